"""In-memory settlement book for the operator console."""

from datetime import date

import structlog

from .models import SettlementRecord, SettlementStatus, SettlementSummary

logger = structlog.get_logger()


def seed_settlements() -> list[SettlementRecord]:
    """Demo settlements shown on a fresh console."""
    return [
        SettlementRecord(
            id="SET-001",
            debtor="Nokia Corporation",
            invoice_id="INV-2024-8847",
            amount=125_000,
            due_date=date(2024, 2, 15),
            investor="0x7a3...f9c2",
        ),
        SettlementRecord(
            id="SET-002",
            debtor="Tesla Inc.",
            invoice_id="INV-2024-7721",
            amount=89_500,
            due_date=date(2024, 2, 10),
            investor="0x4b1...a8e3",
        ),
        SettlementRecord(
            id="SET-003",
            debtor="Siemens AG",
            invoice_id="INV-2024-6632",
            amount=67_200,
            due_date=date(2024, 2, 8),
            investor="0x9c2...b4d1",
            status=SettlementStatus.PAID,
        ),
        SettlementRecord(
            id="SET-004",
            debtor="Samsung Electronics",
            invoice_id="INV-2024-5519",
            amount=234_800,
            due_date=date(2024, 2, 20),
            investor="0x2e7...c5f8",
        ),
        SettlementRecord(
            id="SET-005",
            debtor="Microsoft Corp",
            invoice_id="INV-2024-4401",
            amount=156_000,
            due_date=date(2024, 2, 12),
            investor="0x6d4...e9a7",
        ),
    ]


class SettlementBook:
    """Holds settlement records keyed by id, in insertion order."""

    def __init__(self, records: list[SettlementRecord] | None = None) -> None:
        self._records: dict[str, SettlementRecord] = {}
        for record in records if records is not None else seed_settlements():
            self._records[record.id] = record

    def get(self, record_id: str) -> SettlementRecord:
        """Raises KeyError for an unknown id."""
        try:
            return self._records[record_id]
        except KeyError:
            raise KeyError(f"Settlement not found: {record_id}") from None

    def list_records(self, status: SettlementStatus | None = None) -> list[SettlementRecord]:
        records = list(self._records.values())
        if status is not None:
            records = [r for r in records if r.status == status]
        return records

    def mark_paid(self, record_id: str) -> SettlementRecord:
        record = self.get(record_id)
        record.status = SettlementStatus.PAID
        logger.info("settlement_marked_paid", record_id=record_id, amount=record.amount)
        return record

    def summary(self) -> SettlementSummary:
        pending = self.list_records(SettlementStatus.PENDING)
        paid = self.list_records(SettlementStatus.PAID)
        return SettlementSummary(
            total_pending=sum(r.amount for r in pending),
            total_settled=sum(r.amount for r in paid),
            pending_count=len(pending),
        )
