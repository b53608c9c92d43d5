"""Settlement console API endpoints."""

from fastapi import APIRouter

from silkroad.domains.settlement.book import SettlementBook
from silkroad.domains.settlement.config import SettlementConfig
from silkroad.domains.settlement.models import SettlementStatus
from silkroad.domains.settlement.simulator import SettlementSimulator

router = APIRouter(prefix="/api/v1/settlements", tags=["settlements"])

_book = SettlementBook()
_simulator = SettlementSimulator(_book, config=SettlementConfig.from_env())


@router.get("")
async def list_settlements(status: SettlementStatus | None = None) -> dict:
    records = _book.list_records(status)
    return {
        "items": [r.model_dump(mode="json") for r in records],
        "total": len(records),
    }


@router.get("/summary")
async def get_settlement_summary() -> dict:
    """Pending and settled totals for the console header."""
    return {
        **_book.summary().model_dump(mode="json"),
        "simulating": _simulator.active_record_id,
    }


@router.get("/{record_id}")
async def get_settlement(record_id: str) -> dict:
    return _book.get(record_id).model_dump(mode="json")


@router.post("/{record_id}/simulate")
async def simulate_settlement(record_id: str) -> dict:
    """Run the scripted settlement for a pending record and return every notification."""
    notifications = [n async for n in _simulator.simulate(record_id)]
    return {
        "record": _book.get(record_id).model_dump(mode="json"),
        "notifications": [n.model_dump(mode="json") for n in notifications],
    }
