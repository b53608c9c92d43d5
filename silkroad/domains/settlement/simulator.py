"""Scripted settlement of a financed invoice.

Walks a pending record through a fixed sequence of delayed notifications
(wire received from the banking rail, on-chain settlement, completion) and
marks it paid on the last step. Nothing leaves the process; this drives the
operator console demo.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable

import structlog

from .book import SettlementBook
from .config import SettlementConfig, default_config
from .models import SettlementNotification, SettlementStage, SettlementStatus

logger = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]

STAGE_MESSAGES: dict[SettlementStage, str] = {
    SettlementStage.CONNECTING: "Connecting to Circle API...",
    SettlementStage.WIRE_RECEIVED: "Oracle Alert: Wire Received via Circle API...",
    SettlementStage.SETTLING: "Settling Loan on Solana...",
    SettlementStage.COMPLETED: "Settlement Complete! USDC Released to Investor.",
}


class SimulationInProgress(RuntimeError):
    """Another settlement simulation is still running."""


class SettlementSimulator:
    """Runs one settlement simulation at a time against a settlement book."""

    def __init__(
        self,
        book: SettlementBook,
        config: SettlementConfig | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._book = book
        self._config = config or default_config
        self._sleep = sleep
        self._active_record_id: str | None = None

    @property
    def active_record_id(self) -> str | None:
        return self._active_record_id

    async def simulate(self, record_id: str) -> AsyncIterator[SettlementNotification]:
        """Yield status notifications until the record is paid.

        Raises:
            SimulationInProgress: another simulation holds the console.
            KeyError: unknown record id.
            ValueError: the record is already paid.
        """
        if self._active_record_id is not None:
            raise SimulationInProgress(
                f"Settlement simulation already running for {self._active_record_id}"
            )
        record = self._book.get(record_id)
        if record.status == SettlementStatus.PAID:
            raise ValueError(f"Settlement {record_id} is already paid")

        self._active_record_id = record_id
        logger.info("settlement_simulation_started", record_id=record_id)
        try:
            yield self._notify(record_id, SettlementStage.CONNECTING)
            await self._sleep(self._config.wire_delay)

            yield self._notify(record_id, SettlementStage.WIRE_RECEIVED)
            await self._sleep(self._config.settle_delay)

            yield self._notify(record_id, SettlementStage.SETTLING)
            await self._sleep(self._config.confirmation_delay)

            self._book.mark_paid(record_id)
            yield self._notify(record_id, SettlementStage.COMPLETED)
            logger.info("settlement_simulation_completed", record_id=record_id)
        finally:
            self._active_record_id = None

    def _notify(self, record_id: str, stage: SettlementStage) -> SettlementNotification:
        return SettlementNotification(
            record_id=record_id,
            stage=stage,
            message=STAGE_MESSAGES[stage],
            status=self._book.get(record_id).status,
        )
