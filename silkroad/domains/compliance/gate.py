"""Compliance gate in front of purchase confirmation.

Opening the gate runs three checks in order:

1. Identity check (simulated; always passes after a delay)
2. Sanctions screening of the buyer's wallet
3. Accredited investor check (simulated; passes after a delay)

A risky screening result blocks the gate until it is reopened. Only a gate
that reached STEP3_ACCREDITED lets a purchase be confirmed. Reopening or
closing cancels whatever sequence is still in flight, including an
outstanding screening request.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from .config import ComplianceConfig, GateTimingConfig, default_config
from .models import GateSnapshot, GateState, ScreeningStatus
from .screening import SanctionsScreener

logger = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]

BLOCKED_DEFAULT_DETAIL = "Sanctions Detected"


class ComplianceGate:
    """Sequential compliance checks for a single purchase attempt."""

    def __init__(
        self,
        screener: SanctionsScreener,
        config: ComplianceConfig | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._screener = screener
        self._timing: GateTimingConfig = (config or default_config).gate
        self._sleep = sleep
        self._snapshot = GateSnapshot()
        self._history: list[GateState] = [GateState.IDLE]
        self._task: asyncio.Task[GateSnapshot] | None = None

    @property
    def history(self) -> list[GateState]:
        """States entered since the last open or close, in order."""
        return list(self._history)

    @property
    def wallet_address(self) -> str | None:
        return self._snapshot.wallet_address

    def open(self, wallet_address: str | None) -> "asyncio.Task[GateSnapshot]":
        """Start a fresh check sequence. Await the returned task for the outcome."""
        self._cancel_in_flight()
        self._reset(wallet_address)
        self._task = asyncio.create_task(self._run(wallet_address))
        logger.info("compliance_gate_opened", wallet_address=wallet_address)
        return self._task

    def close(self) -> None:
        self._cancel_in_flight()
        self._reset(None)
        logger.info("compliance_gate_closed")

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def can_confirm(self) -> bool:
        return self._snapshot.state == GateState.STEP3_ACCREDITED

    def current_state(self) -> GateState:
        return self._snapshot.state

    def snapshot(self) -> GateSnapshot:
        return self._snapshot.model_copy(update={"can_confirm": self.can_confirm()})

    def _reset(self, wallet_address: str | None) -> None:
        self._snapshot = GateSnapshot(wallet_address=wallet_address)
        self._history = [GateState.IDLE]

    def _cancel_in_flight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.info("compliance_gate_sequence_cancelled")
        self._task = None

    def _enter(self, state: GateState) -> None:
        self._snapshot.state = state
        self._history.append(state)

    async def _run(self, wallet_address: str | None) -> GateSnapshot:
        await self._sleep(self._timing.identity_check_delay)
        self._enter(GateState.STEP1_IDENTITY)
        self._snapshot.step = 1

        await self._sleep(self._timing.screening_delay)
        self._enter(GateState.STEP2_SCREENING)
        self._snapshot.screening_status = ScreeningStatus.CHECKING

        # Without a connected wallet there is nothing to screen.
        if wallet_address:
            result = await self._screener.screen(wallet_address)
            self._snapshot.screening = result
            if result.is_risky:
                self._enter(GateState.BLOCKED)
                self._snapshot.screening_status = ScreeningStatus.FAILED
                self._snapshot.detail = result.detail or BLOCKED_DEFAULT_DETAIL
                logger.warning(
                    "compliance_gate_blocked",
                    wallet_address=wallet_address,
                    detail=self._snapshot.detail,
                )
                return self.snapshot()
            if result.is_fallback:
                logger.warning(
                    "compliance_gate_screening_defaulted",
                    wallet_address=wallet_address,
                    outcome=result.outcome.value,
                )

        self._snapshot.screening_status = ScreeningStatus.PASSED
        self._snapshot.step = 2

        await self._sleep(self._timing.accreditation_delay)
        self._enter(GateState.STEP3_ACCREDITED)
        self._snapshot.step = 3
        logger.info("compliance_gate_passed", wallet_address=wallet_address)
        return self.snapshot()
