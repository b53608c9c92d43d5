"""Tests for the compliance gate state machine."""

import asyncio

import pytest

from silkroad.domains.compliance.config import ComplianceConfig
from silkroad.domains.compliance.gate import BLOCKED_DEFAULT_DETAIL, ComplianceGate
from silkroad.domains.compliance.models import (
    GateState,
    ScreeningOutcome,
    ScreeningResult,
    ScreeningStatus,
)
from tests.conftest import WALLET

CLEARED = ScreeningResult(
    is_risky=False, detail="Wallet Cleared", risk_score=2.0, outcome=ScreeningOutcome.CLEARED
)
FLAGGED = ScreeningResult(
    is_risky=True, detail="OFAC SDN match", risk_score=9.0, outcome=ScreeningOutcome.FLAGGED
)
DEGRADED = ScreeningResult(
    is_risky=False,
    detail="service unavailable, defaulting to compliant",
    outcome=ScreeningOutcome.DEGRADED,
)


class StubScreener:
    """Returns a fixed result; optionally holds the call until released."""

    def __init__(self, result: ScreeningResult, hold: bool = False) -> None:
        self.result = result
        self.calls: list[str] = []
        self.release = asyncio.Event()
        if not hold:
            self.release.set()

    async def screen(self, address: str) -> ScreeningResult:
        self.calls.append(address)
        await self.release.wait()
        return self.result


async def _settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


class TestGateSequence:
    @pytest.mark.asyncio
    async def test_clean_wallet_reaches_accredited(self, instant_sleep):
        screener = StubScreener(CLEARED)
        gate = ComplianceGate(screener, sleep=instant_sleep)

        snapshot = await gate.open(WALLET)

        assert gate.current_state() == GateState.STEP3_ACCREDITED
        assert gate.can_confirm() is True
        assert snapshot.can_confirm is True
        assert snapshot.step == 3
        assert snapshot.screening_status == ScreeningStatus.PASSED
        assert snapshot.screening == CLEARED
        assert screener.calls == [WALLET]

    @pytest.mark.asyncio
    async def test_step_order(self, instant_sleep):
        gate = ComplianceGate(StubScreener(CLEARED), sleep=instant_sleep)
        await gate.open(WALLET)

        assert gate.history == [
            GateState.IDLE,
            GateState.STEP1_IDENTITY,
            GateState.STEP2_SCREENING,
            GateState.STEP3_ACCREDITED,
        ]

    @pytest.mark.asyncio
    async def test_delays_follow_config(self, instant_sleep):
        config = ComplianceConfig()
        gate = ComplianceGate(StubScreener(CLEARED), config=config, sleep=instant_sleep)
        await gate.open(WALLET)

        assert instant_sleep.delays == [
            config.gate.identity_check_delay,
            config.gate.screening_delay,
            config.gate.accreditation_delay,
        ]

    @pytest.mark.asyncio
    async def test_risky_wallet_blocks(self, instant_sleep):
        gate = ComplianceGate(StubScreener(FLAGGED), sleep=instant_sleep)

        snapshot = await gate.open(WALLET)

        assert gate.current_state() == GateState.BLOCKED
        assert gate.can_confirm() is False
        assert snapshot.screening_status == ScreeningStatus.FAILED
        assert snapshot.detail == "OFAC SDN match"
        assert snapshot.step == 1
        assert GateState.STEP3_ACCREDITED not in gate.history

    @pytest.mark.asyncio
    async def test_blocked_skips_accreditation_delay(self, instant_sleep):
        gate = ComplianceGate(StubScreener(FLAGGED), sleep=instant_sleep)
        await gate.open(WALLET)
        assert len(instant_sleep.delays) == 2

    @pytest.mark.asyncio
    async def test_risky_without_detail_uses_default(self, instant_sleep):
        result = ScreeningResult(is_risky=True, outcome=ScreeningOutcome.FLAGGED)
        gate = ComplianceGate(StubScreener(result), sleep=instant_sleep)
        snapshot = await gate.open(WALLET)
        assert snapshot.detail == BLOCKED_DEFAULT_DETAIL

    @pytest.mark.asyncio
    async def test_degraded_screening_still_passes(self, instant_sleep):
        gate = ComplianceGate(StubScreener(DEGRADED), sleep=instant_sleep)
        snapshot = await gate.open(WALLET)

        assert gate.can_confirm() is True
        assert snapshot.screening.is_fallback is True

    @pytest.mark.asyncio
    async def test_missing_wallet_skips_screening(self, instant_sleep):
        screener = StubScreener(FLAGGED)
        gate = ComplianceGate(screener, sleep=instant_sleep)

        snapshot = await gate.open(None)

        assert screener.calls == []
        assert snapshot.state == GateState.STEP3_ACCREDITED
        assert snapshot.screening is None

    @pytest.mark.asyncio
    async def test_screening_in_progress_state(self, instant_sleep):
        screener = StubScreener(CLEARED, hold=True)
        gate = ComplianceGate(screener, sleep=instant_sleep)

        task = gate.open(WALLET)
        await _settle()

        snapshot = gate.snapshot()
        assert snapshot.state == GateState.STEP2_SCREENING
        assert snapshot.screening_status == ScreeningStatus.CHECKING
        assert snapshot.step == 1
        assert gate.can_confirm() is False

        screener.release.set()
        await task
        assert gate.can_confirm() is True

    @pytest.mark.asyncio
    async def test_is_running_tracks_sequence(self, instant_sleep):
        screener = StubScreener(CLEARED, hold=True)
        gate = ComplianceGate(screener, sleep=instant_sleep)
        assert gate.is_running() is False

        task = gate.open(WALLET)
        await _settle()
        assert gate.is_running() is True

        screener.release.set()
        await task
        assert gate.is_running() is False


class TestGateReset:
    @pytest.mark.asyncio
    async def test_new_gate_is_idle(self, instant_sleep):
        gate = ComplianceGate(StubScreener(CLEARED), sleep=instant_sleep)
        assert gate.current_state() == GateState.IDLE
        assert gate.can_confirm() is False
        assert gate.snapshot().step == 0

    @pytest.mark.asyncio
    async def test_reopen_mid_sequence_resets(self, instant_sleep):
        screener = StubScreener(FLAGGED, hold=True)
        gate = ComplianceGate(screener, sleep=instant_sleep)

        first = gate.open(WALLET)
        await _settle()
        assert gate.current_state() == GateState.STEP2_SCREENING

        second = gate.open(WALLET)
        snapshot = gate.snapshot()
        assert snapshot.state == GateState.IDLE
        assert snapshot.step == 0
        assert snapshot.screening_status == ScreeningStatus.PENDING
        assert snapshot.detail is None
        assert gate.history == [GateState.IDLE]

        screener.result = CLEARED
        screener.release.set()
        final = await second

        assert first.cancelled()
        assert final.state == GateState.STEP3_ACCREDITED
        assert final.detail is None

    @pytest.mark.asyncio
    async def test_reopen_after_block_starts_over(self, instant_sleep):
        screener = StubScreener(FLAGGED)
        gate = ComplianceGate(screener, sleep=instant_sleep)
        await gate.open(WALLET)
        assert gate.current_state() == GateState.BLOCKED

        screener.result = CLEARED
        snapshot = await gate.open(WALLET)

        assert snapshot.state == GateState.STEP3_ACCREDITED
        assert snapshot.detail is None
        assert gate.history[0] == GateState.IDLE
        assert GateState.BLOCKED not in gate.history

    @pytest.mark.asyncio
    async def test_close_cancels_in_flight_screening(self, instant_sleep):
        screener = StubScreener(CLEARED, hold=True)
        gate = ComplianceGate(screener, sleep=instant_sleep)

        task = gate.open(WALLET)
        await _settle()
        gate.close()
        await _settle()

        assert task.cancelled()
        assert gate.current_state() == GateState.IDLE
        assert gate.wallet_address is None
        assert gate.can_confirm() is False

    @pytest.mark.asyncio
    async def test_close_after_success_revokes_confirmation(self, instant_sleep):
        gate = ComplianceGate(StubScreener(CLEARED), sleep=instant_sleep)
        await gate.open(WALLET)
        gate.close()
        assert gate.can_confirm() is False
