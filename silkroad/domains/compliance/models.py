"""Pydantic models for the compliance domain."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ScreeningOutcome(StrEnum):
    CLEARED = "cleared"
    FLAGGED = "flagged"
    # Fail-open outcomes: the check did not actually run.
    DEMO_MODE = "demo_mode"
    DEGRADED = "degraded"


class GateState(StrEnum):
    IDLE = "idle"
    STEP1_IDENTITY = "step1_identity"
    STEP2_SCREENING = "step2_screening"
    STEP3_ACCREDITED = "step3_accredited"
    BLOCKED = "blocked"


class ScreeningStatus(StrEnum):
    PENDING = "pending"
    CHECKING = "checking"
    PASSED = "passed"
    FAILED = "failed"


class ScreeningResult(BaseModel):
    is_risky: bool
    detail: str | None = None
    risk_score: float | None = None
    outcome: ScreeningOutcome

    @property
    def is_fallback(self) -> bool:
        """True when the result is a default rather than a real screening."""
        return self.outcome in (ScreeningOutcome.DEMO_MODE, ScreeningOutcome.DEGRADED)


class GateSnapshot(BaseModel):
    state: GateState = GateState.IDLE
    step: int = Field(default=0, ge=0, le=3)
    screening_status: ScreeningStatus = ScreeningStatus.PENDING
    wallet_address: str | None = None
    detail: str | None = None
    screening: ScreeningResult | None = None
    can_confirm: bool = False


class PurchaseAuthorization(BaseModel):
    wallet_address: str | None
    amount: float = Field(gt=0)
    lamports: int = Field(gt=0)


# --- Request Models ---


class ScreenRequest(BaseModel):
    address: str


class GateOpenRequest(BaseModel):
    wallet_address: str | None = None


class PurchaseConfirmRequest(BaseModel):
    amount: str | float
