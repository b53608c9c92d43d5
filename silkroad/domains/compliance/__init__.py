"""Compliance domain: wallet screening and the purchase gate."""

from .gate import ComplianceGate
from .models import (
    GateSnapshot,
    GateState,
    PurchaseAuthorization,
    ScreeningOutcome,
    ScreeningResult,
    ScreeningStatus,
)
from .purchase import InvalidPurchaseAmount, PurchaseBlocked, confirm_purchase
from .screening import SanctionsScreener

__all__ = [
    "ComplianceGate",
    "GateSnapshot",
    "GateState",
    "InvalidPurchaseAmount",
    "PurchaseAuthorization",
    "PurchaseBlocked",
    "SanctionsScreener",
    "ScreeningOutcome",
    "ScreeningResult",
    "ScreeningStatus",
    "confirm_purchase",
]
