"""Purchase confirmation behind the compliance gate."""

import math

import structlog

from .gate import ComplianceGate
from .models import PurchaseAuthorization

logger = structlog.get_logger()

LAMPORTS_PER_SOL = 1_000_000_000
MAX_TRANSFER_LAMPORTS = 10**15


class InvalidPurchaseAmount(ValueError):
    """The listing price cannot be turned into a positive transfer."""


class PurchaseBlocked(PermissionError):
    """The compliance gate has not cleared this purchase."""


def validate_purchase_amount(raw: str | float | int | None) -> float:
    """Parse a listing price into a positive SOL amount.

    Negative prices are taken as their absolute value.

    Raises:
        InvalidPurchaseAmount: non-numeric, non-finite, zero, or out of range.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidPurchaseAmount("Invalid invoice amount.")
    try:
        amount = abs(float(raw))
    except (TypeError, ValueError) as exc:
        raise InvalidPurchaseAmount("Invalid invoice amount.") from exc

    if not math.isfinite(amount) or amount <= 0:
        raise InvalidPurchaseAmount("Invalid invoice amount.")

    lamports = to_lamports(amount)
    if lamports <= 0 or lamports > MAX_TRANSFER_LAMPORTS:
        raise InvalidPurchaseAmount(f"Invalid lamports value: {lamports}")
    return amount


def to_lamports(amount: float) -> int:
    return math.floor(amount * LAMPORTS_PER_SOL)


def confirm_purchase(
    gate: ComplianceGate,
    raw_amount: str | float | int | None,
) -> PurchaseAuthorization:
    """Authorize a purchase once the gate has passed every check."""
    if not gate.can_confirm():
        logger.warning(
            "purchase_blocked",
            wallet_address=gate.wallet_address,
            gate_state=gate.current_state().value,
        )
        raise PurchaseBlocked(
            f"Compliance checks not passed (state: {gate.current_state().value})"
        )

    try:
        amount = validate_purchase_amount(raw_amount)
    except InvalidPurchaseAmount:
        logger.warning("invalid_purchase_amount", raw_amount=str(raw_amount))
        raise

    authorization = PurchaseAuthorization(
        wallet_address=gate.wallet_address,
        amount=amount,
        lamports=to_lamports(amount),
    )
    logger.info(
        "purchase_authorized",
        wallet_address=authorization.wallet_address,
        amount=authorization.amount,
        lamports=authorization.lamports,
    )
    return authorization
