"""Interest-rate tier classification.

Maps the externally produced invoice risk score (0-100, higher is riskier)
onto one of three rate tiers. A high score is a risky invoice and earns the
investor a higher rate.

Tier boundaries (lower bound inclusive):
    score >= 70         -> HIGH_RISK  16.5%
    40 <= score < 70    -> STANDARD    8.2%
    score < 40          -> PRIME       5.5%
"""

from .models import RateQuote, RateTier

HIGH_RISK_MIN_SCORE = 70
STANDARD_MIN_SCORE = 40

TIER_RATES: dict[RateTier, str] = {
    RateTier.PRIME: "5.5%",
    RateTier.STANDARD: "8.2%",
    RateTier.HIGH_RISK: "16.5%",
}

TIER_DISPLAY_NAMES: dict[RateTier, str] = {
    RateTier.PRIME: "Prime",
    RateTier.STANDARD: "Standard",
    RateTier.HIGH_RISK: "High Risk",
}


def classify(score: int | None) -> RateTier | None:
    """Return the rate tier for a risk score, or None when the score is unknown."""
    if score is None:
        return None
    if score >= HIGH_RISK_MIN_SCORE:
        return RateTier.HIGH_RISK
    if score >= STANDARD_MIN_SCORE:
        return RateTier.STANDARD
    return RateTier.PRIME


def quote(score: int | None) -> RateQuote | None:
    """Build the displayed rate quote for a risk score."""
    tier = classify(score)
    if tier is None:
        return None
    rate = TIER_RATES[tier]
    return RateQuote(
        risk_score=score,
        tier=tier,
        rate=rate,
        label=f"{rate} ({TIER_DISPLAY_NAMES[tier]})",
    )
