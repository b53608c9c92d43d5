"""Compliance gate and sanctions screening configuration.

Every threshold, timeout, and step delay is configurable through
``COMPLIANCE_`` environment variables. The gate delays pace the purchase
modal; they carry no compliance meaning of their own.
"""

import os
from dataclasses import dataclass, field


@dataclass
class ScreeningConfig:
    """Sanctions screening against the external wallet risk service."""

    # Bound on the single outbound request; there are no retries.
    timeout_seconds: float = 10.0

    chain: str = "solana"

    # The service reports on a 0-10 scale under ``riskScore`` or ``score``.
    # Strictly greater than this value is risky.
    risky_score_threshold: float = 7.0

    # Response fields, in lookup order.
    score_fields: tuple[str, ...] = ("riskScore", "score")
    risk_factors_field: str = "riskFactors"


@dataclass
class GateTimingConfig:
    """Delays between the steps of the compliance gate, in seconds."""

    identity_check_delay: float = 1.0
    screening_delay: float = 1.2
    accreditation_delay: float = 1.2


@dataclass
class ComplianceConfig:
    screening: ScreeningConfig = field(default_factory=ScreeningConfig)
    gate: GateTimingConfig = field(default_factory=GateTimingConfig)

    # Live gate sessions kept by the API before the oldest finished one is evicted.
    max_gate_sessions: int = 500

    @classmethod
    def from_env(cls) -> "ComplianceConfig":
        """Load config with env var overrides (COMPLIANCE_ prefix)."""
        config = cls()

        # Screening overrides
        if v := os.getenv("COMPLIANCE_SCREENING_TIMEOUT"):
            config.screening.timeout_seconds = float(v)
        if v := os.getenv("COMPLIANCE_SCREENING_CHAIN"):
            config.screening.chain = v
        if v := os.getenv("COMPLIANCE_RISKY_SCORE_THRESHOLD"):
            config.screening.risky_score_threshold = float(v)

        # Gate timing overrides
        if v := os.getenv("COMPLIANCE_IDENTITY_DELAY"):
            config.gate.identity_check_delay = float(v)
        if v := os.getenv("COMPLIANCE_SCREENING_DELAY"):
            config.gate.screening_delay = float(v)
        if v := os.getenv("COMPLIANCE_ACCREDITATION_DELAY"):
            config.gate.accreditation_delay = float(v)

        if v := os.getenv("COMPLIANCE_MAX_GATE_SESSIONS"):
            config.max_gate_sessions = int(v)

        return config


# Module-level default instance
default_config = ComplianceConfig()
