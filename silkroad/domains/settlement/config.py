"""Settlement simulation timing."""

import os
from dataclasses import dataclass


@dataclass
class SettlementConfig:
    # Bank delay before the wire shows up.
    wire_delay: float = 2.0
    # Time between the wire landing and the on-chain settlement starting.
    settle_delay: float = 1.5
    # Chain confirmation before the record flips to paid.
    confirmation_delay: float = 1.0

    @classmethod
    def from_env(cls) -> "SettlementConfig":
        """Load config with env var overrides (SETTLEMENT_ prefix)."""
        config = cls()
        if v := os.getenv("SETTLEMENT_WIRE_DELAY"):
            config.wire_delay = float(v)
        if v := os.getenv("SETTLEMENT_SETTLE_DELAY"):
            config.settle_delay = float(v)
        if v := os.getenv("SETTLEMENT_CONFIRMATION_DELAY"):
            config.confirmation_delay = float(v)
        return config


default_config = SettlementConfig()
