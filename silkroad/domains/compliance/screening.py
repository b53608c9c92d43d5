"""Wallet sanctions screening against the external risk-scoring service.

The screener fails open. A missing API key, an unreachable service, a
timeout, or a response it cannot read all resolve to a not-risky result
tagged with a fallback outcome, so an infrastructure outage never blocks a
purchase. ``screen`` never raises.
"""

import math
from typing import Any

import httpx
import structlog

from .config import ComplianceConfig, ScreeningConfig, default_config
from .models import ScreeningOutcome, ScreeningResult

logger = structlog.get_logger()

DEMO_MODE_DETAIL = "demo mode"
DEGRADED_DETAIL = "service unavailable, defaulting to compliant"
CLEARED_DETAIL = "Wallet Cleared"
FLAGGED_DEFAULT_DETAIL = "High Risk Score Detected"


class MalformedScreeningResponse(ValueError):
    """The service answered, but not with a readable risk score."""


class SanctionsScreener:
    """Screens wallet addresses through the external risk API."""

    def __init__(
        self,
        api_key: str | None,
        api_url: str,
        config: ComplianceConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._config: ScreeningConfig = (config or default_config).screening
        self._client = client

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def screen(self, address: str) -> ScreeningResult:
        """Screen a wallet address. Always returns a result."""
        if not self.is_configured():
            logger.warning("screening_demo_mode", address=address)
            return ScreeningResult(
                is_risky=False,
                detail=DEMO_MODE_DETAIL,
                outcome=ScreeningOutcome.DEMO_MODE,
            )

        try:
            data = await self._fetch(address)
            score = self._extract_score(data)
        except Exception as exc:
            logger.warning(
                "screening_unavailable",
                address=address,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return ScreeningResult(
                is_risky=False,
                detail=DEGRADED_DETAIL,
                outcome=ScreeningOutcome.DEGRADED,
            )

        if score > self._config.risky_score_threshold:
            detail = self._risk_factors_detail(data) or FLAGGED_DEFAULT_DETAIL
            logger.warning("wallet_flagged", address=address, risk_score=score, detail=detail)
            return ScreeningResult(
                is_risky=True,
                detail=detail,
                risk_score=score,
                outcome=ScreeningOutcome.FLAGGED,
            )

        logger.info("wallet_cleared", address=address, risk_score=score)
        return ScreeningResult(
            is_risky=False,
            detail=CLEARED_DETAIL,
            risk_score=score,
            outcome=ScreeningOutcome.CLEARED,
        )

    async def _fetch(self, address: str) -> Any:
        params = {"address": address, "chain": self._config.chain}
        headers = {"x-api-key": self._api_key, "Content-Type": "application/json"}
        timeout = httpx.Timeout(self._config.timeout_seconds)

        if self._client is not None:
            response = await self._client.get(
                self._api_url, params=params, headers=headers, timeout=timeout
            )
        else:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(self._api_url, params=params, headers=headers)

        response.raise_for_status()
        data = response.json()
        logger.debug("screening_response", address=address, response=data)
        return data

    def _extract_score(self, data: Any) -> float:
        if not isinstance(data, dict):
            raise MalformedScreeningResponse(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        raw = None
        for field_name in self._config.score_fields:
            if data.get(field_name) is not None:
                raw = data[field_name]
                break
        if raw is None:
            return 0.0

        if isinstance(raw, bool):
            raise MalformedScreeningResponse(f"Non-numeric risk score: {raw!r}")
        try:
            score = float(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedScreeningResponse(f"Non-numeric risk score: {raw!r}") from exc
        if not math.isfinite(score):
            raise MalformedScreeningResponse(f"Non-finite risk score: {raw!r}")
        return score

    def _risk_factors_detail(self, data: dict) -> str:
        factors = data.get(self._config.risk_factors_field)
        if not isinstance(factors, list):
            return ""
        return ", ".join(str(f) for f in factors)
