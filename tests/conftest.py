"""Shared test fixtures for SilkRoad compliance tests."""

import asyncio
import os
from collections.abc import Callable

import httpx
import pytest

# Keep the app's step delays out of the API tests.
os.environ.setdefault("COMPLIANCE_IDENTITY_DELAY", "0")
os.environ.setdefault("COMPLIANCE_SCREENING_DELAY", "0")
os.environ.setdefault("COMPLIANCE_ACCREDITATION_DELAY", "0")
os.environ.setdefault("SETTLEMENT_WIRE_DELAY", "0")
os.environ.setdefault("SETTLEMENT_SETTLE_DELAY", "0")
os.environ.setdefault("SETTLEMENT_CONFIRMATION_DELAY", "0")

from silkroad.domains.compliance.screening import SanctionsScreener  # noqa: E402

RANGE_URL = "https://risk.example.test/v1/risk/score"
WALLET = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays and yields once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


@pytest.fixture
def instant_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_screener() -> Callable[..., SanctionsScreener]:
    """Build a configured screener whose HTTP calls go to a mock handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SanctionsScreener:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SanctionsScreener(api_key="test-key", api_url=RANGE_URL, client=client)

    return _make


@pytest.fixture
def score_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Handler factory answering every request with the given JSON body."""

    def _handler_for(body: object, status_code: int = 200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return handler

    return _handler_for
