"""Compliance API endpoints: wallet screening, gate sessions, purchase confirmation."""

import asyncio
import uuid
from collections import OrderedDict

import structlog
from fastapi import APIRouter

from silkroad.config import settings
from silkroad.domains.compliance.config import ComplianceConfig
from silkroad.domains.compliance.gate import ComplianceGate
from silkroad.domains.compliance.models import (
    GateOpenRequest,
    PurchaseConfirmRequest,
    ScreenRequest,
)
from silkroad.domains.compliance.purchase import confirm_purchase
from silkroad.domains.compliance.screening import SanctionsScreener

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/compliance", tags=["compliance"])

# Module-level singletons (would be dependency-injected in production)
_config = ComplianceConfig.from_env()
_screener = SanctionsScreener(
    api_key=settings.range_api_key,
    api_url=settings.range_api_url,
    config=_config,
)

# One gate per purchase attempt, keyed by session id, oldest first
_gates: OrderedDict[str, ComplianceGate] = OrderedDict()


def screening_mode() -> str:
    return "live" if _screener.is_configured() else "demo"


def _make_room() -> None:
    """Evict sessions until a new one fits, finished gates before running ones."""
    while _gates and len(_gates) >= _config.max_gate_sessions:
        session_id = next(
            (sid for sid, gate in _gates.items() if not gate.is_running()),
            next(iter(_gates)),
        )
        _gates.pop(session_id).close()
        logger.info("compliance_session_evicted", session_id=session_id)


def _get_gate(session_id: str) -> ComplianceGate:
    gate = _gates.get(session_id)
    if gate is None:
        raise KeyError(f"Compliance session not found: {session_id}")
    return gate


async def _gate_response(session_id: str, gate: ComplianceGate, task: asyncio.Task | None) -> dict:
    if task is not None:
        # Returns once the sequence finishes or is cancelled by a reopen.
        await asyncio.wait({task})
    return {"session_id": session_id, **gate.snapshot().model_dump(mode="json")}


# ---------------------------------------------------------------------------
# Screening
# ---------------------------------------------------------------------------


@router.post("/screen")
async def screen_wallet(request: ScreenRequest) -> dict:
    """Screen a wallet against the sanctions service. Never fails closed."""
    result = await _screener.screen(request.address)
    return {**result.model_dump(mode="json"), "is_fallback": result.is_fallback}


# ---------------------------------------------------------------------------
# Gate sessions
# ---------------------------------------------------------------------------


@router.post("/gates")
async def open_gate(request: GateOpenRequest, wait: bool = False) -> dict:
    """Open a compliance gate for a new purchase attempt."""
    session_id = str(uuid.uuid4())
    gate = ComplianceGate(_screener, config=_config)
    _make_room()
    _gates[session_id] = gate
    task = gate.open(request.wallet_address)
    logger.info("compliance_session_created", session_id=session_id)
    return await _gate_response(session_id, gate, task if wait else None)


@router.get("/gates/{session_id}")
async def get_gate(session_id: str) -> dict:
    gate = _get_gate(session_id)
    return await _gate_response(session_id, gate, None)


@router.post("/gates/{session_id}/reopen")
async def reopen_gate(session_id: str, wait: bool = False) -> dict:
    """Restart the checks from scratch for the same wallet."""
    gate = _get_gate(session_id)
    task = gate.open(gate.wallet_address)
    return await _gate_response(session_id, gate, task if wait else None)


@router.delete("/gates/{session_id}")
async def close_gate(session_id: str) -> dict:
    gate = _get_gate(session_id)
    gate.close()
    del _gates[session_id]
    logger.info("compliance_session_closed", session_id=session_id)
    return await _gate_response(session_id, gate, None)


@router.post("/gates/{session_id}/confirm")
async def confirm_gate_purchase(session_id: str, request: PurchaseConfirmRequest) -> dict:
    """Authorize the purchase once every compliance check has passed."""
    gate = _get_gate(session_id)
    authorization = confirm_purchase(gate, request.amount)
    # A confirmed purchase ends the attempt.
    del _gates[session_id]
    logger.info("compliance_session_completed", session_id=session_id)
    return {"session_id": session_id, **authorization.model_dump(mode="json")}
