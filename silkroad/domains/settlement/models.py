"""Pydantic models for the settlement console."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel


class SettlementStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"


class SettlementStage(StrEnum):
    CONNECTING = "connecting"
    WIRE_RECEIVED = "wire_received"
    SETTLING = "settling"
    COMPLETED = "completed"


class SettlementRecord(BaseModel):
    id: str
    debtor: str
    invoice_id: str
    amount: float
    currency: str = "USD"
    due_date: date
    investor: str
    status: SettlementStatus = SettlementStatus.PENDING


class SettlementNotification(BaseModel):
    record_id: str
    stage: SettlementStage
    message: str
    status: SettlementStatus


class SettlementSummary(BaseModel):
    total_pending: float
    total_settled: float
    pending_count: int
