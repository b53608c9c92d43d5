"""Pydantic models for the invoice pricing domain."""

from enum import StrEnum

from pydantic import BaseModel, Field


class RateTier(StrEnum):
    PRIME = "prime"
    STANDARD = "standard"
    HIGH_RISK = "high_risk"


class RateQuote(BaseModel):
    risk_score: int = Field(ge=0, le=100)
    tier: RateTier
    rate: str
    label: str


class Listing(BaseModel):
    client_name: str
    price: str
    risk_score: int | None = None


# --- Request Models ---


class ListingRequest(BaseModel):
    label: str
