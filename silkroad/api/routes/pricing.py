"""Invoice pricing API endpoints."""

from fastapi import APIRouter, Query

from silkroad.domains.pricing.classifier import quote
from silkroad.domains.pricing.listing import parse_listing_label
from silkroad.domains.pricing.models import ListingRequest

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])

_NO_QUOTE = {"risk_score": None, "tier": None, "rate": None, "label": None}


@router.get("/quote")
async def get_rate_quote(risk_score: int | None = Query(default=None, ge=0, le=100)) -> dict:
    """Rate tier for an invoice risk score. An unknown score quotes no rate."""
    rate_quote = quote(risk_score)
    if rate_quote is None:
        return dict(_NO_QUOTE)
    return rate_quote.model_dump(mode="json")


@router.post("/listing")
async def decode_listing(request: ListingRequest) -> dict:
    """Decode a marketplace listing label and quote its rate."""
    listing = parse_listing_label(request.label)
    rate_quote = quote(listing.risk_score)
    return {
        "listing": listing.model_dump(mode="json"),
        "quote": rate_quote.model_dump(mode="json") if rate_quote else dict(_NO_QUOTE),
    }
