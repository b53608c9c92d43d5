"""Marketplace listing labels.

Minted invoices carry their display data in a single label of the form
``SR::<client>::<price>::<risk score>``. Records without the ``SR::``
prefix belong to other programs and are not shown on the marketplace.
"""

import structlog

from .models import Listing

logger = structlog.get_logger()

LABEL_PREFIX = "SR"
LABEL_SEPARATOR = "::"

# Written when the invoice was minted before a risk score came back.
DEFAULT_LABEL_RISK_SCORE = 50


def is_marketplace_label(label: str) -> bool:
    return label.startswith(LABEL_PREFIX + LABEL_SEPARATOR)


def format_listing_label(client_name: str, price: str | float, risk_score: int | None) -> str:
    if risk_score is None:
        risk_score = DEFAULT_LABEL_RISK_SCORE
    return LABEL_SEPARATOR.join([LABEL_PREFIX, client_name, str(price), str(risk_score)])


def parse_listing_label(label: str) -> Listing:
    """Decode a marketplace label.

    Raises:
        ValueError: if the label lacks the prefix or the client/price parts.
    """
    if not is_marketplace_label(label):
        raise ValueError(f"Not a marketplace listing label: {label!r}")

    parts = label.split(LABEL_SEPARATOR)
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise ValueError(f"Incomplete listing label: {label!r}")

    risk_score: int | None = None
    if len(parts) > 3:
        try:
            risk_score = int(parts[3])
        except ValueError:
            logger.debug("listing_risk_score_unparsed", label=label)
        else:
            if not 0 <= risk_score <= 100:
                risk_score = None

    return Listing(client_name=parts[1], price=parts[2], risk_score=risk_score)
