"""Display helpers for freight rates (icons, labels, routes, prices)."""

from typing import Dict, Iterable

from src.models.schema import RateBase, RateType, StoredRate
from src.config.messages import DEFAULT_ROUTE_TERMINAL, DEFAULT_ROUTE_UNKNOWN

TYPE_ICONS: Dict[str, str] = {
    RateType.SEA.value: "🚢",
    RateType.PRE_CARRIAGE.value: "🚛",
    RateType.ON_CARRIAGE.value: "🚚",
    RateType.TERMINAL.value: "🏗️",
    RateType.CUSTOMS.value: "📋",
}
DEFAULT_ICON = "📦"

TYPE_LABELS: Dict[str, str] = {
    RateType.SEA.value: "SEA",
    RateType.PRE_CARRIAGE.value: "PRE",
    RateType.ON_CARRIAGE.value: "ON",
    RateType.TERMINAL.value: "THC",
    RateType.CUSTOMS.value: "CUST",
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "TRY": "₺",
}


def get_type_icon(rate_type: str) -> str:
    """Return the emoji icon for a rate type (📦 for unknown types)."""
    return TYPE_ICONS.get(str(getattr(rate_type, "value", rate_type)), DEFAULT_ICON)


def get_type_label(rate_type: str) -> str:
    """Return the short badge label for a rate type.

    Unknown types fall back to the upper-cased type string.
    """
    key = str(getattr(rate_type, "value", rate_type))
    return TYPE_LABELS.get(key, key.upper())


def _first(*values) -> str:
    """First non-empty value, or an empty string."""
    for value in values:
        if value:
            return value
    return ""


def get_route_text(rate: RateBase) -> str:
    """Build the route column text for a rate.

    Port and country names are preferred over their codes. Each category
    shows the legs that make sense for it:

    - sea: origin port → destination port
    - pre_carriage: origin city → destination port
    - on_carriage: origin port → destination city
    - terminal: the port alone
    - customs: country - port

    Args:
        rate: Any rate record

    Returns:
        Human-readable route string
    """
    rate_type = getattr(rate, "rate_type", None)
    origin_port = _first(getattr(rate, "origin_port_name", ""), getattr(rate, "origin_port", ""))
    destination_port = _first(
        getattr(rate, "destination_port_name", ""), getattr(rate, "destination_port", "")
    )

    if rate_type == RateType.SEA.value:
        return f"{origin_port} → {destination_port}"
    if rate_type == RateType.PRE_CARRIAGE.value:
        return f"{rate.origin_city} → {destination_port}"
    if rate_type == RateType.ON_CARRIAGE.value:
        return f"{origin_port} → {rate.destination_city}"
    if rate_type == RateType.TERMINAL.value:
        return origin_port or DEFAULT_ROUTE_TERMINAL
    if rate_type == RateType.CUSTOMS.value:
        return f"{_first(rate.country_name, rate.country_code)} - {getattr(rate, 'origin_port_name', '')}"
    return getattr(rate, "origin_port_name", "") or DEFAULT_ROUTE_UNKNOWN


def format_amount(amount: float) -> str:
    """Format a number with thousands separators and up to 3 decimals.

    Examples:
        >>> format_amount(1200)
        '1,200'
        >>> format_amount(1234.5)
        '1,234.5'
    """
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return text or "0"


def format_price(price: float, currency: str = "USD") -> str:
    """Format a price with its currency symbol.

    Known currencies get their symbol ($, €, £, ₺); any other code is used
    as a prefix followed by a space, e.g. "CHF 450".
    """
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return symbol + format_amount(price or 0)


def count_by_type(rates: Iterable[StoredRate]) -> Dict[str, int]:
    """Count rates per category.

    Every category is present in the result, with 0 when no rate of that
    type is in ``rates``.
    """
    counts = {rate_type.value: 0 for rate_type in RateType}
    for stored in rates:
        counts[stored.rate.rate_type] += 1
    return counts
