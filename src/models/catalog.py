"""Reference data behind the rate form dropdowns."""

from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from src.config.settings import get_settings

PORTS: Dict[str, str] = {
    "TRAMR": "Ambarli",
    "TRPOT": "Ambarli Port",
    "TRIST": "Istanbul",
    "TRMER": "Mersin",
    "TRIZM": "Izmir",
    "TRGEM": "Gemlik",
    "DEHAM": "Hamburg",
    "NLRTM": "Rotterdam",
    "BEANR": "Antwerp",
    "GBFXT": "Felixstowe",
    "USNYC": "New York",
    "USHOU": "Houston",
    "USLAX": "Los Angeles",
    "AEJEA": "Jebel Ali",
    "SGSIN": "Singapore",
    "CNSHA": "Shanghai",
}

COUNTRIES: Dict[str, str] = {
    "DE": "Germany",
    "NL": "Netherlands",
    "BE": "Belgium",
    "GB": "United Kingdom",
    "FR": "France",
    "IT": "Italy",
    "ES": "Spain",
    "US": "United States",
    "AE": "United Arab Emirates",
    "CN": "China",
}

# Pre-carriage origins are inland Turkish cities
TURKISH_CITIES: List[str] = [
    "Istanbul", "Ankara", "Izmir", "Bursa", "Kocaeli",
    "Gaziantep", "Konya", "Kayseri", "Denizli", "Manisa",
]

CONTAINER_TYPES: List[str] = ["20DC", "40DC", "40HC", "20RF", "40RF", "LTL", "FTL"]
INCOTERMS: List[str] = ["EXW", "FCA", "FOB", "CFR", "CIF", "DAP", "DDP"]
CURRENCIES: List[str] = ["USD", "EUR", "GBP", "TRY"]
SHIPMENT_TYPES: List[str] = ["fcl", "lcl"]
THC_SIDES: List[str] = ["origin", "destination"]


def port_name(code: Optional[str]) -> str:
    """Display name for a port code, falling back to the code itself."""
    if not code:
        return ""
    return PORTS.get(code, code)


def country_name(code: Optional[str]) -> str:
    """Display name for a country code, falling back to the code itself."""
    if not code:
        return ""
    return COUNTRIES.get(code, code)


def port_choices() -> List[Tuple[str, str]]:
    """(label, value) pairs for port dropdowns, sorted by name."""
    return sorted(((f"{name} ({code})", code) for code, name in PORTS.items()), key=lambda c: c[0])


def country_choices() -> List[Tuple[str, str]]:
    """(label, value) pairs for country dropdowns, sorted by name."""
    return sorted(((name, code) for code, name in COUNTRIES.items()), key=lambda c: c[0])


def default_valid_until(today: Optional[date] = None, days: Optional[int] = None) -> date:
    """Default 'valid until' date for new rates.

    Args:
        today: Reference date (defaults to the current date)
        days: Validity window in days (defaults to settings.default_validity_days)

    Returns:
        today + days
    """
    today = today or date.today()
    if days is None:
        days = get_settings().default_validity_days
    return today + timedelta(days=days)
