"""Form collector - turns raw per-tab form values into typed rate records."""

import re
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from src.core.errors import ValidationError
from src.models import catalog
from src.models.schema import (
    CustomsRate,
    IncludedService,
    OnCarriageRate,
    PreCarriageRate,
    RateBase,
    RateType,
    SeaFreightRate,
    TerminalRate,
)
from src.config.settings import get_settings
from src.config.messages import (
    ERROR_NEGATIVE_PRICE,
    ERROR_SELECT_DESTINATION_PORT,
    ERROR_SELECT_ORIGIN_CITY,
    ERROR_SELECT_ORIGIN_PORT,
)
from src.config.logging_config import get_logger

logger = get_logger(__name__)

_LEADING_FLOAT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def parse_float(value: Any, default: float = 0.0) -> float:
    """Read a number from a form value.

    Accepts numbers or strings with a leading numeric part ("1200",
    "1200.50 USD"). Empty or non-numeric input yields ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT.match(str(value))
    return float(match.group(1)) if match else default


def parse_int(value: Any, default: int) -> int:
    """Read an integer from a form value; non-numeric input yields ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def parse_date(value: Any) -> Optional[date]:
    """Read an ISO date (YYYY-MM-DD) from a form value; empty means None.

    Raises:
        ValidationError: If the value is not a valid date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e


def _text(form: Mapping[str, Any], key: str, default: str = "") -> str:
    """String value of a field, stripped, with ``default`` for empty values."""
    value = form.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def _services(selected: Optional[Iterable[Any]]) -> list:
    """Keep the known included-service values, in declaration order."""
    chosen = {str(getattr(s, "value", s)) for s in (selected or [])}
    return [service for service in IncludedService if service.value in chosen]


class FormCollector:
    """Collect rate records from form values.

    Each rate category has its own collector method; ``collect`` picks the
    right one from the rate type. Select fields carry codes, and their
    display names are resolved through lookup functions (the reference
    catalog by default) unless the form supplies them explicitly.

    Required fields are checked first and a ValidationError carrying the
    user-facing message is raised before any record is built.
    """

    def __init__(
        self,
        port_lookup: Callable[[str], str] = catalog.port_name,
        country_lookup: Callable[[str], str] = catalog.country_name,
        default_currency: Optional[str] = None
    ):
        """
        Initialize collector.

        Args:
            port_lookup: Maps a port code to its display name
            country_lookup: Maps a country code to its display name
            default_currency: Currency for categories without a currency
                field (defaults to settings.default_currency)
        """
        self.port_lookup = port_lookup
        self.country_lookup = country_lookup
        self.default_currency = default_currency or get_settings().default_currency
        self._collectors: Dict[RateType, Callable[[Mapping[str, Any]], RateBase]] = {
            RateType.SEA: self.collect_sea,
            RateType.PRE_CARRIAGE: self.collect_pre_carriage,
            RateType.ON_CARRIAGE: self.collect_on_carriage,
            RateType.TERMINAL: self.collect_terminal,
            RateType.CUSTOMS: self.collect_customs,
        }

    def collect(self, rate_type: RateType, form: Mapping[str, Any]) -> RateBase:
        """Build a rate of the given category from form values.

        Args:
            rate_type: Category of the form being submitted
            form: Field name -> raw value

        Returns:
            Typed rate record

        Raises:
            ValidationError: If a required field is missing or a value is invalid
        """
        rate_type = RateType(rate_type)
        logger.debug(f"Collecting {rate_type.value} rate from {len(form)} fields")
        return self._collectors[rate_type](form)

    def _port_name(self, form: Mapping[str, Any], code_key: str, name_key: str) -> str:
        return _text(form, name_key) or self.port_lookup(_text(form, code_key))

    @staticmethod
    def _price(form: Mapping[str, Any], key: str = "price") -> float:
        price = parse_float(form.get(key))
        if price < 0:
            raise ValidationError(ERROR_NEGATIVE_PRICE)
        return price

    @staticmethod
    def _build(model, **fields) -> RateBase:
        """Instantiate a rate model, converting pydantic errors to ValidationError."""
        try:
            return model(**fields)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(f"{location}: {first.get('msg')}") from e

    def collect_sea(self, form: Mapping[str, Any]) -> SeaFreightRate:
        """Collect a sea freight rate. Origin and destination ports are required."""
        if not _text(form, "origin_port"):
            raise ValidationError(ERROR_SELECT_ORIGIN_PORT)
        if not _text(form, "destination_port"):
            raise ValidationError(ERROR_SELECT_DESTINATION_PORT)

        return self._build(
            SeaFreightRate,
            origin_port=_text(form, "origin_port"),
            origin_port_name=self._port_name(form, "origin_port", "origin_port_name"),
            destination_port=_text(form, "destination_port"),
            destination_port_name=self._port_name(form, "destination_port", "destination_port_name"),
            shipment_type=_text(form, "shipment_type", "fcl"),
            container_type=_text(form, "container_type", "40HC"),
            incoterm=_text(form, "incoterm", "FOB"),
            price=self._price(form),
            currency=self.default_currency,
            transit_days=parse_int(form.get("transit_days"), 0),
            valid_until=parse_date(form.get("valid_until")),
            notes=_text(form, "notes"),
            included_services=_services(form.get("included_services")),
        )

    def collect_pre_carriage(self, form: Mapping[str, Any]) -> PreCarriageRate:
        """Collect a pre-carriage rate. The origin city is required."""
        if not _text(form, "origin_city"):
            raise ValidationError(ERROR_SELECT_ORIGIN_CITY)

        return self._build(
            PreCarriageRate,
            origin_city=_text(form, "origin_city"),
            destination_port=_text(form, "destination_port"),
            destination_port_name=self._port_name(form, "destination_port", "destination_port_name"),
            container_type=_text(form, "container_type"),
            price=self._price(form),
            currency=self.default_currency,
            transit_days=parse_int(form.get("transit_days"), 1),
            valid_until=parse_date(form.get("valid_until")),
        )

    def collect_on_carriage(self, form: Mapping[str, Any]) -> OnCarriageRate:
        """Collect an on-carriage rate."""
        country_code = _text(form, "country_code")
        return self._build(
            OnCarriageRate,
            country_code=country_code,
            country_name=_text(form, "country_name") or self.country_lookup(country_code),
            origin_port=_text(form, "origin_port"),
            origin_port_name=self._port_name(form, "origin_port", "origin_port_name"),
            destination_city=_text(form, "destination_city"),
            container_type=_text(form, "container_type"),
            price=self._price(form),
            currency=_text(form, "currency", self.default_currency),
            transit_days=parse_int(form.get("transit_days"), 1),
            valid_until=parse_date(form.get("valid_until")),
        )

    def collect_terminal(self, form: Mapping[str, Any]) -> TerminalRate:
        """Collect a terminal handling rate; the THC side goes into notes."""
        return self._build(
            TerminalRate,
            origin_port=_text(form, "port"),
            origin_port_name=self._port_name(form, "port", "port_name"),
            container_type=_text(form, "container_type"),
            price=self._price(form),
            currency=self.default_currency,
            valid_until=parse_date(form.get("valid_until")),
            notes=_text(form, "thc_side", "origin"),
        )

    def collect_customs(self, form: Mapping[str, Any]) -> CustomsRate:
        """Collect a foreign customs rate; the partner name goes into notes."""
        country_code = _text(form, "country_code")
        return self._build(
            CustomsRate,
            country_code=country_code,
            country_name=_text(form, "country_name") or self.country_lookup(country_code),
            origin_port=_text(form, "port"),
            origin_port_name=self._port_name(form, "port", "port_name"),
            container_type=_text(form, "container_type"),
            price=self._price(form, "clearance_fee"),
            currency=_text(form, "currency", "EUR"),
            valid_until=parse_date(form.get("valid_until")),
            notes=_text(form, "partner_name"),
        )
