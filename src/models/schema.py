"""Freight Rate Data Schema - typed records for the five rate categories."""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

ALL_RATES = "all"


class RateType(str, Enum):
    """Enumeration of the rate categories a forwarder can record.

    The value is the discriminant stored in the ``rate_type`` column of the
    backend table.

    Attributes:
        SEA: Port-to-port ocean freight
        PRE_CARRIAGE: Inland haulage from an origin city to the loading port
        ON_CARRIAGE: Inland haulage from the discharge port to a destination city
        TERMINAL: Terminal handling charges (THC) at a port
        CUSTOMS: Foreign customs clearance fee
    """
    SEA = "sea"
    PRE_CARRIAGE = "pre_carriage"
    ON_CARRIAGE = "on_carriage"
    TERMINAL = "terminal"
    CUSTOMS = "customs"


class IncludedService(str, Enum):
    """Services that can be bundled into a sea freight rate."""
    ORIGIN_HAULAGE = "origin-haulage"
    DEST_HAULAGE = "dest-haulage"
    THC = "thc"
    CUSTOMS = "customs"
    DOCUMENTATION = "documentation"


RateFilter = Union[RateType, Literal["all"]]


def normalize_filter(rate_filter: Optional[str]) -> RateFilter:
    """Turn a raw filter value into ``"all"`` or a RateType.

    Args:
        rate_filter: "all", None/empty (treated as "all"), or a rate type value

    Returns:
        ALL_RATES or the matching RateType

    Raises:
        ValueError: If the value is not a known rate type
    """
    if not rate_filter or rate_filter == ALL_RATES:
        return ALL_RATES
    return RateType(rate_filter)


class RateBase(BaseModel):
    """Fields shared by every rate category.

    Attributes:
        price: Non-negative price in ``currency`` (default: 0)
        currency: ISO currency code (default: "USD")
        container_type: Container/equipment code, e.g. "40HC"
        valid_until: Last day the rate is valid (optional)
        notes: Free text; terminal rates store the THC side here and customs
            rates store the partner name
    """
    price: float = Field(default=0.0, ge=0, description="Price, never negative")
    currency: str = Field(default="USD", description="Currency code")
    container_type: str = Field(default="", description="Container/equipment type")
    valid_until: Optional[date] = Field(None, description="Validity end date")
    notes: str = Field(default="", description="Free-text notes")


class SeaFreightRate(RateBase):
    """Port-to-port ocean freight rate."""
    rate_type: Literal["sea"] = "sea"
    origin_port: str = Field(description="Origin port code (UN/LOCODE)")
    origin_port_name: str = ""
    destination_port: str = Field(description="Destination port code (UN/LOCODE)")
    destination_port_name: str = ""
    shipment_type: str = Field(default="fcl", description="fcl or lcl")
    container_type: str = "40HC"
    incoterm: str = "FOB"
    transit_days: int = Field(default=0, ge=0)
    included_services: List[IncludedService] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "rate_type": "sea",
                "origin_port": "TRPOT",
                "origin_port_name": "Ambarli Port",
                "destination_port": "USNYC",
                "destination_port_name": "New York",
                "container_type": "40HC",
                "incoterm": "FOB",
                "price": 1200,
                "currency": "USD",
                "transit_days": 18,
                "included_services": ["thc", "documentation"]
            }
        }


class PreCarriageRate(RateBase):
    """Trucking from an inland origin city to the port of loading."""
    rate_type: Literal["pre_carriage"] = "pre_carriage"
    origin_city: str
    destination_port: str = ""
    destination_port_name: str = ""
    transit_days: int = Field(default=1, ge=0)


class OnCarriageRate(RateBase):
    """Trucking from the port of discharge to an inland destination city."""
    rate_type: Literal["on_carriage"] = "on_carriage"
    country_code: str = ""
    country_name: str = ""
    origin_port: str = ""
    origin_port_name: str = ""
    destination_city: str = ""
    transit_days: int = Field(default=1, ge=0)


class TerminalRate(RateBase):
    """Terminal handling charge at a single port."""
    rate_type: Literal["terminal"] = "terminal"
    origin_port: str = ""
    origin_port_name: str = ""
    notes: str = "origin"


class CustomsRate(RateBase):
    """Customs clearance fee charged by a partner abroad."""
    rate_type: Literal["customs"] = "customs"
    country_code: str = ""
    country_name: str = ""
    origin_port: str = ""
    origin_port_name: str = ""
    currency: str = "EUR"


Rate = Annotated[
    Union[SeaFreightRate, PreCarriageRate, OnCarriageRate, TerminalRate, CustomsRate],
    Field(discriminator="rate_type"),
]

RATE_ADAPTER: TypeAdapter = TypeAdapter(Rate)

# Columns the backend fills in; everything else belongs to the rate itself
METADATA_COLUMNS = ("id", "user_id", "created_at")


class StoredRate(BaseModel):
    """A rate as persisted by the backend.

    Attributes:
        id: Backend-generated identifier
        user_id: Owner of the row
        created_at: Backend-generated creation timestamp
        rate: The typed rate record
    """
    id: str
    user_id: str
    created_at: datetime
    rate: Rate

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        """Accept integer or UUID identifiers from the backend."""
        return str(value) if value is not None else value

    @property
    def rate_type(self) -> RateType:
        """Discriminant of the wrapped rate."""
        return RateType(self.rate.rate_type)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "StoredRate":
        """Build a StoredRate from a flat backend row.

        The table holds the columns of every category, so a row carries
        nulls for the columns its category does not use. Nulls are dropped
        before validation so the category defaults apply.

        Args:
            row: Dictionary returned by the backend for one row

        Returns:
            StoredRate instance
        """
        fields = {k: v for k, v in row.items() if v is not None and k not in METADATA_COLUMNS}
        return cls(
            id=row.get("id"),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
            rate=RATE_ADAPTER.validate_python(fields),
        )

    def to_row(self) -> Dict[str, Any]:
        """Flatten back into the backend row shape."""
        row = self.rate.model_dump(mode="json")
        row.update(id=self.id, user_id=self.user_id, created_at=self.created_at.isoformat())
        return row


def rate_to_row(rate: RateBase) -> Dict[str, Any]:
    """Serialize a rate into JSON-compatible column values for insertion."""
    return rate.model_dump(mode="json")
