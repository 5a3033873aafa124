"""Data models for the freight rates system."""

from src.models.schema import (
    ALL_RATES,
    RateType,
    IncludedService,
    RateFilter,
    RateBase,
    SeaFreightRate,
    PreCarriageRate,
    OnCarriageRate,
    TerminalRate,
    CustomsRate,
    Rate,
    StoredRate,
)

__all__ = [
    # Enums and filters
    "ALL_RATES",
    "RateType",
    "IncludedService",
    "RateFilter",
    # Rate records
    "RateBase",
    "SeaFreightRate",
    "PreCarriageRate",
    "OnCarriageRate",
    "TerminalRate",
    "CustomsRate",
    "Rate",
    "StoredRate",
]
