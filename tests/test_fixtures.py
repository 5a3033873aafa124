"""Test fixtures and sample data for freight rate tests."""

import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Mapping, Optional

from src.core.errors import StoreError
from src.models.schema import (
    CustomsRate,
    OnCarriageRate,
    PreCarriageRate,
    SeaFreightRate,
    TerminalRate,
)


class InMemoryBackend:
    """BackendClient keeping tables in dictionaries.

    Every call is recorded in ``calls`` so tests can assert that nothing
    reached the backend. Setting ``fail_with`` makes table operations raise
    StoreError with that message.
    """

    def __init__(self, user_id: Optional[str] = "user-1"):
        self.user_id = user_id
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.calls: List[tuple] = []
        self.fail_with: Optional[str] = None
        self._clock = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)

    def _check_failure(self):
        if self.fail_with:
            raise StoreError(self.fail_with)

    def current_user_id(self) -> Optional[str]:
        self.calls.append(("current_user_id",))
        return self.user_id

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", table, dict(row)))
        self._check_failure()
        self._clock += timedelta(minutes=1)
        stored = dict(row, id=str(uuid.uuid4()), created_at=self._clock.isoformat())
        self.tables[table].append(stored)
        return dict(stored)

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        order_by: str,
        descending: bool = True
    ) -> List[Dict[str, Any]]:
        self.calls.append(("select", table, dict(filters)))
        self._check_failure()
        rows = [
            dict(row) for row in self.tables[table]
            if all(row.get(column) == value for column, value in filters.items())
        ]
        return sorted(rows, key=lambda row: row[order_by], reverse=descending)

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        self.calls.append(("delete", table, dict(filters)))
        self._check_failure()
        self.tables[table] = [
            row for row in self.tables[table]
            if not all(row.get(column) == value for column, value in filters.items())
        ]

    def table_calls(self) -> List[tuple]:
        """Calls other than the identity lookup."""
        return [call for call in self.calls if call[0] != "current_user_id"]


class FakeQuery:
    """Chainable stand-in for a postgrest request builder.

    Records every builder call; ``execute`` raises ``error`` when set.
    """

    def __init__(self, data=None, error=None):
        self.data = data if data is not None else []
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


def sea_form(**overrides) -> Dict[str, Any]:
    """Sea freight form values as the UI submits them."""
    form = {
        "origin_port": "TRAMR",
        "destination_port": "USNYC",
        "shipment_type": "fcl",
        "container_type": "40HC",
        "incoterm": "FOB",
        "price": "1200",
        "transit_days": "18",
        "valid_until": "2026-11-30",
        "notes": "Weekly service",
        "included_services": ["thc", "documentation"],
    }
    form.update(overrides)
    return form


def create_example_rates() -> list:
    """One rate of each category."""
    return [
        SeaFreightRate(
            origin_port="TRAMR",
            origin_port_name="Ambarli",
            destination_port="DEHAM",
            destination_port_name="Hamburg",
            price=950,
            transit_days=12,
        ),
        PreCarriageRate(origin_city="Bursa", destination_port="TRGEM", destination_port_name="Gemlik", price=300),
        OnCarriageRate(
            country_code="DE",
            country_name="Germany",
            origin_port="DEHAM",
            origin_port_name="Hamburg",
            destination_city="Munich",
            price=780,
            currency="EUR",
        ),
        TerminalRate(origin_port="TRMER", origin_port_name="Mersin", container_type="40HC", price=210),
        CustomsRate(
            country_code="NL",
            country_name="Netherlands",
            origin_port="NLRTM",
            origin_port_name="Rotterdam",
            price=150,
            notes="Dutch Clearing BV",
        ),
    ]
