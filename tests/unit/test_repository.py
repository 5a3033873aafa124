"""Unit tests for the rate repository."""

import pytest

from src.core.errors import AuthError, StoreError
from src.core.repository import RateRepository
from src.models.schema import RateType, SeaFreightRate, TerminalRate
from tests.test_fixtures import InMemoryBackend, create_example_rates


class TestSave:
    """Test RateRepository.save."""

    def test_save_returns_stored_record(self, repository):
        record = SeaFreightRate(origin_port="TRPOT", destination_port="USNYC", price=1200)
        stored = repository.save(record)

        assert stored.id
        assert stored.created_at is not None
        assert stored.user_id == "user-1"
        assert stored.rate == record

    def test_save_attaches_owner(self, repository, backend):
        repository.save(TerminalRate(origin_port="TRMER"))
        inserted = backend.tables["freight_rates"][0]
        assert inserted["user_id"] == "user-1"
        assert inserted["rate_type"] == "terminal"

    def test_save_without_user(self, backend, repository):
        backend.user_id = None
        with pytest.raises(AuthError):
            repository.save(TerminalRate())
        assert backend.table_calls() == []

    def test_save_backend_failure(self, backend, repository):
        backend.fail_with = "duplicate key value"
        with pytest.raises(StoreError, match="duplicate key value"):
            repository.save(TerminalRate())


class TestLoad:
    """Test RateRepository.load."""

    def test_example_round_trip(self, repository):
        record = SeaFreightRate(origin_port="TRPOT", destination_port="USNYC", price=1200)
        stored = repository.save(record)

        rates = repository.load("all")
        assert len(rates) == 1
        assert rates[0].id == stored.id
        assert rates[0].created_at == stored.created_at
        assert rates[0].rate == record

    def test_load_all_newest_first(self, repository):
        saved = [repository.save(rate) for rate in create_example_rates()]
        rates = repository.load("all")

        assert [r.id for r in rates] == [s.id for s in reversed(saved)]
        assert {r.rate_type for r in rates} == set(RateType)

    def test_load_only_current_user(self, backend, repository):
        repository.save(TerminalRate(origin_port="TRMER"))
        backend.user_id = "user-2"
        repository.save(TerminalRate(origin_port="NLRTM"))

        rates = repository.load("all")
        assert len(rates) == 1
        assert rates[0].user_id == "user-2"
        assert rates[0].rate.origin_port == "NLRTM"

    def test_load_filtered(self, repository, backend):
        for rate in create_example_rates():
            repository.save(rate)
        repository.save(SeaFreightRate(origin_port="TRMER", destination_port="SGSIN"))

        rates = repository.load("sea")
        assert len(rates) == 2
        assert all(r.rate.rate_type == "sea" for r in rates)
        assert backend.calls[-1] == ("select", "freight_rates", {"user_id": "user-1", "rate_type": "sea"})

    def test_load_empty(self, repository):
        assert repository.load(RateType.CUSTOMS) == []

    def test_load_without_user(self, backend, repository):
        backend.user_id = None
        with pytest.raises(AuthError):
            repository.load("all")

    def test_load_backend_failure(self, backend, repository):
        backend.fail_with = "relation does not exist"
        with pytest.raises(StoreError, match="relation does not exist"):
            repository.load("all")

    def test_unreadable_rows_skipped(self, backend, repository):
        repository.save(TerminalRate(origin_port="TRMER"))
        backend.tables["freight_rates"].append({
            "id": "broken",
            "user_id": "user-1",
            "created_at": "2026-12-31T00:00:00+00:00",
            "rate_type": "air",
        })
        rates = repository.load("all")
        assert [r.rate.rate_type for r in rates] == ["terminal"]


class TestDelete:
    """Test RateRepository.delete."""

    def test_delete_removes_row(self, repository):
        first = repository.save(TerminalRate(origin_port="TRMER"))
        second = repository.save(TerminalRate(origin_port="TRIZM"))

        repository.delete(first.id)
        ids = [r.id for r in repository.load("all")]
        assert first.id not in ids
        assert second.id in ids

    def test_delete_does_not_check_owner(self, backend, repository):
        stored = repository.save(TerminalRate())
        backend.user_id = None

        repository.delete(stored.id)
        assert backend.calls[-1] == ("delete", "freight_rates", {"id": stored.id})

    def test_delete_backend_failure(self, backend, repository):
        backend.fail_with = "permission denied"
        with pytest.raises(StoreError, match="permission denied"):
            repository.delete("abc")


def test_default_table_from_settings():
    assert RateRepository(InMemoryBackend()).table == "freight_rates"
