"""Unit tests for the Supabase backend adapter (client mocked)."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from src.core.backend import SupabaseBackend
from src.core.errors import AuthError, StoreError
from src.config.settings import Settings
from tests.test_fixtures import FakeQuery


def api_error(message):
    return APIError({"message": message, "code": "42501", "hint": None, "details": None})


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def supabase_backend(client):
    return SupabaseBackend(client)


class TestAuth:
    """Test identity lookup and sign-in."""

    def test_current_user_id(self, client, supabase_backend):
        client.auth.get_user.return_value = SimpleNamespace(user=SimpleNamespace(id="user-1"))
        assert supabase_backend.current_user_id() == "user-1"

    def test_no_session(self, client, supabase_backend):
        client.auth.get_user.return_value = None
        assert supabase_backend.current_user_id() is None

    def test_rejected_session(self, client, supabase_backend):
        client.auth.get_user.side_effect = RuntimeError("JWT expired")
        assert supabase_backend.current_user_id() is None

    def test_sign_in(self, client, supabase_backend):
        client.auth.sign_in_with_password.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-1", email="ops@example.com")
        )
        assert supabase_backend.sign_in("ops@example.com", "secret") == "user-1"
        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "ops@example.com", "password": "secret"}
        )

    def test_sign_in_failure(self, client, supabase_backend):
        client.auth.sign_in_with_password.side_effect = RuntimeError("Invalid login credentials")
        with pytest.raises(AuthError, match="Invalid login credentials"):
            supabase_backend.sign_in("ops@example.com", "wrong")

    def test_from_settings_requires_credentials(self):
        with pytest.raises(AuthError):
            SupabaseBackend.from_settings(Settings(supabase_url="", supabase_anon_key=""))


class TestTableOperations:
    """Test insert/select/delete forwarding."""

    def test_insert_returns_stored_row(self, client, supabase_backend):
        query = FakeQuery(data=[{"id": "abc", "rate_type": "sea"}])
        client.table.return_value = query

        row = supabase_backend.insert("freight_rates", {"rate_type": "sea"})

        client.table.assert_called_with("freight_rates")
        assert row == {"id": "abc", "rate_type": "sea"}
        assert query.calls[0] == ("insert", ({"rate_type": "sea"},), {})

    def test_insert_error(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=api_error("new row violates row-level security policy"))
        with pytest.raises(StoreError, match="row-level security"):
            supabase_backend.insert("freight_rates", {"rate_type": "sea"})

    def test_insert_without_returned_row(self, client, supabase_backend):
        client.table.return_value = FakeQuery(data=[])
        with pytest.raises(StoreError):
            supabase_backend.insert("freight_rates", {"rate_type": "sea"})

    def test_select_applies_filters_and_order(self, client, supabase_backend):
        query = FakeQuery(data=[{"id": "1"}, {"id": "2"}])
        client.table.return_value = query

        rows = supabase_backend.select(
            "freight_rates", {"user_id": "user-1", "rate_type": "sea"}, order_by="created_at"
        )

        assert rows == [{"id": "1"}, {"id": "2"}]
        assert query.calls == [
            ("select", ("*",), {}),
            ("eq", ("user_id", "user-1"), {}),
            ("eq", ("rate_type", "sea"), {}),
            ("order", ("created_at",), {"desc": True}),
        ]

    def test_select_error(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=api_error("permission denied"))
        with pytest.raises(StoreError, match="permission denied"):
            supabase_backend.select("freight_rates", {}, order_by="created_at")

    def test_delete(self, client, supabase_backend):
        query = FakeQuery()
        client.table.return_value = query

        supabase_backend.delete("freight_rates", {"id": "abc"})
        assert query.calls == [("delete", (), {}), ("eq", ("id", "abc"), {})]

    def test_delete_error(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=api_error("permission denied"))
        with pytest.raises(StoreError):
            supabase_backend.delete("freight_rates", {"id": "abc"})


class TestNetworkFailures:
    """Transport errors from the HTTP client surface as StoreError."""

    def test_insert_connection_refused(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=httpx.ConnectError("connection refused"))
        with pytest.raises(StoreError, match="connection refused"):
            supabase_backend.insert("freight_rates", {"rate_type": "sea"})

    def test_select_timeout(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=httpx.ReadTimeout("timed out"))
        with pytest.raises(StoreError, match="timed out"):
            supabase_backend.select("freight_rates", {}, order_by="created_at")

    def test_delete_connection_refused(self, client, supabase_backend):
        client.table.return_value = FakeQuery(error=httpx.ConnectError("connection refused"))
        with pytest.raises(StoreError, match="connection refused"):
            supabase_backend.delete("freight_rates", {"id": "abc"})
