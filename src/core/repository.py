"""Rate repository - save, load and delete rates for the signed-in user."""

from typing import List, Optional

from src.core.backend import BackendClient
from src.core.errors import AuthError, StoreError
from src.models.schema import (
    ALL_RATES,
    RateBase,
    RateFilter,
    StoredRate,
    normalize_filter,
    rate_to_row,
)
from src.config.settings import get_settings
from src.config.messages import ERROR_NOT_AUTHENTICATED
from src.config.logging_config import get_logger

logger = get_logger(__name__)


class RateRepository:
    """Data access for the freight rates table.

    Every read and write is scoped to the authenticated user returned by
    the backend client. Deletes are not checked against the owner here;
    the backend's row-level policy decides whether a delete is allowed.
    """

    def __init__(self, backend: BackendClient, table: Optional[str] = None):
        """
        Initialize repository.

        Args:
            backend: Backend client used for auth lookup and table access
            table: Table name (defaults to settings.rates_table)
        """
        self.backend = backend
        self.table = table or get_settings().rates_table

    def _require_user(self) -> str:
        """Return the current user id or raise AuthError."""
        user_id = self.backend.current_user_id()
        if not user_id:
            raise AuthError(ERROR_NOT_AUTHENTICATED)
        return user_id

    def save(self, record: RateBase) -> StoredRate:
        """Insert a rate owned by the current user.

        Args:
            record: Rate to store (any category)

        Returns:
            The stored rate including generated id and created_at

        Raises:
            AuthError: If no user is signed in
            StoreError: If the backend rejects the insert
        """
        user_id = self._require_user()

        row = rate_to_row(record)
        row["user_id"] = user_id

        stored_row = self.backend.insert(self.table, row)
        try:
            stored = StoredRate.from_row(stored_row)
        except ValueError as e:
            raise StoreError(f"Backend returned an unreadable row: {e}") from e

        logger.info(f"Rate saved successfully: {stored.id} ({stored.rate.rate_type})")
        return stored

    def load(self, rate_filter: RateFilter = ALL_RATES) -> List[StoredRate]:
        """Load the current user's rates, newest first.

        Args:
            rate_filter: "all" or a RateType to narrow the result

        Returns:
            List of StoredRate ordered by created_at descending (may be empty)

        Raises:
            AuthError: If no user is signed in
            StoreError: If the backend query fails
        """
        rate_filter = normalize_filter(rate_filter)
        user_id = self._require_user()

        filters = {"user_id": user_id}
        if rate_filter != ALL_RATES:
            filters["rate_type"] = rate_filter.value

        rows = self.backend.select(self.table, filters, order_by="created_at", descending=True)

        rates = []
        for row in rows:
            try:
                rates.append(StoredRate.from_row(row))
            except ValueError as e:
                logger.warning(f"Skipping unreadable rate row {row.get('id')}: {e}")

        filter_name = getattr(rate_filter, "value", rate_filter)
        logger.info(f"Loaded {len(rates)} rates (type: {filter_name})")
        return rates

    def delete(self, rate_id: str) -> None:
        """Delete a rate by id.

        Args:
            rate_id: Identifier of the rate to delete

        Raises:
            StoreError: If the backend rejects the delete
        """
        self.backend.delete(self.table, {"id": rate_id})
        logger.info(f"Rate deleted: {rate_id}")
