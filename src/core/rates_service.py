"""Freight rates service - the UI-facing operations of the rates section.

Wires the form collector, repository and list renderer together. Every
operation returns a Notification instead of raising, so a failed save,
delete or load never breaks the page.
"""

from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel

from src.core.errors import FreightRatesError, ValidationError
from src.core.form_collector import FormCollector
from src.core.list_renderer import ListRenderer, RatesListView
from src.core.repository import RateRepository
from src.core.tab_controller import REFRESH_RATES
from src.models.schema import ALL_RATES, RateBase, RateFilter, RateType, StoredRate
from src.config.messages import (
    ERROR_DELETING_RATE,
    ERROR_GENERIC,
    ERROR_NOT_AUTHENTICATED,
    ERROR_SAVING_RATE,
    ERROR_UNKNOWN_RATE_TYPE,
    STATUS_DELETE_NOT_CONFIRMED,
    SUCCESS_CUSTOMS_SAVED,
    SUCCESS_ON_CARRIAGE_SAVED,
    SUCCESS_PRE_CARRIAGE_SAVED,
    SUCCESS_RATE_DELETED,
    SUCCESS_SEA_SAVED,
    SUCCESS_TERMINAL_SAVED,
)
from src.config.logging_config import get_logger

logger = get_logger(__name__)


class Notification(BaseModel):
    """A message for the user.

    Attributes:
        kind: "success", "error" or "info"
        message: Text to display
    """
    kind: Literal["success", "error", "info"]
    message: str

    @property
    def ok(self) -> bool:
        return self.kind != "error"


def _success_message(rate: Any) -> str:
    """Success text naming what was saved, per category."""
    rate_type = rate.rate_type
    if rate_type == RateType.SEA.value:
        return SUCCESS_SEA_SAVED.format(origin=rate.origin_port_name, destination=rate.destination_port_name)
    if rate_type == RateType.PRE_CARRIAGE.value:
        return SUCCESS_PRE_CARRIAGE_SAVED.format(origin=rate.origin_city, destination=rate.destination_port_name)
    if rate_type == RateType.ON_CARRIAGE.value:
        return SUCCESS_ON_CARRIAGE_SAVED.format(origin=rate.origin_port_name, destination=rate.destination_city)
    if rate_type == RateType.TERMINAL.value:
        return SUCCESS_TERMINAL_SAVED.format(port=rate.origin_port_name)
    return SUCCESS_CUSTOMS_SAVED.format(country=rate.country_name)


class FreightRatesService:
    """Save, delete, filter and list freight rates on behalf of the UI.

    Args:
        repository: Rate repository bound to a backend client
        collector: Form collector (a default one is created if omitted)
        renderer: List renderer (defaults to one over ``repository``)
    """

    def __init__(
        self,
        repository: RateRepository,
        collector: Optional[FormCollector] = None,
        renderer: Optional[ListRenderer] = None
    ):
        self.repository = repository
        self.collector = collector or FormCollector()
        self.renderer = renderer or ListRenderer(repository)

    def save_rate(
        self,
        rate_type: RateType,
        form: Mapping[str, Any]
    ) -> Tuple[Notification, Optional[StoredRate]]:
        """Collect a rate from form values and store it.

        Validation happens before any backend call.

        Args:
            rate_type: Category of the submitted form
            form: Field name -> raw value

        Returns:
            (notification, stored rate or None on failure)
        """
        try:
            rate_type = RateType(rate_type)
        except ValueError:
            logger.warning(f"Unknown rate type: {rate_type}")
            return Notification(kind="error", message=ERROR_UNKNOWN_RATE_TYPE.format(rate_type=rate_type)), None

        logger.info(f"Saving {rate_type.value} rate...")

        try:
            record: RateBase = self.collector.collect(rate_type, form)
        except ValidationError as e:
            logger.info(f"Validation failed for {rate_type.value} rate: {e}")
            return Notification(kind="error", message=str(e)), None

        try:
            stored = self.repository.save(record)
        except FreightRatesError as e:
            logger.error(f"Saving {rate_type.value} rate failed: {e}")
            return Notification(kind="error", message=ERROR_SAVING_RATE.format(error=e)), None

        return Notification(kind="success", message=_success_message(stored.rate)), stored

    def save_sea_freight_rate(self, form: Mapping[str, Any]) -> Tuple[Notification, Optional[StoredRate]]:
        return self.save_rate(RateType.SEA, form)

    def save_pre_carriage_rate(self, form: Mapping[str, Any]) -> Tuple[Notification, Optional[StoredRate]]:
        return self.save_rate(RateType.PRE_CARRIAGE, form)

    def save_on_carriage_rate(self, form: Mapping[str, Any]) -> Tuple[Notification, Optional[StoredRate]]:
        return self.save_rate(RateType.ON_CARRIAGE, form)

    def save_terminal_rate(self, form: Mapping[str, Any]) -> Tuple[Notification, Optional[StoredRate]]:
        return self.save_rate(RateType.TERMINAL, form)

    def save_foreign_customs_rate(self, form: Mapping[str, Any]) -> Tuple[Notification, Optional[StoredRate]]:
        return self.save_rate(RateType.CUSTOMS, form)

    def delete_rate(self, rate_id: str, confirmed: bool = True) -> Notification:
        """Delete a rate after the user confirmed it.

        Args:
            rate_id: Identifier of the rate
            confirmed: Whether the user confirmed the deletion

        Returns:
            Notification describing the outcome
        """
        rate_id = (rate_id or "").strip()
        if not confirmed:
            return Notification(kind="info", message=STATUS_DELETE_NOT_CONFIRMED)
        if not rate_id:
            return Notification(kind="error", message=ERROR_DELETING_RATE.format(error="no rate selected"))

        logger.info(f"Deleting rate: {rate_id}")
        try:
            self.repository.delete(rate_id)
        except FreightRatesError as e:
            logger.error(f"Deleting rate {rate_id} failed: {e}")
            return Notification(kind="error", message=ERROR_DELETING_RATE.format(error=e))
        return Notification(kind="success", message=SUCCESS_RATE_DELETED)

    def render_saved_rates(self, rate_filter: RateFilter = ALL_RATES) -> RatesListView:
        """Render the saved rates list for ``rate_filter``."""
        return self.renderer.render(rate_filter)

    def filter_saved_rates(self, rate_filter: RateFilter) -> RatesListView:
        logger.info(f"Filtering rates by: {getattr(rate_filter, 'value', rate_filter)}")
        return self.renderer.render(rate_filter)

    def initialize(self) -> Tuple[Notification, Optional[RatesListView]]:
        """Check authentication and load the initial list.

        Returns:
            (notification, initial list view or None when signed out)
        """
        logger.info("Initializing Freight Rates Module...")
        try:
            user_id = self.repository.backend.current_user_id()
        except FreightRatesError as e:
            return Notification(kind="error", message=ERROR_GENERIC.format(error=e)), None

        if not user_id:
            logger.warning("User not authenticated")
            return Notification(kind="error", message=ERROR_NOT_AUTHENTICATED), None

        view = self.render_saved_rates(ALL_RATES)
        logger.info("Freight Rates Module initialized")
        return Notification(kind="info", message=f"{sum(view.counts.values())} saved rates"), view

    def tab_hooks(self, extra: Optional[Dict[str, Callable[..., Any]]] = None) -> Dict[str, Callable[..., Any]]:
        """Hooks for a TabController; the list refresh is provided here."""
        hooks: Dict[str, Callable[..., Any]] = {REFRESH_RATES: self.render_saved_rates}
        hooks.update(extra or {})
        return hooks

