"""Core business logic modules."""

from src.core.errors import AuthError, FreightRatesError, StoreError, ValidationError
from src.core.backend import BackendClient, SupabaseBackend
from src.core.repository import RateRepository
from src.core.form_collector import FormCollector
from src.core.list_renderer import ListRenderer, RatesListView, RateRowView
from src.core.tab_controller import RateTab, TabController, TabSwitch
from src.core.rates_service import FreightRatesService, Notification

__all__ = [
    "AuthError",
    "FreightRatesError",
    "StoreError",
    "ValidationError",
    "BackendClient",
    "SupabaseBackend",
    "RateRepository",
    "FormCollector",
    "ListRenderer",
    "RatesListView",
    "RateRowView",
    "RateTab",
    "TabController",
    "TabSwitch",
    "FreightRatesService",
    "Notification",
]
