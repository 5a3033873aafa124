"""Saved rates list - fetch, count per category and build row view models."""

from html import escape
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from src.core.errors import FreightRatesError
from src.core.repository import RateRepository
from src.models.schema import ALL_RATES, RateFilter, RateType, StoredRate, normalize_filter
from src.models.utils import (
    count_by_type,
    format_price,
    get_route_text,
    get_type_icon,
    get_type_label,
)
from src.config.messages import (
    DEFAULT_EMPTY_CELL,
    ERROR_LOADING_RATES,
    ERROR_UNKNOWN_FILTER,
    STATUS_LOADING_RATES,
    STATUS_NO_RATES,
    STATUS_NO_RATES_HINT,
)
from src.config.logging_config import get_logger

logger = get_logger(__name__)

ListState = Literal["rates", "empty", "error"]


class RateRowView(BaseModel):
    """One display-ready row of the saved rates list."""
    id: str
    rate_type: str
    icon: str
    label: str
    route: str
    container: str = DEFAULT_EMPTY_CELL
    incoterm: str = DEFAULT_EMPTY_CELL
    price: str

    @classmethod
    def from_stored(cls, stored: StoredRate) -> "RateRowView":
        """Build the row view for a stored rate."""
        rate = stored.rate
        return cls(
            id=stored.id,
            rate_type=rate.rate_type,
            icon=get_type_icon(rate.rate_type),
            label=get_type_label(rate.rate_type),
            route=get_route_text(rate),
            container=rate.container_type or DEFAULT_EMPTY_CELL,
            incoterm=getattr(rate, "incoterm", "") or DEFAULT_EMPTY_CELL,
            price=format_price(rate.price, rate.currency),
        )


class RatesListView(BaseModel):
    """Result of rendering the saved rates list.

    Attributes:
        rate_filter: Filter that produced this view ("all" or a rate type value)
        state: "rates", "empty" (placeholder instead of a table) or "error"
        rows: Row view models, newest first
        counts: Rate count per category among the loaded rates
        error: Error message when state is "error"
    """
    rate_filter: str = ALL_RATES
    state: ListState
    rows: List[RateRowView] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=lambda: {t.value: 0 for t in RateType})
    error: Optional[str] = None

    def to_html(self) -> str:
        """Markup for the list container, with every value escaped."""
        if self.state == "error":
            message = ERROR_LOADING_RATES.format(error=self.error)
            return f'<div class="error-rates">{escape(message)}</div>'

        if self.state == "empty":
            return (
                '<div class="empty-rates">'
                '<span class="empty-icon">📋</span>'
                f"<p>{escape(STATUS_NO_RATES)}</p>"
                f"<small>{escape(STATUS_NO_RATES_HINT)}</small>"
                "</div>"
            )

        parts = ['<div class="rates-table">']
        for row in self.rows:
            parts.append(
                f'<div class="rate-row" data-id="{escape(row.id)}" data-type="{escape(row.rate_type)}">'
                f'<div class="rate-type-badge {escape(row.rate_type)}">{row.icon} {escape(row.label)}</div>'
                f'<div class="rate-route">{escape(row.route)}</div>'
                f'<div class="rate-container">{escape(row.container)}</div>'
                f'<div class="rate-incoterm">{escape(row.incoterm)}</div>'
                f'<div class="rate-price">{escape(row.price)}</div>'
                f'<div class="rate-id"><code>{escape(row.id)}</code></div>'
                "</div>"
            )
        parts.append("</div>")
        return "".join(parts)


def loading_html() -> str:
    """Placeholder markup shown while rates are being fetched."""
    return f'<div class="loading-rates">{escape(STATUS_LOADING_RATES)}</div>'


class ListRenderer:
    """Render the saved rates list for the signed-in user.

    The filter is passed into every call; the renderer itself keeps no
    selection state.
    """

    def __init__(self, repository: RateRepository):
        """
        Initialize renderer.

        Args:
            repository: Repository used to load rates
        """
        self.repository = repository

    def render(self, rate_filter: RateFilter = ALL_RATES) -> RatesListView:
        """Load rates and build the list view.

        Unknown filters and load failures are logged and returned as an
        error view rather than raised.

        Args:
            rate_filter: "all" or a rate type

        Returns:
            RatesListView in the "rates", "empty" or "error" state
        """
        try:
            rate_filter = normalize_filter(rate_filter)
        except ValueError:
            logger.warning(f"Unknown rate filter: {rate_filter}")
            return RatesListView(
                rate_filter=str(rate_filter),
                state="error",
                error=ERROR_UNKNOWN_FILTER.format(rate_filter=rate_filter),
            )

        filter_name = getattr(rate_filter, "value", rate_filter)
        logger.debug(f"Rendering saved rates list, filter: {filter_name}")

        try:
            rates = self.repository.load(rate_filter)
        except FreightRatesError as e:
            logger.error(f"Loading rates failed: {e}")
            return RatesListView(rate_filter=filter_name, state="error", error=str(e))

        counts = count_by_type(rates)
        if not rates:
            return RatesListView(rate_filter=filter_name, state="empty", counts=counts)

        return RatesListView(
            rate_filter=filter_name,
            state="rates",
            rows=[RateRowView.from_stored(stored) for stored in rates],
            counts=counts,
        )
