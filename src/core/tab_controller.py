"""Tab controller - one active tab out of six, with per-tab initialization."""

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from src.models.schema import ALL_RATES, RateFilter
from src.config.logging_config import get_logger

logger = get_logger(__name__)


class RateTab(str, Enum):
    """Tabs of the freight rates section."""
    SEA_FREIGHT = "sea_freight"
    PRE_CARRIAGE = "pre_carriage"
    ON_CARRIAGE = "on_carriage"
    TERMINAL = "terminal"
    FOREIGN_CUSTOMS = "foreign_customs"
    MY_RATES = "my_rates"


# Hook names
POPULATE_PORTS = "populate_ports"
POPULATE_CITIES = "populate_cities"
POPULATE_COUNTRIES = "populate_countries"
SET_DEFAULT_DATES = "set_default_dates"
REFRESH_RATES = "refresh_rates"

TAB_INITIALIZERS: Dict[RateTab, Tuple[str, ...]] = {
    RateTab.SEA_FREIGHT: (POPULATE_PORTS, SET_DEFAULT_DATES),
    RateTab.PRE_CARRIAGE: (POPULATE_CITIES, POPULATE_PORTS, SET_DEFAULT_DATES),
    RateTab.ON_CARRIAGE: (POPULATE_COUNTRIES, SET_DEFAULT_DATES),
    RateTab.TERMINAL: (POPULATE_PORTS, SET_DEFAULT_DATES),
    RateTab.FOREIGN_CUSTOMS: (POPULATE_PORTS, SET_DEFAULT_DATES),
    RateTab.MY_RATES: (REFRESH_RATES,),
}


class TabSwitch:
    """Outcome of a tab transition.

    Attributes:
        previous: Tab that was active before the switch
        current: Tab that is active now
        visibility: Tab -> shown flag, exactly one True
        outputs: Hook name -> value returned by that hook
    """

    def __init__(self, previous: RateTab, current: RateTab, visibility: Dict[RateTab, bool]):
        self.previous = previous
        self.current = current
        self.visibility = visibility
        self.outputs: Dict[str, Any] = {}

    @property
    def changed(self) -> bool:
        return self.previous != self.current


class TabController:
    """Finite-state tab switcher.

    Exactly one tab is active at a time. Switching hides every other tab,
    shows the target and runs the target's initialization hooks. Hooks are
    injected by name and any hook that was not provided is skipped. The
    refresh hook for "my rates" receives the rate filter given to
    ``switch``; nothing about the selection is persisted.
    """

    def __init__(
        self,
        hooks: Optional[Mapping[str, Callable[..., Any]]] = None,
        initial: RateTab = RateTab.SEA_FREIGHT
    ):
        """
        Initialize controller.

        Args:
            hooks: Hook name -> callable (see TAB_INITIALIZERS)
            initial: Tab active before the first switch
        """
        self.hooks = dict(hooks or {})
        self.active = RateTab(initial)

    def visibility(self) -> Dict[RateTab, bool]:
        """Tab -> shown flag for the current state."""
        return {tab: tab == self.active for tab in RateTab}

    def switch(self, tab: str, rate_filter: RateFilter = ALL_RATES) -> TabSwitch:
        """Activate ``tab`` and run its initialization hooks.

        Args:
            tab: Target tab (RateTab or its value)
            rate_filter: Filter handed to the list refresh hook

        Returns:
            TabSwitch describing the transition and the hook outputs

        Raises:
            ValueError: If ``tab`` is not a known tab
        """
        target = RateTab(tab)
        previous = self.active
        self.active = target
        logger.debug(f"Switching tab: {previous.value} -> {target.value}")

        result = TabSwitch(previous, target, self.visibility())
        for hook_name in TAB_INITIALIZERS[target]:
            hook = self.hooks.get(hook_name)
            if hook is None:
                continue
            if hook_name == REFRESH_RATES:
                result.outputs[hook_name] = hook(rate_filter)
            else:
                result.outputs[hook_name] = hook()
        return result
