"""
Order registry and filter engine.

The registry owns the authoritative order list. Every load replaces the
list wholesale, then reconciles the selection and drafts against it:

    1. Fetch orders with the current filters (empty filters omitted)
    2. Swap in the new list
    3. Prune selected ids that are no longer present
    4. Create default drafts for orders seen for the first time

A failed fetch keeps the previous list; the operator's view is never
torn down by a transient error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError
from models.order import Order, OrderFilters
from services.draft_store import DraftStore
from services.selection import SelectionSet
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class OrderRegistry:
    """
    Holds the current order snapshot and the active filters.

    Attributes:
        filters: Mutable filter struct used by the next load()
    """

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        selection: SelectionSet,
        drafts: DraftStore,
    ):
        self._api = api_client
        self._selection = selection
        self._drafts = drafts

        self.filters = OrderFilters()

        # Replaced wholesale, never mutated element-wise by load()
        self._orders: List[Order] = []
        self._last_error: Optional[str] = None

    @property
    def orders(self) -> List[Order]:
        """Current orders in server order."""
        return list(self._orders)

    @property
    def order_ids(self) -> List[int]:
        return [order.id for order in self._orders]

    @property
    def last_error(self) -> Optional[str]:
        """Message of the most recent failed load, None after a success."""
        return self._last_error

    def get(self, order_id: int) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def load(self) -> bool:
        """
        Fetch orders with the current filters and reconcile local state.

        Returns:
            True if the snapshot was replaced, False if the fetch failed
        """
        params = self.filters.to_params()
        logger.debug(f"Loading orders with filters {params}")

        try:
            raw_orders = self._api.list_orders(params)
            orders = [Order.from_dict(data) for data in raw_orders]
        except (APIRequestError, KeyError, TypeError, ValueError) as e:
            self._last_error = str(e)
            logger.error(f"Error loading orders: {e}")
            return False

        self._orders = orders
        self._last_error = None

        removed = self._selection.prune(order.id for order in orders)
        if removed:
            logger.debug(f"Pruned {len(removed)} stale selections: {sorted(removed)}")

        for order in orders:
            self._drafts.ensure_drafts(order)

        logger.debug(f"Orders loaded: {len(orders)}")
        return True

    def apply_filters(self, **changes: Any) -> bool:
        """
        Update filter fields and reload.

        Raises:
            KeyError: If a field name is not a filter
        """
        self.filters.update(**changes)
        return self.load()

    def clear_filters(self) -> bool:
        """Reset every filter and reload."""
        self.filters = OrderFilters()
        return self.load()

    def active_filter_count(self) -> int:
        return self.filters.active_count()

    def active_filter_chips(self) -> List[str]:
        return self.filters.chips()

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [order.to_dict() for order in self._orders]
