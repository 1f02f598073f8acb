"""
Bulk actions over the operator's selection.

A bulk action sends every selected order id to the backend in one request.
Afterwards the order list is reloaded; filament-assigning actions also
reload the filament list because the backend deducted inventory.

The selection is left as-is so the operator can chain another action on
the same orders.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import ValidationError
from core.guards import BusyFlag
from services.filament_monitor import FilamentMonitor
from services.order_registry import OrderRegistry
from services.selection import SelectionSet
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

MARK_SHIPPED = "mark_shipped"
ASSIGN_FILAMENT = "assign_filament"

# Actions after which remote inventory has changed
INVENTORY_ACTIONS = frozenset({ASSIGN_FILAMENT})


class BulkActionCoordinator:
    """Runs bulk and per-order inventory actions."""

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        selection: SelectionSet,
        registry: OrderRegistry,
        filaments: FilamentMonitor,
    ):
        self._api = api_client
        self._selection = selection
        self._registry = registry
        self._filaments = filaments
        self._busy = BusyFlag("bulk_action")

    @property
    def busy(self) -> bool:
        return self._busy.is_set

    def bulk_action(self, action: str) -> int:
        """
        Apply ``action`` to every selected order.

        Args:
            action: Backend action name (e.g. "mark_shipped", "assign_filament")

        Returns:
            Number of orders the action was sent for

        Raises:
            ValidationError: If nothing is selected or a bulk action is running
            APIRequestError: If the backend rejects the action
        """
        order_ids = self._selection.ids()
        if not order_ids:
            raise ValidationError("Select at least one order", field="selection")

        if not self._busy.try_acquire():
            raise ValidationError("A bulk action is already running")

        try:
            logger.info(f"Bulk {action} on {len(order_ids)} order(s): {order_ids}")
            self._api.bulk_action(order_ids, action)
        finally:
            self._busy.release()

        self._registry.load()
        if action in INVENTORY_ACTIONS:
            self._filaments.load()

        return len(order_ids)

    def auto_assign_filament(self, order_id: int) -> Optional[str]:
        """
        Let the backend match one order to product profiles and deduct filament.

        Returns:
            The backend's message, if any

        Raises:
            APIRequestError: If the backend rejects the assignment
        """
        logger.info(f"Auto-assigning filament for order {order_id}")
        response: Dict[str, Any] = self._api.auto_assign_filament(order_id)

        self._registry.load()
        self._filaments.load()

        return response.get("message")
