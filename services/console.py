"""
Operator console: the orchestration facade.

The console composes every store and monitor, exposes the operator-facing
command set, and owns the lifecycle of the background printer poll.

ERROR REPORTING:
    - ValidationError   -> warning notice, no request issued
    - APIRequestError   -> generic error notice, local state untouched
    - Background work (auto-sync, printer poll, reloads) -> logged only

Each command returns True on success and False otherwise; the reason is
on the notice board for the HTTP layer to return.

Lifecycle:
    console = OperatorConsole(api_client, preferences)
    console.start()   # initial loads, auto-sync, printer poll
    ...
    console.stop()    # cancels the poll; later commands are no-ops
"""

from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Dict, List, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError, ValidationError
from core.guards import BusyFlag
from core.preferences import FILTERS_COLLAPSED_KEY, PreferenceStore
from core.scheduler import RepeatingTask
from models.alerts import AlertTriggerResult
from models.drafts import StagedPhoto
from models.notices import NoticeBoard
from services.alert_center import AlertCenter
from services.auto_sync import SessionAutoSync
from services.bulk_actions import ASSIGN_FILAMENT, MARK_SHIPPED, BulkActionCoordinator
from services.draft_store import DraftStore
from services.filament_monitor import FilamentMonitor
from services.order_activity import OrderActivityService
from services.order_registry import OrderRegistry
from services.printer_health import DEFAULT_POLL_INTERVAL_SECONDS, PrinterHealthMonitor
from services.product_profiles import ProductProfileCatalog
from services.selection import SelectionSet
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Failure notices for bulk actions the console knows by name
BULK_FAILURE_MESSAGES = {
    MARK_SHIPPED: "Bulk mark shipped failed",
    ASSIGN_FILAMENT: "Bulk assign filament failed",
}


def operator_command(failure_message: str) -> Callable:
    """
    Wrap a console command with the operator error contract.

    The wrapped method returns True on success, False on a validation or
    backend failure (after posting a notice), and False without doing
    anything once the console is closed.
    """
    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self: "OperatorConsole", *args: Any, **kwargs: Any) -> bool:
            return self._run_command(
                method.__name__,
                failure_message,
                lambda: method(self, *args, **kwargs),
            )
        return wrapper
    return decorator


class OperatorConsole:
    """
    Orchestration facade over orders, inventory, printers and alerts.

    Attributes:
        notices: Pending operator notices
        selection: Selected order ids
        drafts: Per-order drafts and caches
        orders: Order registry and filters
        filaments: Filament inventory monitor
        profiles: Product profile catalog
        printers: Printer health monitor
        alerts: Alert settings and actions
        auto_sync: Once-per-session sync gate
    """

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        preferences: Optional[PreferenceStore] = None,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        task_factory: Optional[Callable[..., RepeatingTask]] = None,
    ):
        self._api = api_client
        self._preferences = preferences or PreferenceStore()

        self.notices = NoticeBoard()
        self.selection = SelectionSet()
        self.drafts = DraftStore()
        self.orders = OrderRegistry(api_client, self.selection, self.drafts)
        self.filaments = FilamentMonitor(api_client)
        self.profiles = ProductProfileCatalog(api_client)
        self.bulk = BulkActionCoordinator(api_client, self.selection, self.orders, self.filaments)
        self.activity = OrderActivityService(api_client, self.drafts, self.orders)
        self.printers = PrinterHealthMonitor(
            api_client, interval_seconds=poll_interval_seconds, task_factory=task_factory
        )
        self.alerts = AlertCenter(api_client)
        self.auto_sync = SessionAutoSync(api_client, on_synced=self.orders.load)

        self._lifecycle_lock = threading.Lock()
        self._started = False
        self._closed = False
        self._manual_sync = BusyFlag("sync_orders")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def started(self) -> bool:
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def syncing(self) -> bool:
        """Whether any marketplace sync is running."""
        return self._manual_sync.is_set or self.auto_sync.in_progress

    def start(self) -> None:
        """
        Initial loads, one automatic sync, and the printer poll.

        Safe to call multiple times - only the first call does anything.
        """
        with self._lifecycle_lock:
            if self._started or self._closed:
                return
            self._started = True

        logger.info("Starting operator console")
        self.orders.load()
        self.filaments.load()
        self.profiles.load()
        self.auto_sync.run()
        self.printers.start()
        logger.info("Operator console started")

    def stop(self) -> None:
        """
        Cancel the printer poll and close the console.

        Safe to call multiple times.
        """
        with self._lifecycle_lock:
            if self._closed:
                return
            self._closed = True

        logger.info("Stopping operator console")
        self.printers.stop()
        logger.info("Operator console stopped")

    def _run_command(self, name: str, failure_message: str, func: Callable[[], Any]) -> bool:
        if self.closed:
            logger.debug(f"Ignoring {name} after console stop")
            return False
        try:
            func()
        except ValidationError as e:
            self.notices.warning(e.message)
            return False
        except APIRequestError as e:
            logger.error(f"{failure_message}: {e}")
            self.notices.error(failure_message)
            return False
        return True

    # =========================================================================
    # ORDERS
    # =========================================================================

    @operator_command("Failed to sync orders")
    def sync_orders(self) -> None:
        """Operator-requested sync; reports success and failure."""
        if not self._manual_sync.try_acquire():
            raise ValidationError("Order sync already in progress")

        try:
            self._api.sync_orders()
        finally:
            self._manual_sync.release()

        self.orders.load()
        self.notices.success("Orders synced successfully!")

    def reload_orders(self) -> bool:
        if self.closed:
            return False
        return self.orders.load()

    @operator_command("Invalid order filter")
    def apply_filters(self, **changes: Any) -> None:
        try:
            self.orders.filters.update(**changes)
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid order filter: {e}") from e
        self.orders.load()

    def clear_filters(self) -> bool:
        if self.closed:
            return False
        return self.orders.clear_filters()

    # =========================================================================
    # SELECTION & BULK ACTIONS
    # =========================================================================

    def toggle_selection(self, order_id: int) -> bool:
        """Returns True if the order is selected afterwards."""
        return self.selection.toggle(order_id)

    def select_all(self) -> None:
        self.selection.select_all(self.orders.order_ids)

    def clear_selection(self) -> None:
        self.selection.clear()

    def bulk_action(self, action: str) -> bool:
        """Apply ``action`` to the selection; the selection is kept."""
        failure = BULK_FAILURE_MESSAGES.get(action, f"Bulk {action.replace('_', ' ')} failed")
        return self._run_command("bulk_action", failure, lambda: self.bulk.bulk_action(action))

    @operator_command("Failed to auto-assign filament")
    def auto_assign_filament(self, order_id: int) -> None:
        message = self.bulk.auto_assign_filament(order_id)
        self.notices.success(message or "Filament assigned")

    # =========================================================================
    # NOTES & COMMUNICATIONS
    # =========================================================================

    def set_note_draft(self, order_id: int, content: str) -> None:
        self.drafts.set_note_draft(order_id, content)

    @operator_command("Failed to add note")
    def save_note(self, order_id: int) -> None:
        self.activity.save_note(order_id)

    def load_notes(self, order_id: int) -> Optional[List]:
        if self.closed:
            return None
        return self.activity.load_notes(order_id)

    def set_communication_draft(self, order_id: int, **fields: Optional[str]) -> None:
        self.drafts.set_communication_draft(order_id, **fields)

    @operator_command("Failed to add communication")
    def save_communication(self, order_id: int) -> None:
        self.activity.save_communication(order_id)

    def load_communications(self, order_id: int) -> Optional[List]:
        if self.closed:
            return None
        return self.activity.load_communications(order_id)

    # =========================================================================
    # PHOTOS & SHIPPING LABELS
    # =========================================================================

    def stage_photo(self, order_id: int, photo: Optional[StagedPhoto]) -> None:
        self.drafts.stage_photo(order_id, photo)

    @operator_command("Photo upload failed")
    def upload_photo(self, order_id: int) -> None:
        self.activity.upload_photo(order_id)

    def set_label_draft(
        self,
        order_id: int,
        provider: Optional[str] = None,
        tracking: Optional[str] = None,
    ) -> None:
        self.drafts.set_label_draft(order_id, provider=provider, tracking=tracking)

    @operator_command("Shipping label save failed")
    def save_shipping_label(self, order_id: int) -> None:
        self.activity.save_shipping_label(order_id)

    # =========================================================================
    # FILAMENTS & PRODUCT PROFILES
    # =========================================================================

    @operator_command("Failed to create filament")
    def create_filament(self, fields: Dict[str, Any]) -> None:
        self.filaments.create(fields)

    @operator_command("Failed to update filament")
    def update_filament(self, filament_id: int, fields: Dict[str, Any]) -> None:
        self.filaments.update(filament_id, fields)

    @operator_command("Failed to delete filament")
    def delete_filament(self, filament_id: int) -> None:
        self.filaments.delete(filament_id)

    @operator_command("Failed to create product profile")
    def create_product_profile(self, fields: Dict[str, Any]) -> None:
        self.profiles.create(fields)

    @operator_command("Failed to update product profile")
    def update_product_profile(self, profile_id: int, fields: Dict[str, Any]) -> None:
        self.profiles.update(profile_id, fields)

    @operator_command("Failed to delete product profile")
    def delete_product_profile(self, profile_id: int) -> None:
        self.profiles.delete(profile_id)

    # =========================================================================
    # ALERTS
    # =========================================================================

    def open_alert_settings(self) -> None:
        if self.closed:
            return
        self.alerts.open_settings()

    def close_alert_settings(self) -> None:
        self.alerts.close_settings()

    @operator_command("Failed to save alert settings")
    def save_alert_settings(self, changes: Optional[Dict[str, Any]] = None) -> None:
        self.alerts.save_settings(changes)
        self.notices.success("Alert settings saved")

    def trigger_alerts(self) -> Optional[AlertTriggerResult]:
        """
        Send alerts now and report which channels were used.

        Returns:
            The trigger result, or None if the request failed
        """
        outcome: List[AlertTriggerResult] = []

        def send() -> None:
            result = self.alerts.trigger_alerts()
            self.notices.post("info", result.summary())
            outcome.append(result)

        self._run_command("trigger_alerts", "Failed to send alerts", send)
        return outcome[0] if outcome else None

    # =========================================================================
    # PREFERENCES & VIEW
    # =========================================================================

    @property
    def filters_visible(self) -> bool:
        """Filter panel visibility; collapsed unless the operator opened it."""
        return not self._preferences.get_bool(FILTERS_COLLAPSED_KEY, default=True)

    def toggle_filter_panel(self) -> bool:
        """
        Flip the filter panel and remember the choice.

        Returns:
            New visibility
        """
        visible = not self.filters_visible
        self._preferences.set(FILTERS_COLLAPSED_KEY, not visible)
        return visible

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the whole console."""
        orders = []
        for order in self.orders.orders:
            data = order.to_dict()
            data["selected"] = order.id in self.selection
            data["note_draft"] = self.drafts.note_draft(order.id)
            data["label_draft"] = self.drafts.label_draft(order.id).to_dict()
            orders.append(data)

        return {
            "orders": orders,
            "selected_order_ids": self.selection.ids(),
            "filters": self.orders.filters.to_dict(),
            "active_filter_count": self.orders.active_filter_count(),
            "active_filter_chips": self.orders.active_filter_chips(),
            "filters_visible": self.filters_visible,
            "filaments": [f.to_dict() for f in self.filaments.filaments],
            "low_stock_filaments": [f.to_dict() for f in self.filaments.low_stock],
            "low_stock_display": self.filaments.low_stock_display(),
            "product_profiles": [p.to_dict() for p in self.profiles.profiles],
            "printer_issues": self.printers.issues,
            "alerts": {
                "panel": self.alerts.state.value,
                "settings": self.alerts.settings.to_dict(),
                "preview": self.alerts.preview.to_dict() if self.alerts.preview else None,
                "saving": self.alerts.saving,
                "triggering": self.alerts.triggering,
            },
            "syncing": self.syncing,
            "auto_sync_complete": self.auto_sync.complete,
        }
