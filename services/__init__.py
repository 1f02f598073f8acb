"""
Services layer for the Print Shop Console.

This module contains the orchestration state engine:
- OperatorConsole: Facade composing everything below
- OrderRegistry: Order snapshot, filters, reconciliation
- SelectionSet / BulkActionCoordinator: Selection and bulk actions
- DraftStore / OrderActivityService: Drafts, note and message threads
- FilamentMonitor / ProductProfileCatalog: Inventory
- PrinterHealthMonitor: Background printer poll
- AlertCenter: Alert settings, preview, trigger
- SessionAutoSync: Once-per-session marketplace sync

Thread Model:
    Request threads (Flask)
    └── PrinterHealth thread (60-second poll loop)

Stores are replaced by reference swap; busy flags are lock-guarded.
"""

from .alert_center import AlertCenter, PanelState
from .auto_sync import SessionAutoSync
from .bulk_actions import BulkActionCoordinator
from .console import OperatorConsole
from .draft_store import DraftStore, LazyCache
from .filament_monitor import FilamentMonitor, derive_low_stock
from .order_activity import OrderActivityService
from .order_registry import OrderRegistry
from .printer_health import PrinterHealthMonitor, find_printer_issues
from .product_profiles import ProductProfileCatalog
from .selection import SelectionSet

__all__ = [
    "AlertCenter",
    "PanelState",
    "SessionAutoSync",
    "BulkActionCoordinator",
    "OperatorConsole",
    "DraftStore",
    "LazyCache",
    "FilamentMonitor",
    "derive_low_stock",
    "OrderActivityService",
    "OrderRegistry",
    "PrinterHealthMonitor",
    "find_printer_issues",
    "ProductProfileCatalog",
    "SelectionSet",
]
