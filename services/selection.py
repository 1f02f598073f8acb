"""
Operator order selection.
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Set


class SelectionSet:
    """
    Set of selected order ids.

    Must stay a subset of the loaded orders; the order registry calls
    prune() after every successful reload. Bulk actions never clear it.
    """

    def __init__(self):
        self._ids: Set[int] = set()
        self._lock = threading.Lock()

    def toggle(self, order_id: int) -> bool:
        """
        Flip selection for one order.

        Returns:
            True if the order is selected afterwards
        """
        with self._lock:
            if order_id in self._ids:
                self._ids.discard(order_id)
                return False
            self._ids.add(order_id)
            return True

    def select_all(self, order_ids: Iterable[int]) -> None:
        with self._lock:
            self._ids.update(order_ids)

    def clear(self) -> None:
        with self._lock:
            self._ids.clear()

    def prune(self, valid_ids: Iterable[int]) -> Set[int]:
        """
        Drop ids not in ``valid_ids``.

        Returns:
            The ids that were removed
        """
        valid = set(valid_ids)
        with self._lock:
            removed = self._ids - valid
            self._ids &= valid
        return removed

    def ids(self) -> List[int]:
        """Selected ids in ascending order."""
        with self._lock:
            return sorted(self._ids)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
