"""
Busy flags for operations that must not overlap.

A flag is set before a request is issued and cleared when the request
completes, success or failure. The next attempt checks it first.

Usage:
    if not self._saving.try_acquire():
        raise ValidationError("Alert settings are already being saved")
    try:
        ...
    finally:
        self._saving.release()
"""

from __future__ import annotations

import threading


class BusyFlag:
    """Check-and-set boolean guarded by a lock."""

    def __init__(self, name: str):
        self.name = name
        self._busy = False
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._busy

    def try_acquire(self) -> bool:
        """
        Set the flag if it is clear.

        Returns:
            True if this caller set the flag, False if it was already set
        """
        with self._lock:
            if self._busy:
                return False
            self._busy = True
            return True

    def release(self) -> None:
        with self._lock:
            self._busy = False

    def __bool__(self) -> bool:
        return self._busy
