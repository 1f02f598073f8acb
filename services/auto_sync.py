"""
Once-per-session automatic marketplace sync.

The coordinator makes at most one successful automatic sync per console
session. Two flags gate it:

    in_progress  set before the request, cleared when it completes
    complete     set only when a sync succeeds

run() is a no-op while either flag is set. Failures are logged and never
shown to the operator; the operator's manual sync is separate and reports
both outcomes.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class SessionAutoSync:
    """One-shot sync gate for a console session."""

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        on_synced: Optional[Callable[[], object]] = None,
    ):
        """
        Args:
            api_client: Backend client
            on_synced: Called after a successful sync (reloads orders)
        """
        self._api = api_client
        self._on_synced = on_synced
        self._lock = threading.Lock()
        self._complete = False
        self._in_progress = False

    @property
    def complete(self) -> bool:
        return self._complete

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def run(self) -> bool:
        """
        Sync once if this session has not synced yet.

        Returns:
            True if a sync request was issued and succeeded
        """
        with self._lock:
            if self._complete or self._in_progress:
                return False
            self._in_progress = True

        try:
            self._api.sync_orders()
        except APIRequestError as e:
            with self._lock:
                self._in_progress = False
            logger.error(f"Auto-sync failed: {e}")
            return False

        with self._lock:
            self._in_progress = False
            self._complete = True
        logger.info("Orders auto-synced successfully")

        if self._on_synced is not None:
            self._on_synced()
        return True
