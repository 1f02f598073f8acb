"""
Printer fleet health monitor.

Polls printer status on a background thread and keeps the names of
printers that need attention. Healthy printers produce no state.

SILENT:
    Poll failures are logged, never shown to the operator.

Lifecycle:
    monitor = PrinterHealthMonitor(api_client, interval_seconds=60)
    monitor.start()     # immediate check, then every interval
    ...
    monitor.stop()      # cancels the timer; late results are dropped
"""

from __future__ import annotations

from typing import Callable, List, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError
from core.scheduler import RepeatingTask
from models.printer import PrinterStatus
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 60.0


def find_printer_issues(printers: List[PrinterStatus]) -> List[str]:
    """Display names of problematic printers, in input order."""
    return [printer.display_name for printer in printers if printer.is_problematic]


class PrinterHealthMonitor:
    """
    Background printer health poll.

    The issue list is replaced wholesale by each successful poll; the last
    response to arrive wins.

    Attributes:
        interval_seconds: Time between polls
    """

    def __init__(
        self,
        api_client: ConsoleAPIClient,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        task_factory: Optional[Callable[..., RepeatingTask]] = None,
    ):
        """
        Args:
            api_client: Backend client
            interval_seconds: Seconds between polls
            task_factory: Builds the repeating task (tests substitute a fake)
        """
        self._api = api_client
        self.interval_seconds = interval_seconds
        self._task_factory = task_factory or RepeatingTask

        self._task: Optional[RepeatingTask] = None
        self._stopped = False
        self._issues: List[str] = []
        self._consecutive_failures = 0

    @property
    def issues(self) -> List[str]:
        return list(self._issues)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._stopped

    def start(self) -> None:
        """
        Run one check now, then poll every interval.

        Safe to call multiple times - only one timer is ever created.
        """
        if self._task is not None:
            logger.warning("Printer health monitor already started")
            return

        self._stopped = False
        self.check_now()

        self._task = self._task_factory(
            self.check_now,
            self.interval_seconds,
            name="PrinterHealth",
        )
        self._task.start()

    def stop(self) -> None:
        """
        Cancel the poll timer.

        Safe to call multiple times. A poll already in flight may finish,
        but its result is discarded.
        """
        self._stopped = True
        task, self._task = self._task, None
        if task is not None:
            task.cancel()

    def check_now(self) -> bool:
        """
        Poll printer status once.

        Returns:
            True if the issue list was updated
        """
        try:
            printers = [PrinterStatus.from_dict(p) for p in self._api.list_printers()]
        except (APIRequestError, AttributeError, TypeError, ValueError) as e:
            self._log_failure(e)
            return False

        if self._stopped:
            logger.debug("Discarding printer status received after stop")
            return False

        issues = find_printer_issues(printers)
        self._issues = issues

        if self._consecutive_failures > 0:
            logger.info(
                f"Printer health check recovered after {self._consecutive_failures} failures"
            )
        self._consecutive_failures = 0

        if issues:
            logger.warning(f"Printer issues: {', '.join(issues)}")
        else:
            logger.debug(f"Printer health OK ({len(printers)} printers)")
        return True

    def _log_failure(self, error: Exception) -> None:
        """Log with increasing severity based on consecutive failures."""
        self._consecutive_failures += 1

        if self._consecutive_failures == 1:
            logger.warning(f"Printer health check failed: {error}")
        elif self._consecutive_failures <= 3:
            logger.error(
                f"Printer health check failed ({self._consecutive_failures} consecutive): {error}"
            )
        elif self._consecutive_failures % 5 == 0:
            logger.error(
                f"Printer health check still failing ({self._consecutive_failures} consecutive): {error}"
            )
