"""
Cancellable repeating background task.

A RepeatingTask runs a callable on a dedicated daemon thread at a fixed
interval until cancel() is called. The handle is the only way to stop it;
owners must keep the handle and cancel it at shutdown.

Usage:
    task = RepeatingTask(check_printers, interval_seconds=60, name="PrinterHealth")
    task.start()
    ...
    task.cancel()   # signals the thread and waits for it to exit
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from logging_config import get_logger, set_thread_name


# Module logger
logger = get_logger(__name__)


class RepeatingTask:
    """
    Fixed-interval background loop with an explicit stop handle.

    The first run happens one interval after start(); callers wanting an
    immediate run call the function themselves before starting.

    Exceptions raised by the callable are logged and the loop continues.
    """

    def __init__(
        self,
        func: Callable[[], None],
        interval_seconds: float,
        name: str = "RepeatingTask",
        join_timeout: float = 5.0,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self._func = func
        self._interval = interval_seconds
        self._name = name
        self._join_timeout = join_timeout

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        """Whether the loop thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_cancelled(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """
        Start the loop thread.

        Raises:
            RuntimeError: If the task was already started
        """
        if self._thread is not None:
            raise RuntimeError(f"{self._name} already started")

        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info(f"{self._name} started (interval: {self._interval}s)")

    def cancel(self) -> None:
        """
        Stop the loop and wait for the thread to exit.

        Safe to call multiple times and before start().
        """
        self._stop_event.set()

        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return

        thread.join(timeout=self._join_timeout)
        if thread.is_alive():
            logger.warning(f"{self._name} did not stop within {self._join_timeout}s")
        else:
            logger.info(f"{self._name} stopped")

    def _run(self) -> None:
        set_thread_name(self._name)
        logger.debug(f"{self._name} loop starting")

        # wait() returns True once cancel() sets the event
        while not self._stop_event.wait(timeout=self._interval):
            try:
                self._func()
            except Exception as e:
                logger.error(f"{self._name} iteration failed: {e}", exc_info=True)

        logger.debug(f"{self._name} loop exiting")
