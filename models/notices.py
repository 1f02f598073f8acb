"""
Operator-visible notices.

The console posts a notice whenever an operator-initiated command succeeds
or fails in a way the operator should see. The HTTP layer drains the board
into each response, the JSON counterpart of a flashed message.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Notice:
    """A single message for the operator."""

    level: str
    """'success', 'info', 'warning' or 'error'."""

    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.level, "message": self.message}


class NoticeBoard:
    """
    Ordered queue of pending notices.

    Thread Safety:
        - Uses threading.Lock for all operations
        - drain() removes what it returns (consume-once pattern)
    """

    def __init__(self):
        self._notices: List[Notice] = []
        self._lock = threading.Lock()

    def post(self, level: str, message: str) -> Notice:
        notice = Notice(level, message)
        with self._lock:
            self._notices.append(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.post("success", message)

    def warning(self, message: str) -> Notice:
        return self.post("warning", message)

    def error(self, message: str) -> Notice:
        return self.post("error", message)

    def peek(self) -> List[Notice]:
        with self._lock:
            return list(self._notices)

    def drain(self) -> List[Notice]:
        """Return and remove all pending notices."""
        with self._lock:
            notices, self._notices = self._notices, []
        return notices

    def __len__(self) -> int:
        with self._lock:
            return len(self._notices)
