"""
Local operator preferences that survive across sessions.

Stored as a small JSON object on disk. Unreadable or corrupt files are
treated as empty so a bad preferences file never blocks startup.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

FILTERS_COLLAPSED_KEY = "dashboard_filters_collapsed"


class PreferenceStore:
    """
    JSON-file key/value store.

    Writes go straight to disk; reads come from an in-memory copy loaded
    once at construction.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Args:
            path: JSON file location; None keeps preferences in memory only
        """
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = self._read()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return default

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value
            self._write()

    def _read(self) -> Dict[str, Any]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file {self._path}: not a JSON object")
            return {}
        return data

    def _write(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save preferences to {self._path}: {e}")
