"""
Core module for the Print Shop Console.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- api_client: REST client for the console backend
- guards: Busy flags for operations that must not overlap
- scheduler: Cancellable repeating background task
- preferences: Local preferences persisted across sessions
"""

from .exceptions import (
    ConsoleError,
    ConfigurationError,
    ValidationError,
    APIRequestError,
)
from .api_client import ConsoleAPIClient
from .guards import BusyFlag
from .scheduler import RepeatingTask
from .preferences import PreferenceStore, FILTERS_COLLAPSED_KEY

__all__ = [
    "ConsoleError",
    "ConfigurationError",
    "ValidationError",
    "APIRequestError",
    "ConsoleAPIClient",
    "BusyFlag",
    "RepeatingTask",
    "PreferenceStore",
    "FILTERS_COLLAPSED_KEY",
]
