"""
Custom exceptions for the Print Shop Console.

Exception Hierarchy:
    ConsoleError (base)
    ├── ConfigurationError - Backend URL or credentials missing (startup failure)
    ├── ValidationError    - Operator input rejected before any request (runtime, graceful)
    └── APIRequestError    - Backend call failed (runtime, graceful)

Usage:
    Startup errors (ConfigurationError) cause the app to fail fast.
    Runtime errors are caught by the console and turned into operator notices.
"""

from typing import Optional, Dict, Any


class ConsoleError(Exception):
    """
    Base exception for all console errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class ConfigurationError(ConsoleError):
    """
    The console cannot reach its backend with the current configuration.

    This is a FATAL error raised while building the API client.

    Typical causes:
    - CONSOLE_API_URL missing or empty in .env
    - Malformed URL (no scheme)
    """

    def __init__(self, setting: str, message: Optional[str] = None):
        details = {
            "setting": setting,
            "resolution": f"Set {setting} in .env or the environment",
        }
        super().__init__(message or f"Missing configuration: {setting}", details)
        self.setting = setting


# =============================================================================
# RUNTIME ERRORS - Console continues, operation fails gracefully
# =============================================================================

class ValidationError(ConsoleError):
    """
    Operator input rejected before any request was issued.

    Raised for empty notes/messages, a photo upload with nothing staged,
    a bulk action with an empty selection, or a save that is already running.
    The message is shown to the operator verbatim.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, details)
        self.field = field


class APIRequestError(ConsoleError):
    """
    A backend request failed.

    Covers transport errors, timeouts, non-2xx responses and undecodable
    bodies. Reads swallow this (keeping prior state); mutations surface a
    generic failure notice.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        details: Dict[str, Any] = {"operation": operation}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.operation = operation
        self.status_code = status_code
