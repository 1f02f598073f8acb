"""
Backend REST client for the Print Shop Console.

This module wraps every request/response contract the console consumes:
orders, notes, communications, photos, shipping labels, filaments,
product profiles, printers and alerts.

ERROR CONTRACT:
    Every method either returns decoded data or raises APIRequestError.
    Transport errors, timeouts, non-2xx responses and bad JSON all map to
    APIRequestError so callers handle a single exception type.

THREAD SAFETY:
    A requests.Session is shared by all callers. The printer health thread
    and request threads may call concurrently; each call is independent.

Usage:
    client = ConsoleAPIClient("http://localhost:5000/api", token="...")

    orders = client.list_orders({"status": "paid"})
    note = client.add_note(101, "Reprinted base plate")
"""

from __future__ import annotations

import logging
from typing import Dict, Any, List, Optional

import requests

from .exceptions import APIRequestError, ConfigurationError
from models.drafts import StagedPhoto


class ConsoleAPIClient:
    """
    HTTP client for the console backend.

    Attributes:
        base_url: API root, without trailing slash
        timeout: Seconds to wait for each response
    """

    def __init__(
        self,
        base_url: Optional[str],
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root (e.g. "http://localhost:5000/api")
            token: Bearer token sent on every request (optional)
            timeout: Per-request timeout in seconds
            session: Preconfigured session (tests pass a mock)
            logger: Logger instance (creates default if not provided)

        Raises:
            ConfigurationError: If base_url is empty or has no scheme
        """
        if not base_url:
            raise ConfigurationError("CONSOLE_API_URL")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                "CONSOLE_API_URL", f"CONSOLE_API_URL must start with http:// or https://: {base_url}"
            )

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._logger = logger or logging.getLogger("core.api_client")

        self._session = session or requests.Session()
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

        self._logger.debug(f"ConsoleAPIClient initialized for {self.base_url}")

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Any:
        """
        Issue one request and decode the JSON body.

        Args:
            operation: Short name used in logs and errors (e.g. "list_orders")
            method: HTTP method
            path: Path under base_url, starting with "/"

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            APIRequestError: On any transport, status or decode failure
        """
        url = f"{self.base_url}{path}"
        self._logger.debug(f"{operation}: {method} {url}")

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise APIRequestError(operation, f"{operation} timed out after {self.timeout:.1f}s") from e
        except requests.exceptions.RequestException as e:
            raise APIRequestError(operation, f"{operation} failed: {e}") from e

        if not response.ok:
            message = self._error_message(response)
            self._logger.debug(f"{operation}: HTTP {response.status_code} {message}")
            raise APIRequestError(
                operation,
                f"{operation} failed: HTTP {response.status_code} {message}".rstrip(),
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise APIRequestError(
                operation, f"{operation} returned invalid JSON", status_code=response.status_code
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Best-effort server error text ('message' or 'error' key)."""
        try:
            body = response.json()
        except ValueError:
            return ""
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or "")
        return ""

    # =========================================================================
    # ORDERS
    # =========================================================================

    def sync_orders(self) -> Any:
        """Ask the backend to pull new orders from the marketplace."""
        return self._request("sync_orders", "POST", "/orders/sync", json={})

    def list_orders(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Fetch the order list.

        Args:
            params: Filter query parameters; empty values must already be omitted

        Returns:
            Ordered list of order dictionaries
        """
        body = self._request("list_orders", "GET", "/orders", params=params or {})
        return list((body or {}).get("orders", []))

    def bulk_action(self, order_ids: List[int], action: str) -> List[Dict[str, Any]]:
        """Apply ``action`` to every order in ``order_ids``."""
        body = self._request(
            "bulk_action",
            "POST",
            "/orders/bulk-actions",
            json={"order_ids": list(order_ids), "action": action},
        )
        return list((body or {}).get("orders", []))

    def auto_assign_filament(self, order_id: int) -> Dict[str, Any]:
        """Match an order's items to product profiles and deduct filament."""
        return self._request(
            "auto_assign_filament", "POST", f"/orders/{order_id}/auto-assign-filament", json={}
        ) or {}

    def list_notes(self, order_id: int) -> List[Dict[str, Any]]:
        body = self._request("list_notes", "GET", f"/orders/{order_id}/notes")
        return list((body or {}).get("notes", []))

    def add_note(self, order_id: int, content: str) -> Dict[str, Any]:
        return self._request(
            "add_note", "POST", f"/orders/{order_id}/notes", json={"content": content}
        ) or {}

    def list_communications(self, order_id: int) -> List[Dict[str, Any]]:
        body = self._request("list_communications", "GET", f"/orders/{order_id}/communications")
        return list((body or {}).get("logs", []))

    def add_communication(self, order_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Log a customer communication.

        Args:
            order_id: Order the message belongs to
            payload: {"message", "direction", "channel"}
        """
        return self._request(
            "add_communication", "POST", f"/orders/{order_id}/communications", json=payload
        ) or {}

    def upload_photo(self, order_id: int, photo: StagedPhoto) -> Dict[str, Any]:
        """Upload a finished-product photo as multipart field 'photo'."""
        files = {"photo": (photo.filename, photo.content, photo.content_type)}
        return self._request("upload_photo", "POST", f"/orders/{order_id}/photo", files=files) or {}

    def update_shipping_label(self, order_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create or update an order's shipping label.

        Returns:
            The full updated order
        """
        return self._request(
            "update_shipping_label", "POST", f"/orders/{order_id}/shipping-label", json=payload
        )

    # =========================================================================
    # FILAMENTS
    # =========================================================================

    def list_filaments(self) -> List[Dict[str, Any]]:
        body = self._request("list_filaments", "GET", "/filaments")
        return list((body or {}).get("filaments", []))

    def create_filament(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("create_filament", "POST", "/filaments", json=fields)

    def update_filament(self, filament_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("update_filament", "PUT", f"/filaments/{filament_id}", json=fields)

    def delete_filament(self, filament_id: int) -> None:
        self._request("delete_filament", "DELETE", f"/filaments/{filament_id}")

    # =========================================================================
    # PRODUCT PROFILES
    # =========================================================================

    def list_product_profiles(self) -> List[Dict[str, Any]]:
        body = self._request("list_product_profiles", "GET", "/product-profiles")
        return list((body or {}).get("profiles", []))

    def create_product_profile(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("create_product_profile", "POST", "/product-profiles", json=fields)

    def update_product_profile(self, profile_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "update_product_profile", "PUT", f"/product-profiles/{profile_id}", json=fields
        )

    def delete_product_profile(self, profile_id: int) -> None:
        self._request("delete_product_profile", "DELETE", f"/product-profiles/{profile_id}")

    # =========================================================================
    # PRINTERS
    # =========================================================================

    def list_printers(self) -> List[Dict[str, Any]]:
        """Fetch current status snapshots for every printer."""
        body = self._request("list_printers", "GET", "/printers")
        if isinstance(body, dict):
            return list(body.get("printers", []))
        return list(body or [])

    # =========================================================================
    # ALERTS
    # =========================================================================

    def get_alert_settings(self) -> Dict[str, Any]:
        return self._request("get_alert_settings", "GET", "/alerts/settings") or {}

    def update_alert_settings(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("update_alert_settings", "PUT", "/alerts/settings", json=fields) or {}

    def preview_alerts(self) -> Dict[str, Any]:
        return self._request("preview_alerts", "GET", "/alerts/preview") or {}

    def trigger_alerts(self) -> Dict[str, Any]:
        return self._request("trigger_alerts", "POST", "/alerts/trigger", json={}) or {}
