"""
Unit tests for the backend REST client.

A MagicMock stands in for the requests.Session so every request the client
issues can be inspected without a network.
"""

import logging
import pytest
from unittest.mock import MagicMock

import requests

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError, ConfigurationError
from models.drafts import StagedPhoto


BASE_URL = "http://backend.test/api"


# Fixtures

@pytest.fixture
def logger():
    """Create a test logger."""
    return logging.getLogger("test")


@pytest.fixture
def session():
    """Mock session whose requests succeed with an empty JSON object."""
    session = MagicMock()
    session.headers = {}
    session.request.return_value = _response(200, {})
    return session


@pytest.fixture
def client(session, logger):
    return ConsoleAPIClient(BASE_URL, token="secret", timeout=5, session=session, logger=logger)


def _response(status_code, body=None, content=b"x"):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.content = content if body is not None else b""
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


# Tests for Construction

class TestClientConfiguration:
    """Test client construction and fail-fast checks."""

    def test_missing_url_raises(self, session):
        with pytest.raises(ConfigurationError) as exc_info:
            ConsoleAPIClient("", session=session)
        assert exc_info.value.setting == "CONSOLE_API_URL"

    def test_url_without_scheme_raises(self, session):
        with pytest.raises(ConfigurationError):
            ConsoleAPIClient("backend.test/api", session=session)

    def test_token_sets_bearer_header(self, client, session):
        assert session.headers["Authorization"] == "Bearer secret"

    def test_trailing_slash_stripped(self, session):
        client = ConsoleAPIClient(BASE_URL + "/", session=session)
        assert client.base_url == BASE_URL


# Tests for Transport

class TestRequestHandling:
    """Test the single error contract of _request()."""

    def test_timeout_maps_to_api_error(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(APIRequestError) as exc_info:
            client.list_orders()

        assert exc_info.value.operation == "list_orders"
        assert "timed out" in exc_info.value.message

    def test_connection_error_maps_to_api_error(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(APIRequestError):
            client.sync_orders()

    def test_http_error_carries_status_and_server_message(self, client, session):
        session.request.return_value = _response(422, {"message": "Invalid provider"})

        with pytest.raises(APIRequestError) as exc_info:
            client.update_shipping_label(101, {"provider": "??"})

        assert exc_info.value.status_code == 422
        assert "Invalid provider" in exc_info.value.message

    def test_invalid_json_maps_to_api_error(self, client, session):
        session.request.return_value = _response(200, ValueError("bad json"))

        with pytest.raises(APIRequestError):
            client.get_alert_settings()

    def test_empty_body_returns_none(self, client, session):
        session.request.return_value = _response(204, None)
        assert client.delete_filament(3) is None

    def test_timeout_passed_to_session(self, client, session):
        client.list_filaments()
        assert session.request.call_args.kwargs["timeout"] == 5


# Tests for Endpoints

class TestOrderEndpoints:
    """Test order request/response contracts."""

    def test_list_orders_sends_filters(self, client, session):
        session.request.return_value = _response(200, {"orders": [{"id": 1}]})

        orders = client.list_orders({"status": "paid"})

        assert orders == [{"id": 1}]
        args, kwargs = session.request.call_args
        assert args == ("GET", f"{BASE_URL}/orders")
        assert kwargs["params"] == {"status": "paid"}

    def test_bulk_action_payload(self, client, session):
        client.bulk_action([101, 103], "mark_shipped")

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{BASE_URL}/orders/bulk-actions")
        assert kwargs["json"] == {"order_ids": [101, 103], "action": "mark_shipped"}

    def test_notes_and_logs_keys(self, client, session):
        session.request.return_value = _response(200, {"notes": [{"id": 1}]})
        assert client.list_notes(101) == [{"id": 1}]

        session.request.return_value = _response(200, {"logs": [{"id": 2}]})
        assert client.list_communications(101) == [{"id": 2}]

    def test_upload_photo_is_multipart(self, client, session):
        session.request.return_value = _response(200, {"photo_url": "https://cdn/1.jpg"})
        photo = StagedPhoto("dragon.jpg", b"\xff\xd8", "image/jpeg")

        result = client.upload_photo(101, photo)

        assert result == {"photo_url": "https://cdn/1.jpg"}
        kwargs = session.request.call_args.kwargs
        assert kwargs["files"] == {"photo": ("dragon.jpg", b"\xff\xd8", "image/jpeg")}

    def test_auto_assign_path(self, client, session):
        session.request.return_value = _response(200, {"message": "Assigned 85g"})

        assert client.auto_assign_filament(7) == {"message": "Assigned 85g"}
        args = session.request.call_args.args
        assert args[1] == f"{BASE_URL}/orders/7/auto-assign-filament"


class TestInventoryAndAlertEndpoints:
    """Test filament, profile, printer and alert contracts."""

    def test_update_filament_uses_put(self, client, session):
        client.update_filament(3, {"current_amount": 500})
        assert session.request.call_args.args[0] == "PUT"

    def test_list_profiles_key(self, client, session):
        session.request.return_value = _response(200, {"profiles": [{"id": 9}]})
        assert client.list_product_profiles() == [{"id": 9}]

    def test_list_printers_accepts_bare_list(self, client, session):
        session.request.return_value = _response(200, [{"id": 1, "status": "Idle"}])
        assert client.list_printers() == [{"id": 1, "status": "Idle"}]

    def test_list_printers_accepts_wrapped_list(self, client, session):
        session.request.return_value = _response(200, {"printers": [{"id": 2}]})
        assert client.list_printers() == [{"id": 2}]

    def test_trigger_alerts(self, client, session):
        session.request.return_value = _response(200, {"sent": True, "channels": []})

        assert client.trigger_alerts() == {"sent": True, "channels": []}
        assert session.request.call_args.args == ("POST", f"{BASE_URL}/alerts/trigger")
