"""
Unit tests for the alert center and the session auto-sync gate.
"""

import pytest
from unittest.mock import MagicMock

from core.exceptions import APIRequestError, ValidationError
from services.alert_center import AlertCenter, PanelState
from services.auto_sync import SessionAutoSync


# Fixtures

@pytest.fixture
def mock_api_client():
    client = MagicMock()
    client.get_alert_settings.return_value = {
        "slack_webhook_url": "https://hooks.slack.test/x",
        "discord_webhook_url": None,
        "email_enabled": False,
        "email_to": "",
    }
    client.preview_alerts.return_value = {
        "low_stock": [{"id": 1, "material": "PLA"}],
        "printer_issues": [],
    }
    client.update_alert_settings.side_effect = lambda fields: dict(fields)
    client.trigger_alerts.return_value = {"sent": True, "channels": []}
    return client


@pytest.fixture
def alerts(mock_api_client):
    return AlertCenter(mock_api_client)


# Alert Panel Tests

class TestAlertPanel:
    """Test the CLOSED -> LOADING -> READY lifecycle."""

    def test_initially_closed(self, alerts):
        assert alerts.state is PanelState.CLOSED
        assert alerts.preview is None

    def test_open_loads_settings_and_preview(self, alerts):
        alerts.open_settings()

        assert alerts.state is PanelState.READY
        assert alerts.settings.slack_webhook_url == "https://hooks.slack.test/x"
        assert alerts.preview.low_stock == [{"id": 1, "material": "PLA"}]

    def test_one_failed_fetch_does_not_block_the_other(self, alerts, mock_api_client):
        mock_api_client.get_alert_settings.side_effect = APIRequestError("get_alert_settings", "down")

        alerts.open_settings()

        assert alerts.state is PanelState.READY
        assert alerts.settings.slack_webhook_url == ""
        assert alerts.preview is not None

    def test_close(self, alerts):
        alerts.open_settings()
        alerts.close_settings()
        assert alerts.state is PanelState.CLOSED

    def test_close_during_load_stays_closed(self, alerts, mock_api_client):
        """Test closing while the fetches are in flight is not overwritten."""
        def close_then_return():
            alerts.close_settings()
            return {"email_to": "ops@example.com"}

        mock_api_client.get_alert_settings.side_effect = close_then_return

        alerts.open_settings()

        assert alerts.state is PanelState.CLOSED
        assert alerts.settings.email_to == "ops@example.com"


class TestAlertActions:
    """Test saving and triggering."""

    def test_save_applies_changes(self, alerts, mock_api_client):
        saved = alerts.save_settings({"email_enabled": True, "email_to": "ops@example.com"})

        payload = mock_api_client.update_alert_settings.call_args.args[0]
        assert payload["email_enabled"] is True
        assert payload["slack_webhook_url"] == ""
        assert saved.email_to == "ops@example.com"
        assert alerts.saving is False

    def test_save_while_saving_rejected(self, alerts, mock_api_client):
        """Test a second save during an in-flight save issues no request."""
        def reenter(fields):
            with pytest.raises(ValidationError):
                alerts.save_settings({"email_to": "other@example.com"})
            return dict(fields)

        mock_api_client.update_alert_settings.side_effect = reenter
        alerts.save_settings({"email_to": "ops@example.com"})

        assert mock_api_client.update_alert_settings.call_count == 1
        assert alerts.settings.email_to == "ops@example.com"

    def test_failed_save_keeps_settings(self, alerts, mock_api_client):
        mock_api_client.update_alert_settings.side_effect = APIRequestError("update_alert_settings", "400")

        with pytest.raises(APIRequestError):
            alerts.save_settings({"email_to": "ops@example.com"})

        assert alerts.settings.email_to == ""
        assert alerts.saving is False

    def test_trigger_summary(self, alerts):
        result = alerts.trigger_alerts()

        assert result.sent is True
        assert result.summary() == "Alerts sent: yes (channels: none)"
        assert alerts.triggering is False


# Auto-Sync Tests

class TestSessionAutoSync:
    """Test the once-per-session gate."""

    def test_runs_at_most_once(self, mock_api_client):
        on_synced = MagicMock()
        auto_sync = SessionAutoSync(mock_api_client, on_synced=on_synced)

        assert auto_sync.run() is True
        assert auto_sync.run() is False

        mock_api_client.sync_orders.assert_called_once()
        on_synced.assert_called_once()
        assert auto_sync.complete

    def test_failure_allows_retry(self, mock_api_client):
        mock_api_client.sync_orders.side_effect = [APIRequestError("sync_orders", "down"), None]
        auto_sync = SessionAutoSync(mock_api_client)

        assert auto_sync.run() is False
        assert not auto_sync.complete
        assert not auto_sync.in_progress

        assert auto_sync.run() is True
        assert auto_sync.complete

    def test_no_second_request_while_in_flight(self, mock_api_client):
        auto_sync = SessionAutoSync(mock_api_client)
        nested = []

        def reenter():
            nested.append(auto_sync.run())

        mock_api_client.sync_orders.side_effect = reenter
        auto_sync.run()

        assert nested == [False]
        assert mock_api_client.sync_orders.call_count == 1
