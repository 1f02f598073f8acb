"""
Unit tests for the operator console facade.

The console is wired to a MagicMock API client and a fake task factory;
tests check the operator-facing error contract (notices) and lifecycle.
"""

import pytest
from unittest.mock import MagicMock

from core.exceptions import APIRequestError
from core.preferences import FILTERS_COLLAPSED_KEY, PreferenceStore
from services.console import OperatorConsole


# Fixtures

@pytest.fixture
def mock_api_client():
    client = MagicMock()
    client.list_orders.return_value = [
        {"id": 101, "status": "paid"},
        {"id": 102, "status": "paid"},
    ]
    client.list_filaments.return_value = [
        {"id": 1, "material": "PLA", "color": "Red", "current_amount": 40, "low_stock_threshold": 50},
    ]
    client.list_product_profiles.return_value = []
    client.list_printers.return_value = [{"id": 1, "name": "Ender", "status": "offline"}]
    client.get_alert_settings.return_value = {}
    client.preview_alerts.return_value = {}
    client.trigger_alerts.return_value = {"sent": True, "channels": []}
    client.add_note.return_value = {"id": 1, "order_id": 101, "content": "Reprint"}
    client.auto_assign_filament.return_value = {"message": "Assigned 85g"}
    return client


@pytest.fixture
def task_factory():
    return MagicMock()


@pytest.fixture
def preferences(tmp_path):
    return PreferenceStore(tmp_path / "prefs.json")


@pytest.fixture
def console(mock_api_client, preferences, task_factory):
    return OperatorConsole(mock_api_client, preferences=preferences, task_factory=task_factory)


@pytest.fixture
def started_console(console):
    console.start()
    yield console
    console.stop()


def _messages(console):
    return [(n.level, n.message) for n in console.notices.drain()]


# Lifecycle Tests

class TestLifecycle:
    """Test start/stop."""

    def test_start_loads_syncs_and_polls(self, console, mock_api_client, task_factory):
        console.start()

        assert console.orders.order_ids == [101, 102]
        assert [f.id for f in console.filaments.low_stock] == [1]
        mock_api_client.sync_orders.assert_called_once()
        assert console.auto_sync.complete
        assert console.printers.issues == ["Ender"]
        task_factory.assert_called_once()
        task_factory.return_value.start.assert_called_once()

    def test_start_twice_is_noop(self, console, mock_api_client, task_factory):
        console.start()
        console.start()

        mock_api_client.sync_orders.assert_called_once()
        task_factory.assert_called_once()

    def test_malformed_printer_payload_does_not_block_start(self, console, mock_api_client, task_factory):
        mock_api_client.list_printers.return_value = ["offline"]

        console.start()

        assert console.printers.issues == []
        task_factory.assert_called_once()
        task_factory.return_value.start.assert_called_once()

    def test_auto_sync_failure_is_silent(self, console, mock_api_client):
        mock_api_client.sync_orders.side_effect = APIRequestError("sync_orders", "down")

        console.start()

        assert _messages(console) == []
        assert not console.auto_sync.complete

    def test_stop_cancels_poll(self, console, task_factory):
        console.start()
        console.stop()

        task_factory.return_value.cancel.assert_called_once()
        assert console.closed

    def test_commands_after_stop_are_noops(self, started_console, mock_api_client):
        started_console.stop()
        started_console.selection.toggle(101)

        assert started_console.bulk_action("mark_shipped") is False
        assert started_console.sync_orders() is False

        mock_api_client.bulk_action.assert_not_called()
        assert _messages(started_console) == []


# Command Tests

class TestOperatorCommands:
    """Test the notice contract of operator commands."""

    def test_manual_sync_reports_success(self, started_console, mock_api_client):
        assert started_console.sync_orders() is True

        assert _messages(started_console) == [("success", "Orders synced successfully!")]
        assert mock_api_client.sync_orders.call_count == 2

    def test_manual_sync_reports_failure(self, started_console, mock_api_client):
        mock_api_client.sync_orders.side_effect = APIRequestError("sync_orders", "down")

        assert started_console.sync_orders() is False
        assert _messages(started_console) == [("error", "Failed to sync orders")]
        assert not started_console.syncing

    def test_bulk_action_with_empty_selection_warns(self, started_console, mock_api_client):
        assert started_console.bulk_action("mark_shipped") is False

        assert _messages(started_console) == [("warning", "Select at least one order")]
        mock_api_client.bulk_action.assert_not_called()

    def test_bulk_action_failure(self, started_console, mock_api_client):
        started_console.select_all()
        mock_api_client.bulk_action.side_effect = APIRequestError("bulk_action", "down")

        assert started_console.bulk_action("mark_shipped") is False
        assert _messages(started_console) == [("error", "Bulk mark shipped failed")]
        assert started_console.selection.ids() == [101, 102]

    def test_auto_assign_reports_server_message(self, started_console):
        assert started_console.auto_assign_filament(101) is True
        assert _messages(started_console) == [("success", "Assigned 85g")]

    def test_blank_note_warns(self, started_console, mock_api_client):
        started_console.set_note_draft(101, "   ")

        assert started_console.save_note(101) is False
        assert _messages(started_console) == [("warning", "Note cannot be empty")]
        mock_api_client.add_note.assert_not_called()

    def test_save_note(self, started_console):
        started_console.set_note_draft(101, "Reprint")

        assert started_console.save_note(101) is True
        assert started_console.drafts.notes.get(101)[0].content == "Reprint"

    def test_invalid_filter_warns(self, started_console):
        assert started_console.apply_filters(min_total="lots") is False

        level, message = _messages(started_console)[0]
        assert level == "warning"
        assert message.startswith("Invalid order filter")

    def test_list_valued_total_warns(self, started_console, mock_api_client):
        calls_before = mock_api_client.list_orders.call_count

        assert started_console.apply_filters(min_total=[1]) is False

        level, message = _messages(started_console)[0]
        assert level == "warning"
        assert message.startswith("Invalid order filter")
        assert started_console.orders.filters.min_total is None
        assert mock_api_client.list_orders.call_count == calls_before

    def test_upload_without_photo_warns(self, started_console):
        assert started_console.upload_photo(101) is False
        assert _messages(started_console) == [("warning", "Select a photo first")]

    def test_filament_delete_failure(self, started_console, mock_api_client):
        mock_api_client.delete_filament.side_effect = APIRequestError("delete_filament", "in use")

        assert started_console.delete_filament(1) is False
        assert _messages(started_console) == [("error", "Failed to delete filament")]

    def test_trigger_alerts_posts_summary(self, started_console):
        result = started_console.trigger_alerts()

        assert result.sent is True
        assert _messages(started_console) == [("info", "Alerts sent: yes (channels: none)")]

    def test_trigger_alerts_failure_returns_none(self, started_console, mock_api_client):
        mock_api_client.trigger_alerts.side_effect = APIRequestError("trigger_alerts", "down")

        assert started_console.trigger_alerts() is None
        assert _messages(started_console) == [("error", "Failed to send alerts")]

    def test_save_alert_settings(self, started_console, mock_api_client):
        mock_api_client.update_alert_settings.side_effect = lambda fields: dict(fields)

        assert started_console.save_alert_settings({"email_to": "ops@example.com"}) is True
        assert _messages(started_console) == [("success", "Alert settings saved")]


# View Tests

class TestViewState:
    """Test preferences and the dashboard snapshot."""

    def test_filters_hidden_by_default(self, console):
        assert console.filters_visible is False

    def test_toggle_filter_panel_persists(self, console, preferences):
        assert console.toggle_filter_panel() is True
        assert preferences.get(FILTERS_COLLAPSED_KEY) is False

        assert console.toggle_filter_panel() is False
        assert preferences.get(FILTERS_COLLAPSED_KEY) is True

    def test_snapshot(self, started_console):
        started_console.toggle_selection(102)

        snapshot = started_console.snapshot()

        assert [o["id"] for o in snapshot["orders"]] == [101, 102]
        assert snapshot["orders"][1]["selected"] is True
        assert snapshot["orders"][0]["label_draft"] == {"provider": "manual", "tracking": ""}
        assert snapshot["selected_order_ids"] == [102]
        assert snapshot["low_stock_display"] == "PLA Red (40g)"
        assert snapshot["printer_issues"] == ["Ender"]
        assert snapshot["alerts"]["panel"] == "closed"
        assert snapshot["auto_sync_complete"] is True
        assert snapshot["filters_visible"] is False
