"""
Unit tests for order selection and bulk actions.
"""

import threading
import pytest
from unittest.mock import MagicMock

from core.exceptions import APIRequestError, ValidationError
from core.guards import BusyFlag
from services.bulk_actions import ASSIGN_FILAMENT, MARK_SHIPPED, BulkActionCoordinator
from services.selection import SelectionSet


# Fixtures

@pytest.fixture
def mock_api_client():
    client = MagicMock()
    client.bulk_action.return_value = []
    client.auto_assign_filament.return_value = {"message": "Assigned 85g of PLA Red"}
    return client


@pytest.fixture
def selection():
    return SelectionSet()


@pytest.fixture
def registry():
    return MagicMock()


@pytest.fixture
def filaments():
    return MagicMock()


@pytest.fixture
def coordinator(mock_api_client, selection, registry, filaments):
    return BulkActionCoordinator(mock_api_client, selection, registry, filaments)


# Selection Tests

class TestSelectionSet:
    """Test toggling, select-all and pruning."""

    def test_toggle_twice_restores(self):
        selection = SelectionSet()

        assert selection.toggle(5) is True
        assert 5 in selection
        assert selection.toggle(5) is False
        assert 5 not in selection

    def test_select_all_and_clear(self):
        selection = SelectionSet()
        selection.select_all([3, 1, 2])

        assert selection.ids() == [1, 2, 3]
        selection.clear()
        assert len(selection) == 0

    def test_prune_returns_removed(self):
        selection = SelectionSet()
        selection.select_all([101, 102, 103])

        removed = selection.prune([101, 104])

        assert removed == {102, 103}
        assert selection.ids() == [101]


class TestBusyFlag:
    """Test the check-and-set guard."""

    def test_second_acquire_fails(self):
        flag = BusyFlag("save")

        assert flag.try_acquire() is True
        assert flag.try_acquire() is False
        flag.release()
        assert flag.try_acquire() is True

    def test_only_one_thread_wins(self):
        flag = BusyFlag("race")
        results = []
        barrier = threading.Barrier(8)

        def contend():
            barrier.wait()
            results.append(flag.try_acquire())

        threads = [threading.Thread(target=contend) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1


# Bulk Action Tests

class TestBulkActions:
    """Test bulk_action() preconditions and follow-up reloads."""

    def test_empty_selection_rejected_without_request(self, coordinator, mock_api_client):
        with pytest.raises(ValidationError) as exc_info:
            coordinator.bulk_action(MARK_SHIPPED)

        assert exc_info.value.message == "Select at least one order"
        mock_api_client.bulk_action.assert_not_called()

    def test_mark_shipped_reloads_orders_only(self, coordinator, selection, mock_api_client, registry, filaments):
        selection.select_all([103, 101])

        count = coordinator.bulk_action(MARK_SHIPPED)

        assert count == 2
        mock_api_client.bulk_action.assert_called_once_with([101, 103], MARK_SHIPPED)
        registry.load.assert_called_once()
        filaments.load.assert_not_called()

    def test_assign_filament_reloads_filaments(self, coordinator, selection, registry, filaments):
        selection.toggle(101)

        coordinator.bulk_action(ASSIGN_FILAMENT)

        registry.load.assert_called_once()
        filaments.load.assert_called_once()

    def test_selection_kept_after_success(self, coordinator, selection):
        selection.select_all([101, 102])
        coordinator.bulk_action(MARK_SHIPPED)
        assert selection.ids() == [101, 102]

    def test_failure_propagates_and_releases_flag(self, coordinator, selection, mock_api_client, registry):
        selection.toggle(101)
        mock_api_client.bulk_action.side_effect = APIRequestError("bulk_action", "boom")

        with pytest.raises(APIRequestError):
            coordinator.bulk_action(MARK_SHIPPED)

        assert coordinator.busy is False
        registry.load.assert_not_called()

    def test_overlapping_bulk_action_rejected(self, coordinator, selection, mock_api_client):
        """Test a second bulk action while one is in flight issues no request."""
        selection.toggle(101)
        nested = []

        def reenter(order_ids, action):
            with pytest.raises(ValidationError):
                coordinator.bulk_action(MARK_SHIPPED)
            nested.append(True)
            return []

        mock_api_client.bulk_action.side_effect = reenter
        coordinator.bulk_action(MARK_SHIPPED)

        assert nested == [True]
        assert mock_api_client.bulk_action.call_count == 1


class TestAutoAssign:
    """Test single-order filament assignment."""

    def test_reloads_and_returns_message(self, coordinator, registry, filaments):
        message = coordinator.auto_assign_filament(101)

        assert message == "Assigned 85g of PLA Red"
        registry.load.assert_called_once()
        filaments.load.assert_called_once()
