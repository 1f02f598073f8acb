"""
Alert channel settings, preview and manual trigger.

Panel lifecycle:
    CLOSED -> LOADING -> READY -> (close) -> CLOSED

Opening the panel fetches the settings and the preview in parallel.
Either fetch may fail without affecting the other; the panel is READY
once both have finished, unless it was closed in the meantime.

Saving is exclusive: a save while another is in flight is rejected, since
the settings are a single record per account.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Dict, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError, ValidationError
from core.guards import BusyFlag
from models.alerts import AlertPreview, AlertSettings, AlertTriggerResult
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class PanelState(Enum):
    """State of the alert settings panel."""

    CLOSED = "closed"
    LOADING = "loading"
    READY = "ready"


class AlertCenter:
    """
    Alert configuration and actions.

    Attributes:
        settings: Last known settings (defaults until first load)
        preview: Last loaded preview, None if never loaded
        state: Panel state
    """

    def __init__(self, api_client: ConsoleAPIClient):
        self._api = api_client

        self.settings = AlertSettings()
        self.preview: Optional[AlertPreview] = None
        self.state = PanelState.CLOSED

        self._saving = BusyFlag("save_alert_settings")
        self._triggering = BusyFlag("trigger_alerts")

    @property
    def saving(self) -> bool:
        return self._saving.is_set

    @property
    def triggering(self) -> bool:
        return self._triggering.is_set

    # =========================================================================
    # PANEL
    # =========================================================================

    def open_settings(self) -> None:
        """Open the panel and load settings and preview side by side."""
        self.state = PanelState.LOADING

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="AlertPanel") as executor:
            settings_future = executor.submit(self.load_settings)
            preview_future = executor.submit(self.load_preview)
            settings_future.result()
            preview_future.result()

        if self.state is PanelState.LOADING:
            self.state = PanelState.READY
        else:
            logger.debug("Alert panel closed before its data finished loading")

    def close_settings(self) -> None:
        self.state = PanelState.CLOSED

    def load_settings(self) -> bool:
        try:
            data = self._api.get_alert_settings()
        except APIRequestError as e:
            logger.error(f"Failed to load alert settings: {e}")
            return False

        if data:
            self.settings = AlertSettings.from_dict(data)
        return True

    def load_preview(self) -> bool:
        try:
            self.preview = AlertPreview.from_dict(self._api.preview_alerts() or {})
        except APIRequestError as e:
            logger.error(f"Failed to load alert preview: {e}")
            return False
        return True

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def save_settings(self, changes: Optional[Dict[str, Any]] = None) -> AlertSettings:
        """
        Save settings, optionally applying ``changes`` first.

        Local settings are only replaced with the backend's response.

        Raises:
            ValidationError: If a save is already in flight
            APIRequestError: If the backend rejects the save
        """
        if not self._saving.try_acquire():
            raise ValidationError("Alert settings are already being saved")

        try:
            payload = self.settings.to_dict()
            payload.update(changes or {})
            saved = self._api.update_alert_settings(payload)
            self.settings = AlertSettings.from_dict(saved or payload)
        finally:
            self._saving.release()

        logger.info("Alert settings saved")
        return self.settings

    def trigger_alerts(self) -> AlertTriggerResult:
        """
        Ask the backend to send alerts now.

        Raises:
            ValidationError: If a trigger is already in flight
            APIRequestError: If the backend call fails
        """
        if not self._triggering.try_acquire():
            raise ValidationError("Alerts are already being sent")

        try:
            result = AlertTriggerResult.from_dict(self._api.trigger_alerts() or {})
        finally:
            self._triggering.release()

        logger.info(result.summary())
        return result
