"""
Filament inventory monitor.

Owns the filament list and the derived low-stock subset. Create, update
and delete never patch the list locally; they always reload so that
server-derived fields (used_amount, is_low_stock) stay consistent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError
from models.filament import Filament
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


def derive_low_stock(filaments: List[Filament]) -> List[Filament]:
    """
    Filaments flagged low by the backend or at/below their threshold.

    Pure function of the list; input order is preserved.
    """
    return [filament for filament in filaments if filament.needs_restock]


class FilamentMonitor:
    """
    Current filament list plus its low-stock subset.

    Both lists are swapped together on each successful load.
    """

    def __init__(self, api_client: ConsoleAPIClient):
        self._api = api_client
        self._filaments: List[Filament] = []
        self._low_stock: List[Filament] = []
        self._last_error: Optional[str] = None

    @property
    def filaments(self) -> List[Filament]:
        return list(self._filaments)

    @property
    def low_stock(self) -> List[Filament]:
        return list(self._low_stock)

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def get(self, filament_id: int) -> Optional[Filament]:
        for filament in self._filaments:
            if filament.id == filament_id:
                return filament
        return None

    def load(self) -> bool:
        """
        Replace the filament list from the backend.

        Returns:
            True on success; on failure the previous lists are kept
        """
        try:
            filaments = [Filament.from_dict(data) for data in self._api.list_filaments()]
        except (APIRequestError, KeyError, TypeError, ValueError) as e:
            self._last_error = str(e)
            logger.error(f"Error loading filaments: {e}")
            return False

        self._filaments = filaments
        self._low_stock = derive_low_stock(filaments)
        self._last_error = None

        if self._low_stock:
            logger.info(f"{len(self._low_stock)} filament(s) low on stock")
        logger.debug(f"Filaments loaded: {len(filaments)}")
        return True

    def create(self, fields: Dict[str, Any]) -> None:
        """
        Register a new spool, then reload.

        Raises:
            APIRequestError: If the backend rejects the create
        """
        self._api.create_filament(fields)
        logger.info(f"Filament created: {fields.get('material', '')} {fields.get('color', '')}")
        self.load()

    def update(self, filament_id: int, fields: Dict[str, Any]) -> None:
        """
        Raises:
            APIRequestError: If the backend rejects the update
        """
        self._api.update_filament(filament_id, fields)
        logger.info(f"Filament {filament_id} updated")
        self.load()

    def delete(self, filament_id: int) -> None:
        """
        Raises:
            APIRequestError: If the backend rejects the delete
        """
        self._api.delete_filament(filament_id)
        logger.info(f"Filament {filament_id} deleted")
        self.load()

    def low_stock_display(self, limit: int = 3) -> str:
        """Banner text for the first few low-stock spools."""
        return ", ".join(filament.label for filament in self._low_stock[:limit])
