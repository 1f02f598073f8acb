"""Product profile catalog (list and edit only)."""

from __future__ import annotations

from typing import Any, Dict, List

from core.api_client import ConsoleAPIClient
from core.exceptions import APIRequestError
from models.filament import ProductProfile
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class ProductProfileCatalog:
    """Profiles used by the backend's filament auto-assignment."""

    def __init__(self, api_client: ConsoleAPIClient):
        self._api = api_client
        self._profiles: List[ProductProfile] = []

    @property
    def profiles(self) -> List[ProductProfile]:
        return list(self._profiles)

    def load(self) -> bool:
        try:
            profiles = [ProductProfile.from_dict(data) for data in self._api.list_product_profiles()]
        except (APIRequestError, TypeError, ValueError) as e:
            logger.error(f"Error loading product profiles: {e}")
            return False

        self._profiles = profiles
        return True

    def create(self, fields: Dict[str, Any]) -> None:
        self._api.create_product_profile(fields)
        logger.info(f"Product profile created: {fields.get('product_name', '')}")
        self.load()

    def update(self, profile_id: int, fields: Dict[str, Any]) -> None:
        self._api.update_product_profile(profile_id, fields)
        logger.info(f"Product profile {profile_id} updated")
        self.load()

    def delete(self, profile_id: int) -> None:
        self._api.delete_product_profile(profile_id)
        logger.info(f"Product profile {profile_id} deleted")
        self.load()
