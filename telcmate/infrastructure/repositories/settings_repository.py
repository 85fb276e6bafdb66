"""Repository for the site-wide settings document."""

from __future__ import annotations

import logging

from telcmate.domain.shared.models import SETTINGS_COLLECTION, SYSTEM_SETTINGS_ID
from telcmate.domain.users.models import SettingsPatch, SystemSettings
from telcmate.infrastructure.stores.base import DocumentStore

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Repository for the single ``settings/system`` document."""

    def __init__(self, store: DocumentStore, collection: str = SETTINGS_COLLECTION):
        self.store = store
        self.collection = collection

    async def initialize_settings(self) -> bool:
        """Write the default settings if the collection is empty.

        The document is stored under the fixed ``system`` key, so a repeated
        or concurrent seed overwrites rather than duplicates it.

        Returns:
            True if the defaults were written.
        """
        if not await self.store.is_empty(self.collection):
            return False

        await self.store.set(
            self.collection, SYSTEM_SETTINGS_ID, SystemSettings().to_document()
        )
        logger.info("Seeded default system settings")
        return True

    async def get_system_settings(self) -> SystemSettings | None:
        """Load the settings, or None if they were never configured."""
        document = await self.store.get(self.collection, SYSTEM_SETTINGS_ID)
        if document is None:
            return None
        return SystemSettings.model_validate(document.data)

    async def update_system_settings(self, patch: SettingsPatch) -> SystemSettings | None:
        """Merge the patched fields into the settings and return the result.

        Raises:
            DocumentNotFoundError: If the settings were never seeded.
        """
        fields = patch.to_fields()
        await self.store.update(self.collection, SYSTEM_SETTINGS_ID, fields)
        logger.info(f"Updated system settings: {', '.join(sorted(fields))}")
        return await self.get_system_settings()
