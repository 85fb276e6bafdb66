"""Seed default users and settings on start."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from telcmate.infrastructure.repositories.settings_repository import (
    SettingsRepository,
)
from telcmate.infrastructure.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class InitializationResult:
    """Which collections were seeded by this run."""

    users_seeded: bool
    settings_seeded: bool


class DataInitializer:
    """Runs the idempotent seed operations.

    Intended to be called on every process start; after the first successful
    run it only performs the two emptiness checks.
    """

    def __init__(self, users: UserRepository, settings: SettingsRepository) -> None:
        self.users = users
        self.settings = settings

    async def initialize(self) -> InitializationResult:
        users_seeded = await self.users.initialize_users()
        settings_seeded = await self.settings.initialize_settings()

        if users_seeded or settings_seeded:
            logger.info(
                f"Initialized data (users: {users_seeded}, settings: {settings_seeded})"
            )
        else:
            logger.debug("Users and settings already present")
        return InitializationResult(users_seeded, settings_seeded)
