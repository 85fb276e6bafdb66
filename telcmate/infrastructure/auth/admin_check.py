"""Server-side admin check consulted by every privileged operation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from telcmate.infrastructure.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AdminCheck(ABC):
    """Answers whether a caller may perform admin operations."""

    @abstractmethod
    async def is_admin(self, caller_code: str) -> bool:
        """Check the caller's admin status against the authoritative source."""
        pass


class UserDirectoryAdminCheck(AdminCheck):
    """Resolves admin status from the users collection on every call.

    Client-held flags are never consulted. A code shared by several accounts
    is refused rather than resolved to an arbitrary one of them.
    """

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def is_admin(self, caller_code: str) -> bool:
        if not caller_code:
            return False

        matches = await self.users.find_users_by_code(caller_code)
        if len(matches) > 1:
            logger.warning("Refusing admin check for an access code shared by several users")
            return False
        return bool(matches) and matches[0].is_admin
