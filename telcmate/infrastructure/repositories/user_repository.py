"""Repository for user accounts."""

from __future__ import annotations

import logging

from telcmate.domain.shared.models import USERS_COLLECTION
from telcmate.domain.users.models import DEFAULT_USERS, User, parse_user
from telcmate.infrastructure.stores.base import DocumentStore

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for managing user accounts."""

    def __init__(self, store: DocumentStore, collection: str = USERS_COLLECTION):
        self.store = store
        self.collection = collection

    async def initialize_users(self) -> bool:
        """Seed the default accounts if the collection is empty.

        Safe to call on every start. Two processes seeding at the same moment
        can both observe an empty collection; nothing guards against that.

        Returns:
            True if the default accounts were written.
        """
        if not await self.store.is_empty(self.collection):
            return False

        for user in DEFAULT_USERS:
            await self.store.add(self.collection, user.to_document())
        logger.info(f"Seeded {len(DEFAULT_USERS)} default users")
        return True

    async def find_users_by_code(self, code: str) -> list[User]:
        """Load every account using the given code."""
        documents = await self.store.query(self.collection, {"code": code})
        return [parse_user(doc.data, doc.id) for doc in documents]

    async def get_user_by_code(self, code: str) -> User | None:
        """Load the account for a code, or None.

        If several accounts share the code, the first one in store order is
        returned and a warning is logged.
        """
        users = await self.find_users_by_code(code)
        if not users:
            return None
        if len(users) > 1:
            logger.warning(
                f"{len(users)} users share one access code; using {users[0].id}"
            )
        return users[0]
