"""Tests for the admin dependency container."""

from __future__ import annotations

import os
from unittest.mock import patch

from telcmate.core.settings import Settings
from telcmate.infrastructure.containers.admin_container import AdminContainer
from telcmate.infrastructure.stores.sql_store import SQLDocumentStore


class TestAdminContainer:
    """Test AdminContainer wiring."""

    def test_components_share_one_store(self, store) -> None:
        container = AdminContainer(store=store)

        assert container.get_store() is store
        assert container.get_exercise_repository().store is store
        assert container.get_user_repository().store is store
        assert container.get_settings_repository().store is store

    def test_services_use_shared_repository_and_check(self, store) -> None:
        container = AdminContainer(store=store)
        repository = container.get_exercise_repository()
        admin_check = container.get_admin_check()

        for service in (
            container.get_create_exercise_service(),
            container.get_edit_exercise_service(),
            container.get_delete_exercise_service(),
            container.get_load_exercise_service(),
        ):
            assert service.repository is repository
            assert service.admin_check is admin_check

    def test_initializer_uses_container_repositories(self, store) -> None:
        container = AdminContainer(store=store)
        initializer = container.get_data_initializer()

        assert initializer.users is container.get_user_repository()
        assert initializer.settings is container.get_settings_repository()

    @patch.dict(os.environ, {}, clear=True)
    def test_builds_store_from_settings(self) -> None:
        settings = Settings(_env_file=None, TELCMATE_DATABASE_URL="sqlite://")

        container = AdminContainer(settings=settings)

        assert isinstance(container.get_store(), SQLDocumentStore)
