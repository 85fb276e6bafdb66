"""Dependency injection container for the exercise admin."""

from __future__ import annotations

from telcmate.application_services.exercises.create_exercise import CreateExercise
from telcmate.application_services.exercises.delete_exercise import DeleteExercise
from telcmate.application_services.exercises.edit_exercise import EditExercise
from telcmate.application_services.exercises.load_exercise import LoadExercise
from telcmate.application_services.setup.data_initializer import DataInitializer
from telcmate.core.settings import Settings
from telcmate.infrastructure.auth.admin_check import (
    AdminCheck,
    UserDirectoryAdminCheck,
)
from telcmate.infrastructure.repositories.exercise_repository import (
    ExerciseRepository,
)
from telcmate.infrastructure.repositories.settings_repository import (
    SettingsRepository,
)
from telcmate.infrastructure.repositories.user_repository import UserRepository
from telcmate.infrastructure.stores import DocumentStore, create_document_store


class AdminContainer:
    """Container for the admin dependencies, all sharing one document store."""

    def __init__(
        self,
        store: DocumentStore | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the admin container."""
        self._store = store or create_document_store(settings)

        # Initialize repositories
        self._exercises = ExerciseRepository(self._store)
        self._users = UserRepository(self._store)
        self._settings = SettingsRepository(self._store)

        self._admin_check = UserDirectoryAdminCheck(self._users)
        self._data_initializer = DataInitializer(self._users, self._settings)

        # Initialize form services
        self._create_exercise = CreateExercise(self._exercises, self._admin_check)
        self._edit_exercise = EditExercise(self._exercises, self._admin_check)
        self._delete_exercise = DeleteExercise(self._exercises, self._admin_check)
        self._load_exercise = LoadExercise(self._exercises, self._admin_check)

    def get_store(self) -> DocumentStore:
        """Get the document store instance."""
        return self._store

    def get_exercise_repository(self) -> ExerciseRepository:
        return self._exercises

    def get_user_repository(self) -> UserRepository:
        return self._users

    def get_settings_repository(self) -> SettingsRepository:
        return self._settings

    def get_admin_check(self) -> AdminCheck:
        return self._admin_check

    def get_data_initializer(self) -> DataInitializer:
        return self._data_initializer

    def get_create_exercise_service(self) -> CreateExercise:
        return self._create_exercise

    def get_edit_exercise_service(self) -> EditExercise:
        return self._edit_exercise

    def get_delete_exercise_service(self) -> DeleteExercise:
        return self._delete_exercise

    def get_load_exercise_service(self) -> LoadExercise:
        return self._load_exercise
