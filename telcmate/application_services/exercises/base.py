"""Shared behaviour of the exercise admin form services."""

from __future__ import annotations

from typing import TypeVar

from telcmate.application_services.exercises.form_models import FormResult
from telcmate.domain.shared.services import DomainService, PermissionDeniedError
from telcmate.infrastructure.auth.admin_check import AdminCheck
from telcmate.infrastructure.repositories.exercise_repository import (
    ExerciseRepository,
)

R = TypeVar("R")


class ExerciseFormService(DomainService[R, FormResult]):
    """Base for services behind the create, edit, load and delete forms.

    Every call is checked against the server-side admin check before any
    store access happens.
    """

    def __init__(self, repository: ExerciseRepository, admin_check: AdminCheck) -> None:
        super().__init__()
        self.repository = repository
        self.admin_check = admin_check

    async def _require_admin(self, caller_code: str) -> None:
        if not await self.admin_check.is_admin(caller_code):
            raise PermissionDeniedError()
