"""Domain service that fetches an exercise for the edit and delete forms."""

from __future__ import annotations

from telcmate.application_services.exercises.base import ExerciseFormService
from telcmate.application_services.exercises.form_models import (
    FormResult,
    LoadExerciseRequest,
)
from telcmate.domain.shared.services import PermissionDeniedError, log_domain_operation


class LoadExercise(ExerciseFormService[LoadExerciseRequest]):
    """Fetch one exercise for an admin form."""

    @log_domain_operation
    async def call(self, request: LoadExerciseRequest) -> FormResult:
        try:
            await self._require_admin(request.caller_code)
            exercise = await self.repository.get_by_id(request.exercise_id)
        except PermissionDeniedError:
            return FormResult.denied()
        except Exception as e:
            self.logger.error(f"Error fetching exercise {request.exercise_id}: {e}")
            return FormResult.failed("Failed to fetch exercise data")

        if exercise is None:
            return FormResult.not_found(request.exercise_id)
        return FormResult.ok("Loaded", f"Loaded exercise {exercise.id}", exercise)
