"""Domain service behind the delete-exercise form."""

from __future__ import annotations

from telcmate.application_services.exercises.base import ExerciseFormService
from telcmate.application_services.exercises.form_models import (
    DeleteExerciseRequest,
    FormResult,
)
from telcmate.domain.shared.services import PermissionDeniedError, log_domain_operation


class DeleteExercise(ExerciseFormService[DeleteExerciseRequest]):
    """Delete an exercise; deleting an unknown ID still succeeds."""

    @log_domain_operation
    async def call(self, request: DeleteExerciseRequest) -> FormResult:
        try:
            await self._require_admin(request.caller_code)
            await self.repository.delete(request.exercise_id)
        except PermissionDeniedError:
            return FormResult.denied()
        except Exception as e:
            self.logger.error(f"Error deleting exercise {request.exercise_id}: {e}")
            return FormResult.failed("Failed to delete exercise")

        return FormResult.ok("Success", "Exercise deleted successfully")
