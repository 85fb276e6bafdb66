"""Domain service behind the edit-exercise form."""

from __future__ import annotations

from telcmate.application_services.exercises.base import ExerciseFormService
from telcmate.application_services.exercises.form_models import (
    EditExerciseRequest,
    FormResult,
)
from telcmate.domain.exercises.models import InvalidExerciseError, parse_patch
from telcmate.domain.shared.services import PermissionDeniedError, log_domain_operation
from telcmate.infrastructure.stores.base import DocumentNotFoundError


class EditExercise(ExerciseFormService[EditExerciseRequest]):
    """Apply a partial change to an exercise.

    The merged record is validated against its variant before anything is
    written; only the changed fields are then sent to the store as a patch.
    """

    @log_domain_operation
    async def call(self, request: EditExerciseRequest) -> FormResult:
        try:
            await self._require_admin(request.caller_code)
            patch = parse_patch(request.changes)

            current = await self.repository.get_by_id(request.exercise_id)
            if current is None:
                return FormResult.not_found(request.exercise_id)

            updated = patch.apply_to(current)
            await self.repository.update(request.exercise_id, patch, type(current))
        except PermissionDeniedError:
            return FormResult.denied()
        except InvalidExerciseError as e:
            return FormResult.failed(str(e), "VALIDATION_ERROR", title="Invalid Exercise")
        except DocumentNotFoundError:
            return FormResult.not_found(request.exercise_id)
        except Exception as e:
            self.logger.error(f"Error updating exercise {request.exercise_id}: {e}")
            return FormResult.failed("Failed to update exercise")

        return FormResult.ok("Success", "Exercise updated successfully", updated)
