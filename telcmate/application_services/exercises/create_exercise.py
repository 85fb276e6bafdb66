"""Domain service behind the create-exercise form."""

from __future__ import annotations

from telcmate.application_services.exercises.base import ExerciseFormService
from telcmate.application_services.exercises.form_models import (
    REQUIRED_FIELDS,
    CreateExerciseRequest,
    FormResult,
    check_required_fields,
)
from telcmate.domain.exercises.models import InvalidExerciseError, parse_exercise
from telcmate.domain.shared.services import (
    PermissionDeniedError,
    ValidationError,
    log_domain_operation,
)


class CreateExercise(ExerciseFormService[CreateExerciseRequest]):
    """Validate a complete exercise payload and store it."""

    @log_domain_operation
    async def call(self, request: CreateExerciseRequest) -> FormResult:
        try:
            await self._require_admin(request.caller_code)
            check_required_fields(request.payload, REQUIRED_FIELDS)
            exercise = parse_exercise(request.payload)
            created = await self.repository.create(exercise)
        except PermissionDeniedError:
            return FormResult.denied()
        except (ValidationError, InvalidExerciseError) as e:
            return FormResult.failed(str(e), "VALIDATION_ERROR", title="Invalid Exercise")
        except Exception as e:
            self.logger.error(f"Error creating exercise: {e}")
            return FormResult.failed("Failed to create exercise. Please try again.")

        return FormResult.ok(
            "Exercise Created",
            "The exercise has been created successfully.",
            created,
        )
