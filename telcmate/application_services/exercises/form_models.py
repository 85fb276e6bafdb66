"""Requests and results exchanged with the exercise admin forms."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from telcmate.domain.exercises.models import Exercise
from telcmate.domain.shared.services import ValidationError

# Fields every exercise form marks as required
REQUIRED_FIELDS = ("type", "part", "title", "description")

PERMISSION_DENIED_MESSAGE = "You do not have permission to access this page."


@dataclass
class CreateExerciseRequest:
    """Request to create an exercise from a complete form payload."""

    caller_code: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class EditExerciseRequest:
    """Request to change some fields of an existing exercise."""

    caller_code: str
    exercise_id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass
class DeleteExerciseRequest:
    """Request to delete an exercise."""

    caller_code: str
    exercise_id: str


@dataclass
class LoadExerciseRequest:
    """Request to fetch an exercise for the edit and delete forms."""

    caller_code: str
    exercise_id: str


@dataclass
class FormResult:
    """Outcome shown to the admin as a notification."""

    success: bool
    title: str
    message: str
    exercise: Exercise | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, title: str, message: str, exercise: Exercise | None = None) -> FormResult:
        return cls(success=True, title=title, message=message, exercise=exercise)

    @classmethod
    def failed(cls, message: str, error_code: str | None = None, title: str = "Error") -> FormResult:
        return cls(success=False, title=title, message=message, error_code=error_code)

    @classmethod
    def denied(cls) -> FormResult:
        return cls.failed(PERMISSION_DENIED_MESSAGE, "PERMISSION_DENIED", title="Access Denied")

    @classmethod
    def not_found(cls, exercise_id: str) -> FormResult:
        return cls.failed(f"Exercise {exercise_id} not found", "NOT_FOUND", title="Not Found")


def check_required_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Reject a form payload with a missing or blank required field.

    Raises:
        ValidationError: Naming the first offending field.
    """
    for name in fields:
        value = payload.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required", field=name)
