"""User accounts and site-wide settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base model for camelCase store documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})


class User(DocumentModel):
    """Platform account, looked up by its access code."""

    id: str | None = None
    name: str
    code: str = Field(..., min_length=1, description="Login token and lookup key")
    is_admin: bool = False
    is_moderator: bool = False
    is_demo: bool = False
    role: str = Field("Student", description="Display label")


DEFAULT_USERS: tuple[User, ...] = (
    User(
        name="Admin User",
        code="admin123",
        is_admin=True,
        role="Admin",
    ),
    User(
        name="Moderator User",
        code="mod123",
        is_moderator=True,
        role="Moderator",
    ),
    User(
        name="Test User",
        code="user123",
        role="Student",
    ),
    User(
        name="Demo User",
        code="demo123",
        is_demo=True,
        role="Student",
    ),
)


class DefaultTimeLimits(DocumentModel):
    """Default time limit in minutes per exercise type."""

    reading: int = Field(20, gt=0)
    listening: int = Field(15, gt=0)
    grammar: int = Field(15, gt=0)
    writing: int = Field(30, gt=0)


class SystemSettings(DocumentModel):
    """Site-wide configuration stored under the well-known ``system`` key."""

    site_title: str = "Telc Mate"
    allow_registration: bool = False
    maintenance_mode: bool = False
    default_time_limit: DefaultTimeLimits = Field(default_factory=DefaultTimeLimits)
    language: str = "en"
    show_correct_answers: bool = True
    allow_test_retake: bool = True
    demo_access_level: str = "limited"


class TimeLimitsPatch(DocumentModel):
    """Partial update of the default time limits."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    reading: int | None = Field(None, gt=0)
    listening: int | None = Field(None, gt=0)
    grammar: int | None = Field(None, gt=0)
    writing: int | None = Field(None, gt=0)

    @model_validator(mode="after")
    def reject_empty_values(self) -> TimeLimitsPatch:
        if not self.model_fields_set:
            raise ValueError("defaultTimeLimit patch must set at least one type")
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"defaultTimeLimit.{name} cannot be cleared")
        return self


class SettingsPatch(DocumentModel):
    """Partial update of the system settings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    site_title: str | None = None
    allow_registration: bool | None = None
    maintenance_mode: bool | None = None
    default_time_limit: TimeLimitsPatch | None = None
    language: str | None = None
    show_correct_answers: bool | None = None
    allow_test_retake: bool | None = None
    demo_access_level: str | None = None

    @model_validator(mode="after")
    def reject_empty_values(self) -> SettingsPatch:
        if not self.model_fields_set:
            raise ValueError("Patch must set at least one field")
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def to_fields(self) -> dict[str, Any]:
        """Serialize the set fields for a merge-patch.

        Nested time limits become dotted field paths
        (``defaultTimeLimit.writing``) so untouched limits keep their values.
        """
        fields = self.model_dump(
            mode="json",
            by_alias=True,
            include=set(self.model_fields_set) - {"default_time_limit"},
        )
        if self.default_time_limit is not None:
            limits = self.default_time_limit.model_dump(
                mode="json", include=set(self.default_time_limit.model_fields_set)
            )
            for kind, minutes in limits.items():
                fields[f"defaultTimeLimit.{kind}"] = minutes
        return fields


def parse_user(data: Mapping[str, Any], user_id: str) -> User:
    """Build a User from a stored document."""
    return User.model_validate({**data, "id": user_id})
