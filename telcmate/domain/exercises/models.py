"""Exercise schema: the closed set of exercise variants.

Every exercise carries the common fields (``type``, ``part``, ``title``,
``description``, ``timeLimit``) plus exactly one variant payload selected by
its (type, part) tag. Store documents use camelCase field names; Python code
uses snake_case attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel


class InvalidExerciseError(ValueError):
    """Raised when a payload or stored document does not match its variant."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ExerciseModel(BaseModel):
    """Base model for all exercise documents and their embedded parts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ============================================================================
# Embedded content
# ============================================================================


class TitledText(ExerciseModel):
    """A text block paired with the title it should be matched to."""

    content: str
    correct_title: str


class MultipleChoiceQuestion(ExerciseModel):
    """Question with ordered options and the index of the correct one."""

    question: str
    options: list[str]
    correct_answer: int = Field(..., ge=0)

    @model_validator(mode="after")
    def correct_answer_in_options(self) -> MultipleChoiceQuestion:
        """Ensure the correct answer points at an existing option."""
        if self.correct_answer >= len(self.options):
            raise ValueError("correctAnswer must be an index into options")
        return self


class ChoiceBlank(ExerciseModel):
    """Gap filled by picking one of several options."""

    options: list[str]
    correct_answer: int = Field(..., ge=0)

    @model_validator(mode="after")
    def correct_answer_in_options(self) -> ChoiceBlank:
        """Ensure the correct answer points at an existing option."""
        if self.correct_answer >= len(self.options):
            raise ValueError("correctAnswer must be an index into options")
        return self


class WordBlank(ExerciseModel):
    """Gap filled by dragging a word from the word bank."""

    correct_word: str


# ============================================================================
# Variants
# ============================================================================


class BaseExercise(ExerciseModel):
    """Fields shared by every exercise variant."""

    id: str | None = Field(None, description="Store-assigned document ID")
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    time_limit: int = Field(..., gt=0, description="Time limit in minutes")

    def to_document(self) -> dict[str, Any]:
        """Serialize for storage; the ID lives in the document key, not the body."""
        return self.model_dump(
            mode="json", by_alias=True, exclude={"id"}, exclude_none=True
        )

    def with_id(self, exercise_id: str) -> Exercise:
        """Return a copy carrying the given store ID."""
        return self.model_copy(update={"id": exercise_id})  # type: ignore[return-value]


class ReadingPart1Exercise(BaseExercise):
    """Title matching: pick the right title for each text."""

    type: Literal["reading"]
    part: Literal["part1"]
    texts: list[TitledText]


class ReadingPart2Exercise(BaseExercise):
    """Multiple choice questions about one text."""

    type: Literal["reading"]
    part: Literal["part2"]
    content: str
    questions: list[MultipleChoiceQuestion]


class ReadingPart3Exercise(BaseExercise):
    """Matching between several content blocks and a shared option list."""

    type: Literal["reading"]
    part: Literal["part3"]
    content: list[str]
    options: list[str]
    correct_answers: list[int]

    @model_validator(mode="after")
    def answers_match_blocks(self) -> ReadingPart3Exercise:
        """One answer per block, each an index into options."""
        if len(self.correct_answers) != len(self.content):
            raise ValueError("correctAnswers must have one entry per content block")
        for index in self.correct_answers:
            if not 0 <= index < len(self.options):
                raise ValueError("correctAnswers must be indices into options")
        return self


class ListeningExercise(BaseExercise):
    """Audio with multiple choice questions, used for every listening part."""

    type: Literal["listening"]
    part: Literal["part1", "part2", "part3"]
    audio_url: str
    questions: list[MultipleChoiceQuestion]
    transcript: str | None = None


class GrammarPart1Exercise(BaseExercise):
    """Text with blanks, each answered by choosing an option."""

    type: Literal["grammar"]
    part: Literal["part1"]
    text_with_blanks: str
    blanks: list[ChoiceBlank]


class GrammarPart2Exercise(BaseExercise):
    """Text with blanks filled from a word bank."""

    type: Literal["grammar"]
    part: Literal["part2"]
    text_with_blanks: str
    blanks: list[WordBlank]
    word_bank: list[str]

    @model_validator(mode="after")
    def word_bank_covers_answers(self) -> GrammarPart2Exercise:
        """The word bank must offer every correct word."""
        missing = {b.correct_word for b in self.blanks} - set(self.word_bank)
        if missing:
            raise ValueError(
                f"wordBank is missing correct words: {', '.join(sorted(missing))}"
            )
        return self


class WritingExercise(BaseExercise):
    """Free writing task graded against a list of criteria."""

    type: Literal["writing"]
    part: Literal["part1", "part2"]
    prompt: str
    evaluation_criteria: list[str]


def exercise_variant_tag(value: Any) -> str | None:
    """Map an exercise (model or raw document) to its union tag.

    Listening and writing share one shape across parts; reading and grammar
    are refined by part. Unknown combinations yield None, which pydantic
    reports as a validation error.
    """
    if isinstance(value, Mapping):
        kind, part = value.get("type"), value.get("part")
    else:
        kind, part = getattr(value, "type", None), getattr(value, "part", None)

    kind = getattr(kind, "value", kind)
    part = getattr(part, "value", part)

    if kind in ("listening", "writing"):
        return kind
    if kind in ("reading", "grammar") and isinstance(part, str):
        return f"{kind}/{part}"
    return None


Exercise = Annotated[
    Union[
        Annotated[ReadingPart1Exercise, Tag("reading/part1")],
        Annotated[ReadingPart2Exercise, Tag("reading/part2")],
        Annotated[ReadingPart3Exercise, Tag("reading/part3")],
        Annotated[ListeningExercise, Tag("listening")],
        Annotated[GrammarPart1Exercise, Tag("grammar/part1")],
        Annotated[GrammarPart2Exercise, Tag("grammar/part2")],
        Annotated[WritingExercise, Tag("writing")],
    ],
    Discriminator(exercise_variant_tag),
]

EXERCISE_ADAPTER: TypeAdapter[Exercise] = TypeAdapter(Exercise)


def parse_exercise(data: Mapping[str, Any], exercise_id: str | None = None) -> Exercise:
    """Validate a raw payload against the exercise union.

    Args:
        data: Document body or request payload (camelCase or snake_case).
        exercise_id: Store ID to attach; overrides any ``id`` in the payload.

    Raises:
        InvalidExerciseError: If the payload does not match exactly one variant.
    """
    payload = dict(data)
    if exercise_id is not None:
        payload["id"] = exercise_id
    try:
        return EXERCISE_ADAPTER.validate_python(payload)
    except PydanticValidationError as e:
        label = f"exercise {exercise_id}" if exercise_id else "exercise"
        raise InvalidExerciseError(
            f"Invalid {label}: {e}", errors=e.errors(include_url=False)
        ) from e


# Fields a patch may never touch: the ID is the document key and the
# variant tag is fixed for the lifetime of a record.
IMMUTABLE_FIELDS = frozenset({"id", "type", "part"})
NULLABLE_FIELDS = frozenset({"transcript"})


class ExercisePatch(ExerciseModel):
    """Partial update of an exercise, validated field by field."""

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    time_limit: int | None = Field(None, gt=0)

    texts: list[TitledText] | None = None
    content: str | list[str] | None = None
    questions: list[MultipleChoiceQuestion] | None = None
    options: list[str] | None = None
    correct_answers: list[int] | None = None
    audio_url: str | None = None
    transcript: str | None = None
    text_with_blanks: str | None = None
    blanks: list[ChoiceBlank] | list[WordBlank] | None = None
    word_bank: list[str] | None = None
    prompt: str | None = None
    evaluation_criteria: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_immutable_fields(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            touched = IMMUTABLE_FIELDS & set(data)
            if touched:
                raise ValueError(
                    f"Cannot change {', '.join(sorted(touched))} of an existing exercise"
                )
        return data

    @model_validator(mode="after")
    def reject_empty_values(self) -> ExercisePatch:
        if not self.model_fields_set:
            raise ValueError("Patch must set at least one field")
        for name in self.model_fields_set - NULLABLE_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def to_fields(self) -> dict[str, Any]:
        """Serialize only the fields the caller set, using store field names."""
        return self.model_dump(
            mode="json", by_alias=True, include=set(self.model_fields_set)
        )

    def check_fits(self, variant: type[BaseExercise]) -> None:
        """Check every patched field exists on the variant with the right shape.

        Rules spanning several fields (such as the word bank covering the
        answers) need the stored record and are checked by ``apply_to``.

        Raises:
            InvalidExerciseError: If a field is foreign to the variant or
                has a shape the variant does not accept.
        """
        foreign = sorted(self.model_fields_set - set(variant.model_fields))
        if foreign:
            raise InvalidExerciseError(
                f"Invalid exercise update: {variant.__name__} has no field "
                f"{', '.join(foreign)}"
            )

        for name in sorted(self.model_fields_set):
            annotation = variant.model_fields[name].annotation
            try:
                TypeAdapter(annotation).validate_python(getattr(self, name))
            except PydanticValidationError as e:
                raise InvalidExerciseError(
                    f"Invalid exercise update: {name} does not fit "
                    f"{variant.__name__}: {e}",
                    errors=e.errors(include_url=False),
                ) from e

    def apply_to(self, exercise: BaseExercise) -> Exercise:
        """Merge this patch into an exercise and re-validate the result.

        Raises:
            InvalidExerciseError: If the merged record no longer fits its variant.
        """
        merged = {**exercise.to_document(), **self.to_fields()}
        return parse_exercise(merged, exercise.id)


def parse_patch(data: Mapping[str, Any]) -> ExercisePatch:
    """Validate a raw partial update.

    Raises:
        InvalidExerciseError: If a field has the wrong shape or is immutable.
    """
    try:
        return ExercisePatch.model_validate(dict(data))
    except PydanticValidationError as e:
        raise InvalidExerciseError(
            f"Invalid exercise update: {e}", errors=e.errors(include_url=False)
        ) from e
