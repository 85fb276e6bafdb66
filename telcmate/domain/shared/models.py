"""Shared enums and constants for all bounded contexts."""

from __future__ import annotations

from enum import Enum


class ExerciseType(str, Enum):
    """Exam sections an exercise can belong to."""

    READING = "reading"
    LISTENING = "listening"
    GRAMMAR = "grammar"
    WRITING = "writing"


class ExercisePart(str, Enum):
    """Exam parts within a section."""

    PART1 = "part1"
    PART2 = "part2"
    PART3 = "part3"


# Document store collection names (wire contract)
EXERCISES_COLLECTION = "exercises"
USERS_COLLECTION = "users"
SETTINGS_COLLECTION = "settings"

# Well-known key of the site-wide settings document
SYSTEM_SETTINGS_ID = "system"
