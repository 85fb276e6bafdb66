"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from telcmate.infrastructure.stores.sql_store import SQLDocumentStore  # noqa: E402

ADMIN_CODE = "admin123"
STUDENT_CODE = "user123"

SAMPLE_EXERCISES: dict[str, dict[str, Any]] = {
    "reading/part1": {
        "type": "reading",
        "part": "part1",
        "title": "Überschriften zuordnen",
        "description": "Match each text to its title",
        "timeLimit": 20,
        "texts": [
            {"content": "Der Zug fährt heute später ab.", "correctTitle": "Verspätung"},
            {"content": "Das Museum ist montags geschlossen.", "correctTitle": "Ruhetag"},
        ],
    },
    "reading/part2": {
        "type": "reading",
        "part": "part2",
        "title": "Zeitungsartikel",
        "description": "Read the article and answer the questions",
        "timeLimit": 25,
        "content": "Die Stadt baut einen neuen Radweg entlang des Flusses.",
        "questions": [
            {
                "question": "Was baut die Stadt?",
                "options": ["Eine Brücke", "Einen Radweg", "Einen Bahnhof"],
                "correctAnswer": 1,
            }
        ],
    },
    "reading/part3": {
        "type": "reading",
        "part": "part3",
        "title": "Anzeigen",
        "description": "Find the matching advert for each situation",
        "timeLimit": 15,
        "content": ["Sie suchen eine Wohnung.", "Sie möchten Deutsch lernen."],
        "options": ["Sprachschule", "Immobilienbüro", "Fitnessstudio"],
        "correctAnswers": [1, 0],
    },
    "listening/part1": {
        "type": "listening",
        "part": "part1",
        "title": "Durchsagen",
        "description": "Listen to the announcements",
        "timeLimit": 15,
        "audioUrl": "https://example.com/audio/durchsage.mp3",
        "questions": [
            {
                "question": "Wohin fährt der Zug?",
                "options": ["Berlin", "Hamburg"],
                "correctAnswer": 0,
            }
        ],
        "transcript": "Der Zug nach Berlin fährt von Gleis 3.",
    },
    "grammar/part1": {
        "type": "grammar",
        "part": "part1",
        "title": "Präpositionen",
        "description": "Choose the right word for each gap",
        "timeLimit": 10,
        "textWithBlanks": "Ich wohne ___ Berlin.",
        "blanks": [{"options": ["in", "an", "auf"], "correctAnswer": 0}],
    },
    "grammar/part2": {
        "type": "grammar",
        "part": "part2",
        "title": "Wortschatz",
        "description": "Fill the gaps from the word bank",
        "timeLimit": 10,
        "textWithBlanks": "Ich ___ gern Kaffee.",
        "blanks": [{"correctWord": "trinke"}],
        "wordBank": ["trinke", "esse", "lese"],
    },
    "writing/part1": {
        "type": "writing",
        "part": "part1",
        "title": "E-Mail an einen Freund",
        "description": "Write an informal email",
        "timeLimit": 30,
        "prompt": "Schreiben Sie Ihrem Freund über Ihren Urlaub.",
        "evaluationCriteria": ["Inhalt", "Grammatik", "Wortschatz"],
    },
}


def sample_exercise(key: str, **overrides: Any) -> dict[str, Any]:
    """Return a fresh copy of a sample exercise payload."""
    payload = copy.deepcopy(SAMPLE_EXERCISES[key])
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> SQLDocumentStore:
    """Create an in-memory SQL document store."""
    return SQLDocumentStore("sqlite://")
