"""Play sessions for Spell Quest: word searches and spelling tests."""

from .models import (
    SessionSummary,
    SpellingSummary,
    IncorrectWord,
    TestResult,
    ChildProgress,
    ChildProfile,
    WordList,
    RecordOutcome,
)
from .engine import WordSearchSession
from .spelling import SpellingTest, celebration_for
from .progress import apply_result, cumulative_average, percentage_of, round_half_up

__all__ = [
    "SessionSummary",
    "SpellingSummary",
    "IncorrectWord",
    "TestResult",
    "ChildProgress",
    "ChildProfile",
    "WordList",
    "RecordOutcome",
    "WordSearchSession",
    "SpellingTest",
    "celebration_for",
    "apply_result",
    "cumulative_average",
    "percentage_of",
    "round_half_up",
]
