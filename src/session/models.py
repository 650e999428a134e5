"""
Pydantic models for the session layer.

This module holds the data records (summaries, history records, child
profiles, word lists) exchanged between the engines, the recorder and the
document store. Stored documents use camelCase keys, so the records carry
camelCase aliases and are dumped with `by_alias=True`.
"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..puzzle.models import WordEntry


ResultType = Literal["spelling", "wordsearch"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
Celebration = Literal["excellent", "good", "pass"]


class StoredModel(BaseModel):
    """Base for records persisted as camelCase documents."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SessionSummary(BaseModel):
    """Completion summary emitted by a word-search session."""
    score: int
    total: int
    percentage: int
    time_taken_ms: int
    words_found: List[str] = Field(default_factory=list)
    words_not_found: List[str] = Field(default_factory=list)


class IncorrectWord(StoredModel):
    """A misspelled answer in a spelling test."""
    word: str
    user_input: str


class SpellingSummary(BaseModel):
    """Completion summary emitted by a spelling test."""
    score: int
    total: int
    percentage: int
    time_taken_ms: int
    words_correct: List[str] = Field(default_factory=list)
    words_incorrect: List[IncorrectWord] = Field(default_factory=list)


class TestResult(StoredModel):
    """A history record appended to `testResults` and the child's history."""
    __test__ = False  # not a pytest test class

    id: Optional[str] = None
    type: ResultType
    date: datetime
    child_id: str
    list_id: Optional[str] = None
    list_name: str = ""
    score: int
    total: int
    percentage: int
    time_taken: int
    difficulty: Optional[Difficulty] = None
    # Spelling test fields
    words_correct: Optional[List[str]] = None
    words_incorrect: Optional[List[IncorrectWord]] = None
    # Word search fields
    words_found: Optional[List[str]] = None
    words_not_found: Optional[List[str]] = None


class ChildProgress(StoredModel):
    """Running totals shown on the child's dashboard."""
    coins: int = 0
    gems: int = 0
    completed_quests: int = 0
    wordsearches_completed: int = 0
    total_tests: int = 0
    accuracy: int = 0


class ChildProfile(StoredModel):
    """A child's profile as stored in `children` and mirrored in the local cache."""
    id: str
    parent_id: Optional[str] = None
    username: str = ""
    display_name: str = ""
    age: Optional[int] = None
    difficulty_level: Difficulty = "beginner"
    progress: ChildProgress = Field(default_factory=ChildProgress)
    test_history: List[TestResult] = Field(default_factory=list)


class WordList(StoredModel):
    """A parent-managed spelling list."""
    id: Optional[str] = None
    name: str
    category: str = ""
    difficulty: Difficulty = "beginner"
    words: List[WordEntry] = Field(default_factory=list)
    assigned_to: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None


class RecordOutcome(BaseModel):
    """What the recorder managed to do with a finished session."""
    result: TestResult
    persisted: bool = False
    profile: Optional[ChildProfile] = None
    error: Optional[str] = None
