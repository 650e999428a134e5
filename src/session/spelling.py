from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from ..errors import PuzzleUnavailable, SessionComplete
from .models import Celebration, IncorrectWord, SpellingSummary, WordList
from .progress import percentage_of


# Minimum percentage for each celebration, highest first
CELEBRATION_THRESHOLDS = [
    (90, "excellent"),
    (70, "good"),
    (50, "pass"),
]


def celebration_for(percentage: int) -> Optional[Celebration]:
    """Celebration level for a finished test, or None below 50%."""
    for threshold, level in CELEBRATION_THRESHOLDS:
        if percentage >= threshold:
            return level
    return None


class SpellingTest(BaseModel):
    """
    A word-by-word spelling test over a word list.

    The child hears (or reads the hint for) the current word and types
    it; answers are compared case-insensitively.

    Attributes:
        word_list: The list being tested
        current_index: Index of the word being asked
        words_correct: Words spelled correctly
        words_incorrect: Misspelled words with what was typed
    """

    word_list: WordList
    current_index: int = 0
    words_correct: List[str] = Field(default_factory=list)
    words_incorrect: List[IncorrectWord] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    is_complete: bool = False

    @classmethod
    def create(cls, word_list: Optional[WordList], started_at: Optional[datetime] = None) -> "SpellingTest":
        """
        Factory method to start a test on a word list.

        Raises:
            PuzzleUnavailable: If there is no list or it has no words
        """
        if word_list is None or not word_list.words:
            raise PuzzleUnavailable("NO_WORD_LIST")
        return cls(word_list=word_list, started_at=started_at or datetime.now())

    @property
    def total(self) -> int:
        return len(self.word_list.words)

    @property
    def score(self) -> int:
        return len(self.words_correct)

    @property
    def is_last_word(self) -> bool:
        return self.current_index >= self.total - 1

    @property
    def current_word(self) -> Optional[str]:
        if self.current_index >= self.total:
            return None
        return self.word_list.words[self.current_index].word

    @property
    def current_hint(self) -> Optional[str]:
        if self.current_index >= self.total:
            return None
        return self.word_list.words[self.current_index].hint

    def answer(self, user_input: str) -> bool:
        """
        Check an answer for the current word and move to the next one.

        Returns:
            True if the answer was spelled correctly

        Raises:
            SessionComplete: If the test is finished or every word was asked
        """
        if self.is_complete or self.current_word is None:
            raise SessionComplete("No words left in this test")

        word = self.current_word
        correct = user_input.strip().lower() == word.strip().lower()
        if correct:
            self.words_correct.append(word)
        else:
            self.words_incorrect.append(IncorrectWord(word=word, user_input=user_input))

        self.current_index += 1
        return correct

    def finish(self, now: Optional[datetime] = None) -> SpellingSummary:
        """End the test; unanswered words count against the score."""
        if self.is_complete:
            raise SessionComplete()

        ended_at = now or datetime.now()
        self.is_complete = True

        return SpellingSummary(
            score=self.score,
            total=self.total,
            percentage=percentage_of(self.score, self.total),
            time_taken_ms=max(0, int((ended_at - self.started_at).total_seconds() * 1000)),
            words_correct=list(self.words_correct),
            words_incorrect=list(self.words_incorrect),
        )
