"""
Result recording for finished sessions.

Appends the history record to `testResults`, updates the child's history
and running totals, then mirrors the profile into the local cache. Store
failures are logged and swallowed so a child is never blocked from
closing a finished game; the cache is still updated, so it can run ahead
of the store until the next successful fetch.
"""

import logging
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..errors import StorageError
from ..session.models import (
    ChildProfile,
    RecordOutcome,
    SessionSummary,
    SpellingSummary,
    TestResult,
    WordList,
)
from ..session.progress import apply_result
from .cache import LocalCache
from .store import JsonDocumentStore
from .wordlists import CHILDREN, TEST_RESULTS, get_child


logger = logging.getLogger(__name__)


class ResultRecorder(BaseModel):
    """
    Hands finished sessions to the persistence sink and the local cache.

    Attributes:
        store: Document store (source of truth)
        cache: Optional local mirror of the child profile
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    store: JsonDocumentStore
    cache: Optional[LocalCache] = None

    def record_wordsearch(
        self,
        child_id: str,
        word_list: WordList,
        summary: SessionSummary,
        date: Optional[datetime] = None,
    ) -> RecordOutcome:
        """Record a finished word search."""
        result = TestResult(
            type="wordsearch",
            date=date or datetime.now(),
            child_id=child_id,
            list_id=word_list.id,
            list_name=word_list.name,
            score=summary.score,
            total=summary.total,
            percentage=summary.percentage,
            time_taken=summary.time_taken_ms,
            difficulty=word_list.difficulty,
            words_found=summary.words_found,
            words_not_found=summary.words_not_found,
        )
        return self.record(result)

    def record_spelling(
        self,
        child_id: str,
        word_list: WordList,
        summary: SpellingSummary,
        date: Optional[datetime] = None,
    ) -> RecordOutcome:
        """Record a finished spelling test."""
        result = TestResult(
            type="spelling",
            date=date or datetime.now(),
            child_id=child_id,
            list_id=word_list.id,
            list_name=word_list.name,
            score=summary.score,
            total=summary.total,
            percentage=summary.percentage,
            time_taken=summary.time_taken_ms,
            difficulty=word_list.difficulty,
            words_correct=summary.words_correct,
            words_incorrect=summary.words_incorrect,
        )
        return self.record(result)

    def record(self, result: TestResult) -> RecordOutcome:
        """
        Persist a history record and update the child's totals.

        Returns:
            RecordOutcome; `persisted` is False when the store failed
        """
        outcome = RecordOutcome(result=result)
        base_profile = self._current_profile(result.child_id)

        try:
            result.id = self.store.add_document(TEST_RESULTS, result.to_document())
            profile = self._updated_profile(base_profile, result)
            self.store.update_document(CHILDREN, result.child_id, {
                "testHistory": [r.to_document() for r in profile.test_history],
                "progress": profile.progress.to_document(),
            })
            outcome.persisted = True
        except StorageError as e:
            logger.exception("Could not save %s result for child %s", result.type, result.child_id)
            outcome.error = str(e)
            if result.id is not None:
                self._discard_result(result.id)
                result.id = None
            profile = self._updated_profile(base_profile, result)

        outcome.profile = profile
        self._update_cache(profile)
        return outcome

    def _current_profile(self, child_id: str) -> ChildProfile:
        """Latest known profile: the store, else the cache, else a blank one."""
        try:
            return get_child(self.store, child_id)
        except StorageError:
            logger.warning("Child %s unavailable from store, falling back to cache", child_id)

        cached = self.cache.get_child() if self.cache else None
        if cached is not None and cached.id == child_id:
            return cached
        return ChildProfile(id=child_id)

    def _discard_result(self, result_id: str) -> None:
        """Remove a history record whose child update failed, so a retry does not duplicate it."""
        try:
            self.store.delete_document(TEST_RESULTS, result_id)
        except StorageError:
            logger.exception("Could not remove orphaned result %s", result_id)

    @staticmethod
    def _updated_profile(profile: ChildProfile, result: TestResult) -> ChildProfile:
        return profile.model_copy(update={
            "test_history": [*profile.test_history, result],
            "progress": apply_result(profile.progress, result),
        })

    def _update_cache(self, profile: ChildProfile) -> None:
        if self.cache is None:
            return
        try:
            self.cache.set_child(profile)
        except OSError:
            logger.exception("Could not update local cache for child %s", profile.id)
