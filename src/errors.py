"""Exceptions shared across the puzzle, session and storage layers."""

from typing import Literal


UnavailableReason = Literal["NO_WORD_LIST", "NO_WORDS_PLACED"]

# Child-facing guidance for each empty state
_UNAVAILABLE_MESSAGES = {
    "NO_WORD_LIST": "You don't have a spelling list yet. Ask your parent to assign one!",
    "NO_WORDS_PLACED": "We couldn't build a word search from this list. Ask your parent to check the words.",
}


class PuzzleUnavailable(ValueError):
    """Raised when a word search cannot be started for a child."""

    def __init__(self, reason: UnavailableReason, detail: str = ""):
        self.reason = reason
        self.message = _UNAVAILABLE_MESSAGES[reason]
        super().__init__(detail or self.message)


class SessionComplete(RuntimeError):
    """Raised when a finished session receives further input."""

    def __init__(self, message: str = "Session is already complete"):
        self.message = message
        super().__init__(message)


class StorageError(RuntimeError):
    """Raised when the document store cannot read or write a document."""


class DocumentNotFound(StorageError):
    """Raised when a document id does not exist in a collection."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document '{doc_id}' not found in '{collection}'")


class WordListGenerationError(RuntimeError):
    """Raised when the language model returns an unusable word list."""
