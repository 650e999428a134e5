"""Word-list provider and child lookups backed by the document store."""

from typing import List, Optional
from pydantic import ValidationError

from ..errors import PuzzleUnavailable, StorageError
from ..session.models import ChildProfile, WordList
from .store import JsonDocumentStore


WORD_LISTS = "wordLists"
CHILDREN = "children"
TEST_RESULTS = "testResults"


def save_word_list(store: JsonDocumentStore, word_list: WordList) -> WordList:
    """Create or overwrite a word list; returns it with its id set."""
    doc_id = store.add_document(WORD_LISTS, word_list.to_document(), doc_id=word_list.id)
    return word_list.model_copy(update={"id": doc_id})


def get_word_list(store: JsonDocumentStore, list_id: str) -> WordList:
    return WordList.model_validate(store.get_document(WORD_LISTS, list_id))


def assigned_word_lists(store: JsonDocumentStore, child_id: str) -> List[WordList]:
    """Active lists assigned to the child, newest first."""
    docs = store.query(WORD_LISTS, where={"isActive": True}, array_contains=("assignedTo", child_id))
    lists = [WordList.model_validate(doc) for doc in docs]
    lists.sort(key=lambda wl: (wl.created_at is not None, wl.created_at), reverse=True)
    return lists


def latest_assigned_list(store: JsonDocumentStore, child_id: str) -> WordList:
    """
    The child's most recent active list.

    Raises:
        PuzzleUnavailable: NO_WORD_LIST when nothing is assigned
    """
    lists = assigned_word_lists(store, child_id)
    if not lists:
        raise PuzzleUnavailable("NO_WORD_LIST", f"No active word list assigned to child '{child_id}'")
    return lists[0]


def save_child(store: JsonDocumentStore, child: ChildProfile) -> ChildProfile:
    store.add_document(CHILDREN, child.to_document(), doc_id=child.id)
    return child


def _child_from_document(doc: dict) -> ChildProfile:
    try:
        return ChildProfile.model_validate(doc)
    except ValidationError as e:
        raise StorageError(f"Malformed child document '{doc.get('id')}': {e.error_count()} errors") from e


def get_child(store: JsonDocumentStore, child_id: str) -> ChildProfile:
    """
    Load a child profile.

    Raises:
        DocumentNotFound: If the child does not exist
        StorageError: If the stored document does not validate
    """
    return _child_from_document(store.get_document(CHILDREN, child_id))


def find_child_by_username(store: JsonDocumentStore, username: str) -> Optional[ChildProfile]:
    docs = store.query(CHILDREN, where={"username": username})
    return _child_from_document(docs[0]) if docs else None
