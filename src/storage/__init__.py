"""Document storage, local cache and result recording."""

from .store import JsonDocumentStore
from .cache import LocalCache
from .wordlists import (
    save_word_list,
    get_word_list,
    assigned_word_lists,
    latest_assigned_list,
    save_child,
    get_child,
    find_child_by_username,
)
from .recorder import ResultRecorder

__all__ = [
    "JsonDocumentStore",
    "LocalCache",
    "save_word_list",
    "get_word_list",
    "assigned_word_lists",
    "latest_assigned_list",
    "save_child",
    "get_child",
    "find_child_by_username",
    "ResultRecorder",
]
