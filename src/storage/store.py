"""
JSON-file document store.

Each collection is a directory under the store root and each document a
`<id>.json` file inside it. Documents always carry their own `id`.
"""

import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel

from ..errors import DocumentNotFound, StorageError


Document = Dict[str, Any]


def set_dotted(doc: Document, key: str, value: Any) -> None:
    """Set `value` at a dotted path such as 'progress.accuracy', creating parents."""
    parts = key.split('.')
    target = doc
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[parts[-1]] = value


class JsonDocumentStore(BaseModel):
    """
    A minimal document database backed by JSON files.

    Attributes:
        root: Directory holding one sub-directory per collection
    """

    root: Path

    def _collection_dir(self, collection: str) -> Path:
        return self.root / collection

    def _doc_path(self, collection: str, doc_id: str) -> Path:
        return self._collection_dir(collection) / f"{doc_id}.json"

    def _write(self, path: Path, doc: Document) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                json.dump(doc, f, indent=2, default=str)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    def _read(self, path: Path) -> Document:
        try:
            with open(path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def add_document(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        """
        Add a document to a collection.

        Args:
            collection: Collection name (e.g. "testResults")
            data: Document body; an "id" key is added or overwritten
            doc_id: Optional id (a random one is generated otherwise)

        Returns:
            The document id
        """
        doc_id = doc_id or data.get("id") or uuid.uuid4().hex
        self._write(self._doc_path(collection, doc_id), {**data, "id": doc_id})
        return doc_id

    def get_document(self, collection: str, doc_id: str) -> Document:
        """
        Fetch one document.

        Raises:
            DocumentNotFound: If no such document exists
        """
        path = self._doc_path(collection, doc_id)
        if not path.exists():
            raise DocumentNotFound(collection, doc_id)
        return self._read(path)

    def update_document(self, collection: str, doc_id: str, patch: Document) -> Document:
        """
        Apply a patch to an existing document.

        Keys may be dotted paths ("progress.wordsearchesCompleted") to
        update nested fields without replacing the parent object.

        Returns:
            The updated document
        """
        doc = self.get_document(collection, doc_id)
        for key, value in patch.items():
            set_dotted(doc, key, value)
        doc["id"] = doc_id
        self._write(self._doc_path(collection, doc_id), doc)
        return doc

    def delete_document(self, collection: str, doc_id: str) -> None:
        path = self._doc_path(collection, doc_id)
        if not path.exists():
            raise DocumentNotFound(collection, doc_id)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Could not delete {path}: {e}") from e

    def query(
        self,
        collection: str,
        where: Optional[Document] = None,
        array_contains: Optional[Tuple[str, Any]] = None,
    ) -> List[Document]:
        """
        List documents matching simple filters.

        Args:
            collection: Collection name
            where: Field -> value equality filters
            array_contains: (field, value) pair; the field must be a list holding value

        Returns:
            Matching documents, ordered by id
        """
        directory = self._collection_dir(collection)
        if not directory.exists():
            return []

        results = []
        for path in sorted(directory.glob("*.json")):
            doc = self._read(path)
            if where and any(doc.get(k) != v for k, v in where.items()):
                continue
            if array_contains:
                field, value = array_contains
                if value not in (doc.get(field) or []):
                    continue
            results.append(doc)

        return results
