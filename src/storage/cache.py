"""Client-side key/value cache mirroring the signed-in child's profile."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel

from ..session.models import ChildProfile


logger = logging.getLogger(__name__)

CHILD_KEY = "childUser"


class LocalCache(BaseModel):
    """
    JSON file holding a flat key/value map.

    A convenience copy only: the document store is the source of truth and
    the cache may drift until the next fetch. An unreadable cache file is
    treated as empty.
    """

    path: Path

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable cache %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def get_child(self) -> Optional[ChildProfile]:
        """The cached child profile, if any."""
        raw = self.get(CHILD_KEY)
        return ChildProfile.model_validate(raw) if raw else None

    def set_child(self, profile: ChildProfile) -> None:
        self.set(CHILD_KEY, profile.to_document())
