"""Key/value stores used around the planning engine."""
from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from shopgrowth.db.models.kv_entry import KeyValueEntry


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store, used by tests and one-off scripts."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class SqlKeyValueStore:
    """Store backed by the ``kv_entries`` table; every ``set`` commits."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> Optional[Any]:
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc)
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=copy.deepcopy(value), updated_at=now))
        else:
            entry.value = copy.deepcopy(value)
            entry.updated_at = now
            flag_modified(entry, "value")
        self.db.commit()
