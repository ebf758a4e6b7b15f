"""Process-wide in-memory record store.

Each collection maps a generated id to a flat record. Records are handed out
as shallow copies, so a caller holding a record never sees later writes until
it reads again.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from engage.errors import NotFoundError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

COLLECTIONS = (
    "users",
    "prediction_markets",
    "predictions",
    "tasks",
    "user_tasks",
    "achievements",
    "user_achievements",
    "rewards",
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(record: Mapping[str, Any], filter_query: Mapping[str, Any]) -> bool:
    for key, expected in filter_query.items():
        if record.get(key) != expected:
            return False
    return True


class Collection:
    """Insertion-ordered mapping of id -> record."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._records: Dict[str, Record] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return (dict(record) for record in list(self._records.values()))

    def insert(self, document: Mapping[str, Any]) -> Record:
        """Store a new record under a generated id and return a copy of it."""
        record = dict(document)
        record["id"] = str(uuid.uuid4())
        record.setdefault("created_at", utc_now_iso())
        self._records[record["id"]] = record
        return dict(record)

    def get(self, record_id: str) -> Optional[Record]:
        record = self._records.get(record_id)
        return dict(record) if record is not None else None

    def update(self, record_id: str, updates: Mapping[str, Any]) -> Record:
        """Shallow-merge ``updates`` into the record; unknown ids raise."""
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.name} record not found: {record_id}")
        merged = {**record, **updates, "id": record_id}
        self._records[record_id] = merged
        return dict(merged)

    def find(
        self,
        filter_query: Optional[Mapping[str, Any]] = None,
        predicate: Optional[Callable[[Record], bool]] = None,
    ) -> List[Record]:
        results = []
        for record in self._records.values():
            if filter_query and not _matches(record, filter_query):
                continue
            if predicate is not None and not predicate(record):
                continue
            results.append(dict(record))
        return results

    def find_one(self, filter_query: Mapping[str, Any]) -> Optional[Record]:
        for record in self._records.values():
            if _matches(record, filter_query):
                return dict(record)
        return None

    def clear(self) -> None:
        self._records.clear()


class InMemoryStore:
    """Owner of every collection; one instance per process, injected into repositories."""

    def __init__(self, collection_names=COLLECTIONS) -> None:
        self._collections: Dict[str, Collection] = {
            name: Collection(name) for name in collection_names
        }
        logger.info("in_memory_store_initialized collections=%d", len(self._collections))

    def __getitem__(self, name: str) -> Collection:
        try:
            return self._collections[name]
        except KeyError:
            raise KeyError(f"Unknown collection: {name}") from None

    def stats(self) -> Dict[str, int]:
        """Return record counts per collection (used by the health endpoint)."""
        return {name: len(collection) for name, collection in self._collections.items()}

    def reset(self) -> None:
        for collection in self._collections.values():
            collection.clear()
