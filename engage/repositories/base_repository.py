"""Shared repository helpers for store-backed collections."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from engage.database import Collection, InMemoryStore


def newest_first(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order records by ``created_at`` descending; ties put later inserts first."""
    return sorted(
        reversed(list(records)), key=lambda record: record.get("created_at") or "", reverse=True
    )


class BaseRepository:
    """Base repository providing lazy collection access."""

    collection_name: str

    def __init__(self, store: InMemoryStore, collection_name: str) -> None:
        if not collection_name:
            raise ValueError("collection_name is required")
        self._store = store
        self.collection_name = collection_name
        self._collection = None

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            if self._store is None:
                raise RuntimeError("Store not configured for repository")
            self._collection = self._store[self.collection_name]
        return self._collection
