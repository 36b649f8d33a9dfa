"""
Repairs API — In-Memory Repair Store
=====================================

What:  The exclusive owner of the live repair collection, plus the FastAPI
       dependency that hands the current app's store to route handlers.
How:   A list of Repair records guarded by one lock per store instance; every
       operation is read-modify-write under that lock, so create/update/delete
       are atomic with respect to each other.
Who:   Built once by the app factory (`create_app`) and attached to
       `app.state.store`; route handlers receive it via `Depends(get_store)`.
When:  Lives for the lifetime of the process. Nothing is persisted.

Id allocation:
    Ids come from a running counter that only moves forward. After the highest
    record is deleted, the next create still gets a fresh id, so an id is never
    handed out twice within one store's lifetime.

        seeded with ids 1..6  → next id 7
        delete 6, create      → 7 (not 6)
        empty store, create   → 1
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from fastapi import Request

from repairs_api.exceptions import NotFoundError
from repairs_api.models.repair import MUTABLE_FIELDS, Repair

logger = logging.getLogger(__name__)


class RepairStore:
    """
    Thread-safe in-memory collection of repairs.

    Records are kept in insertion order. `list()` returns a new list, so callers
    can filter or sort it freely; changes to the collection go through
    `create`, `update` and `delete` only.
    """

    def __init__(self, initial: Optional[Iterable[Repair]] = None):
        self._lock = threading.Lock()
        self._repairs: List[Repair] = []
        self._next_id = 1

        for repair in initial or ():
            if any(existing.id == repair.id for existing in self._repairs):
                raise ValueError(f"Duplicate repair id in initial data: {repair.id}")
            self._repairs.append(repair)
            self._next_id = max(self._next_id, repair.id + 1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._repairs)

    @property
    def next_id(self) -> int:
        """The id the next `create` call will assign."""
        with self._lock:
            return self._next_id

    # ── Reads ─────────────────────────────────────────────────────────────

    def list(self) -> List[Repair]:
        with self._lock:
            return list(self._repairs)

    def get(self, repair_id: int) -> Repair:
        with self._lock:
            return self._repairs[self._index_of(repair_id)]

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, fields: Dict[str, Any]) -> Repair:
        """
        Store a new repair and return it.

        Args:
            fields: Mutable fields keyed by Python attribute name
                    (title, description, assigned_to, date, image).
                    Any `id` key is ignored; the store always assigns the id.
        """
        values = {name: fields.get(name) for name in MUTABLE_FIELDS}
        with self._lock:
            repair = Repair(id=self._next_id, **values)
            self._next_id += 1
            self._repairs.append(repair)
        return repair

    def update(self, repair_id: int, changes: Dict[str, Any]) -> Repair:
        """
        Shallow-merge `changes` onto the repair with `repair_id`.

        Only keys present in `changes` are written; a key mapped to None or ""
        clears that field. Unknown keys and `id` are dropped.

        Raises:
            NotFoundError: no live repair has this id (store is unchanged)
        """
        update = {name: value for name, value in changes.items() if name in MUTABLE_FIELDS}
        with self._lock:
            index = self._index_of(repair_id)
            merged = self._repairs[index].model_copy(update=update)
            self._repairs[index] = merged
        return merged

    def delete(self, repair_id: int) -> Repair:
        """
        Remove and return the repair with `repair_id`.

        Raises:
            NotFoundError: no live repair has this id
        """
        with self._lock:
            return self._repairs.pop(self._index_of(repair_id))

    # ── Internals ─────────────────────────────────────────────────────────

    def _index_of(self, repair_id: int) -> int:
        # Caller holds the lock
        for index, repair in enumerate(self._repairs):
            if repair.id == repair_id:
                return index
        raise NotFoundError(repair_id=repair_id)


# ── Seed Loading ──────────────────────────────────────────────────────────

def load_seed_repairs(path: Union[str, Path]) -> List[Repair]:
    """
    Read the initial repair set from a JSON array file.

    Each element uses the wire field names (`assignedTo`). A missing file is
    not an error: the service starts empty and logs a warning.

    Raises:
        ValueError: the file exists but is not a JSON array of repair objects
    """
    seed_path = Path(path)
    if not seed_path.exists():
        logger.warning("Seed file %s not found; starting with an empty store", seed_path)
        return []

    raw = json.loads(seed_path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Seed file {seed_path} must contain a JSON array")

    repairs = [Repair.model_validate(item) for item in raw]
    logger.info("Loaded %d seed repairs from %s", len(repairs), seed_path)
    return repairs


# ── Store Dependency ──────────────────────────────────────────────────────

def get_store(request: Request) -> RepairStore:
    """
    FastAPI dependency returning the store owned by the running app.

    Example usage in a route:
        @router.get("/repairs")
        async def list_repairs(store: RepairStore = Depends(get_store)):
            return store.list()
    """
    return request.app.state.store
