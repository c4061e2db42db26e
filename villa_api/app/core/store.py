"""
In‑memory villa store.

``VillaStore`` owns the authoritative, insertion‑ordered collection of
villa records together with the invariants over it: ids are distinct
and positive, names are distinct when compared case‑insensitively and
an id never changes once assigned.

All access goes through one reentrant lock.  Single operations take it
themselves; callers that need a read‑then‑write sequence (for example
"assign the next id, check the name, insert") wrap the sequence in
``with store.locked():`` so that it runs as one critical section.  The
lock only ever covers in‑memory work.

Records handed out by the store are copies.  Mutating a returned
record has no effect on the collection.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace as dc_replace
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .errors import Conflict, NotFound


logger = logging.getLogger(__name__)

# Fields a client may change after creation.  ``id`` is deliberately absent.
MUTABLE_FIELDS = ("name", "sqft", "occupancy")


@dataclass
class VillaRecord:
    id: int
    name: str
    sqft: int
    occupancy: int

    def copy(self) -> "VillaRecord":
        return dc_replace(self)


# Demo data loaded when ``SEED_VILLAS`` is enabled.
DEFAULT_VILLAS = (
    VillaRecord(id=1, name="Pool View", sqft=100, occupancy=4),
    VillaRecord(id=2, name="Beach View", sqft=300, occupancy=3),
)


class VillaStore:
    """Thread-safe, in-memory collection of :class:`VillaRecord`."""

    def __init__(self, records: Optional[Iterable[VillaRecord]] = None) -> None:
        self._lock = threading.RLock()
        self._records: List[VillaRecord] = []
        if records:
            self.seed(records)

    @contextmanager
    def locked(self) -> Iterator["VillaStore"]:
        """Hold the store lock for the duration of the ``with`` block."""
        with self._lock:
            yield self

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self) -> List[VillaRecord]:
        with self._lock:
            return [record.copy() for record in self._records]

    def get(self, villa_id: int) -> VillaRecord:
        with self._lock:
            return self._find(villa_id).copy()

    def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Return ``True`` if another villa already uses ``name``.

        The comparison is case-insensitive.  ``exclude_id`` lets a
        record keep its own name during an update.
        """
        wanted = name.casefold()
        with self._lock:
            return any(
                record.name.casefold() == wanted and record.id != exclude_id
                for record in self._records
            )

    def next_id(self) -> int:
        """Return ``max(existing ids) + 1``, or ``1`` for an empty store.

        After the highest id is deleted the next insert reuses it.
        """
        with self._lock:
            if not self._records:
                return 1
            return max(record.id for record in self._records) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def insert(self, record: VillaRecord) -> VillaRecord:
        """Append ``record``; raises :class:`Conflict` on a duplicate id or name."""
        with self._lock:
            if any(existing.id == record.id for existing in self._records):
                raise Conflict("id", f"Villa with id {record.id} already exists!")
            if self.exists_by_name(record.name):
                raise Conflict("name")
            stored = record.copy()
            self._records.append(stored)
            logger.debug("Inserted villa %s", stored.id)
            return stored.copy()

    def replace(self, villa_id: int, fields: Dict[str, Any]) -> VillaRecord:
        """Overwrite every mutable field of villa ``villa_id``."""
        missing = [name for name in MUTABLE_FIELDS if name not in fields]
        if missing:
            raise ValueError(f"replace() requires all mutable fields, missing: {missing}")
        return self.patch(villa_id, fields)

    def patch(self, villa_id: int, fields: Dict[str, Any]) -> VillaRecord:
        """Overwrite only the mutable fields present in ``fields``."""
        unknown = set(fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")
        with self._lock:
            record = self._find(villa_id)
            new_name = fields.get("name")
            if new_name is not None and self.exists_by_name(new_name, exclude_id=villa_id):
                raise Conflict("name")
            for name, value in fields.items():
                setattr(record, name, value)
            return record.copy()

    def delete(self, villa_id: int) -> None:
        with self._lock:
            record = self._find(villa_id)
            self._records.remove(record)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def seed(self, records: Iterable[VillaRecord]) -> None:
        """Insert ``records`` keeping their ids; used at startup and in tests."""
        with self._lock:
            for record in records:
                self.insert(record)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _find(self, villa_id: int) -> VillaRecord:
        for record in self._records:
            if record.id == villa_id:
                return record
        raise NotFound(f"Villa {villa_id} not found")
