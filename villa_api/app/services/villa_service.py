"""
Service layer for villas.

``VillaService`` implements list, get, create, replace, patch and
delete over a :class:`~villa_api.app.core.store.VillaStore`.  Each
operation validates its whole input before touching the store, and
every read‑then‑write sequence runs inside ``store.locked()`` so that
concurrent requests cannot interleave between the check and the
mutation.

Outcomes are reported through the exceptions in
:mod:`villa_api.app.core.errors`:

* get / delete of id ``0`` and null payloads → ``InvalidArgument``
* missing villa → ``NotFound`` (except for patch, which answers
  ``InvalidArgument`` for backward compatibility)
* duplicate name → ``Conflict`` on the ``name`` field
* a client‑supplied id on create → ``InternalError``

Replace and patch never create a villa that does not exist.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence, Union

import jsonpatch
from pydantic import ValidationError

from villa_api.app.core.errors import Conflict, InternalError, InvalidArgument, NotFound, field_errors
from villa_api.app.core.store import MUTABLE_FIELDS, VillaRecord, VillaStore
from villa_api.app.schemas.villa import (
    JsonPatchOperation,
    VillaCreate,
    VillaPatch,
    VillaRead,
    VillaUpdate,
)


logger = logging.getLogger(__name__)

PatchDocument = Union[VillaPatch, Sequence[JsonPatchOperation], Sequence[Dict[str, Any]]]


class VillaService:
    """Validation and mutation rules for the villa collection."""

    def __init__(self, store: VillaStore) -> None:
        self._store = store

    @property
    def store(self) -> VillaStore:
        return self._store

    def list_villas(self) -> List[VillaRead]:
        """Return every villa in insertion order."""
        return [self._to_read(record) for record in self._store.list()]

    def get_villa(self, villa_id: int) -> VillaRead:
        """Return a single villa.

        Raises ``InvalidArgument`` for id ``0`` and ``NotFound`` when no
        villa has the id.
        """
        self._require_id(villa_id)
        return self._to_read(self._store.get(villa_id))

    def create_villa(self, data: Optional[VillaCreate]) -> VillaRead:
        """Create a villa and assign it ``max(id) + 1``.

        The name check, id assignment and insert run under the store
        lock as one step.
        """
        if data is None:
            logger.warning("Rejected villa creation without a payload")
            raise InvalidArgument("Villa payload is required")
        if data.id > 0:
            logger.warning("Rejected villa creation with client-supplied id %s", data.id)
            raise InternalError("Villa id is assigned by the server")
        with self._store.locked() as store:
            if store.exists_by_name(data.name):
                logger.warning("Rejected duplicate villa name '%s'", data.name)
                raise Conflict("name")
            record = VillaRecord(
                id=store.next_id(),
                name=data.name,
                sqft=data.sqft,
                occupancy=data.occupancy,
            )
            created = store.insert(record)
        logger.info("Created villa %s ('%s')", created.id, created.name)
        return self._to_read(created)

    def replace_villa(self, villa_id: int, data: Optional[VillaCreate]) -> None:
        """Overwrite every mutable field of an existing villa.

        The payload ``id`` must match ``villa_id``.  A missing villa
        raises ``NotFound``; nothing is inserted.
        """
        if data is None or data.id != villa_id:
            logger.warning("Rejected replace of villa %s: payload missing or id mismatch", villa_id)
            raise InvalidArgument("Payload id must match the villa id in the URL")
        with self._store.locked() as store:
            store.get(villa_id)
            if store.exists_by_name(data.name, exclude_id=villa_id):
                logger.warning("Rejected rename of villa %s to duplicate '%s'", villa_id, data.name)
                raise Conflict("name")
            store.replace(villa_id, data.model_dump(include=set(MUTABLE_FIELDS)))
        logger.info("Replaced villa %s", villa_id)

    def patch_villa(self, villa_id: int, document: Optional[PatchDocument]) -> None:
        """Apply a partial update to an existing villa.

        ``document`` is either a :class:`VillaPatch` naming the fields to
        change or a list of RFC 6902 JSON Patch operations.  The patched
        villa is validated as a whole before anything is written.
        Unlike get and delete, a missing villa raises ``InvalidArgument``.
        """
        if document is None or villa_id == 0:
            logger.warning("Rejected patch of villa %s: document missing or id is zero", villa_id)
            raise InvalidArgument("A patch document and a non-zero id are required")
        with self._store.locked() as store:
            try:
                current = store.get(villa_id)
            except NotFound:
                logger.warning("Rejected patch of unknown villa %s", villa_id)
                raise InvalidArgument(f"Villa {villa_id} not found") from None
            patched = self._apply_patch(current, document)
            if patched.id != villa_id:
                raise InvalidArgument("Villa id cannot be changed", errors={"id": ["Villa id cannot be changed"]})
            changes = {
                name: value
                for name, value in patched.model_dump(include=set(MUTABLE_FIELDS)).items()
                if getattr(current, name) != value
            }
            if not changes:
                return
            if "name" in changes and store.exists_by_name(changes["name"], exclude_id=villa_id):
                logger.warning("Rejected rename of villa %s to duplicate '%s'", villa_id, changes["name"])
                raise Conflict("name")
            store.patch(villa_id, changes)
        logger.info("Patched villa %s: %s", villa_id, sorted(changes))

    def delete_villa(self, villa_id: int) -> None:
        """Remove a villa.  Raises ``InvalidArgument`` for id ``0``, ``NotFound`` if absent."""
        self._require_id(villa_id)
        self._store.delete(villa_id)
        logger.info("Deleted villa %s", villa_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _require_id(villa_id: int) -> None:
        if villa_id == 0:
            raise InvalidArgument("Villa id must not be 0")

    @staticmethod
    def _apply_patch(current: VillaRecord, document: PatchDocument) -> VillaUpdate:
        """Return the villa that results from applying ``document`` to ``current``."""
        source = asdict(current)
        if isinstance(document, VillaPatch):
            result = {**source, **document.model_dump(exclude_unset=True)}
        else:
            operations = [
                op.model_dump(by_alias=True, exclude_unset=True) if isinstance(op, JsonPatchOperation) else op
                for op in document
            ]
            try:
                result = jsonpatch.JsonPatch(operations).apply(source)
            except (jsonpatch.JsonPatchException, jsonpatch.JsonPointerException) as exc:
                raise InvalidArgument(f"Invalid JSON Patch document: {exc}") from exc
        try:
            return VillaUpdate.model_validate(result)
        except ValidationError as exc:
            raise InvalidArgument("Patched villa is invalid", errors=field_errors(exc.errors())) from exc

    @staticmethod
    def _to_read(record: VillaRecord) -> VillaRead:
        return VillaRead.model_validate(record)
