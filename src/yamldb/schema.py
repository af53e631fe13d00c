"""Versioned record envelopes with foreign-key-like references.

A ``Schema`` wraps a record's data together with the key it is stored under
and a list of references to other records. Each reference carries update and
delete constraints that behave like SQL foreign-key actions:

- ``cascade``: deleting this record deletes the referenced one too.
- ``restrict``: the operation is refused while the referenced record exists.
- ``no action``: the referenced record is left alone.

Constraints are checked eagerly, one reference at a time, in list order.
Nothing is rolled back: references cascaded before a later ``restrict`` stay
deleted. Inspect the store to see how far a cascade got.

Cascading updates would require rewriting the key held by the referencing
side, which isn't tracked, so ``cascade`` on update refuses the update just
like ``restrict``.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from pydantic import BaseModel, Field

from yamldb.errors import (
    DecodeError,
    DeleteRestrictedError,
    ReferenceNotFoundError,
    UpdateRestrictedError,
)

if TYPE_CHECKING:
    from yamldb.database import YamlDb

DataT = TypeVar("DataT")


class Action(str, enum.Enum):
    """What happens to a referenced record when the referencing one changes."""

    CASCADE = "cascade"
    RESTRICT = "restrict"
    NO_ACTION = "no action"


class Constraints(BaseModel):
    # Triggered when the referencing record is updated.
    update: Action = Action.NO_ACTION
    # Triggered when the referencing record is deleted.
    delete: Action = Action.NO_ACTION


class SchemaReference(BaseModel):
    """A link to another record in the database."""

    key: str
    constraints: Constraints = Field(default_factory=Constraints)


class Schema(BaseModel, Generic[DataT]):
    """A versioned YAML record that can reference other records.

    Think of it like a row in an SQL table. ``key`` MUST equal the key the
    record is stored under, since other records use it to reference this
    one. That is a contract with the caller and isn't verified.
    """

    # Bump whenever the data type changes so readers can migrate old records.
    version: int = 0
    key: str
    references: list[SchemaReference] = Field(default_factory=list)
    data: DataT | None = None

    def delete(self, db: YamlDb) -> None:
        """Delete this record, applying each reference's delete constraint.

        Raises DeleteRestrictedError on the first ``restrict`` reference that
        still exists. This record itself is deleted last, and only if it is
        still present.
        """
        self._delete(db, set())

    def _delete(self, db: YamlDb, visited: set[str]) -> None:
        normalize = db.disk.transform.normalize
        visited.add(normalize(self.key))
        for ref in self.references:
            if not db.has(ref.key):
                continue
            action = ref.constraints.delete
            if action == Action.RESTRICT:
                raise DeleteRestrictedError(self.key, ref.key)
            if action == Action.CASCADE and normalize(ref.key) not in visited:
                _cascade_delete(db, ref.key, visited)
        if db.has(self.key):
            db.delete(self.key)

    def update(
        self,
        db: YamlDb,
        new_key: str,
        on_update: Callable[[Schema[Any]], None] | None = None,
    ) -> Schema[Any]:
        """Re-store this record under ``new_key``, applying update constraints.

        Every reference must still exist (ReferenceNotFoundError otherwise)
        and have a ``no action`` update constraint (UpdateRestrictedError
        otherwise). The stored record is read back, its key set to
        ``new_key``, ``on_update`` applied, and the result written under
        ``new_key``. When the key changes the old file is removed. Returns
        the written record.
        """
        for ref in self.references:
            if not db.has(ref.key):
                raise ReferenceNotFoundError(self.key, ref.key)
            if ref.constraints.update in (Action.CASCADE, Action.RESTRICT):
                raise UpdateRestrictedError(self.key, ref.key)

        def mutate(schema: Schema[Any]) -> None:
            schema.key = new_key
            if on_update is not None:
                on_update(schema)

        normalize = db.disk.transform.normalize
        if normalize(new_key) == normalize(self.key):
            return db.update(self.key, type(self), mutate)

        updated = db.read(self.key, type(self))
        mutate(updated)
        db.write(new_key, updated)
        db.delete(self.key)
        return updated


def _cascade_delete(db: YamlDb, key: str, visited: set[str]) -> None:
    """Delete a referenced record, following its own references if it has any.

    The record is treated as an envelope only when it decodes as one and its
    ``key`` names the record itself. Anything else is erased as is.
    """
    normalize = db.disk.transform.normalize
    try:
        referenced: Schema[Any] | None = db.read(key, Schema[Any])
    except DecodeError:
        referenced = None
    if referenced is not None and normalize(referenced.key) == normalize(key):
        referenced._delete(db, visited)
        return
    visited.add(normalize(key))
    if db.has(key):
        db.delete(key)
