"""Record-level API: YAML documents stored on disk by key."""

from __future__ import annotations

import typing
from collections.abc import Hashable
from contextlib import closing
from typing import Any, Callable, Iterator, TypeVar, overload

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from yaml.constructor import ConstructorError

from yamldb.config import DiskOptions
from yamldb.disk import Disk
from yamldb.errors import DecodeError

M = TypeVar("M", bound=BaseModel)

DEFAULT_CHUNK_SIZE = 100


class _StrictLoader(yaml.SafeLoader):
    """Safe loader that rejects mappings with duplicate keys."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def marshal(value: Any) -> bytes:
    """Encode a model or plain Python value as a YAML document."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)
    try:
        text = yaml.safe_dump(value, sort_keys=False, allow_unicode=True, default_flow_style=False)
    except yaml.YAMLError as e:
        raise ValueError(
            f"Value of type {type(value).__name__} is not YAML-serializable: {e}"
        ) from e
    return text.encode("utf-8")


def unmarshal(key: str, data: bytes, model: type[M] | None = None, *, strict: bool = False) -> Any:
    """Decode a YAML document, optionally validating it into ``model``.

    In strict mode duplicate mapping keys and fields unknown to ``model``
    (including nested models) raise DecodeError.
    """
    loader = _StrictLoader if strict else yaml.SafeLoader
    try:
        obj = yaml.load(data, Loader=loader)
    except yaml.YAMLError as e:
        raise DecodeError(key, str(e), strict=strict) from e
    if model is None:
        return obj
    if strict:
        unknown = unknown_fields(model, obj)
        if unknown:
            raise DecodeError(key, f"unknown fields: {', '.join(unknown)}", strict=True)
    try:
        return model.model_validate(obj)
    except PydanticValidationError as e:
        raise DecodeError(key, str(e), strict=strict) from e


def _field_names(model: type[BaseModel]) -> set[str]:
    names: set[str] = set()
    for name, info in model.model_fields.items():
        names.add(name)
        if info.alias:
            names.add(info.alias)
        if isinstance(info.validation_alias, str):
            names.add(info.validation_alias)
    return names


def _nested_models(annotation: Any) -> list[tuple[type[BaseModel], bool]]:
    """Return (model, is_collection) pairs reachable from a field annotation."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return [(annotation, False)]
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is dict:
        return []
    if origin in (list, tuple, set, frozenset):
        return [(m, True) for arg in args for m, _ in _nested_models(arg)]
    return [pair for arg in args for pair in _nested_models(arg)]


def unknown_fields(model: type[BaseModel], obj: Any, path: str = "") -> list[str]:
    """List dotted paths of mapping keys that ``model`` doesn't declare."""
    if not isinstance(obj, dict) or model.model_config.get("extra") == "allow":
        return []
    known = _field_names(model)
    unknown = [f"{path}{k}" for k in obj if k not in known]
    for name, info in model.model_fields.items():
        value = obj.get(info.alias or name, obj.get(name))
        if value is None:
            continue
        for nested, is_collection in _nested_models(info.annotation):
            items = value if is_collection and isinstance(value, list) else [value]
            for item in items:
                unknown.extend(unknown_fields(nested, item, f"{path}{name}."))
    return unknown


class YamlDb:
    """A simple disk-backed key-value store for YAML files."""

    def __init__(self, options: DiskOptions | None = None) -> None:
        self.options = options or DiskOptions()
        # Exposed for advanced usage.
        self.disk = Disk(self.options)

    # --- Writing ---

    def write(self, key: str, value: Any) -> None:
        """Write a YAML-serializable value (pydantic model or plain data)."""
        self.disk.write(key, marshal(value))

    def write_raw(self, key: str, data: bytes) -> None:
        """Write a raw YAML resource."""
        self.disk.write(key, data)

    # --- Reading ---

    @overload
    def read(self, key: str) -> Any: ...

    @overload
    def read(self, key: str, model: type[M]) -> M: ...

    def read(self, key: str, model: type[M] | None = None) -> Any:
        """Read a resource; unknown fields are ignored."""
        return unmarshal(key, self.disk.read(key), model)

    @overload
    def read_strict(self, key: str) -> Any: ...

    @overload
    def read_strict(self, key: str, model: type[M]) -> M: ...

    def read_strict(self, key: str, model: type[M] | None = None) -> Any:
        """Read a resource, failing on unknown fields and duplicate keys."""
        return unmarshal(key, self.disk.read(key), model, strict=True)

    def read_raw(self, key: str) -> bytes:
        return self.disk.read(key)

    def has(self, key: str) -> bool:
        """Return whether a resource is stored for ``key``."""
        return self.disk.has(key)

    # --- Modifying ---

    def delete(self, key: str) -> None:
        """Remove a resource; raises NotFoundError when there is none."""
        self.disk.erase(key)

    def update(self, key: str, model: type[M] | None, mutator: Callable[[Any], None]) -> Any:
        """Read ``key``, let ``mutator`` change the value in place, write it back.

        Not atomic: a concurrent write between the read and the write is
        silently overwritten.
        """
        value = self.read(key, model)
        mutator(value)
        self.write(key, value)
        return value

    def purge(self, prefix: str) -> None:
        """Remove all resources whose key starts with ``prefix``. Cannot be undone!"""
        with closing(self.disk.keys_prefix(prefix)) as keys:
            for key in keys:
                self.delete(key)

    def purge_all(self) -> None:
        """Remove all data from the database.

        Note that *any* file found below the base path is deleted, not just
        those written through this store. Cannot be undone!
        """
        self.disk.erase_all()

    # --- Enumeration ---

    def keys(self, prefix: str = "") -> Iterator[str]:
        """Lazily yield keys starting with ``prefix`` in no particular order."""
        return self.disk.keys_prefix(prefix)

    def iterate(self, prefix: str, callback: Callable[[str, bytes], None]) -> bool:
        """Call ``callback(key, data)`` for each resource under ``prefix``.

        Returns whether any resource was found. The first error raised while
        reading or by the callback stops the walk and propagates.
        """
        found = False
        with closing(self.disk.keys_prefix(prefix)) as keys:
            for key in keys:
                found = True
                callback(key, self.read_raw(key))
        return found

    def iterate_serialized(
        self,
        prefix: str,
        callback: Callable[[Any], None],
        model: type[BaseModel] | None = None,
    ) -> bool:
        """Like ``iterate`` but passes each decoded resource to ``callback``."""

        def decode(key: str, data: bytes) -> None:
            callback(unmarshal(key, data, model))

        return self.iterate(prefix, decode)

    def get_ordered_keys(
        self, prefix: str = "", start_after: str = "", chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> list[str]:
        """Return keys with ``prefix`` in sort order; requires ``sort_keys``.

        ``chunk_size`` is how many keys are fetched from the index at a time.
        """
        return self.disk.ordered_keys(prefix, start_after, chunk_size)
