"""Structured error types for yamldb."""

from __future__ import annotations


class YamlDbError(Exception):
    """Base error for all yamldb errors."""


class NotFoundError(YamlDbError):
    """Raised when no file is stored for a key."""

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Key not found: '{key}'")


class ReferenceNotFoundError(NotFoundError):
    """Raised when a schema references a key that no longer exists."""

    def __init__(self, key: str, reference: str) -> None:
        self.reference = reference
        super().__init__(key, f"Old reference to '{reference}' not found (from '{key}')")


class StorageIOError(YamlDbError):
    """Raised when the filesystem fails underneath a storage operation."""

    def __init__(self, operation: str, path: str, detail: str) -> None:
        self.operation = operation
        self.path = path
        self.detail = detail
        super().__init__(f"Storage error during {operation} on '{path}': {detail}")


class DecodeError(YamlDbError):
    """Raised when a stored payload can't be decoded into the requested shape."""

    def __init__(self, key: str, detail: str, *, strict: bool = False) -> None:
        self.key = key
        self.detail = detail
        self.strict = strict
        mode = "strict " if strict else ""
        super().__init__(f"Failed to {mode}decode '{key}': {detail}")


class DeleteRestrictedError(YamlDbError):
    """Raised when a Restrict constraint blocks a delete."""

    def __init__(self, key: str, reference: str) -> None:
        self.key = key
        self.reference = reference
        super().__init__(
            f"Can't delete '{key}' because there's still a reference to '{reference}' "
            "(blocked by constraint)"
        )


class UpdateRestrictedError(YamlDbError):
    """Raised when a Restrict (or Cascade) constraint blocks an update."""

    def __init__(self, key: str, reference: str) -> None:
        self.key = key
        self.reference = reference
        super().__init__(
            f"Can't update '{key}' because there's still a reference to '{reference}' "
            "(blocked by constraint)"
        )
