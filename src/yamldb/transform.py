"""Mapping between logical keys and on-disk locations.

A key such as ``users/42`` is split on ``/``: every segment but the last
becomes a directory below the base path and the last one is the file name.
With ``append_extension`` enabled the ``.yaml`` extension is added to the file
name unless the key already ends with it, so ``users/42`` and
``users/42.yaml`` resolve to the same file. The inverse keeps the file name
as found on disk, which means keys enumerated in that mode carry the
extension even if they were written without it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

EXTENSION = ".yaml"
SEPARATOR = "/"

_RESERVED_SEGMENTS = frozenset({".", ".."})


@dataclass(frozen=True)
class PathKey:
    """Directory segments plus file name for one stored key."""

    path: tuple[str, ...]
    file_name: str

    def relative_path(self) -> str:
        return os.path.join(*self.path, self.file_name)


class KeyTransform:
    """Derives ``PathKey`` values from keys and back."""

    def __init__(self, append_extension: bool = False) -> None:
        self.append_extension = append_extension

    def normalize(self, key: str) -> str:
        """Return the canonical form of a key (extension applied once)."""
        if self.append_extension and not key.endswith(EXTENSION):
            return key + EXTENSION
        return key

    def to_path(self, key: str) -> PathKey:
        if not key:
            raise ValueError("key must not be empty")
        segments = self.normalize(key).split(SEPARATOR)
        if any(not s or s in _RESERVED_SEGMENTS for s in segments):
            raise ValueError(f"key '{key}' must not contain empty, '.' or '..' segments")
        return PathKey(path=tuple(segments[:-1]), file_name=segments[-1])

    def from_path(self, path_key: PathKey) -> str:
        return SEPARATOR.join((*path_key.path, path_key.file_name))
