"""Configuration for a yamldb store."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from yamldb.sorting import OrderFunc


class Compression(enum.IntEnum):
    """Compression applied to files before they are stored on disk."""

    NONE = 0
    ZLIB = 1
    GZIP = 2


@dataclass(frozen=True)
class Permissions:
    """Mode bits for created directories and files."""

    path: int = 0o777
    file: int = 0o666


@dataclass
class DiskOptions:
    """Options for a disk-backed store rooted at ``base_path``."""

    # Directory where files should be stored.
    base_path: str = "yamldb-data"
    # Max in-memory cache size in bytes. 0 disables caching.
    cache_size_max: int = 0
    # Append the .yaml extension to keys (if not added yet).
    append_extension: bool = False
    compression: Compression = Compression.NONE
    permissions: Permissions = field(default_factory=Permissions)
    # When set, files are written here first and then moved into base_path.
    # Must be on the same device/partition as base_path.
    temp_dir: str | None = None
    # Keep an in-memory ordered index of keys.
    sort_keys: bool = False
    # Less-than function used by the index. Defaults to alphabetic order.
    sort_order_func: OrderFunc | None = None
