"""Disk storage engine: files under a base directory, addressed by key."""

from __future__ import annotations

import os
import shutil
import threading
import zlib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterator

from yamldb.cache import BoundedCache
from yamldb.compression import get_codec
from yamldb.config import DiskOptions
from yamldb.errors import NotFoundError, StorageIOError, YamlDbError
from yamldb.index import OrderedIndex
from yamldb.transform import KeyTransform, PathKey


_TEMP_PREFIX = ".yamldb-"
_TEMP_SUFFIX = ".tmp"

# Errors meaning "there is no file at this location".
_MISSING = (FileNotFoundError, IsADirectoryError, NotADirectoryError)


class Disk:
    """Stores raw payloads as files below ``options.base_path``.

    Owns the payload cache and, when ``sort_keys`` is enabled, the ordered
    index. A single instance must own a base path; two instances pointed at
    the same directory don't see each other's cache or index updates.
    """

    def __init__(self, options: DiskOptions) -> None:
        self.options = options
        self.base_path = Path(options.base_path)
        self.temp_dir = Path(options.temp_dir) if options.temp_dir else None
        self.transform = KeyTransform(options.append_extension)
        self._codec = get_codec(options.compression)
        self._cache = BoundedCache(options.cache_size_max)
        self._lock = threading.RLock()
        self.index: OrderedIndex | None = None
        if options.sort_keys:
            self.index = OrderedIndex(options.sort_order_func)
            self.index.initialize(self.keys_prefix(""))

    # --- Paths ---

    def _resolve(self, key: str) -> tuple[str, Path]:
        path_key = self.transform.to_path(key)
        return self.transform.from_path(path_key), self.base_path / path_key.relative_path()

    def path_for(self, key: str) -> Path:
        """Return the file location for ``key``."""
        return self._resolve(key)[1]

    # --- Core operations ---

    def write(self, key: str, data: bytes) -> None:
        """Store ``data`` for ``key``, creating parent directories as needed."""
        canonical, path = self._resolve(key)
        payload = self._codec.compress(data) if self._codec else data
        with self._lock:
            try:
                self._write_file(path, payload)
            except OSError as e:
                raise StorageIOError("write", str(path), str(e)) from e
            self._cache.pop(canonical)
            if self.index is not None:
                self.index.insert(canonical)

    def _write_file(self, path: Path, payload: bytes) -> None:
        perms = self.options.permissions
        os.makedirs(path.parent, mode=perms.path, exist_ok=True)
        if self.temp_dir is not None:
            os.makedirs(self.temp_dir, mode=perms.path, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                prefix=_TEMP_PREFIX,
                suffix=_TEMP_SUFFIX,
                dir=self.temp_dir or path.parent,
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_path, perms.file)
            os.replace(tmp_path, path)
            tmp_path = None
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

    def read(self, key: str) -> bytes:
        """Return the payload for ``key``, from cache when possible."""
        canonical, path = self._resolve(key)
        cached = self._cache.get(canonical)
        if cached is not None:
            return cached
        with self._lock:
            try:
                payload = path.read_bytes()
            except _MISSING as e:
                raise NotFoundError(key) from e
            except OSError as e:
                raise StorageIOError("read", str(path), str(e)) from e
            data = self._decompress(path, payload)
            self._cache.put(canonical, data)
        return data

    def _decompress(self, path: Path, payload: bytes) -> bytes:
        if self._codec is None:
            return payload
        try:
            return self._codec.decompress(payload)
        except (zlib.error, EOFError, OSError) as e:
            raise StorageIOError("decompress", str(path), str(e)) from e

    def erase(self, key: str) -> None:
        """Remove the file for ``key``; raises NotFoundError if there is none."""
        canonical, path = self._resolve(key)
        with self._lock:
            try:
                os.remove(path)
            except _MISSING as e:
                raise NotFoundError(key) from e
            except OSError as e:
                raise StorageIOError("erase", str(path), str(e)) from e
            self._cache.pop(canonical)
            if self.index is not None:
                self.index.delete(canonical)
            self._prune_dirs(path.parent)

    def _prune_dirs(self, directory: Path) -> None:
        base = self.base_path.resolve()
        current = directory.resolve()
        while current != base and base in current.parents:
            try:
                current.rmdir()
            except OSError:
                # not empty, or already gone
                break
            current = current.parent

    def erase_all(self) -> None:
        """Remove the base directory and everything in it.

        Any file below the base path goes, including files that were never
        written through this store. The temp directory is removed as well.
        """
        with self._lock:
            self._cache.clear()
            if self.index is not None:
                self.index.clear()
            for directory in (self.base_path, self.temp_dir):
                if directory is None:
                    continue
                try:
                    shutil.rmtree(directory)
                except FileNotFoundError:
                    continue
                except OSError as e:
                    raise StorageIOError("erase_all", str(directory), str(e)) from e

    def has(self, key: str) -> bool:
        canonical, path = self._resolve(key)
        if canonical in self._cache:
            return True
        return path.is_file()

    # --- Enumeration ---

    def keys_prefix(self, prefix: str = "", cancel: threading.Event | None = None) -> Iterator[str]:
        """Lazily yield stored keys starting with ``prefix``, in unspecified order.

        The walk stops as soon as ``cancel`` is set or the generator is closed.
        Only the directory that can hold matching keys is walked.
        """
        head, _, _ = prefix.rpartition("/")
        segments = head.split("/") if head else []
        if all(s and s not in (".", "..") for s in segments):
            root = self.base_path.joinpath(*segments)
        else:
            root = self.base_path
        temp_dir = self.temp_dir.resolve() if self.temp_dir is not None else None

        def on_error(e: OSError) -> None:
            if isinstance(e, _MISSING):
                return
            raise StorageIOError("walk", str(e.filename), str(e)) from e

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            if cancel is not None and cancel.is_set():
                return
            current = Path(dirpath)
            if temp_dir is not None and current.resolve() == temp_dir:
                dirnames[:] = []
                continue
            dirnames.sort()
            relative = current.relative_to(self.base_path).parts
            for name in sorted(filenames):
                if name.startswith(_TEMP_PREFIX) and name.endswith(_TEMP_SUFFIX):
                    continue
                key = self.transform.from_path(PathKey(path=relative, file_name=name))
                if not key.startswith(prefix):
                    continue
                if cancel is not None and cancel.is_set():
                    return
                yield key

    def ordered_keys(
        self, prefix: str = "", start_after: str = "", chunk_size: int = 100
    ) -> list[str]:
        """Return keys with ``prefix`` in index order, strictly after ``start_after``.

        The index is read ``chunk_size`` keys at a time until it is exhausted.
        """
        if self.index is None:
            raise YamlDbError("Ordered keys are only available when sort_keys is enabled")
        ordered: list[str] = []
        chunk = self.index.keys(start_after, chunk_size)
        while chunk:
            ordered.extend(k for k in chunk if k.startswith(prefix))
            chunk = self.index.keys(chunk[-1], chunk_size)
        return ordered
