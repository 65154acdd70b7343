# SPDX-License-Identifier: MIT

"""
Concurrent key -> Field store.

The registry is partitioned into independently locked shards. A key always
maps to the same shard, so registration and mutation of one key are mutually
exclusive while unrelated keys rarely share a lock. Locks are only held for a
single dict operation; nothing is called back while one is held.
"""

from __future__ import annotations

import logging
import threading
import zlib
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config.defaults import DEFAULT_LOCK_SHARDS
from .errors import TunableNotFoundError, TypeMismatchError, UnknownKindError
from .fields import Field, Kind

lib_logger = logging.getLogger("tweaker_library")


class SetResult(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"

    def __bool__(self) -> bool:
        return self is SetResult.OK


class _Shard:
    __slots__ = ("lock", "entries")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.entries: Dict[str, Field] = {}


class Registry:
    """Process-lifetime store of tunables, shared by host code and the server."""

    def __init__(self, shards: int = DEFAULT_LOCK_SHARDS):
        shard_count = int(shards)
        if shard_count < 1:
            raise ValueError(f"shards must be >= 1, got {shards!r}")
        self._shards: List[_Shard] = [_Shard() for _ in range(shard_count)]
        self._size = 0
        self._size_lock = threading.Lock()

    def _shard(self, key: str) -> _Shard:
        return self._shards[zlib.crc32(key.encode("utf-8")) % len(self._shards)]

    # --- Registration ---
    def register(self, key: str, field: Field) -> bool:
        """Insert ``field`` under ``key`` unless the key already exists.

        Returns True only for the call that actually inserted. Later calls
        with the same key leave the first Field in place.
        """
        if not isinstance(key, str) or not key:
            raise ValueError("Tunable key must be a non-empty string")
        if not isinstance(field, Field):
            raise TypeError(f"Expected Field, got {type(field).__name__}")

        shard = self._shard(key)
        with shard.lock:
            if key in shard.entries:
                inserted = False
            else:
                shard.entries[key] = field
                inserted = True
        if inserted:
            with self._size_lock:
                self._size += 1
            lib_logger.debug(
                f"Registered tunable '{key}' ({field.kind.value}) from {field.file}:{field.line}"
            )
        else:
            lib_logger.debug(f"Ignoring duplicate registration of '{key}'")
        return inserted

    # --- Lookup ---
    def get(self, key: str) -> Optional[Field]:
        shard = self._shard(key)
        with shard.lock:
            return shard.entries.get(key)

    def value(self, key: str) -> Any:
        """Current value of ``key``; raises TunableNotFoundError if unknown."""
        field = self.get(key)
        if field is None:
            raise TunableNotFoundError(key)
        return field.value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    # --- Mutation ---
    def set_value(self, key: str, value: Any, kind: Any = None) -> SetResult:
        """Replace the value of ``key``, keeping its metadata.

        ``kind``, when given, must name the stored kind. The stored Field is
        left untouched on any failure.
        """
        expected: Optional[Kind] = None
        if kind is not None:
            try:
                expected = Kind.parse(kind)
            except UnknownKindError:
                return SetResult.TYPE_MISMATCH

        shard = self._shard(key)
        with shard.lock:
            current = shard.entries.get(key)
            if current is None:
                return SetResult.NOT_FOUND
            if expected is not None and expected is not current.kind:
                return SetResult.TYPE_MISMATCH
            try:
                shard.entries[key] = current.with_value(value)
            except TypeMismatchError:
                return SetResult.TYPE_MISMATCH
        lib_logger.debug(f"Updated tunable '{key}' to {value!r}")
        return SetResult.OK

    # --- Enumeration ---
    def enumerate(self) -> Iterator[Tuple[str, Field]]:
        """Yield (key, Field) pairs shard by shard.

        Each shard is copied under its lock, so writers are held off for one
        dict copy at most. Values observed are whole snapshots, either the
        value before or after a concurrent write.
        """
        for shard in self._shards:
            with shard.lock:
                items = list(shard.entries.items())
            yield from items

    def snapshot(self) -> List[Tuple[str, Field]]:
        return list(self.enumerate())

    def keys(self) -> List[str]:
        return [key for key, _ in self.enumerate()]

    def size(self) -> int:
        with self._size_lock:
            return self._size

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"Registry(size={self.size()}, shards={len(self._shards)})"
