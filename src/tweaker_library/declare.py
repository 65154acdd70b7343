# SPDX-License-Identifier: MIT

"""
Registration entry point for host programs.

``tweak`` declares a tunable once at startup and hands back a ``Tunable``
that reads the current value on every access::

    registry = Registry()
    GAIN = tweak_f64(registry, "GAIN", 0.5, min=0.0, max=1.0, step=0.1)

    def process(sample):
        return sample * GAIN.get()

The namespace, file and line default to the caller's module and source
position. Declaring the same key twice returns a handle to the first
registration; the second default is ignored.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Optional, Tuple

from .errors import TunableNotFoundError
from .fields import Field, Kind, infer_kind
from .registry import Registry


def make_key(namespace: str, name: str) -> str:
    return f"{namespace}::{name}" if namespace else name


def location_key(namespace: str, file: str, line: int) -> str:
    """Key for declarations without a usable symbolic name."""
    return make_key(namespace, f"{file}:{line}")


def _caller_location(depth: int) -> Tuple[str, str, int]:
    frame = sys._getframe(depth + 1)
    module = frame.f_globals.get("__name__", "") or ""
    filename = frame.f_code.co_filename
    try:
        relative = os.path.relpath(filename)
    except ValueError:
        # Different drive on Windows
        relative = filename
    if not relative.startswith(".."):
        filename = relative
    return module, filename.replace(os.sep, "/"), frame.f_lineno


class Tunable:
    """Handle to one registered tunable.

    Every ``get()`` looks the key up again, so edits made through the page are
    visible immediately. The handle never holds a reference into the registry.
    """

    __slots__ = ("registry", "key", "kind")

    def __init__(self, registry: Registry, key: str, kind: Kind):
        self.registry = registry
        self.key = key
        self.kind = kind

    def field(self) -> Field:
        current = self.registry.get(self.key)
        if current is None:
            raise TunableNotFoundError(self.key)
        return current

    def get(self) -> Any:
        return self.field().value

    def set(self, value: Any) -> bool:
        """Write a new value from host code; False if it does not fit the kind."""
        return bool(self.registry.set_value(self.key, value, self.kind))

    def __repr__(self) -> str:
        return repr(self.get())

    def __str__(self) -> str:
        return str(self.get())


def _declare(
    registry: Registry,
    name: Optional[str],
    default: Any,
    kind: Any,
    min: Any,
    max: Any,
    step: Any,
    namespace: Optional[str],
    file: Optional[str],
    line: Optional[int],
    depth: int,
) -> Tunable:
    caller_module, caller_file, caller_line = _caller_location(depth + 1)
    module = caller_module if namespace is None else namespace
    source_file = caller_file if file is None else file
    source_line = caller_line if line is None else int(line)

    resolved_kind = infer_kind(default) if kind is None else Kind.parse(kind)
    field = Field.of(
        resolved_kind,
        default,
        min,
        max,
        step,
        module=module,
        file=source_file,
        line=source_line,
    )

    if name:
        key = make_key(module, name)
    else:
        key = location_key(module, source_file, source_line)

    registry.register(key, field)
    stored = registry.get(key)
    # The key may already belong to an earlier declaration of another kind
    stored_kind = stored.kind if stored is not None else resolved_kind
    return Tunable(registry, key, stored_kind)


def tweak(
    registry: Registry,
    name: Optional[str],
    default: Any,
    kind: Any = None,
    *,
    min: Any = None,
    max: Any = None,
    step: Any = None,
    namespace: Optional[str] = None,
    file: Optional[str] = None,
    line: Optional[int] = None,
) -> Tunable:
    """Register a tunable (first registration of a key wins) and return its handle.

    Args:
        registry: Registry to declare into.
        name: Symbolic name; the key becomes ``namespace::name``. When empty the
            key is derived from the source location instead.
        default: Initial value.
        kind: Kind or kind name; inferred from ``default`` when omitted.
        min, max, step: Slider metadata for numeric kinds.
        namespace, file, line: Provenance; taken from the caller when omitted.
    """
    return _declare(
        registry, name, default, kind, min, max, step, namespace, file, line, 1
    )


def _typed(kind: Kind):
    def declare(
        registry: Registry,
        name: Optional[str],
        default: Any,
        *,
        min: Any = None,
        max: Any = None,
        step: Any = None,
        namespace: Optional[str] = None,
        file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Tunable:
        return _declare(
            registry, name, default, kind, min, max, step, namespace, file, line, 1
        )

    declare.__name__ = f"tweak_{kind.value}"
    declare.__qualname__ = declare.__name__
    declare.__doc__ = f"Declare a {kind.value} tunable. See ``tweak``."
    return declare


tweak_f32 = _typed(Kind.F32)
tweak_f64 = _typed(Kind.F64)
tweak_i8 = _typed(Kind.I8)
tweak_u8 = _typed(Kind.U8)
tweak_i16 = _typed(Kind.I16)
tweak_u16 = _typed(Kind.U16)
tweak_i32 = _typed(Kind.I32)
tweak_u32 = _typed(Kind.U32)
tweak_i64 = _typed(Kind.I64)
tweak_u64 = _typed(Kind.U64)
tweak_usize = _typed(Kind.USIZE)
tweak_bool = _typed(Kind.BOOL)
tweak_str = _typed(Kind.STRING)
