# SPDX-License-Identifier: MIT

"""
Typed field model for tunable values.

A Field is an immutable snapshot of one tunable: its kind, current value,
slider metadata for numeric kinds and the place it was declared. Updating a
tunable swaps in a new snapshot produced by ``Field.with_value``, so readers
always see a whole Field, never a half-written one.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config.defaults import (
    DEFAULT_FLOAT_MAX,
    DEFAULT_FLOAT_MIN,
    DEFAULT_FLOAT_STEP,
    DEFAULT_INT_SLIDER_LIMIT,
    DEFAULT_INT_STEP,
)
from .errors import TypeMismatchError, UnknownKindError


class Kind(str, Enum):
    """Supported value kinds. The value doubles as the wire name in /set/<kind>."""

    F32 = "f32"
    F64 = "f64"
    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"
    I64 = "i64"
    U64 = "u64"
    USIZE = "usize"
    BOOL = "bool"
    STRING = "string"

    @classmethod
    def parse(cls, name: Any) -> "Kind":
        if isinstance(name, Kind):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnknownKindError(str(name)) from None

    @property
    def is_float(self) -> bool:
        return self in (Kind.F32, Kind.F64)

    @property
    def is_integer(self) -> bool:
        return self in _INT_BOUNDS

    @property
    def is_numeric(self) -> bool:
        return self.is_float or self.is_integer

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        """Representable range of an integer kind, None for other kinds."""
        return _INT_BOUNDS.get(self)


def _signed(bits: int) -> Tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _unsigned(bits: int) -> Tuple[int, int]:
    return 0, (1 << bits) - 1


_INT_BOUNDS: Dict[Kind, Tuple[int, int]] = {
    Kind.I8: _signed(8),
    Kind.U8: _unsigned(8),
    Kind.I16: _signed(16),
    Kind.U16: _unsigned(16),
    Kind.I32: _signed(32),
    Kind.U32: _unsigned(32),
    Kind.I64: _signed(64),
    Kind.U64: _unsigned(64),
    Kind.USIZE: _unsigned(64),
}


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def coerce_value(kind: Kind, value: Any, key: Optional[str] = None) -> Any:
    """Return ``value`` normalized for ``kind`` or raise TypeMismatchError.

    Only lossless normalization happens here: ints become floats for float
    kinds and f32 values are rounded to single precision. NaN and
    infinities are rejected, as JSON cannot carry them back. bool is never
    accepted as a number, and numbers are never accepted as bool or string.
    """
    if kind is Kind.BOOL:
        if isinstance(value, bool):
            return value
        raise TypeMismatchError(kind.value, value, key)

    if kind is Kind.STRING:
        if isinstance(value, str):
            return value
        raise TypeMismatchError(kind.value, value, key)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(kind.value, value, key)

    if kind.is_float:
        try:
            as_float = float(value)
            if not math.isfinite(as_float):
                raise TypeMismatchError(kind.value, value, key)
            return _to_f32(as_float) if kind is Kind.F32 else as_float
        except OverflowError:
            raise TypeMismatchError(kind.value, value, key) from None

    # Integer kinds: the value must be an int inside the width of the kind
    if not isinstance(value, int):
        raise TypeMismatchError(kind.value, value, key)
    low, high = _INT_BOUNDS[kind]
    if not low <= value <= high:
        raise TypeMismatchError(kind.value, value, key)
    return value


def infer_kind(value: Any) -> Kind:
    """Kind used when a declaration does not name one."""
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.I64
    if isinstance(value, float):
        return Kind.F64
    if isinstance(value, str):
        return Kind.STRING
    raise TypeMismatchError("tunable", value)


def default_range(kind: Kind) -> Tuple[Any, Any, Any]:
    """Slider (min, max, step) for a numeric kind when none are declared."""
    if kind.is_float:
        return DEFAULT_FLOAT_MIN, DEFAULT_FLOAT_MAX, DEFAULT_FLOAT_STEP
    if kind.is_integer:
        low, high = _INT_BOUNDS[kind]
        low = max(low, -DEFAULT_INT_SLIDER_LIMIT)
        high = min(high, DEFAULT_INT_SLIDER_LIMIT)
        return low, high, DEFAULT_INT_STEP
    return None, None, None


@dataclass(frozen=True)
class Field:
    """Current value plus immutable metadata of one tunable.

    ``min <= value <= max`` is deliberately not checked: the page limits its
    controls to the range but writes outside it are still stored.
    """

    kind: Kind
    value: Any
    min: Any = None
    max: Any = None
    step: Any = None
    module: str = ""
    file: str = ""
    line: int = 0

    def __post_init__(self) -> None:
        kind = Kind.parse(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", coerce_value(kind, self.value))

        if kind.is_numeric:
            default_min, default_max, default_step = default_range(kind)
            for name, fallback in (
                ("min", default_min),
                ("max", default_max),
                ("step", default_step),
            ):
                current = getattr(self, name)
                if current is None:
                    current = fallback
                object.__setattr__(self, name, coerce_value(kind, current))
        else:
            for name in ("min", "max", "step"):
                if getattr(self, name) is not None:
                    raise TypeMismatchError(kind.value, getattr(self, name))

        object.__setattr__(self, "line", int(self.line))

    @classmethod
    def of(
        cls,
        kind: Any,
        value: Any,
        min: Any = None,
        max: Any = None,
        step: Any = None,
        *,
        module: str = "",
        file: str = "",
        line: int = 0,
    ) -> "Field":
        return cls(
            kind=Kind.parse(kind),
            value=value,
            min=min,
            max=max,
            step=step,
            module=module,
            file=file,
            line=line,
        )

    def with_value(self, value: Any) -> "Field":
        """Copy of this field holding ``value``; metadata is carried over."""
        return replace(self, value=coerce_value(self.kind, value))

    def accepts(self, value: Any) -> bool:
        try:
            coerce_value(self.kind, value)
        except TypeMismatchError:
            return False
        return True

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "kind": self.kind.value,
            "value": self.value,
            "module": self.module,
            "file": self.file,
            "line": self.line,
        }
        if self.kind.is_numeric:
            payload["min"] = self.min
            payload["max"] = self.max
            payload["step"] = self.step
        return payload
