# SPDX-License-Identifier: MIT

from .declare import (
    Tunable,
    location_key,
    make_key,
    tweak,
    tweak_bool,
    tweak_f32,
    tweak_f64,
    tweak_i8,
    tweak_i16,
    tweak_i32,
    tweak_i64,
    tweak_str,
    tweak_u8,
    tweak_u16,
    tweak_u32,
    tweak_u64,
    tweak_usize,
)
from .errors import (
    MalformedPayloadError,
    TransportError,
    TunableNotFoundError,
    TweakerError,
    TypeMismatchError,
    UnknownKindError,
)
from .fields import Field, Kind, coerce_value, default_range, infer_kind
from .registry import Registry, SetResult
from .view import NamespaceGroup, build_view, label_for

__all__ = [
    "Field",
    "Kind",
    "MalformedPayloadError",
    "NamespaceGroup",
    "Registry",
    "SetResult",
    "TransportError",
    "Tunable",
    "TunableNotFoundError",
    "TweakerError",
    "TypeMismatchError",
    "UnknownKindError",
    "build_view",
    "coerce_value",
    "default_range",
    "infer_kind",
    "label_for",
    "location_key",
    "make_key",
    "tweak",
    "tweak_bool",
    "tweak_f32",
    "tweak_f64",
    "tweak_i8",
    "tweak_i16",
    "tweak_i32",
    "tweak_i64",
    "tweak_str",
    "tweak_u8",
    "tweak_u16",
    "tweak_u32",
    "tweak_u64",
    "tweak_usize",
]
