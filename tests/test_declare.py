# SPDX-License-Identifier: MIT

from __future__ import annotations

import sys

import pytest

from tweaker_library import (
    Kind,
    Registry,
    TunableNotFoundError,
    TypeMismatchError,
    Tunable,
    location_key,
    make_key,
    tweak,
    tweak_bool,
    tweak_f32,
    tweak_str,
    tweak_u8,
)


def test_keys() -> None:
    assert make_key("app", "GAIN") == "app::GAIN"
    assert make_key("", "GAIN") == "GAIN"
    assert location_key("app", "app.py", 12) == "app::app.py:12"


def test_tweak_records_caller_provenance(registry: Registry) -> None:
    line = sys._getframe().f_lineno + 1
    gain = tweak(registry, "GAIN", 0.5, min=0.0, max=1.0, step=0.1)

    field = gain.field()
    assert gain.key == f"{__name__}::GAIN"
    assert gain.kind is Kind.F64
    assert field.module == __name__
    assert field.line == line
    assert field.file.endswith("test_declare.py")
    assert (field.min, field.max, field.step) == (0.0, 1.0, 0.1)


def test_typed_shorthands_record_caller_provenance(registry: Registry) -> None:
    line = sys._getframe().f_lineno + 1
    level = tweak_u8(registry, "LEVEL", 3, namespace="mixer")

    assert level.key == "mixer::LEVEL"
    assert level.kind is Kind.U8
    assert level.field().line == line
    assert level.field().file.endswith("test_declare.py")
    assert (level.field().min, level.field().max) == (0, 255)


def test_tweak_without_name_uses_location_key(registry: Registry) -> None:
    handle = tweak(registry, None, True, namespace="app", file="main.py", line=42)
    assert handle.key == "app::main.py:42"
    assert handle.kind is Kind.BOOL


def test_second_declaration_returns_first_registration(registry: Registry) -> None:
    first = tweak_str(registry, "NAME", "first", namespace="app")
    second = tweak_str(registry, "NAME", "second", namespace="app")

    assert first.key == second.key
    assert second.get() == "first"
    assert registry.size() == 1


def test_redeclaring_a_key_with_another_kind_keeps_stored_kind(
    registry: Registry,
) -> None:
    tweak_bool(registry, "FLAG", False, namespace="app")
    handle = tweak(registry, "FLAG", 1.5, namespace="app")
    assert handle.kind is Kind.BOOL
    assert handle.get() is False


def test_tunable_reads_live_value(registry: Registry) -> None:
    scale = tweak_f32(registry, "SCALE", 0.0, namespace="app")
    assert scale.get() == 0.0

    registry.set_value("app::SCALE", 0.5)
    assert scale.get() == 0.5
    assert repr(scale) == "0.5"
    assert str(scale) == "0.5"

    assert scale.set(0.25) is True
    assert scale.set("fast") is False
    assert registry.value("app::SCALE") == 0.25


def test_tunable_for_unknown_key_raises() -> None:
    handle = Tunable(Registry(), "app::missing", Kind.I32)
    with pytest.raises(TunableNotFoundError):
        handle.get()


def test_invalid_default_fails_at_declaration(registry: Registry) -> None:
    with pytest.raises(TypeMismatchError):
        tweak_u8(registry, "BAD", 300, namespace="app")
    with pytest.raises(TypeMismatchError):
        tweak(registry, "BAD_FLAG", True, min=0, namespace="app")
    assert registry.size() == 0
