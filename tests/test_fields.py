# SPDX-License-Identifier: MIT

from __future__ import annotations

import pytest

from tweaker_library import (
    Field,
    Kind,
    TypeMismatchError,
    UnknownKindError,
    coerce_value,
    default_range,
    infer_kind,
)
from tweaker_library.config import DEFAULT_INT_SLIDER_LIMIT


def test_kind_parse_accepts_wire_names_and_rejects_unknown() -> None:
    assert Kind.parse("f64") is Kind.F64
    assert Kind.parse(" USIZE ") is Kind.USIZE
    assert Kind.parse(Kind.BOOL) is Kind.BOOL
    with pytest.raises(UnknownKindError):
        Kind.parse("f16")


def test_integer_bounds_follow_width() -> None:
    assert Kind.I8.bounds == (-128, 127)
    assert Kind.U8.bounds == (0, 255)
    assert Kind.I16.bounds == (-32768, 32767)
    assert Kind.U32.bounds == (0, 2**32 - 1)
    assert Kind.I64.bounds == (-(2**63), 2**63 - 1)
    assert Kind.USIZE.bounds == (0, 2**64 - 1)
    assert Kind.F32.bounds is None
    assert Kind.STRING.bounds is None


def test_coerce_value_rejects_cross_kind_values() -> None:
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.F64, True)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.I32, 1.5)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.BOOL, 1)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.STRING, 3)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.U8, 256)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.U64, -1)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.F32, 1e300)
    with pytest.raises(TypeMismatchError):
        coerce_value(Kind.F64, None)


def test_coerce_value_normalizes_numbers() -> None:
    assert coerce_value(Kind.F64, 2) == 2.0
    assert isinstance(coerce_value(Kind.F64, 2), float)
    assert coerce_value(Kind.I8, -128) == -128
    single = coerce_value(Kind.F32, 0.1)
    assert single != 0.1
    assert abs(single - 0.1) < 1e-7


@pytest.mark.parametrize("kind", [Kind.F32, Kind.F64])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_are_rejected(kind: Kind, value: float) -> None:
    with pytest.raises(TypeMismatchError):
        coerce_value(kind, value)
    assert not Field.of(kind, 0.5).accepts(value)


def test_infer_kind() -> None:
    assert infer_kind(True) is Kind.BOOL
    assert infer_kind(3) is Kind.I64
    assert infer_kind(0.5) is Kind.F64
    assert infer_kind("x") is Kind.STRING
    with pytest.raises(TypeMismatchError):
        infer_kind([1, 2])


def test_numeric_field_fills_default_slider_metadata() -> None:
    float_field = Field.of("f64", 0.25)
    assert (float_field.min, float_field.max, float_field.step) == (0.0, 1.0, 0.001)

    int_field = Field.of("u16", 7)
    assert (int_field.min, int_field.max, int_field.step) == (0, 65535, 1)

    # 64-bit sliders stop where browser doubles lose integer precision
    assert default_range(Kind.U64) == (0, DEFAULT_INT_SLIDER_LIMIT, 1)
    assert default_range(Kind.I64) == (
        -DEFAULT_INT_SLIDER_LIMIT,
        DEFAULT_INT_SLIDER_LIMIT,
        1,
    )
    assert Field.of(Kind.USIZE, 2**60).value == 2**60
    assert default_range(Kind.BOOL) == (None, None, None)


def test_field_accepts_out_of_range_value() -> None:
    field = Field.of(Kind.F64, 5.0, 0.0, 1.0, 0.1)
    assert field.value == 5.0
    assert field.with_value(-3.0).value == -3.0


def test_bool_and_string_fields_carry_no_slider_metadata() -> None:
    flag = Field.of(Kind.BOOL, False, module="app", file="app.py", line=9)
    assert flag.min is None and flag.max is None and flag.step is None
    with pytest.raises(TypeMismatchError):
        Field.of(Kind.STRING, "x", min=0)


def test_with_value_keeps_metadata_and_checks_kind() -> None:
    field = Field.of(Kind.I32, 1, -10, 10, 2, module="app", file="a.py", line=4)
    updated = field.with_value(8)
    assert updated.value == 8
    assert (updated.min, updated.max, updated.step) == (-10, 10, 2)
    assert (updated.module, updated.file, updated.line) == ("app", "a.py", 4)
    assert field.value == 1
    with pytest.raises(TypeMismatchError):
        field.with_value("8")
    assert field.accepts(3) is True
    assert field.accepts(3.5) is False


def test_to_payload_includes_metadata_for_numeric_kinds_only() -> None:
    number = Field.of(Kind.U8, 3, module="m", file="f.py", line=1).to_payload()
    assert number == {
        "kind": "u8",
        "value": 3,
        "module": "m",
        "file": "f.py",
        "line": 1,
        "min": 0,
        "max": 255,
        "step": 1,
    }
    text = Field.of(Kind.STRING, "hi").to_payload()
    assert "min" not in text
    assert text["value"] == "hi"
