# SPDX-License-Identifier: MIT

from __future__ import annotations

from tweaker_app.page import render_control, render_page
from tweaker_library import Field, Kind, build_view


def _page(*entries) -> str:
    return render_page(build_view(list(entries)), poll_interval_ms=1000)


def test_two_namespaces_render_in_order() -> None:
    text = _page(
        ("zeta::z", Field.of(Kind.BOOL, True, module="zeta", file="z.py", line=1)),
        ("alpha::a", Field.of(Kind.F64, 0.1, module="alpha", file="a.py", line=2)),
    )
    assert text.index("<h2>alpha</h2>") < text.index("<h2>zeta</h2>")
    assert "a.py:2" in text
    assert "setInterval(poll, 1000)" in text


def test_controls_per_kind() -> None:
    number = render_control(
        "app::n", Field.of(Kind.I16, -3, -10, 10, 1, module="app"), "tweak_0"
    )
    assert 'type="range"' in number
    assert 'min="-10"' in number and 'max="10"' in number and 'value="-3"' in number
    assert "Math.round(Number(this.value))" in number
    assert "parseInt" not in number
    assert "&quot;i16&quot;" in number

    ratio = render_control("app::r", Field.of(Kind.F32, 0.5, module="app"), "tweak_1")
    assert "parseFloat(this.value)" in ratio

    flag = render_control("app::f", Field.of(Kind.BOOL, True, module="app"), "tweak_2")
    assert 'type="checkbox"' in flag and " checked" in flag
    assert "this.checked" in flag

    text = render_control("app::s", Field.of(Kind.STRING, "hi", module="app"), "tweak_3")
    assert 'type="text"' in text and 'value="hi"' in text


def test_values_and_keys_are_escaped() -> None:
    text = _page(
        (
            'app::<b>"x"',
            Field.of(Kind.STRING, '</script><b>', module="app", file="a.py", line=1),
        )
    )
    assert "<b>" not in text
    assert "&lt;/script&gt;&lt;b&gt;" in text
    assert "&lt;b&gt;&quot;x&quot;" in text


def test_empty_page_has_placeholder_and_status_banner() -> None:
    text = render_page([])
    assert "No tunables registered yet." in text
    assert 'id="status"' in text


def test_default_64_bit_slider_stays_in_exact_integer_range() -> None:
    wide = render_control("app::w", Field.of(Kind.U64, 3, module="app"), "tweak_0")
    assert f'max="{2**53 - 1}"' in wide
    assert "e+" not in wide
    assert "Math.round(Number(this.value))" in wide
