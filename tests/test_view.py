# SPDX-License-Identifier: MIT

from __future__ import annotations

from tweaker_library import Field, Kind, Registry, build_view, label_for


def _field(module: str, file: str, line: int) -> Field:
    return Field.of(Kind.F64, 0.0, module=module, file=file, line=line)


def test_groups_sorted_by_namespace_and_entries_by_line(registry: Registry) -> None:
    registry.register("zeta::late", _field("zeta", "zeta.py", 30))
    registry.register("alpha::second", _field("alpha", "alpha.py", 20))
    registry.register("zeta::early", _field("zeta", "zeta.py", 4))
    registry.register("alpha::first", _field("alpha", "alpha.py", 10))

    groups = build_view(registry.snapshot())

    assert [group.namespace for group in groups] == ["alpha", "zeta"]
    assert [key for key, _ in groups[0].entries] == ["alpha::first", "alpha::second"]
    assert [key for key, _ in groups[1].entries] == ["zeta::early", "zeta::late"]


def test_entries_order_by_file_before_line() -> None:
    entries = [
        ("app::b", _field("app", "b.py", 1)),
        ("app::a2", _field("app", "a.py", 50)),
        ("app::a1", _field("app", "a.py", 2)),
    ]
    (group,) = build_view(entries)
    assert [key for key, _ in group.entries] == ["app::a1", "app::a2", "app::b"]


def test_build_view_does_not_touch_input() -> None:
    entries = [
        ("b::x", _field("b", "b.py", 2)),
        ("a::y", _field("a", "a.py", 1)),
    ]
    original = list(entries)
    build_view(entries)
    assert entries == original
    assert build_view([]) == []


def test_group_payload_and_labels() -> None:
    (group,) = build_view([("app::mixer::gain", _field("app::mixer", "m.py", 7))])
    payload = group.to_payload()
    assert payload["namespace"] == "app::mixer"
    assert payload["entries"][0]["key"] == "app::mixer::gain"
    assert payload["entries"][0]["label"] == "gain"
    assert payload["entries"][0]["line"] == 7
    assert label_for("plain") == "plain"
