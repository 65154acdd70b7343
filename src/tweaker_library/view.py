# SPDX-License-Identifier: MIT

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .fields import Field


@dataclass(frozen=True)
class NamespaceGroup:
    """Entries declared in one namespace, in declaration order."""

    namespace: str
    entries: List[Tuple[str, Field]] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "entries": [
                {"key": key, "label": label_for(key), **entry.to_payload()}
                for key, entry in self.entries
            ],
        }


def label_for(key: str) -> str:
    """Display label: the last segment of a ``namespace::name`` key."""
    return key.rsplit("::", 1)[-1]


def build_view(entries: Iterable[Tuple[str, Field]]) -> List[NamespaceGroup]:
    """Group a registry snapshot by namespace for display.

    Namespaces are sorted lexicographically and entries inside a namespace by
    (file, line), with the key breaking ties. The input is not modified.
    """
    grouped: Dict[str, List[Tuple[str, Field]]] = {}
    for key, entry in entries:
        grouped.setdefault(entry.module, []).append((key, entry))

    return [
        NamespaceGroup(
            namespace=namespace,
            entries=sorted(
                grouped[namespace],
                key=lambda row: (row[1].file, row[1].line, row[0]),
            ),
        )
        for namespace in sorted(grouped)
    ]
