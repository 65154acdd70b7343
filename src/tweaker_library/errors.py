# SPDX-License-Identifier: MIT

"""
Error types for the tweaker library.

Registry operations report failures as return values (``None``, ``False``,
``SetResult``). These exceptions are raised only at the edges: typed accessors,
Field construction from host code, and the HTTP/transport layer.
"""

from typing import Any, Optional


class TweakerError(Exception):
    """Base class for every error raised by the tweaker packages."""


class TunableNotFoundError(TweakerError, KeyError):
    """A lookup or update referenced a key that was never registered."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No tunable registered under '{key}'")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return self.args[0]


class TypeMismatchError(TweakerError, TypeError):
    """A value does not belong to the kind it is written to."""

    def __init__(self, kind: str, value: Any, key: Optional[str] = None):
        self.kind = kind
        self.value = value
        self.key = key
        target = f"'{key}' ({kind})" if key else kind
        super().__init__(
            f"Value {value!r} of type {type(value).__name__} is not valid for {target}"
        )


class UnknownKindError(TweakerError, ValueError):
    """A kind name outside the supported set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported tunable kind '{name}'")


class MalformedPayloadError(TweakerError, ValueError):
    """An update request body could not be read as a {key, value} pair."""


class TransportError(TweakerError):
    """The editing server failed to bind or stopped on a socket error."""
