# SPDX-License-Identifier: MIT

from __future__ import annotations

import pytest

from tweaker_library import Field, Kind, Registry


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def gain_field() -> Field:
    return Field.of(
        Kind.F64, 0.5, 0.0, 1.0, 0.1, module="app", file="app.py", line=3
    )
