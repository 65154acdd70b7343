# SPDX-License-Identifier: MIT

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from tweaker_library.config.defaults import (
    DEFAULT_HOST,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PORT,
)

logger = logging.getLogger("tweaker_app")

DEFAULT_LOG_LEVEL = "INFO"


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning(f"Invalid {name} '{raw}'. Falling back to {default}.")
        return default
    if value < minimum:
        logger.warning(
            f"Invalid {name} '{raw}'. Must be >= {minimum}. Falling back to {default}."
        )
        return default
    return value


@dataclass
class TweakerSettings:
    """Runtime settings of the editing server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TweakerSettings":
        """Read TWEAKER_* variables, keeping defaults for anything unset or invalid."""
        source = os.environ if env is None else env
        host = (source.get("TWEAKER_HOST") or "").strip() or DEFAULT_HOST
        log_dir_raw = (source.get("TWEAKER_LOG_DIR") or "").strip()
        return cls(
            host=host,
            port=_env_int(source, "TWEAKER_PORT", DEFAULT_PORT, 0),
            poll_interval_ms=_env_int(
                source, "TWEAKER_POLL_INTERVAL_MS", DEFAULT_POLL_INTERVAL_MS, 50
            ),
            log_level=(source.get("TWEAKER_LOG_LEVEL") or DEFAULT_LOG_LEVEL)
            .strip()
            .upper(),
            log_dir=Path(log_dir_raw) if log_dir_raw else None,
        )

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"
