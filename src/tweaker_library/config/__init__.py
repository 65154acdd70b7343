# SPDX-License-Identifier: MIT

from .defaults import (
    DEFAULT_FLOAT_MAX,
    DEFAULT_FLOAT_MIN,
    DEFAULT_FLOAT_STEP,
    DEFAULT_HOST,
    DEFAULT_INT_SLIDER_LIMIT,
    DEFAULT_INT_STEP,
    DEFAULT_LOCK_SHARDS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PORT,
    DEFAULT_SHUTDOWN_TIMEOUT,
    DEFAULT_STARTUP_TIMEOUT,
)

__all__ = [
    "DEFAULT_FLOAT_MAX",
    "DEFAULT_FLOAT_MIN",
    "DEFAULT_FLOAT_STEP",
    "DEFAULT_HOST",
    "DEFAULT_INT_SLIDER_LIMIT",
    "DEFAULT_INT_STEP",
    "DEFAULT_LOCK_SHARDS",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_PORT",
    "DEFAULT_SHUTDOWN_TIMEOUT",
    "DEFAULT_STARTUP_TIMEOUT",
]
