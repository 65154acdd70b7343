# SPDX-License-Identifier: MIT

"""
Centralized defaults for the tweaker library.

This file contains the default values for:
- The editing server bind address and client poll interval
- Registry lock partitioning
- Slider metadata used when a declaration omits min/max/step

Environment variables can override the server values at runtime
(see tweaker_app.settings).
"""

# =============================================================================
# SERVER DEFAULTS
# =============================================================================

# Address the editing page is served on
# Override: TWEAKER_HOST=<host>, TWEAKER_PORT=<port>
DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 9938

# How often the page asks /should_refresh for newly registered tunables
# Override: TWEAKER_POLL_INTERVAL_MS=<milliseconds>
DEFAULT_POLL_INTERVAL_MS: int = 1000

# Seconds to wait for the background server to come up or shut down
DEFAULT_STARTUP_TIMEOUT: float = 5.0
DEFAULT_SHUTDOWN_TIMEOUT: float = 5.0

# =============================================================================
# REGISTRY DEFAULTS
# =============================================================================

# Number of independently locked partitions in a Registry
# Unrelated keys only contend when they hash into the same shard
DEFAULT_LOCK_SHARDS: int = 16

# =============================================================================
# SLIDER DEFAULTS
# =============================================================================

# Floating point sliders
DEFAULT_FLOAT_MIN: float = 0.0
DEFAULT_FLOAT_MAX: float = 1.0
DEFAULT_FLOAT_STEP: float = 0.001

# Integer sliders span the full width of their kind
DEFAULT_INT_STEP: int = 1

# Browsers hold range inputs as doubles; default 64-bit sliders stop at the
# largest integer a double represents exactly (Number.MAX_SAFE_INTEGER)
DEFAULT_INT_SLIDER_LIMIT: int = 2**53 - 1
