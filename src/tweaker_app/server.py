# SPDX-License-Identifier: MIT

"""
HTTP service that lets a browser inspect and edit a Registry.

Routes:
- ``GET /``               editing page, resets the change watermark
- ``GET /should_refresh`` ``refresh`` once after the entry count changed
- ``POST /set/{kind}``    ``{"key": ..., "value": ...}`` update of one tunable
- ``GET /state``          JSON dump of the grouped view
"""

from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from tweaker_library.config.defaults import (
    DEFAULT_SHUTDOWN_TIMEOUT,
    DEFAULT_STARTUP_TIMEOUT,
)
from tweaker_library.errors import (
    MalformedPayloadError,
    TransportError,
    UnknownKindError,
)
from tweaker_library.fields import Kind
from tweaker_library.registry import Registry, SetResult
from tweaker_library.view import build_view

from .page import render_page
from .settings import TweakerSettings

logger = logging.getLogger("tweaker_app")

REFRESH_SIGNAL = "refresh"


class UpdateRequest(BaseModel):
    """Body of POST /set/{kind}. ``value`` is checked against the kind later."""

    key: StrictStr
    value: Any

    model_config = ConfigDict(extra="ignore")


class ChangeWatermark:
    """Last registry size seen by the page, shared by all request handlers."""

    def __init__(self, size: int = 0):
        self._size = size
        self._lock = threading.Lock()

    def reset(self, size: int) -> None:
        with self._lock:
            self._size = size

    def check(self, size: int) -> bool:
        """True (once) when ``size`` differs from the watermark, which then moves."""
        with self._lock:
            if size == self._size:
                return False
            self._size = size
            return True

    @property
    def value(self) -> int:
        with self._lock:
            return self._size


def parse_update(payload: Any) -> UpdateRequest:
    if not isinstance(payload, dict):
        raise MalformedPayloadError("Request body must be a JSON object.")
    try:
        return UpdateRequest.model_validate(payload)
    except ValidationError as e:
        missing = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise MalformedPayloadError(
            f"Request body must contain a string 'key' and a 'value' (invalid: {', '.join(missing)})."
        ) from e


def create_app(
    registry: Registry,
    settings: Optional[TweakerSettings] = None,
) -> FastAPI:
    """Build the editing service for ``registry``."""
    settings = settings or TweakerSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Tweaker serving {registry.size()} tunable(s) at {settings.url}"
        )
        yield
        logger.info("Tweaker server stopped.")

    app = FastAPI(title="Const Tweaker", lifespan=lifespan, docs_url=None, redoc_url=None)
    app.state.registry = registry
    app.state.settings = settings
    app.state.watermark = ChangeWatermark(registry.size())

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        current: Registry = request.app.state.registry
        # Size is read before the snapshot; a racing registration costs one extra refresh
        request.app.state.watermark.reset(current.size())
        groups = build_view(current.snapshot())
        return HTMLResponse(
            render_page(groups, request.app.state.settings.poll_interval_ms)
        )

    @app.get("/should_refresh", response_class=PlainTextResponse)
    def should_refresh(request: Request):
        current: Registry = request.app.state.registry
        if request.app.state.watermark.check(current.size()):
            logger.debug("Registry size changed, asking the page to refresh.")
            return PlainTextResponse(REFRESH_SIGNAL)
        return PlainTextResponse("")

    @app.get("/state")
    def state(request: Request) -> Dict[str, Any]:
        current: Registry = request.app.state.registry
        groups: List[Dict[str, Any]] = [
            group.to_payload() for group in build_view(current.snapshot())
        ]
        return {"size": current.size(), "groups": groups}

    @app.post("/set/{kind}")
    async def set_value(kind: str, request: Request):
        try:
            resolved_kind = Kind.parse(kind)
        except UnknownKindError as e:
            raise HTTPException(status_code=404, detail=str(e))

        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise HTTPException(status_code=400, detail="Invalid JSON in request body.")

        try:
            update = parse_update(payload)
        except MalformedPayloadError as e:
            raise HTTPException(status_code=400, detail=str(e))

        current: Registry = request.app.state.registry
        result = current.set_value(update.key, update.value, resolved_kind)
        if result is SetResult.NOT_FOUND:
            logger.warning(f"Rejected update of unknown tunable '{update.key}'.")
            raise HTTPException(
                status_code=404, detail=f"No tunable registered under '{update.key}'"
            )
        if result is SetResult.TYPE_MISMATCH:
            stored = current.get(update.key)
            stored_kind = stored.kind.value if stored is not None else "unknown"
            logger.warning(
                f"Rejected {resolved_kind.value} update of '{update.key}' ({stored_kind}): {update.value!r}"
            )
            raise HTTPException(
                status_code=409,
                detail=(
                    f"Value {update.value!r} is not a valid {resolved_kind.value} "
                    f"for '{update.key}' ({stored_kind})"
                ),
            )

        stored = current.get(update.key)
        return {
            "ok": True,
            "key": update.key,
            "value": stored.value if stored is not None else update.value,
        }

    return app


class TweakerServer:
    """Runs the editing service on a background daemon thread.

    Socket failures end the server thread and are kept in ``error``; they are
    never raised into the host program, which keeps reading its tunables.
    """

    def __init__(self, registry: Registry, settings: Optional[TweakerSettings] = None):
        self.registry = registry
        self.settings = settings or TweakerSettings()
        self.app = create_app(registry, self.settings)
        self.error: Optional[TransportError] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._server is not None
            and self._server.started
        )

    def start(self) -> "TweakerServer":
        if self._thread is not None and self._thread.is_alive():
            return self
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        self.error = None
        self._thread = threading.Thread(
            target=self._serve, name="tweaker-server", daemon=True
        )
        self._thread.start()
        return self

    def _serve(self) -> None:
        assert self._server is not None
        try:
            self._server.run()
        except (OSError, SystemExit) as e:
            # uvicorn exits with SystemExit when the socket cannot be bound
            self.error = TransportError(
                f"Tweaker server on {self.settings.url} failed: {e!r}"
            )
            logger.error(str(self.error))
            return
        if not self._server.started and self.error is None:
            self.error = TransportError(
                f"Tweaker server on {self.settings.url} stopped before it started."
            )
            logger.error(str(self.error))

    def wait_until_started(self, timeout: float = DEFAULT_STARTUP_TIMEOUT) -> bool:
        """Block until the server accepts connections; False on failure or timeout."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._server is not None and self._server.started:
                return True
            if self._thread is None or not self._thread.is_alive():
                return False
            time.sleep(0.02)
        return self._server is not None and self._server.started

    def stop(self, timeout: float = DEFAULT_SHUTDOWN_TIMEOUT) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning(f"Tweaker server did not stop within {timeout:.1f}s.")
            self._thread = None


def run(
    registry: Registry,
    host: Optional[str] = None,
    port: Optional[int] = None,
    settings: Optional[TweakerSettings] = None,
) -> TweakerServer:
    """Serve the editing page for ``registry`` in the background.

    Defaults to ``http://127.0.0.1:9938`` unless overridden by arguments or
    TWEAKER_* environment variables. Returns the running server handle.
    """
    resolved = settings or TweakerSettings.from_env()
    if host is not None:
        resolved.host = host
    if port is not None:
        resolved.port = int(port)
    server = TweakerServer(registry, resolved).start()
    if server.wait_until_started():
        logger.info(f"Tweaker page available at {resolved.url}")
    elif server.error is None:
        logger.warning(f"Tweaker server on {resolved.url} is still starting.")
    return server
