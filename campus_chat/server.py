"""FastAPI development chat server (in-memory rooms and history)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from campus_chat.state import ServerDeps
from campus_chat.config.websocket import WS_ENDPOINT_PATH
from campus_chat.runtime.logging import configure_logging
from campus_chat.runtime.dependencies import build_server_deps
from campus_chat.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


def build_app(deps: ServerDeps | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        if getattr(app.state, "deps", None) is None:
            app.state.deps = build_server_deps()
        logger.info("chat server: ready")
        yield

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.state.deps = deps

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "deps", None)
        if runtime_deps is None:
            raise RuntimeError("Server dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


app = build_app()

__all__ = ["app", "build_app"]
