"""Helpers shared by the demo apps: body parsing, timing, failure logging."""
from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI, Request

from layer_apps.common.config import load_settings
from layer_apps.common.errors import InvalidRequest
from layer_apps.common.logging_setup import setup_logging
from layer_apps.gateway.client import LayerClient


async def read_json(request: Request) -> dict[str, Any]:
    """Decode the request body; malformed JSON or a non-object body is a client error."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequest("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise InvalidRequest("Invalid JSON body")
    return body


def elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


def error_message(exc: BaseException, fallback: str) -> str:
    return str(exc) or fallback


def truncate(text: str | None, limit: int = 100) -> str | None:
    return text[:limit] if text is not None else None


def log_failure(logger: logging.Logger, label: str, exc: BaseException, **context: Any) -> None:
    """Log message, stack and a small request summary. Never pass full bodies here."""
    logger.error("%s: %s | context=%s", label, exc, context, exc_info=exc)


def get_client(request: Request) -> LayerClient:
    return request.app.state.client


def client_lifespan(client: LayerClient | None) -> Callable[[FastAPI], Any]:
    """Build the gateway client on startup unless one was injected.

    A missing API key raises ConfigurationError here, so the server never
    starts accepting traffic without one.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.client is None:
            settings = load_settings()
            setup_logging(settings.log_level)
            app.state.client = LayerClient.from_settings(settings)
        yield

    return lifespan


def build_app(title: str, service: str, client: LayerClient | None) -> FastAPI:
    """Create a FastAPI app with the client slot and a /health route."""
    app = FastAPI(title=title, lifespan=client_lifespan(client))
    app.state.client = client
    app.state.service = service

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": service}

    return app
