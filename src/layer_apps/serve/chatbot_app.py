"""Chatbot demo.

Endpoints:
- GET /health
- POST /api/chat  { "messages": [{"role": "...", "content": "..."}, ...] }
"""
from __future__ import annotations
import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from layer_apps.common.config import load_gates
from layer_apps.common.errors import InvalidRequest
from layer_apps.common.schema import ChatMessage, ChatOut
from layer_apps.gateway.client import LayerClient
from layer_apps.serve.handlers import build_app, elapsed_ms, error_message, get_client, log_failure, read_json

LOGGER = logging.getLogger("layer_apps.chatbot")

SERVICE = "chatbot"


def parse_messages(body: dict) -> list[dict[str, str]]:
    messages = body.get("messages")
    if not messages or not isinstance(messages, list):
        raise InvalidRequest("Messages array is required")
    try:
        return [ChatMessage.model_validate(m).model_dump() for m in messages]
    except ValidationError as e:
        raise InvalidRequest("Each message must have a string role and content") from e


def create_app(client: LayerClient | None = None, gate_id: str | None = None) -> FastAPI:
    gate_id = gate_id or load_gates().chatbot
    app = build_app("Layer Chatbot", SERVICE, client)

    @app.post("/api/chat", response_model=ChatOut)
    async def chat(request: Request, layer: LayerClient = Depends(get_client)):
        try:
            messages = parse_messages(await read_json(request))
        except InvalidRequest as e:
            return JSONResponse({"error": e.message}, status_code=400)

        start = time.perf_counter()
        try:
            result = await layer.chat(gate_id, messages)
        except Exception as e:
            log_failure(LOGGER, "Chat error", e, messages_count=len(messages))
            return JSONResponse(
                {"error": error_message(e, "Failed to process chat request")}, status_code=500
            )

        return ChatOut(content=result.content, model=result.model, cost=result.cost, latency=elapsed_ms(start))

    return app


app = create_app()
