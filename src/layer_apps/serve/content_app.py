"""Content generator demo.

Endpoints:
- GET /health
- GET /api/content-types
- POST /api/generate  { "gateId": "...", "prompt": "..." }

The body field carrying the gate id is configurable (CONTENT_GATE_FIELD) so
older clients posting ``gate`` can be served without a second code path.
"""
from __future__ import annotations
import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from layer_apps.common.config import GateConfig, load_gates
from layer_apps.common.errors import InvalidRequest
from layer_apps.common.schema import ContentOut
from layer_apps.gateway.client import LayerClient
from layer_apps.serve.handlers import (
    build_app,
    error_message,
    get_client,
    log_failure,
    read_json,
    truncate,
)

LOGGER = logging.getLogger("layer_apps.content")

SERVICE = "content-generator"


def parse_generate(body: dict, gate_field: str) -> tuple[str, str]:
    gate_id = body.get(gate_field)
    prompt = body.get("prompt")
    if not isinstance(gate_id, str) or not gate_id.strip() or not isinstance(prompt, str) or not prompt.strip():
        raise InvalidRequest(f"{gate_field} and prompt are required")
    return gate_id.strip(), prompt


def create_app(
    client: LayerClient | None = None,
    gates: GateConfig | None = None,
    gate_field: str | None = None,
) -> FastAPI:
    gates = gates or load_gates()
    gate_field = gate_field or os.getenv("CONTENT_GATE_FIELD") or "gateId"
    app = build_app("Layer Content Generator", SERVICE, client)

    @app.get("/api/content-types")
    def content_types() -> dict[str, list[dict[str, str]]]:
        return {
            "options": [
                {"id": o.id, "gateId": o.gate_id, "title": o.title, "description": o.description}
                for o in gates.content
            ]
        }

    @app.post("/api/generate", response_model=ContentOut)
    async def generate(request: Request, layer: LayerClient = Depends(get_client)):
        try:
            gate_id, prompt = parse_generate(await read_json(request), gate_field)
        except InvalidRequest as e:
            return JSONResponse({"error": e.message}, status_code=400)

        try:
            result = await layer.chat(gate_id, [{"role": "user", "content": prompt}])
        except Exception as e:
            log_failure(LOGGER, "Generation error", e, gate_id=gate_id, prompt=truncate(prompt))
            return JSONResponse({"error": error_message(e, "Failed to generate content")}, status_code=500)

        return ContentOut(content=result.content)

    return app


app = create_app()
