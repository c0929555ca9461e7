"""Image generator demo.

Endpoints:
- GET /health
- POST /api/generate  { "prompt": "..." }
"""
from __future__ import annotations
import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from layer_apps.common.config import load_gates
from layer_apps.common.errors import GatewayError, InvalidRequest
from layer_apps.common.schema import ImageOut
from layer_apps.gateway.client import LayerClient
from layer_apps.serve.handlers import (
    build_app,
    elapsed_ms,
    error_message,
    get_client,
    log_failure,
    read_json,
    truncate,
)

LOGGER = logging.getLogger("layer_apps.image")

SERVICE = "image-generator"


def parse_prompt(body: dict) -> str:
    prompt = body.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidRequest("Prompt is required")
    return prompt.strip()


def create_app(client: LayerClient | None = None, gate_id: str | None = None) -> FastAPI:
    gate_id = gate_id or load_gates().image
    app = build_app("Layer Image Generator", SERVICE, client)

    @app.post("/api/generate", response_model=ImageOut)
    async def generate(request: Request, layer: LayerClient = Depends(get_client)):
        try:
            prompt = parse_prompt(await read_json(request))
        except InvalidRequest as e:
            return JSONResponse({"error": e.message}, status_code=400)

        start = time.perf_counter()
        try:
            result = await layer.image(gate_id, prompt)
            if not result.content:
                raise GatewayError("Gateway returned no images")
        except Exception as e:
            log_failure(LOGGER, "Image error", e, prompt=truncate(prompt))
            return JSONResponse({"error": error_message(e, "Failed to generate image")}, status_code=500)

        return ImageOut(
            content=result.content,
            model=result.model,
            cost=result.cost,
            latency=elapsed_ms(start),
            images=list(result.images),
        )

    return app


app = create_app()
