"""Recipe generator demo.

Endpoints:
- GET /health
- POST /recipe  { "groceryList": ["eggs", "spinach", ...] }
"""
from __future__ import annotations
import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from layer_apps.common.config import load_gates
from layer_apps.common.errors import InvalidRequest
from layer_apps.common.schema import RecipeMetadata, RecipeOut
from layer_apps.common.templates import load_template, render_prompt
from layer_apps.gateway.client import LayerClient
from layer_apps.serve.handlers import build_app, elapsed_ms, error_message, get_client, log_failure, read_json

LOGGER = logging.getLogger("layer_apps.recipe")

SERVICE = "recipe-generator"

GROCERY_LIST_ERROR = "groceryList must be a non-empty array of strings"


def parse_grocery_list(body: dict) -> list[str]:
    items = body.get("groceryList")
    if not isinstance(items, list) or len(items) == 0 or not all(isinstance(i, str) for i in items):
        raise InvalidRequest(GROCERY_LIST_ERROR)
    return items


def create_app(client: LayerClient | None = None, gate_id: str | None = None, template: str | None = None) -> FastAPI:
    gate_id = gate_id or load_gates().recipe
    template = template or load_template("recipe_prompt.txt")
    app = build_app("Layer Recipe Generator", SERVICE, client)

    @app.post("/recipe", response_model=RecipeOut)
    async def recipe(request: Request, layer: LayerClient = Depends(get_client)):
        try:
            body = await read_json(request)
        except InvalidRequest:
            return JSONResponse(
                {"error": "Invalid request", "message": "Request body must be valid JSON"}, status_code=400
            )
        try:
            grocery_list = parse_grocery_list(body)
        except InvalidRequest as e:
            return JSONResponse({"error": "Invalid request", "message": e.message}, status_code=400)

        prompt = render_prompt(template, ", ".join(grocery_list))
        start = time.perf_counter()
        try:
            result = await layer.chat(gate_id, [{"role": "user", "content": prompt}])
        except Exception as e:
            log_failure(LOGGER, "Error generating recipe", e, ingredients_count=len(grocery_list))
            return JSONResponse(
                {"error": "Recipe generation failed", "message": error_message(e, "Unknown error")},
                status_code=500,
            )

        return RecipeOut(
            recipe=result.content,
            metadata=RecipeMetadata(
                model=result.model,
                cost=result.cost,
                latency=elapsed_ms(start),
                ingredients=grocery_list,
            ),
        )

    return app


app = create_app()
