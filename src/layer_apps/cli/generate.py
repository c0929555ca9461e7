"""Run a single gateway generation from the terminal."""
from __future__ import annotations
import argparse
import asyncio
import logging
import time

from layer_apps.common.config import load_settings
from layer_apps.common.logging_setup import setup_logging
from layer_apps.common.schema import GenerationResult
from layer_apps.gateway.client import LayerClient

LOGGER = logging.getLogger("layer_apps.cli")

async def run(client: LayerClient, kind: str, gate_id: str, prompt: str) -> GenerationResult:
    """
    Dispatch one generation.

    Args:
        client: Gateway client.
        kind: "chat" or "image".
        gate_id: Gate identifier.
        prompt: User prompt; sent as a single user message for chat.
    """
    if kind == "image":
        return await client.image(gate_id, prompt)
    return await client.chat(gate_id, [{"role": "user", "content": prompt}])

def main() -> None:
    ap = argparse.ArgumentParser(description="Run one generation through the Layer gateway")
    ap.add_argument("--kind", choices=["chat", "image"], default="chat")
    ap.add_argument("--gate", required=True, help="Gate identifier")
    ap.add_argument("--prompt", required=True, help="User prompt")
    args = ap.parse_args()

    settings = load_settings()
    setup_logging(settings.log_level)
    client = LayerClient.from_settings(settings)

    start = time.perf_counter()
    resp = asyncio.run(run(client, args.kind, args.gate, args.prompt))
    latency_ms = int((time.perf_counter() - start) * 1000)
    LOGGER.info("Latency: %sms | model=%s cost=%s", latency_ms, resp.model, resp.cost)
    print(resp.content)

if __name__ == "__main__":
    main()
