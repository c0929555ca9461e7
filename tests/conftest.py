from __future__ import annotations

import asyncio
from typing import Any

import pytest

from layer_apps.common.errors import GatewayError
from layer_apps.common.schema import GenerationResult


class FakeLayer:
    """Stands in for LayerClient; records every call."""

    def __init__(self, result: GenerationResult | None = None, error: Exception | None = None, delay: float = 0.0) -> None:
        self.result = result or GenerationResult(content="hello", model="gpt-x", cost=0.0002)
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, str, Any]] = []

    async def _respond(self) -> GenerationResult:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result

    async def chat(self, gate_id: str, messages: list[dict[str, str]]) -> GenerationResult:
        self.calls.append(("chat", gate_id, messages))
        return await self._respond()

    async def image(self, gate_id: str, prompt: str) -> GenerationResult:
        self.calls.append(("image", gate_id, prompt))
        return await self._respond()


@pytest.fixture
def fake_layer() -> FakeLayer:
    return FakeLayer()


@pytest.fixture
def failing_layer() -> FakeLayer:
    return FakeLayer(error=GatewayError("Gateway error 503: upstream unavailable", status_code=503))
