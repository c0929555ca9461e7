from __future__ import annotations

import dataclasses

import pytest

from layer_apps.common.schema import GenerationRequest, GenerationResult


def test_chat_payload() -> None:
    req = GenerationRequest(gate_id="g", kind="chat", messages=({"role": "user", "content": "hi"},))
    assert req.to_payload() == {
        "gateId": "g",
        "type": "chat",
        "data": {"messages": [{"role": "user", "content": "hi"}]},
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gate_id": "", "kind": "chat", "messages": ({"role": "user", "content": "hi"},)},
        {"gate_id": "g", "kind": "chat"},
        {"gate_id": "g", "kind": "chat", "messages": ({"role": "user", "content": "hi"},), "prompt": "p"},
        {"gate_id": "g", "kind": "image"},
        {"gate_id": "g", "kind": "image", "prompt": "p", "messages": ()},
        {"gate_id": "g", "kind": "video", "prompt": "p"},
    ],
)
def test_request_invariants(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GenerationRequest(**kwargs)


def test_result_is_immutable() -> None:
    result = GenerationResult(content="x", model="m", cost=0.1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.content = "y"  # type: ignore[misc]
