"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

GenerationKind = Literal["chat", "image"]


class ChatMessage(BaseModel):
    role: str
    content: str


@dataclass(frozen=True)
class GenerationRequest:
    """A single call to the gateway.

    Chat requests carry ``messages``; image requests carry ``prompt``.
    Exactly one of the two is set.
    """
    gate_id: str
    kind: GenerationKind
    messages: tuple[dict[str, str], ...] | None = None
    prompt: str | None = None

    def __post_init__(self) -> None:
        if not self.gate_id:
            raise ValueError("gate_id is required")
        if self.kind == "chat":
            if not self.messages or self.prompt is not None:
                raise ValueError("chat requests take messages and no prompt")
        elif self.kind == "image":
            if not self.prompt or self.messages is not None:
                raise ValueError("image requests take a prompt and no messages")
        else:
            raise ValueError(f"unknown generation kind: {self.kind!r}")

    def to_payload(self) -> dict[str, Any]:
        """Wire body for POST /v2/complete."""
        if self.kind == "chat":
            messages = [dict(m) for m in self.messages or ()]
        else:
            messages = [{"role": "user", "content": self.prompt or ""}]
        return {"gateId": self.gate_id, "type": self.kind, "data": {"messages": messages}}


@dataclass(frozen=True)
class GenerationResult:
    """Normalized gateway response."""
    content: str
    model: str
    cost: float
    images: tuple[str, ...] = field(default=())


class ChatOut(BaseModel):
    content: str
    model: str
    cost: float
    latency: int


class ContentOut(BaseModel):
    content: str


class ImageOut(ChatOut):
    images: list[str] = []


class RecipeMetadata(BaseModel):
    model: str
    cost: float
    latency: int
    ingredients: list[str]


class RecipeOut(BaseModel):
    recipe: str
    metadata: RecipeMetadata
