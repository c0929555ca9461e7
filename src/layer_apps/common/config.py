"""Process configuration read from the environment and the gate YAML file."""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from layer_apps.common.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.uselayer.ai"
DEFAULT_TIMEOUT = 120.0
DEFAULT_GATES_PATH = Path(__file__).resolve().parent.parent / "configs" / "gates.yaml"


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    content_gate_field: str = "gateId"


@dataclass(frozen=True)
class ContentOption:
    id: str
    gate_id: str
    title: str
    description: str = ""


@dataclass(frozen=True)
class GateConfig:
    chatbot: str
    image: str
    recipe: str
    content: tuple[ContentOption, ...] = ()


def load_settings() -> Settings:
    """Read settings from the environment.

    Raises:
        ConfigurationError: if LAYER_API_KEY is unset or empty, or
            LAYER_TIMEOUT is not a positive number.
    """
    api_key = os.getenv("LAYER_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("LAYER_API_KEY environment variable is required")

    raw_timeout = os.getenv("LAYER_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as e:
        raise ConfigurationError(f"LAYER_TIMEOUT must be a number, got {raw_timeout!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"LAYER_TIMEOUT must be positive, got {timeout}")

    return Settings(
        api_key=api_key,
        base_url=os.getenv("LAYER_API_URL") or DEFAULT_BASE_URL,
        timeout=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        content_gate_field=os.getenv("CONTENT_GATE_FIELD") or "gateId",
    )


def load_cfg(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_gates(path: str | Path | None = None) -> GateConfig:
    """Load the fixed gate identifiers for each app.

    Args:
        path: YAML file; defaults to LAYER_GATES_CONFIG or the packaged gates.yaml.
    """
    path = path or os.getenv("LAYER_GATES_CONFIG") or DEFAULT_GATES_PATH
    try:
        cfg = load_cfg(path)
        options = tuple(
            ContentOption(
                id=str(opt["id"]),
                gate_id=str(opt["gate_id"]),
                title=str(opt.get("title", opt["id"])),
                description=str(opt.get("description", "")),
            )
            for opt in cfg.get("content", []) or []
        )
        return GateConfig(
            chatbot=str(cfg["chatbot"]["gate_id"]),
            image=str(cfg["image"]["gate_id"]),
            recipe=str(cfg["recipe"]["gate_id"]),
            content=options,
        )
    except (OSError, yaml.YAMLError, KeyError, TypeError) as e:
        raise ConfigurationError(f"Invalid gate configuration at {path}: {e}") from e
