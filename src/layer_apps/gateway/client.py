"""Async client for the Layer AI-routing gateway.

One normalized entry point per generation kind:
- chat(gate_id, messages) -> text content
- image(gate_id, prompt)  -> first image URL

Every call makes exactly one POST to ``{base_url}/v2/complete``; there is no
retry, caching or batching. Any failure surfaces as ``GatewayError``.
"""
from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping

import httpx

from layer_apps.common.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings
from layer_apps.common.errors import ConfigurationError, GatewayError
from layer_apps.common.schema import GenerationRequest, GenerationResult

LOGGER = logging.getLogger("layer_apps.gateway")

COMPLETE_PATH = "/v2/complete"


class LayerClient:
    """Gateway adapter bound to an API key and base URL.

    Holds only immutable configuration, so one instance can serve many
    concurrent requests.

    Usage:
        client = LayerClient(api_key="...")
        result = await client.chat(gate_id, [{"role": "user", "content": "hi"}])
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("LAYER_API_KEY environment variable is required")
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayerClient":
        return cls(api_key=settings.api_key, base_url=settings.base_url, timeout=settings.timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return f"LayerClient(base_url={self._base_url!r}, timeout={self._timeout})"

    async def chat(self, gate_id: str, messages: Iterable[Mapping[str, str]]) -> GenerationResult:
        """
        Run a chat-style generation.

        Args:
            gate_id: Gate identifier selecting the routing policy.
            messages: Ordered {role, content} messages.

        Returns:
            Result whose content is the generated text.
        """
        request = GenerationRequest(
            gate_id=gate_id,
            kind="chat",
            messages=tuple({"role": m["role"], "content": m["content"]} for m in messages),
        )
        data = await self._send(request)
        content = data.get("content")
        if not isinstance(content, str) or not content:
            raise GatewayError("Gateway response missing content")
        return GenerationResult(content=content, model=_model(data), cost=_cost(data))

    async def image(self, gate_id: str, prompt: str) -> GenerationResult:
        """
        Run an image generation.

        Args:
            gate_id: Gate identifier selecting the routing policy.
            prompt: Image description.

        Returns:
            Result whose content is the first image URL.

        Raises:
            GatewayError: when the gateway returns no images.
        """
        request = GenerationRequest(gate_id=gate_id, kind="image", prompt=prompt)
        data = await self._send(request)
        urls = _image_urls(data.get("images"))
        if not urls:
            raise GatewayError("Gateway returned no images")
        return GenerationResult(content=urls[0], model=_model(data), cost=_cost(data), images=tuple(urls))

    async def _send(self, request: GenerationRequest) -> dict[str, Any]:
        payload = request.to_payload()
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        LOGGER.info(
            "gateway request gate=%s type=%s messages=%d",
            request.gate_id,
            request.kind,
            len(payload["data"]["messages"]),
        )

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                r = await client.post(COMPLETE_PATH, headers=headers, json=payload)
        except httpx.HTTPError as e:
            LOGGER.error("gateway request failed gate=%s: %s", request.gate_id, e)
            raise GatewayError(f"Gateway request failed: {e}") from e

        if not r.is_success:
            message = _error_detail(r)
            LOGGER.error("gateway error gate=%s status=%s: %s", request.gate_id, r.status_code, message)
            raise GatewayError(f"Gateway error {r.status_code}: {message}", status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise GatewayError("Malformed gateway response", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise GatewayError("Malformed gateway response", status_code=r.status_code)

        LOGGER.info("gateway response gate=%s model=%s cost=%s", request.gate_id, data.get("model"), data.get("cost"))
        return data


def _model(data: Mapping[str, Any]) -> str:
    model = data.get("model")
    return str(model) if model else "unknown"


def _cost(data: Mapping[str, Any]) -> float:
    try:
        return round(float(data.get("cost") or 0.0), 6)
    except (TypeError, ValueError) as e:
        raise GatewayError(f"Malformed cost in gateway response: {data.get('cost')!r}") from e


def _image_urls(images: Any) -> list[str]:
    """Collect URLs from image descriptors ({"url": ...} or bare strings)."""
    if not isinstance(images, list):
        return []
    urls: list[str] = []
    for item in images:
        url = item.get("url") if isinstance(item, dict) else item
        if isinstance(url, str) and url:
            urls.append(url)
    return urls


def _error_detail(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text[:200] or r.reason_phrase
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return r.reason_phrase
