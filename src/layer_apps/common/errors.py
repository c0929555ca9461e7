"""Error types shared by the gateway client and the apps."""
from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Required configuration is missing or unreadable. Fatal at startup."""


class GatewayError(RuntimeError):
    """The gateway call failed or returned something we cannot use."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidRequest(ValueError):
    """Client payload failed validation; rendered as a 400."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
