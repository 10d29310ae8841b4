"""
Application-level exceptions.

The extraction and classification core never raises on malformed input;
these are reserved for collaborators that talk to the outside world
(fullnode RPC, blob store) and for invalid configuration. The API server
maps them to HTTP status codes.
"""

from __future__ import annotations

from typing import Any


class SuiSenseError(Exception):
    """Base class for all SuiSense errors."""


class ConfigError(SuiSenseError):
    """An environment setting is present but invalid."""


class RpcError(SuiSenseError):
    """
    Fullnode call failed: transport error, non-2xx HTTP status or JSON-RPC error.

    code is the HTTP status or JSON-RPC error code when known; data holds the
    raw JSON-RPC error object.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


class AnchorError(SuiSenseError):
    """Storing the explanation payload failed."""
