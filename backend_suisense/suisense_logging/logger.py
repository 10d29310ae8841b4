"""
structlog setup for SuiSense.

Every record carries timestamp, level and logger; JSON output names the
event event_type. Two processors
are specific to this service: secrets that reach a log call (the LLM API key,
Authorization headers) are masked, and long free-text fields such as raw Move
error output or LLM explanations are clipped to LOG_MAX_FIELD_CHARS.

LOG_LEVEL (default INFO), LOG_FORMAT (json | console), LOG_MAX_FIELD_CHARS
(default 2000). Imports nothing from backend_suisense.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

REDACTED = "[redacted]"
SECRET_KEYS = frozenset({"api_key", "openai_api_key", "authorization", "headers"})

DEFAULT_MAX_FIELD_CHARS = 2000


def _max_field_chars() -> int:
    raw = os.getenv("LOG_MAX_FIELD_CHARS", "").strip()
    return int(raw) if raw.isdigit() and int(raw) > 0 else DEFAULT_MAX_FIELD_CHARS


def rename_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type."""
    if "event" in event_dict:
        event_dict.setdefault("event_type", event_dict.pop("event"))
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def clip_long_text(max_chars: int):
    """Processor factory: truncate str values longer than max_chars, noting how much was cut."""

    def _clip(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_chars:
                event_dict[key] = f"{value[:max_chars]}...(+{len(value) - max_chars} chars)"
        return event_dict

    return _clip


def configure_logging() -> None:
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    json_output = os.getenv("LOG_FORMAT", "json").strip().lower() == "json"

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
        redact_secrets,
        clip_long_text(_max_field_chars()),
    ]
    if json_output:
        processors += [rename_event, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name).bind(logger=name)


def bind_tx(tx_digest: str, network: str | None = None) -> structlog.BoundLogger:
    """Request-scoped logger for one transaction digest (and network, when given)."""
    log = get_logger("backend_suisense.api").bind(tx_digest=tx_digest)
    return log.bind(network=network) if network else log
