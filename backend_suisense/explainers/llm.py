"""
LLM explainer: OpenAI-compatible chat completions over HTTP.

The model only sees the JSON facts/summary and is told not to invent
values. Every failure mode (no key, bad timeout setting, HTTP error, bad
payload, timeout) returns None so callers fall back to the deterministic
text.
"""

from __future__ import annotations

import json
from typing import Any

import requests

from backend_suisense.config.env import (
    get_openai_api_key,
    get_openai_base_url,
    get_openai_model,
    get_openai_timeout_sec,
)
from backend_suisense.core.exceptions import ConfigError
from backend_suisense.suisense_logging import get_logger

logger = get_logger(__name__)

TEMPERATURE = 0.2

TX_SYSTEM_PROMPT = (
    "You are a transaction explainer for Sui. Only use the provided JSON facts. "
    "Do not invent amounts or objects. If a value is unknown, say it is unknown. "
    "Return a concise paragraph."
)
ERROR_SYSTEM_PROMPT = (
    "You explain Move errors in plain English. Only use the provided JSON. "
    "Do not invent details. Return 2-4 sentences maximum."
)


def call_chat_completion(system_prompt: str, user_payload: dict[str, Any]) -> str | None:
    """Return the trimmed assistant message, or None if the LLM is unavailable."""
    api_key = get_openai_api_key()
    if not api_key:
        return None

    url = f"{get_openai_base_url()}/v1/chat/completions"
    body = {
        "model": get_openai_model(),
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": json.dumps(user_payload)},
        ],
        "temperature": TEMPERATURE,
    }
    try:
        timeout_sec = get_openai_timeout_sec()
    except ConfigError as e:
        logger.warning("llm_config_invalid", error=str(e))
        return None
    try:
        r = requests.post(
            url,
            json=body,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout_sec,
        )
    except requests.RequestException as e:
        logger.warning("llm_request_failed", url=url, error=str(e))
        return None
    if not r.ok:
        logger.warning("llm_http_error", url=url, status_code=r.status_code)
        return None

    try:
        data = r.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning("llm_bad_response", url=url, error=str(e))
        return None
    if not isinstance(content, str):
        return None
    return content.strip()


def explain_tx_with_llm(facts: dict[str, Any]) -> str | None:
    return call_chat_completion(TX_SYSTEM_PROMPT, facts)


def explain_error_with_llm(summary: dict[str, Any]) -> str | None:
    return call_chat_completion(ERROR_SYSTEM_PROMPT, summary)
