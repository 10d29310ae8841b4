"""
Environment variable loading and validation for SuiSense.

- SUI_NETWORK: devnet | testnet | mainnet | localnet (default: devnet)
- SUI_RPC_URL: fullnode endpoint; overrides the network default
- SUI_RPC_TIMEOUT_SEC: HTTP timeout for fullnode calls
- OPENAI_API_KEY / OPENAI_MODEL / OPENAI_BASE_URL / OPENAI_TIMEOUT_SEC: explainer
- WALRUS_PUBLISHER_URL / WALRUS_EPOCHS / WALRUS_DELETABLE: explanation blob storage
- API_HOST / API_PORT (PORT accepted as fallback)
- CORS_ALLOW_ORIGINS: comma-separated browser origins (default: any)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from backend_suisense.core.exceptions import ConfigError

# Project root: config is backend_suisense/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_NETWORK = "devnet"
FULLNODE_URLS = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com"


def load_suisense_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def get_sui_network() -> str:
    """Return SUI_NETWORK from env, lowercased. Default: devnet."""
    load_suisense_env()
    return _env_str("SUI_NETWORK", DEFAULT_NETWORK).lower()


def resolve_rpc_url(network: str | None = None, rpc_url: str | None = None) -> str:
    """
    Resolve the fullnode RPC URL.

    Order: explicit rpc_url > SUI_RPC_URL > known network URL (explicit network,
    then SUI_NETWORK). Unknown network names fall back to testnet.
    """
    if rpc_url and rpc_url.strip():
        return rpc_url.strip()
    load_suisense_env()
    env_url = _env_str("SUI_RPC_URL")
    if env_url:
        return env_url
    net = (network or "").strip().lower() or get_sui_network()
    return FULLNODE_URLS.get(net, FULLNODE_URLS["testnet"])


def get_rpc_timeout_sec() -> float:
    load_suisense_env()
    return _env_float("SUI_RPC_TIMEOUT_SEC", 30.0)


def get_openai_api_key() -> str | None:
    """Return OPENAI_API_KEY or None; no key means the LLM explainer is disabled."""
    load_suisense_env()
    return _env_str("OPENAI_API_KEY") or None


def get_openai_model() -> str:
    load_suisense_env()
    return _env_str("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)


def get_openai_base_url() -> str:
    load_suisense_env()
    return _env_str("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL).rstrip("/")


def get_openai_timeout_sec() -> float:
    load_suisense_env()
    return _env_float("OPENAI_TIMEOUT_SEC", 30.0)


def get_walrus_publisher_url() -> str | None:
    """Return WALRUS_PUBLISHER_URL or None; None disables blob storage."""
    load_suisense_env()
    url = _env_str("WALRUS_PUBLISHER_URL")
    return url.rstrip("/") if url else None


def get_walrus_epochs() -> int:
    load_suisense_env()
    epochs = _env_int("WALRUS_EPOCHS", 1)
    if epochs < 1:
        raise ConfigError(f"WALRUS_EPOCHS must be >= 1, got {epochs}")
    return epochs


def get_walrus_deletable() -> bool:
    """Blobs are deletable unless WALRUS_DELETABLE is literally 'false'."""
    load_suisense_env()
    return _env_str("WALRUS_DELETABLE", "true").lower() != "false"


def get_api_host() -> str:
    load_suisense_env()
    return _env_str("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    load_suisense_env()
    if _env_str("API_PORT"):
        return _env_int("API_PORT", 8000)
    return _env_int("PORT", 8000)


def get_cors_allow_origins() -> list[str]:
    """Comma-separated CORS_ALLOW_ORIGINS; unset or empty allows any origin."""
    load_suisense_env()
    origins = [o.strip() for o in _env_str("CORS_ALLOW_ORIGINS").split(",") if o.strip()]
    return origins or ["*"]
