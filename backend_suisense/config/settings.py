"""
Application settings snapshot.

Collects the env.py getters into one frozen object so the API server can
log the effective configuration at startup without leaking secrets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend_suisense.config import env


@dataclass(frozen=True)
class Settings:
    sui_network: str
    sui_rpc_url: str
    rpc_timeout_sec: float
    openai_api_key: str | None
    openai_model: str
    openai_base_url: str
    openai_timeout_sec: float
    walrus_publisher_url: str | None
    walrus_epochs: int
    walrus_deletable: bool
    api_host: str
    api_port: int
    cors_allow_origins: tuple[str, ...]

    def to_log_dict(self) -> dict[str, Any]:
        """Loggable view: API key reduced to a presence flag."""
        return {
            "sui_network": self.sui_network,
            "sui_rpc_url": self.sui_rpc_url,
            "rpc_timeout_sec": self.rpc_timeout_sec,
            "llm_enabled": self.openai_api_key is not None,
            "openai_model": self.openai_model,
            "walrus_enabled": self.walrus_publisher_url is not None,
            "walrus_epochs": self.walrus_epochs,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "cors_allow_origins": list(self.cors_allow_origins),
        }


def get_settings() -> Settings:
    """Read the current environment (and .env) into a Settings snapshot."""
    network = env.get_sui_network()
    return Settings(
        sui_network=network,
        sui_rpc_url=env.resolve_rpc_url(network),
        rpc_timeout_sec=env.get_rpc_timeout_sec(),
        openai_api_key=env.get_openai_api_key(),
        openai_model=env.get_openai_model(),
        openai_base_url=env.get_openai_base_url(),
        openai_timeout_sec=env.get_openai_timeout_sec(),
        walrus_publisher_url=env.get_walrus_publisher_url(),
        walrus_epochs=env.get_walrus_epochs(),
        walrus_deletable=env.get_walrus_deletable(),
        api_host=env.get_api_host(),
        api_port=env.get_api_port(),
        cors_allow_origins=tuple(env.get_cors_allow_origins()),
    )
