"""
Pytest fixtures for SuiSense tests. Clears service env so tests never hit a real
fullnode, LLM or blob store; provides a realistic transaction-block payload.
"""

from __future__ import annotations

import copy

import pytest

SERVICE_ENV_VARS = (
    "SUI_NETWORK",
    "SUI_RPC_URL",
    "SUI_RPC_TIMEOUT_SEC",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_TIMEOUT_SEC",
    "WALRUS_PUBLISHER_URL",
    "WALRUS_EPOCHS",
    "WALRUS_DELETABLE",
    "API_HOST",
    "API_PORT",
    "PORT",
    "CORS_ALLOW_ORIGINS",
)

SENDER = "0xa11ce"
RECIPIENT = "0xb0b"
TX_DIGEST = "9sBGxGX3k9mQc2cYXr2m8YjzYkQHxZ7f3B5nY1W4uT2a"

# suix_getTransactionBlock result: swap on a shared pool, then coin join;
# one object transferred, SUI out, USDC in.
SAMPLE_TX_BLOCK = {
    "digest": TX_DIGEST,
    "transaction": {
        "data": {
            "sender": SENDER,
            "transaction": {
                "kind": "ProgrammableTransaction",
                "inputs": [
                    {"type": "pure", "valueType": "u64", "value": "1000"},
                    {
                        "type": "object",
                        "objectType": "sharedObject",
                        "objectId": "0xpool",
                        "initialSharedVersion": "7",
                        "mutable": True,
                    },
                    {
                        "type": "object",
                        "objectType": "immOrOwnedObject",
                        "objectId": "0xcoin1",
                        "version": "3",
                        "digest": "4Dj3bW4LVqXvB8fYoZ1gYk5",
                    },
                ],
                "transactions": [
                    {"MoveCall": {"package": "0xdee9", "module": "pool", "function": "swap"}},
                    {"SplitCoins": ["GasCoin", [{"Input": 0}]]},
                    {"MoveCall": {"package": "0x2", "module": "coin", "function": "join"}},
                ],
            },
        }
    },
    "effects": {"status": {"status": "success"}},
    "objectChanges": [
        {
            "type": "mutated",
            "sender": SENDER,
            "objectId": "0xpool",
            "objectType": "0xdee9::pool::Pool",
            "owner": {"Shared": {"initial_shared_version": 7}},
        },
        {
            "type": "mutated",
            "sender": SENDER,
            "objectId": "0xcoin1",
            "objectType": "0x2::coin::Coin<0x2::sui::SUI>",
            "owner": {"AddressOwner": SENDER},
        },
        {
            "type": "transferred",
            "sender": SENDER,
            "recipient": {"AddressOwner": RECIPIENT},
            "objectId": "0xnft",
            "objectType": "0xabc::nft::Nft",
        },
    ],
    "balanceChanges": [
        {"owner": {"AddressOwner": SENDER}, "coinType": "0x2::sui::SUI", "amount": "-1000"},
        {"owner": {"AddressOwner": SENDER}, "coinType": "0xusdc::usdc::USDC", "amount": "2500"},
    ],
}


@pytest.fixture(autouse=True)
def clean_service_env(monkeypatch):
    """Unset every service env var so defaults apply and no remote service is enabled."""
    for name in SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tx_block():
    """Fresh deep copy of the sample transaction block (tests may mutate it)."""
    return copy.deepcopy(SAMPLE_TX_BLOCK)


@pytest.fixture
def client():
    """FastAPI TestClient; dependency overrides are cleared after each test."""
    from fastapi.testclient import TestClient

    from backend_suisense.api_server.server import app

    yield TestClient(app)
    app.dependency_overrides.clear()
