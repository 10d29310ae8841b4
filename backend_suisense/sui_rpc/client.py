"""
Sui fullnode JSON-RPC client: fetch a transaction block by digest.

Calls suix_getTransactionBlock with every show-option the fact extractor
reads; nodes that predate the suix_ namespace answer -32601 (method not
found) and are retried once with sui_getTransactionBlock. Any other failure
is raised as RpcError for the caller to surface.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from backend_suisense.config.env import get_rpc_timeout_sec, resolve_rpc_url
from backend_suisense.core.exceptions import RpcError
from backend_suisense.suisense_logging import get_logger

logger = get_logger(__name__)

METHOD_GET_TX_BLOCK = "suix_getTransactionBlock"
METHOD_GET_TX_BLOCK_LEGACY = "sui_getTransactionBlock"
JSONRPC_METHOD_NOT_FOUND = -32601

TX_BLOCK_OPTIONS: dict[str, bool] = {
    "showInput": True,
    "showEffects": True,
    "showEvents": True,
    "showBalanceChanges": True,
    "showObjectChanges": True,
}

_request_ids = itertools.count(1)


def _build_rpc_body(method: str, params: list[Any]) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": method,
        "params": params,
    }


def rpc_call(
    client: httpx.Client,
    rpc_url: str,
    method: str,
    params: list[Any],
) -> dict[str, Any]:
    """Perform one JSON-RPC call; raise RpcError on transport, HTTP or RPC error."""
    body = _build_rpc_body(method, params)
    try:
        resp = client.post(rpc_url, json=body)
    except httpx.HTTPError as e:
        raise RpcError(f"Sui RPC transport error: {e}") from e

    if resp.is_error:
        raise RpcError(resp.text or f"HTTP {resp.status_code}", resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise RpcError("Sui RPC returned invalid JSON", resp.status_code) from e
    if not isinstance(data, dict):
        raise RpcError("Sui RPC returned a non-object response", resp.status_code)

    err = data.get("error")
    if err:
        err_obj = err if isinstance(err, dict) else {"message": str(err)}
        code = err_obj.get("code")
        raise RpcError(
            err_obj.get("message") or "RPC error",
            code if isinstance(code, int) else None,
            err_obj,
        )
    result = data.get("result")
    return result if isinstance(result, dict) else {}


def fetch_transaction_block(
    tx_digest: str,
    network: str | None = None,
    rpc_url: str | None = None,
    *,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """
    Fetch the full transaction block for tx_digest.

    rpc_url / network are resolved via config (explicit URL > SUI_RPC_URL >
    network fullnode). Pass client to reuse a connection pool or inject a
    transport in tests.
    """
    resolved = resolve_rpc_url(network, rpc_url)
    params: list[Any] = [tx_digest, TX_BLOCK_OPTIONS]
    own_client = client is None
    http = client or httpx.Client(timeout=httpx.Timeout(get_rpc_timeout_sec()))
    try:
        try:
            result = rpc_call(http, resolved, METHOD_GET_TX_BLOCK, params)
        except RpcError as e:
            if e.code != JSONRPC_METHOD_NOT_FOUND:
                raise
            logger.info(
                "sui_rpc_method_fallback",
                tx_digest=tx_digest,
                method=METHOD_GET_TX_BLOCK_LEGACY,
            )
            result = rpc_call(http, resolved, METHOD_GET_TX_BLOCK_LEGACY, params)
    except RpcError as e:
        logger.warning(
            "sui_rpc_fetch_failed",
            tx_digest=tx_digest,
            rpc_url=resolved,
            code=e.code,
            error=e.message,
        )
        raise
    finally:
        if own_client:
            http.close()

    logger.info("sui_rpc_tx_fetched", tx_digest=tx_digest, rpc_url=resolved)
    return result
