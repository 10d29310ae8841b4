"""
Explanation anchoring: content hash plus Walrus blob storage.

Every explanation payload gets a SHA-256 content hash over its canonical
JSON encoding; the same bytes are stored on Walrus through an HTTP
publisher when WALRUS_PUBLISHER_URL is configured. Writing the on-chain
receipt object needs a signer and is not done here, so receipt_id is None.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from backend_suisense.config.env import (
    get_rpc_timeout_sec,
    get_walrus_deletable,
    get_walrus_epochs,
    get_walrus_publisher_url,
)
from backend_suisense.core.exceptions import AnchorError
from backend_suisense.suisense_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnchorResult:
    walrus_blob_id: str | None
    content_hash: str
    receipt_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "walrus_blob_id": self.walrus_blob_id,
            "content_hash": self.content_hash,
            "receipt_id": self.receipt_id,
        }


class Anchorer(Protocol):
    def anchor(self, tx_digest: str, payload: dict[str, Any], created_at_ms: int) -> AnchorResult:
        ...


def canonical_json_bytes(payload: dict[str, Any]) -> bytes:
    """Stable encoding: sorted keys, no whitespace, UTF-8."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def content_hash(payload: dict[str, Any]) -> str:
    """Hex SHA-256 of the canonical JSON encoding."""
    return hashlib.sha256(canonical_json_bytes(payload)).hexdigest()


def _blob_id_from_response(data: Any) -> str | None:
    """Walrus publisher answers with newlyCreated.blobObject.blobId or alreadyCertified.blobId."""
    if not isinstance(data, dict):
        return None
    created = data.get("newlyCreated")
    if isinstance(created, dict):
        blob = created.get("blobObject")
        if isinstance(blob, dict) and blob.get("blobId"):
            return str(blob["blobId"])
    certified = data.get("alreadyCertified")
    if isinstance(certified, dict) and certified.get("blobId"):
        return str(certified["blobId"])
    return None


class DigestOnlyAnchorer:
    """No blob store configured: hash only."""

    def anchor(self, tx_digest: str, payload: dict[str, Any], created_at_ms: int) -> AnchorResult:
        digest = content_hash(payload)
        logger.info("anchor_digest_only", tx_digest=tx_digest, content_hash=digest)
        return AnchorResult(walrus_blob_id=None, content_hash=digest)


class WalrusPublisherAnchorer:
    """Store explanation payloads via a Walrus HTTP publisher (PUT /v1/blobs)."""

    def __init__(
        self,
        publisher_url: str,
        *,
        epochs: int = 1,
        deletable: bool = True,
        timeout_sec: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not publisher_url.strip():
            raise ValueError("publisher_url must be non-empty")
        if epochs < 1:
            raise ValueError("epochs must be >= 1")
        self._publisher_url = publisher_url.rstrip("/")
        self._epochs = epochs
        self._deletable = deletable
        self._timeout_sec = timeout_sec
        self._client = client

    def _store(self, blob: bytes) -> str:
        params: dict[str, Any] = {"epochs": self._epochs}
        if self._deletable:
            params["deletable"] = "true"
        url = f"{self._publisher_url}/v1/blobs"
        own_client = self._client is None
        client = self._client or httpx.Client(timeout=httpx.Timeout(self._timeout_sec))
        try:
            resp = client.put(url, params=params, content=blob)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise AnchorError(f"Walrus publisher request failed: {e}") from e
        except ValueError as e:
            raise AnchorError("Walrus publisher returned invalid JSON") from e
        finally:
            if own_client:
                client.close()

        blob_id = _blob_id_from_response(data)
        if blob_id is None:
            raise AnchorError("Walrus publisher response has no blob id")
        return blob_id

    def anchor(self, tx_digest: str, payload: dict[str, Any], created_at_ms: int) -> AnchorResult:
        blob = canonical_json_bytes(payload)
        digest = hashlib.sha256(blob).hexdigest()
        blob_id = self._store(blob)
        logger.info(
            "anchor_blob_stored",
            tx_digest=tx_digest,
            walrus_blob_id=blob_id,
            content_hash=digest,
            created_at_ms=created_at_ms,
            epochs=self._epochs,
        )
        return AnchorResult(walrus_blob_id=blob_id, content_hash=digest)


def get_anchorer() -> Anchorer:
    """Walrus anchorer when WALRUS_PUBLISHER_URL is set, else hash-only."""
    publisher = get_walrus_publisher_url()
    if not publisher:
        return DigestOnlyAnchorer()
    return WalrusPublisherAnchorer(
        publisher,
        epochs=get_walrus_epochs(),
        deletable=get_walrus_deletable(),
        timeout_sec=get_rpc_timeout_sec(),
    )
