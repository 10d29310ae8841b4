"""
Anchoring: content-hash and store explanation payloads.
"""

from backend_suisense.anchoring.receipts import (
    AnchorResult,
    Anchorer,
    DigestOnlyAnchorer,
    WalrusPublisherAnchorer,
    content_hash,
    get_anchorer,
)

__all__ = [
    "AnchorResult",
    "Anchorer",
    "DigestOnlyAnchorer",
    "WalrusPublisherAnchorer",
    "content_hash",
    "get_anchorer",
]
