"""
Intent engine: one human-readable label for what a transaction does.

Priority: Move calls > object transfers > balance movements > unknown.
Multi-call labels list at most MAX_LISTED_CALLS operations; the full list
stays available on TransactionFacts.called_operations.
"""

from __future__ import annotations

from backend_suisense.sui_rpc.models import TransactionFacts

MAX_LISTED_CALLS = 4

INTENT_TRANSFERS = "Transfers objects"
INTENT_MOVES_ASSETS = "Moves assets"
INTENT_UNKNOWN = "Intent unknown (insufficient data)"


def infer_intent(facts: TransactionFacts) -> str:
    calls = facts.called_operations
    if len(calls) == 1:
        return f"Calls {calls[0]}"
    if len(calls) > 1:
        return "Calls Move functions: " + ", ".join(calls[:MAX_LISTED_CALLS])
    if facts.assets.transfers:
        return INTENT_TRANSFERS
    if facts.assets.incoming or facts.assets.outgoing:
        return INTENT_MOVES_ASSETS
    return INTENT_UNKNOWN
