"""
Sui RPC package.

Fetches transaction blocks from a Sui fullnode and normalizes the raw
payload into TransactionFacts for the analytics layer.
"""

from backend_suisense.sui_rpc.client import fetch_transaction_block
from backend_suisense.sui_rpc.models import (
    AssetFlows,
    BalanceEntry,
    ObjectInput,
    TransactionFacts,
    Transfer,
)
from backend_suisense.sui_rpc.owner import format_owner, parse_owner
from backend_suisense.sui_rpc.parser import extract_facts

__all__ = [
    "AssetFlows",
    "BalanceEntry",
    "ObjectInput",
    "TransactionFacts",
    "Transfer",
    "extract_facts",
    "fetch_transaction_block",
    "format_owner",
    "parse_owner",
]
