"""
Backend SuiSense: explainable Sui transactions and Move errors.

Fetches transaction blocks from a Sui fullnode, normalizes them into
transaction facts, infers intent and risk, classifies raw Move error
output, and serves human-readable explanations over HTTP.
"""

__version__ = "0.1.0"
