"""
Deterministic explanations used when the LLM explainer is disabled or fails.

Input is the JSON dict form of TransactionFacts / ErrorSummary so the same
payload can be fed to either explainer.
"""

from __future__ import annotations

from typing import Any


def explain_tx_fallback(facts: dict[str, Any]) -> str:
    intent = facts.get("intent") or "Intent unknown"
    functions = facts.get("called_operations") or []
    assets = facts.get("assets") or {}
    asset_in = assets.get("in") or []
    asset_out = assets.get("out") or []
    transfers = assets.get("transfers") or []
    shared = facts.get("shared_objects") or []

    parts = [f"Intent: {intent}."]
    if functions:
        parts.append(f"Functions called: {', '.join(functions)}.")
    if asset_in or asset_out:
        parts.append(f"Balance changes observed (in: {len(asset_in)}, out: {len(asset_out)}).")
    if transfers:
        parts.append(f"Object transfers: {len(transfers)}.")
    if shared:
        parts.append(f"Shared objects touched: {len(shared)}.")
    if not functions and not asset_in and not asset_out and not transfers:
        parts.append("Insufficient data to determine detailed behavior.")
    return " ".join(parts)


def explain_error_fallback(summary: dict[str, Any]) -> str:
    parts = [f"{summary.get('summary') or 'Move error detected'}."]
    if summary.get("likely_cause"):
        parts.append(summary["likely_cause"])
    stack = summary.get("move_stack") or []
    if stack:
        parts.append(f"Stack frames detected: {len(stack)}.")
    abort_code = summary.get("abort_code")
    if abort_code and abort_code != "unknown":
        parts.append(f"Abort code: {abort_code}.")
    return " ".join(parts)
