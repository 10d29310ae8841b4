"""
Explainers: LLM-written explanations with deterministic fallbacks.
"""

from backend_suisense.explainers.fallback import explain_error_fallback, explain_tx_fallback
from backend_suisense.explainers.llm import explain_error_with_llm, explain_tx_with_llm


def explain_tx(facts: dict) -> str:
    """LLM explanation of transaction facts, or the fallback text."""
    return explain_tx_with_llm(facts) or explain_tx_fallback(facts)


def explain_error(summary: dict) -> str:
    """LLM explanation of an error summary, or the fallback text."""
    return explain_error_with_llm(summary) or explain_error_fallback(summary)


__all__ = [
    "explain_error",
    "explain_error_fallback",
    "explain_error_with_llm",
    "explain_tx",
    "explain_tx_fallback",
    "explain_tx_with_llm",
]
