"""
Analytics pipeline: raw transaction block -> facts with intent and risk.

Single entrypoint for the API server: extract_facts, infer_intent,
infer_risk; returns a new TransactionFacts with the inference fields set.
"""

from __future__ import annotations

from typing import Any

from backend_suisense.analytics.intent_engine import infer_intent
from backend_suisense.analytics.risk_engine import infer_risk
from backend_suisense.suisense_logging import get_logger
from backend_suisense.sui_rpc.models import TransactionFacts
from backend_suisense.sui_rpc.parser import extract_facts

logger = get_logger(__name__)


def analyze_transaction(raw: Any) -> TransactionFacts:
    """
    Run full analysis for one transaction block: extract -> intent -> risk.

    Safe to call with partial or malformed payloads; extraction degrades to
    defaults and inference still runs.
    """
    facts = extract_facts(raw)
    intent = infer_intent(facts)
    risk, confidence = infer_risk(facts)
    analyzed = facts.with_inference(intent=intent, risk=risk, confidence=confidence)
    logger.info(
        "tx_analysis_done",
        tx_digest=analyzed.tx_digest,
        intent=intent,
        risk=risk,
        confidence=confidence,
    )
    return analyzed
