"""
Risk engine: derive risk level and confidence from transaction facts.

Value leaving an owner (outgoing balances or object transfers) makes a
transaction MEDIUM; the same movement while touching shared objects makes
it HIGH. Confidence reflects how much the facts actually tell us: no Move
calls -> low; calls plus observed asset movement -> high; calls alone ->
medium.
"""

from __future__ import annotations

from typing import NamedTuple

from backend_suisense.suisense_logging import get_logger
from backend_suisense.sui_rpc.models import TransactionFacts

logger = get_logger(__name__)

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"

CONFIDENCE_LOW = "low"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_HIGH = "high"


class RiskAssessment(NamedTuple):
    risk: str
    confidence: str


def infer_risk(facts: TransactionFacts) -> RiskAssessment:
    """Return (risk, confidence); both in {"low", "medium", "high"}."""
    assets = facts.assets
    has_out = bool(assets.outgoing)
    has_transfers = bool(assets.transfers)
    has_in = bool(assets.incoming)
    moves_value = has_out or has_transfers

    risk = RISK_LOW
    if moves_value:
        risk = RISK_MEDIUM
    if facts.shared_objects and moves_value:
        risk = RISK_HIGH

    if not facts.called_operations:
        confidence = CONFIDENCE_LOW
    elif moves_value or has_in:
        confidence = CONFIDENCE_HIGH
    else:
        confidence = CONFIDENCE_MEDIUM

    logger.debug(
        "risk_engine_result",
        tx_digest=facts.tx_digest,
        shared_objects=len(facts.shared_objects),
        has_out=has_out,
        has_transfers=has_transfers,
        risk=risk,
        confidence=confidence,
    )
    return RiskAssessment(risk, confidence)
