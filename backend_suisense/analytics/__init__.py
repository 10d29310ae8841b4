"""
SuiSense analytics: intent and risk inference over transaction facts.

Modules: intent_engine, risk_engine, analytics_pipeline.
"""

from backend_suisense.analytics.analytics_pipeline import analyze_transaction
from backend_suisense.analytics.intent_engine import infer_intent
from backend_suisense.analytics.risk_engine import RiskAssessment, infer_risk

__all__ = [
    "RiskAssessment",
    "analyze_transaction",
    "infer_intent",
    "infer_risk",
]
