"""
Move error diagnostics: classify raw error output into categories with advice.
"""

from backend_suisense.diagnostics.error_classifier import ErrorSummary, detect_category, parse_error

__all__ = ["ErrorSummary", "detect_category", "parse_error"]
