"""
Move error classifier: raw CLI / RPC error text -> ErrorSummary.

Pure and deterministic. Category comes from the ordered rules in
categories.py; abort code, stack frames (0x..::module::function) and
modules (0x..::module) are pulled out with regexes. Never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from backend_suisense.diagnostics.categories import (
    CATEGORY_ADVICE,
    CATEGORY_RULES,
    MOVE_ABORT,
    UNKNOWN,
)
from backend_suisense.suisense_logging import get_logger
from backend_suisense.utils.ordering import unique_in_order

logger = get_logger(__name__)

MOVE_FN_RE = re.compile(r"0x[0-9a-fA-F]+::[A-Za-z0-9_]+::[A-Za-z0-9_]+")
MODULE_RE = re.compile(r"0x[0-9a-fA-F]+::[A-Za-z0-9_]+")
ABORT_CODE_RE = re.compile(r"abort\s*code\s*[:=]\s*(0x[0-9a-fA-F]+|\d+)", re.IGNORECASE)

CONFIDENCE_LOW = "low"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_HIGH = "high"


@dataclass(frozen=True)
class ErrorSummary:
    """Categorized, explained view of one raw Move error."""

    category: str
    summary: str
    likely_cause: str
    fix_steps: tuple[str, ...]
    confidence: str
    abort_code: str
    move_stack: tuple[str, ...]
    modules: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "summary": self.summary,
            "likely_cause": self.likely_cause,
            "fix_steps": list(self.fix_steps),
            "confidence": self.confidence,
            "abort_code": self.abort_code,
            "move_stack": list(self.move_stack),
            "modules": list(self.modules),
        }


def detect_category(raw_text: str) -> str:
    lowered = raw_text.lower()
    for matches, category in CATEGORY_RULES:
        if matches(lowered):
            return category
    return UNKNOWN


def _confidence(category: str, move_stack: tuple[str, ...]) -> str:
    if category == UNKNOWN:
        return CONFIDENCE_LOW
    # abort with no located call site
    if category == MOVE_ABORT and not move_stack:
        return CONFIDENCE_MEDIUM
    return CONFIDENCE_HIGH


def parse_error(raw_text: str) -> ErrorSummary:
    text = raw_text if isinstance(raw_text, str) else str(raw_text or "")
    category = detect_category(text)
    cause, fixes = CATEGORY_ADVICE[category]

    abort_match = ABORT_CODE_RE.search(text)
    move_stack = tuple(unique_in_order(MOVE_FN_RE.findall(text)))
    modules = tuple(unique_in_order(MODULE_RE.findall(text)))

    if category == UNKNOWN:
        summary = "Parsed Move error output"
    else:
        summary = f"Detected {category.replace('_', ' ')}"

    result = ErrorSummary(
        category=category,
        summary=summary,
        likely_cause=cause,
        fix_steps=fixes,
        confidence=_confidence(category, move_stack),
        abort_code=abort_match.group(1) if abort_match else UNKNOWN,
        move_stack=move_stack,
        modules=modules,
    )
    logger.debug(
        "move_error_classified",
        category=result.category,
        confidence=result.confidence,
        abort_code=result.abort_code,
        stack_frames=len(move_stack),
    )
    return result
