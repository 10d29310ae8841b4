"""
Central Move error category registry.

Ordered detection rules (first match wins) and the fixed advice text shown
to users for each category. All modules must import from here.
"""

from __future__ import annotations

from typing import Callable

MOVE_ABORT = "move_abort"
GAS = "gas"
OBJECT_NOT_FOUND = "object_not_found"
TYPE_MISMATCH = "type_mismatch"
ABILITY_CONSTRAINT = "ability_constraint"
BORROW_ERROR = "borrow_error"
INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
PERMISSION_ERROR = "permission_error"
UNKNOWN = "unknown"


def _any_of(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(n in text for n in needles)


def _all_of(*needles: str) -> Callable[[str], bool]:
    return lambda text: all(n in text for n in needles)


# Predicates receive lowercased text. Order is the tie-break: an abort code
# must win over the generic keywords that abort messages often contain.
CATEGORY_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (_any_of("moveabort", "move abort", "abort code"), MOVE_ABORT),
    (_any_of("insufficient gas", "gas budget"), GAS),
    (_any_of("object not found", "objectnotfound"), OBJECT_NOT_FOUND),
    (_any_of("type mismatch", "type error"), TYPE_MISMATCH),
    (_all_of("ability", "constraint"), ABILITY_CONSTRAINT),
    (_all_of("borrow", "error"), BORROW_ERROR),
    (
        lambda text: "index out of bounds" in text
        or ("vector" in text and "out of bounds" in text),
        INDEX_OUT_OF_BOUNDS,
    ),
    (_any_of("permission"), PERMISSION_ERROR),
)

# === category -> (likely cause, fix steps) ===
CATEGORY_ADVICE: dict[str, tuple[str, tuple[str, ...]]] = {
    MOVE_ABORT: (
        "A Move abort was triggered by the called function.",
        (
            "Locate the aborting module and function and review its abort conditions.",
            "Check inputs and object state used by the function.",
            "Map the abort code to the module's documented error codes, if available.",
        ),
    ),
    GAS: (
        "Gas budget was too low to finish execution.",
        (
            "Increase the gas budget for the transaction.",
            "Reduce computation by simplifying inputs or calls.",
        ),
    ),
    OBJECT_NOT_FOUND: (
        "An input object could not be found or is not accessible.",
        (
            "Verify the object ID exists on the selected network.",
            "Ensure the object is not deleted or locked by another transaction.",
            "Confirm the sender has access or ownership if required.",
        ),
    ),
    TYPE_MISMATCH: (
        "The provided type arguments or object types do not match the function signature.",
        (
            "Re-check the Move function signature and type parameters.",
            "Ensure the object types passed match expected types.",
        ),
    ),
    ABILITY_CONSTRAINT: (
        "A Move ability constraint was violated (key/store/drop/copy).",
        (
            "Inspect the type abilities required by the function.",
            "Adjust the type used or modify the function to accept the type.",
        ),
    ),
    BORROW_ERROR: (
        "A mutable/immutable borrow rule was violated during execution.",
        (
            "Review the Move code for conflicting borrows.",
            "Ensure mutable and immutable borrows are not active at the same time.",
        ),
    ),
    INDEX_OUT_OF_BOUNDS: (
        "A vector index access was out of bounds.",
        (
            "Check vector lengths before indexing.",
            "Add bounds checks or guard clauses.",
        ),
    ),
    PERMISSION_ERROR: (
        "The transaction lacks permission for the attempted action.",
        (
            "Verify ownership or capability requirements in the Move module.",
            "Ensure the sender has the necessary permissions.",
        ),
    ),
    UNKNOWN: (
        "Unknown error cause (insufficient details).",
        (
            "Include the full error output with stack trace.",
            "Double-check network, inputs, and function arguments.",
        ),
    ),
}

ALL_CATEGORIES = tuple(CATEGORY_ADVICE)
