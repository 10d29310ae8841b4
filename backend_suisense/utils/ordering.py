"""Order-preserving helpers shared by the fact extractor and the error classifier."""

from __future__ import annotations

from typing import Iterable


def unique_in_order(items: Iterable[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence of each item in its original position."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out
