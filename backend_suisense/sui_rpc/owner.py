"""
Ownership descriptor parsing and display formatting.

Nodes report owners either as a plain string or as a single-key tagged
object ({"AddressOwner": "0x.."}, {"ObjectOwner": "0x.."},
{"Shared": {"initial_shared_version": n}}, "Immutable"). parse_owner maps
that into the closed Owner union once; render_owner is the exhaustive
formatter over it.
"""

from __future__ import annotations

from typing import Any

from backend_suisense.sui_rpc.models import (
    UNKNOWN,
    AddressOwner,
    ImmutableOwner,
    ObjectOwner,
    Owner,
    OwnerLabel,
    SharedOwner,
    UnknownOwner,
)


def _is_set(value: Any) -> bool:
    """Tag payload counts as present unless null, false, empty string or zero."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, int, float)) and not value:
        return False
    return True


def parse_owner(raw: Any) -> Owner:
    """Parse a raw owner descriptor. Never raises; unrecognized input is UnknownOwner."""
    if not _is_set(raw):
        return UnknownOwner()
    if isinstance(raw, str):
        return OwnerLabel(raw)
    if not isinstance(raw, dict):
        return UnknownOwner()
    if _is_set(raw.get("AddressOwner")):
        return AddressOwner(str(raw["AddressOwner"]))
    if _is_set(raw.get("ObjectOwner")):
        return ObjectOwner(str(raw["ObjectOwner"]))
    if _is_set(raw.get("Shared")):
        shared = raw["Shared"]
        version = shared.get("initial_shared_version") if isinstance(shared, dict) else None
        return SharedOwner(version)
    if _is_set(raw.get("Immutable")):
        return ImmutableOwner()
    return UnknownOwner()


def render_owner(owner: Owner) -> str:
    if isinstance(owner, AddressOwner):
        return owner.address
    if isinstance(owner, ObjectOwner):
        return f"object:{owner.object_id}"
    if isinstance(owner, SharedOwner):
        return "shared"
    if isinstance(owner, ImmutableOwner):
        return "immutable"
    if isinstance(owner, OwnerLabel):
        return owner.label
    return UNKNOWN


def format_owner(raw: Any) -> str:
    """Display string for a raw owner descriptor: address, object:<id>, shared, immutable or unknown."""
    return render_owner(parse_owner(raw))


def is_shared(raw: Any) -> bool:
    return isinstance(parse_owner(raw), SharedOwner)
