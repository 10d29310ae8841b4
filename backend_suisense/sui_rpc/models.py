"""
Data models for normalized Sui transaction facts.

Immutable snapshots computed fresh per request from a transaction-block
response. List-valued fields always default to empty tuples so consumers
never branch on presence. to_dict() produces the JSON shape handed to the
explainer and the anchoring layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Union

UNKNOWN = "unknown"

KIND_IMM_OR_OWNED = "imm_or_owned"
KIND_SHARED = "shared"
KIND_UNKNOWN = "unknown"


# -----------------------------------------------------------------------------
# Ownership descriptor (closed set of variants)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class AddressOwner:
    """Owned by an account address."""

    address: str


@dataclass(frozen=True)
class ObjectOwner:
    """Owned by another object (dynamic field / wrapped child)."""

    object_id: str


@dataclass(frozen=True)
class SharedOwner:
    """Shared object; accessible to any transaction."""

    initial_shared_version: Any = None


@dataclass(frozen=True)
class ImmutableOwner:
    """Frozen object; nobody can mutate it."""


@dataclass(frozen=True)
class OwnerLabel:
    """Owner already given as a plain string by the node; rendered verbatim."""

    label: str


@dataclass(frozen=True)
class UnknownOwner:
    """Absent or unrecognized descriptor."""


Owner = Union[AddressOwner, ObjectOwner, SharedOwner, ImmutableOwner, OwnerLabel, UnknownOwner]


# -----------------------------------------------------------------------------
# Transaction facts
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectInput:
    """A declared object input of the programmable transaction."""

    object_id: str
    object_type: str = UNKNOWN
    kind: str = KIND_UNKNOWN

    def to_dict(self) -> dict[str, str]:
        return {
            "object_id": self.object_id,
            "object_type": self.object_type,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class BalanceEntry:
    """
    One balance-change record.

    amount is the node's original decimal string (never re-rounded), or
    "unknown" when the node omitted it.
    """

    coin_type: str
    amount: str
    owner: str

    def to_dict(self) -> dict[str, str]:
        return {"coin_type": self.coin_type, "amount": self.amount, "owner": self.owner}


@dataclass(frozen=True)
class Transfer:
    """An object that changed hands (object change of type 'transferred')."""

    object_id: str
    object_type: str
    sender: str
    recipient: str

    def to_dict(self) -> dict[str, str]:
        return {
            "object_id": self.object_id,
            "object_type": self.object_type,
            "from": self.sender,
            "to": self.recipient,
        }


@dataclass(frozen=True)
class AssetFlows:
    """Balance movements split by direction, plus object transfers."""

    incoming: tuple[BalanceEntry, ...] = ()
    outgoing: tuple[BalanceEntry, ...] = ()
    transfers: tuple[Transfer, ...] = ()

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {
            "in": [e.to_dict() for e in self.incoming],
            "out": [e.to_dict() for e in self.outgoing],
            "transfers": [t.to_dict() for t in self.transfers],
        }


@dataclass(frozen=True)
class TransactionFacts:
    """
    Normalized facts extracted from one transaction block.

    intent, risk and confidence stay None until inference runs; use
    with_inference() to get the augmented copy.
    """

    sender: str = UNKNOWN
    called_operations: tuple[str, ...] = ()
    """package::module::function in discovery order; repeats kept."""
    involved_modules: tuple[str, ...] = ()
    """Unique package::module, sorted ascending."""
    object_inputs: tuple[ObjectInput, ...] = ()
    shared_objects: tuple[str, ...] = ()
    assets: AssetFlows = field(default_factory=AssetFlows)
    tx_digest: str = UNKNOWN
    status: str = UNKNOWN
    intent: str | None = None
    risk: str | None = None
    confidence: str | None = None

    def with_inference(self, intent: str, risk: str, confidence: str) -> "TransactionFacts":
        return replace(self, intent=intent, risk=risk, confidence=confidence)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable dict; inference keys appear only once populated."""
        out: dict[str, Any] = {
            "tx_digest": self.tx_digest,
            "status": self.status,
            "sender": self.sender,
            "called_operations": list(self.called_operations),
            "involved_modules": list(self.involved_modules),
            "object_inputs": [o.to_dict() for o in self.object_inputs],
            "shared_objects": list(self.shared_objects),
            "assets": self.assets.to_dict(),
        }
        if self.intent is not None:
            out["intent"] = self.intent
        if self.risk is not None:
            out["risk"] = self.risk
        if self.confidence is not None:
            out["confidence"] = self.confidence
        return out
