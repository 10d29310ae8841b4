"""
Sui transaction parser: raw transaction-block payloads to TransactionFacts.

Accepts the result of sui_getTransactionBlock / suix_getTransactionBlock
(showInput, showEffects, showBalanceChanges, showObjectChanges). Purely
structural; intent and risk live in backend_suisense.analytics.

Upstream JSON is untrusted and often partial, so every accessor tolerates
missing or mistyped fields: scalars degrade to "unknown", lists to empty.
extract_facts never raises on malformed input.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from backend_suisense.suisense_logging import get_logger
from backend_suisense.sui_rpc.models import (
    KIND_IMM_OR_OWNED,
    KIND_SHARED,
    KIND_UNKNOWN,
    UNKNOWN,
    AssetFlows,
    BalanceEntry,
    ObjectInput,
    TransactionFacts,
    Transfer,
)
from backend_suisense.sui_rpc.owner import format_owner, is_shared
from backend_suisense.utils.ordering import unique_in_order

logger = get_logger(__name__)

MOVE_CALL_TAG = "MoveCall"
CHANGE_TRANSFERRED = "transferred"

# Flattened input shape (showInput on recent fullnodes): {"type": "object", "objectType": ...}
_FLAT_INPUT_KINDS = {
    "immOrOwnedObject": KIND_IMM_OR_OWNED,
    "sharedObject": KIND_SHARED,
}


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _text(value: Any, default: str = UNKNOWN) -> str:
    """Non-empty scalar as str, else default."""
    if value is None or value == "" or isinstance(value, (dict, list)):
        return default
    return str(value)


def _programmable_transaction(raw: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return (transaction.data, transaction.data.transaction)."""
    data = _as_dict(_as_dict(raw.get("transaction")).get("data"))
    return data, _as_dict(data.get("transaction"))


def _normalize_operations(pt: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Return the operation list as a list of tagged entries.

    Programmable transactions carry a "transactions" list; some payloads inline
    a single tagged operation directly in the transaction kind.
    """
    entries = pt.get("transactions")
    if isinstance(entries, list):
        return [e for e in entries if isinstance(e, dict)]
    if MOVE_CALL_TAG in pt:
        return [pt]
    return []


def _called_operations(operations: list[dict[str, Any]]) -> list[tuple[str, str, str]]:
    """(package, module, function) per MoveCall entry; incomplete calls are skipped."""
    calls: list[tuple[str, str, str]] = []
    for entry in operations:
        call = _as_dict(entry.get(MOVE_CALL_TAG))
        package = _text(call.get("package"), "")
        module = _text(call.get("module"), "")
        function = _text(call.get("function"), "")
        if package and module and function:
            calls.append((package, module, function))
    return calls


def _object_types(object_changes: list[Any]) -> dict[str, str]:
    types: dict[str, str] = {}
    for change in object_changes:
        change = _as_dict(change)
        object_id = _text(change.get("objectId"), "")
        object_type = _text(change.get("objectType"), "")
        if object_id and object_type:
            types[object_id] = object_type
    return types


def _resolve_input(item: dict[str, Any]) -> tuple[str | None, str]:
    """Return (object_id, kind) for an object input, (None, ...) for pure values."""
    tagged = item.get("Object")
    if isinstance(tagged, dict):
        if isinstance(tagged.get("ImmOrOwnedObject"), dict):
            return _text(tagged["ImmOrOwnedObject"].get("objectId"), "") or None, KIND_IMM_OR_OWNED
        if isinstance(tagged.get("SharedObject"), dict):
            return _text(tagged["SharedObject"].get("objectId"), "") or None, KIND_SHARED
        if isinstance(tagged.get("Receiving"), dict):
            return _text(tagged["Receiving"].get("objectId"), "") or None, KIND_UNKNOWN
        return None, KIND_UNKNOWN
    if item.get("type") == "object":
        kind = _FLAT_INPUT_KINDS.get(_text(item.get("objectType"), ""), KIND_UNKNOWN)
        return _text(item.get("objectId"), "") or None, kind
    return None, KIND_UNKNOWN


def _parse_amount(raw: Any) -> Decimal | None:
    """Numeric value of a balance amount; None when missing or unparsable."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        raw = str(raw)
    if not isinstance(raw, str):
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if value.is_nan():
        return None
    return value


def _amount_text(raw: Any) -> str:
    if raw is None:
        return UNKNOWN
    return raw if isinstance(raw, str) else str(raw)


def _split_balance_changes(
    balance_changes: list[Any],
) -> tuple[list[BalanceEntry], list[BalanceEntry]]:
    """Non-negative amounts go in; missing, unparsable or negative go out."""
    incoming: list[BalanceEntry] = []
    outgoing: list[BalanceEntry] = []
    for change in balance_changes:
        change = _as_dict(change)
        raw_amount = change.get("amount")
        entry = BalanceEntry(
            coin_type=_text(change.get("coinType")),
            amount=_amount_text(raw_amount),
            owner=format_owner(change.get("owner")),
        )
        value = _parse_amount(raw_amount)
        if value is None or value < 0:
            outgoing.append(entry)
        else:
            incoming.append(entry)
    return incoming, outgoing


def _transfers(object_changes: list[Any]) -> list[Transfer]:
    transfers: list[Transfer] = []
    for change in object_changes:
        change = _as_dict(change)
        if change.get("type") != CHANGE_TRANSFERRED:
            continue
        recipient = change.get("recipient")
        transfers.append(
            Transfer(
                object_id=_text(change.get("objectId")),
                object_type=_text(change.get("objectType")),
                sender=_text(change.get("sender")),
                recipient=format_owner(recipient if recipient else change.get("owner")),
            )
        )
    return transfers


def extract_facts(raw: Any) -> TransactionFacts:
    """
    Normalize a transaction-block response into TransactionFacts.

    Never raises; absent fields degrade to "unknown" / empty sequences.
    intent, risk and confidence are left unset.
    """
    raw = _as_dict(raw)
    data, pt = _programmable_transaction(raw)
    sender = _text(data.get("sender"), "") or _text(raw.get("sender"))

    calls = _called_operations(_normalize_operations(pt))
    called_operations = tuple(f"{p}::{m}::{f}" for p, m, f in calls)
    involved_modules = tuple(sorted({f"{p}::{m}" for p, m, _ in calls}))

    object_changes = _as_list(raw.get("objectChanges"))
    object_types = _object_types(object_changes)

    object_inputs: list[ObjectInput] = []
    shared_candidates: list[str] = []

    for item in _as_list(pt.get("inputs")):
        if not isinstance(item, dict):
            continue
        object_id, kind = _resolve_input(item)
        if object_id is None:
            continue
        object_inputs.append(
            ObjectInput(
                object_id=object_id,
                object_type=object_types.get(object_id, UNKNOWN),
                kind=kind,
            )
        )
        if kind == KIND_SHARED:
            shared_candidates.append(object_id)

    # Objects that end up shared during execution, not only declared shared inputs
    for change in object_changes:
        change = _as_dict(change)
        object_id = _text(change.get("objectId"), "")
        if object_id and is_shared(change.get("owner")):
            shared_candidates.append(object_id)

    incoming, outgoing = _split_balance_changes(_as_list(raw.get("balanceChanges")))

    facts = TransactionFacts(
        sender=sender,
        called_operations=called_operations,
        involved_modules=involved_modules,
        object_inputs=tuple(object_inputs),
        shared_objects=tuple(unique_in_order(shared_candidates)),
        assets=AssetFlows(
            incoming=tuple(incoming),
            outgoing=tuple(outgoing),
            transfers=tuple(_transfers(object_changes)),
        ),
        tx_digest=_text(raw.get("digest")),
        status=_text(_as_dict(_as_dict(raw.get("effects")).get("status")).get("status")),
    )
    logger.debug(
        "tx_facts_extracted",
        tx_digest=facts.tx_digest,
        operations=len(facts.called_operations),
        object_inputs=len(facts.object_inputs),
        shared_objects=len(facts.shared_objects),
        assets_in=len(incoming),
        assets_out=len(outgoing),
        transfers=len(facts.assets.transfers),
    )
    return facts
