"""
Tests for the Sui transaction fact extractor (sui_rpc.parser.extract_facts).

Covers both operation-list shapes, both input shapes, shared-object
discovery, balance routing and graceful degradation on malformed payloads.
"""

from __future__ import annotations

import json

import pytest

from backend_suisense.sui_rpc.models import TransactionFacts
from backend_suisense.sui_rpc.parser import extract_facts
from tests.conftest import RECIPIENT, SENDER, TX_DIGEST


def _block(pt: dict, **extra) -> dict:
    """Wrap a programmable-transaction dict into a transaction-block payload."""
    out = {"transaction": {"data": {"sender": SENDER, "transaction": pt}}}
    out.update(extra)
    return out


# --- Full sample ---


def test_extract_sample_block(tx_block):
    """Realistic swap block: calls, modules, inputs, shared objects, assets, transfers."""
    facts = extract_facts(tx_block)

    assert facts.sender == SENDER
    assert facts.tx_digest == TX_DIGEST
    assert facts.status == "success"
    assert facts.called_operations == ("0xdee9::pool::swap", "0x2::coin::join")
    assert facts.involved_modules == ("0x2::coin", "0xdee9::pool")
    assert [o.to_dict() for o in facts.object_inputs] == [
        {"object_id": "0xpool", "object_type": "0xdee9::pool::Pool", "kind": "shared"},
        {"object_id": "0xcoin1", "object_type": "0x2::coin::Coin<0x2::sui::SUI>", "kind": "imm_or_owned"},
    ]
    assert facts.shared_objects == ("0xpool",)

    assets = facts.to_dict()["assets"]
    assert assets["in"] == [{"coin_type": "0xusdc::usdc::USDC", "amount": "2500", "owner": SENDER}]
    assert assets["out"] == [{"coin_type": "0x2::sui::SUI", "amount": "-1000", "owner": SENDER}]
    assert assets["transfers"] == [
        {"object_id": "0xnft", "object_type": "0xabc::nft::Nft", "from": SENDER, "to": RECIPIENT}
    ]


def test_inference_fields_absent_after_extraction(tx_block):
    """intent/risk/confidence are not set by extraction and not serialized."""
    facts = extract_facts(tx_block)
    assert facts.intent is None and facts.risk is None and facts.confidence is None
    out = facts.to_dict()
    assert "intent" not in out
    assert "risk" not in out
    assert "confidence" not in out


def test_extract_is_idempotent(tx_block):
    """Same input twice -> identical output, byte for byte once serialized."""
    first = extract_facts(tx_block)
    second = extract_facts(tx_block)
    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


# --- Operation list ---


def test_missing_operation_list():
    """No operation list at all -> no calls, no modules."""
    facts = extract_facts(_block({"inputs": []}))
    assert facts.called_operations == ()
    assert facts.involved_modules == ()


def test_single_inlined_move_call():
    """A single inlined MoveCall is treated as a one-entry operation list."""
    facts = extract_facts(_block({"MoveCall": {"package": "0x5", "module": "m", "function": "f"}}))
    assert facts.called_operations == ("0x5::m::f",)
    assert facts.involved_modules == ("0x5::m",)


def test_incomplete_move_calls_skipped():
    """Calls missing package, module or function are dropped; other kinds ignored."""
    pt = {
        "transactions": [
            {"MoveCall": {"package": "0x1", "module": "m"}},
            {"MoveCall": {"module": "m", "function": "f"}},
            {"TransferObjects": [[{"Input": 0}], {"Input": 1}]},
            "garbage",
            {"MoveCall": {"package": "0x1", "module": "m", "function": "ok"}},
        ]
    }
    facts = extract_facts(_block(pt))
    assert facts.called_operations == ("0x1::m::ok",)


def test_repeated_calls_kept_modules_unique_sorted():
    """called_operations keeps repeats; involved_modules is unique and sorted."""
    pt = {
        "transactions": [
            {"MoveCall": {"package": "0xff", "module": "zeta", "function": "a"}},
            {"MoveCall": {"package": "0x1", "module": "alpha", "function": "b"}},
            {"MoveCall": {"package": "0xff", "module": "zeta", "function": "a"}},
            {"MoveCall": {"package": "0x1", "module": "alpha", "function": "c"}},
        ]
    }
    facts = extract_facts(_block(pt))
    assert facts.called_operations == (
        "0xff::zeta::a",
        "0x1::alpha::b",
        "0xff::zeta::a",
        "0x1::alpha::c",
    )
    assert facts.involved_modules == ("0x1::alpha", "0xff::zeta")
    assert list(facts.involved_modules) == sorted(set(facts.involved_modules))


# --- Inputs and shared objects ---


def test_mint_with_tagged_shared_input():
    """One call to 0xabc::coin::mint plus tagged shared input 0xdef."""
    pt = {
        "inputs": [{"Object": {"SharedObject": {"objectId": "0xdef", "initialSharedVersion": 1, "mutable": True}}}],
        "transactions": [{"MoveCall": {"package": "0xabc", "module": "coin", "function": "mint"}}],
    }
    facts = extract_facts(_block(pt))
    assert facts.called_operations == ("0xabc::coin::mint",)
    assert facts.shared_objects == ("0xdef",)
    assert facts.object_inputs[0].kind == "shared"
    assert facts.object_inputs[0].object_type == "unknown"


def test_tagged_owned_input_type_lookup():
    """ImmOrOwnedObject inputs resolve their type from object changes."""
    pt = {"inputs": [{"Object": {"ImmOrOwnedObject": {"objectId": "0x77", "version": 2}}}]}
    changes = [{"type": "mutated", "objectId": "0x77", "objectType": "0x2::coin::Coin<X>"}]
    facts = extract_facts(_block(pt, objectChanges=changes))
    assert facts.object_inputs[0].to_dict() == {
        "object_id": "0x77",
        "object_type": "0x2::coin::Coin<X>",
        "kind": "imm_or_owned",
    }
    assert facts.shared_objects == ()


def test_receiving_and_pure_inputs():
    """Receiving objects get kind unknown; pure values are not object inputs."""
    pt = {
        "inputs": [
            {"type": "pure", "valueType": "address", "value": "0x1"},
            {"Pure": [1, 2, 3]},
            {"type": "object", "objectType": "receiving", "objectId": "0x88"},
            {"Object": {"Receiving": {"objectId": "0x89"}}},
            {"type": "object", "objectType": "sharedObject"},
        ]
    }
    facts = extract_facts(_block(pt))
    assert [(o.object_id, o.kind) for o in facts.object_inputs] == [("0x88", "unknown"), ("0x89", "unknown")]


def test_shared_objects_from_changes_dedup_and_order():
    """Declared shared inputs come first; objects shared during execution are appended once."""
    pt = {
        "inputs": [
            {"Object": {"SharedObject": {"objectId": "0xa"}}},
            {"Object": {"SharedObject": {"objectId": "0xa"}}},
        ]
    }
    changes = [
        {"type": "created", "objectId": "0xb", "owner": {"Shared": {"initial_shared_version": 4}}},
        {"type": "mutated", "objectId": "0xa", "owner": {"Shared": {"initial_shared_version": 1}}},
        {"type": "mutated", "objectId": "0xc", "owner": {"AddressOwner": SENDER}},
    ]
    facts = extract_facts(_block(pt, objectChanges=changes))
    assert facts.shared_objects == ("0xa", "0xb")
    assert len(facts.object_inputs) == 2


# --- Balance changes ---


@pytest.mark.parametrize(
    "amount, bucket, text",
    [
        ("2500", "in", "2500"),
        ("0", "in", "0"),
        (42, "in", "42"),
        ("123456789012345678901234567890", "in", "123456789012345678901234567890"),
        ("-1", "out", "-1"),
        ("abc", "out", "abc"),
        ("NaN", "out", "NaN"),
        (None, "out", "unknown"),
    ],
)
def test_balance_routing(amount, bucket, text):
    """Non-negative numbers go in; missing, unparsable or negative go out; text preserved."""
    change = {"owner": {"AddressOwner": SENDER}, "coinType": "0x2::sui::SUI"}
    if amount is not None:
        change["amount"] = amount
    facts = extract_facts({"balanceChanges": [change]})
    assets = facts.to_dict()["assets"]
    other = "out" if bucket == "in" else "in"
    assert len(assets[bucket]) == 1
    assert assets[other] == []
    assert assets[bucket][0]["amount"] == text


@pytest.mark.parametrize("flag", [True, False])
def test_balance_bool_amount_goes_out(flag):
    """A JSON boolean is not an amount: routed out, text kept as Python renders it."""
    facts = extract_facts({"balanceChanges": [{"coinType": "0x2::sui::SUI", "amount": flag}]})
    assert facts.assets.incoming == ()
    assert facts.assets.outgoing[0].amount == str(flag)


def test_balance_defaults():
    """Missing coin type and owner degrade to unknown."""
    facts = extract_facts({"balanceChanges": [{"amount": "5"}]})
    assert facts.assets.incoming[0].to_dict() == {"coin_type": "unknown", "amount": "5", "owner": "unknown"}


# --- Transfers ---


def test_transfer_recipient_fallbacks():
    """Recipient string used as-is; missing recipient falls back to the formatted owner."""
    changes = [
        {"type": "transferred", "objectId": "0x1", "sender": SENDER, "recipient": "0xplain"},
        {"type": "transferred", "objectId": "0x2", "owner": {"ObjectOwner": "0xparent"}},
        {"type": "transferred"},
        {"type": "mutated", "objectId": "0x3", "recipient": "0xnope"},
    ]
    transfers = extract_facts({"objectChanges": changes}).to_dict()["assets"]["transfers"]
    assert transfers == [
        {"object_id": "0x1", "object_type": "unknown", "from": SENDER, "to": "0xplain"},
        {"object_id": "0x2", "object_type": "unknown", "from": "unknown", "to": "object:0xparent"},
        {"object_id": "unknown", "object_type": "unknown", "from": "unknown", "to": "unknown"},
    ]


# --- Malformed input ---


@pytest.mark.parametrize("raw", [None, "garbage", 17, [], {}, {"transaction": "x"}])
def test_malformed_payloads_degrade(raw):
    """Anything that is not a well-formed block yields default facts."""
    facts = extract_facts(raw)
    assert facts == TransactionFacts()
    out = facts.to_dict()
    assert out["sender"] == "unknown"
    assert out["called_operations"] == []
    assert out["involved_modules"] == []
    assert out["object_inputs"] == []
    assert out["shared_objects"] == []
    assert out["assets"] == {"in": [], "out": [], "transfers": []}


def test_mistyped_sections():
    """Mistyped lists and entries are tolerated."""
    raw = {
        "transaction": {"data": {"transaction": {"inputs": "nope", "transactions": {"MoveCall": 1}}}},
        "objectChanges": "nope",
        "balanceChanges": [None, 5],
        "effects": {"status": "success"},
        "sender": "0xtop",
    }
    facts = extract_facts(raw)
    assert facts.sender == "0xtop"
    assert facts.called_operations == ()
    assert facts.status == "unknown"
    assert len(facts.assets.outgoing) == 2
    assert all(e.amount == "unknown" for e in facts.assets.outgoing)
