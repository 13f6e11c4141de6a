import pytest

from bonding_core.common.enums import CurveType
from bonding_core.common.errors import InsufficientBalance, InvalidMinter, MintAmountOverflow
from bonding_core.common.math import U128_MAX
from bonding_core.common.model import AssetAirDropped
from bonding_core.engine.bonding_engine import BondingCurveEngine
from bonding_core.ledger.memory import InMemoryLedger


def _make_engine(**kwargs):
    ledger = InMemoryLedger()
    ledger.deposit(0, "alice", 100)
    engine = BondingCurveEngine(ledger, **kwargs)
    engine.create_asset("alice", 1, 10000, CurveType.LINEAR, 2000, "Bond", "BND", 12)
    return engine


def test_airdrop():
    engine = _make_engine()
    record = engine.airdrops.airdrop("alice", 1, ["bob", "carol"], 100)

    assert record == AssetAirDropped(asset_id=1, amount=100, source="alice", beneficiaries=("bob", "carol"))
    assert engine.ledger.free_balance(1, "bob") == 100
    assert engine.ledger.free_balance(1, "carol") == 100
    assert engine.ledger.free_balance(1, "alice") == 1800
    assert engine.ledger.total_issuance(1) == 2000


def test_repeated_beneficiary_receives_twice():
    engine = _make_engine()
    engine.airdrops.airdrop("alice", 1, ["bob", "bob"], 100)
    assert engine.ledger.free_balance(1, "bob") == 200


def test_empty_beneficiaries():
    engine = _make_engine()
    record = engine.airdrops.airdrop("alice", 1, [], 100)
    assert record.beneficiaries == ()
    assert engine.ledger.free_balance(1, "alice") == 2000


def test_only_minter_can_airdrop():
    engine = _make_engine()
    with pytest.raises(InvalidMinter):
        engine.airdrops.airdrop("bob", 1, ["carol"], 100)


def test_any_caller_when_minter_not_required():
    """Tokens still come out of the minter's account."""
    engine = _make_engine(airdrop_requires_minter=False)
    record = engine.airdrops.airdrop("bob", 1, ["carol"], 100)
    assert record.source == "alice"
    assert engine.ledger.free_balance(1, "carol") == 100


def test_all_or_nothing():
    # 3 * 700 = 2100 > 2000 held by alice
    engine = _make_engine()
    with pytest.raises(InsufficientBalance):
        engine.airdrops.airdrop("alice", 1, ["bob", "carol", "dave"], 700)
    for account in ("bob", "carol", "dave"):
        assert engine.ledger.free_balance(1, account) == 0
    assert engine.ledger.free_balance(1, "alice") == 2000


def test_total_overflow():
    engine = _make_engine()
    with pytest.raises(MintAmountOverflow):
        engine.airdrops.airdrop("alice", 1, ["bob", "carol"], U128_MAX)
