import pytest

from bonding_core.common.enums import CurveType
from bonding_core.common.model import CurveParams, Power
from bonding_core.engine.bonding_engine import BondingCurveEngine
from bonding_core.ledger.memory import InMemoryLedger
from bonding_core.webapi import webapi
from bonding_core.webapi.webapi import create_app, curve_status


CREATE_BODY = {
    "caller": "alice",
    "asset_id": 1,
    "max_supply": 10000,
    "curve_type": "linear",
    "mint_amount": 2000,
    "name": "Bond",
    "symbol": "BND",
    "decimals": 12,
}


@pytest.fixture
def engine():
    return BondingCurveEngine(InMemoryLedger())


@pytest.fixture
def client(engine):
    app = create_app(engine)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def funded_client(client):
    client.post("/accounts/fund", json={"account": "alice", "amount": 100})
    client.post("/accounts/fund", json={"account": "bob", "amount": 2000000})
    resp = client.post("/assets", json=CREATE_BODY)
    assert resp.status_code == 201
    return client


def test_fund_and_balance(client):
    resp = client.post("/accounts/fund", json={"account": "alice", "amount": 100})
    assert resp.status_code == 200
    assert resp.get_json() == {"account": "alice", "asset_id": 0, "balance": 100}

    resp = client.get("/accounts/balance", query_string={"account": "alice"})
    assert resp.get_json()["balance"] == 100


def test_create_asset(client, engine):
    client.post("/accounts/fund", json={"account": "alice", "amount": 100})
    resp = client.post("/assets", json=CREATE_BODY)
    assert resp.status_code == 201
    assert resp.get_json() == {"asset_id": 1, "creator": "alice", "curve_id": 0}
    assert engine.get_asset(1).metadata.symbol == "BND"


def test_create_asset_without_deposit(client):
    resp = client.post("/assets", json=CREATE_BODY)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InsufficientBalanceToReserve"


def test_buy_and_sell(funded_client):
    resp = funded_client.post("/assets/buy", json={"caller": "bob", "asset_id": 1, "amount": 500})
    assert resp.status_code == 200
    assert resp.get_json()["cost"] == 1125000

    resp = funded_client.post(
        "/assets/sell", json={"caller": "bob", "asset_id": 1, "beneficiary": "carol", "amount": 500}
    )
    assert resp.get_json()["return_amount"] == 875000

    resp = funded_client.get("/accounts/balance", query_string={"account": "bob", "asset_id": 1})
    assert resp.get_json()["balance"] == 0


def test_mint_by_non_minter(funded_client):
    resp = funded_client.post("/assets/mint", json={"caller": "bob", "asset_id": 1, "amount": 10})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidMinter"


def test_airdrop(funded_client):
    resp = funded_client.post(
        "/assets/airdrop", json={"caller": "alice", "asset_id": 1, "beneficiaries": ["bob", "carol"], "amount": 10}
    )
    assert resp.status_code == 200
    assert resp.get_json()["beneficiaries"] == ["bob", "carol"]


def test_spot_price(funded_client):
    resp = funded_client.get("/assets/spot-price", query_string={"asset_id": 1})
    assert resp.get_json() == {"asset_id": 1, "price": 2000000}


def test_unknown_asset_is_404(client):
    resp = client.get("/assets/spot-price", query_string={"asset_id": 9})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "AssetDoesNotExist"


@pytest.mark.parametrize("action, expected", [("buy", 1125000), ("sell", 875000)])
def test_quote(funded_client, action, expected):
    resp = funded_client.get("/assets/quote", query_string={"asset_id": 1, "action": action, "amount": 500})
    assert resp.get_json()["value"] == expected


def test_negative_amount_rejected(funded_client):
    resp = funded_client.post("/assets/buy", json={"caller": "bob", "asset_id": 1, "amount": -1})
    assert resp.status_code in (400, 422)


def test_curve_status_route(client):
    resp = client.get(
        "/curve/status", query_string={"curve_type": "linear", "max_supply": 1000, "points": 4}
    )
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["curve_type"] == "LINEAR"
    assert data["points"] == [[0, 0], [250, 31250], [500, 125000], [750, 281250], [1000, 500000]]
    assert data["report"]["errors"] == []


def test_curve_status_without_integral():
    status = curve_status(CurveParams(curve_type=CurveType.FLAT), 1000, 4)
    assert status.points == []
    assert status.report["errors"] == ["FLAT: no integral implementation is defined."]


@pytest.fixture
def reserve_client():
    engine = BondingCurveEngine(
        InMemoryLedger(), reserve_curve_power=Power(base_n=100, base_d=100), reserve_curve_precision=1
    )
    client = create_app(engine).test_client()
    client.post("/accounts/fund", json={"account": "alice", "amount": 100})
    client.post("/accounts/fund", json={"account": "bob", "amount": 1000})
    client.post("/assets", json=dict(CREATE_BODY, mint_amount=40))
    return client


def test_reserve_mint_report_and_burn(reserve_client):
    body = {"caller": "bob", "asset_id": 1, "reserve_amount": 100}
    assert reserve_client.post("/assets/reserve/mint", json=body).get_json()["minted"] == 0
    resp = reserve_client.post("/assets/reserve/mint", json=body)
    assert resp.status_code == 200
    assert resp.get_json() == {"account": "bob", "asset_id": 1, "reserve_amount": 100, "minted": 40}

    resp = reserve_client.get("/assets/reserve/report", query_string={"asset_id": 1})
    assert resp.get_json()["report"]["errors"] == []

    resp = reserve_client.post(
        "/assets/reserve/burn", json={"caller": "bob", "asset_id": 1, "beneficiary": "carol", "amount": 40}
    )
    assert resp.get_json()["reserve_amount"] == 4
    resp = reserve_client.get("/accounts/balance", query_string={"account": "carol"})
    assert resp.get_json()["balance"] == 4


def test_reserve_burn_with_empty_pool(reserve_client):
    resp = reserve_client.post(
        "/assets/reserve/burn", json={"caller": "alice", "asset_id": 1, "beneficiary": "alice", "amount": 10}
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidCurveParameters"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("", False),
        ("0", False),
        ("1", True),
        ("true", True),
        ("YES", True),
    ]
)
def test_main_debug_is_opt_in(monkeypatch, value, expected):
    calls = []
    monkeypatch.setattr(webapi.app, "run", lambda **kwargs: calls.append(kwargs))
    if value is None:
        monkeypatch.delenv("BONDING_CORE_DEBUG", raising=False)
    else:
        monkeypatch.setenv("BONDING_CORE_DEBUG", value)

    webapi.main()

    assert calls == [{"debug": expected}]
