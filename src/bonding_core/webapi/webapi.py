import logging
import os
from dataclasses import asdict
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from bonding_core.common.enums import CurveType, OrderSide
from bonding_core.common.errors import AssetDoesNotExist, BondingCurveError
from bonding_core.common.model import CurveParams, CurveStatus
from bonding_core.curves.curve_factory import curve_for
from bonding_core.engine.bonding_engine import BondingCurveEngine
from bonding_core.ledger.memory import InMemoryLedger
from bonding_core.validation.common_validator import CommonValidator
from bonding_core.validation.linear_validator import LinearCurveValidator


logger = logging.getLogger(__name__)

info = Info(title="Bonding Curve API", version="1.0.0")


class CurveTransactionAction(Enum):
    buy = "buy"
    sell = "sell"


class CurveTypeName(Enum):
    linear = "linear"
    exponential = "exponential"
    flat = "flat"
    logarithmic = "logarithmic"


class CreateAssetRequest(BaseModel):
    caller: str = Field(description="Account creating the asset; becomes its minter")
    asset_id: int = Field(ge=0, description="Unique asset id")
    max_supply: int = Field(ge=0, description="Upper bound on ever-issued units")
    curve_type: CurveTypeName = Field(description="The bonding curve type to use")
    exponent: int = Field(1, ge=0, description="Exponent of the price function")
    slope: int = Field(1, ge=0, description="Slope of the price function")
    mint_amount: int = Field(ge=0, description="Units minted to the creator on creation")
    name: str = Field(description="Token name")
    symbol: str = Field(description="Token symbol")
    decimals: int = Field(ge=0, le=255, description="Token decimals")


class MintRequest(BaseModel):
    caller: str = Field(description="Registered minter of the asset")
    asset_id: int = Field(ge=0)
    amount: int = Field(ge=0, description="amount to mint")


class BuyRequest(BaseModel):
    caller: str = Field(description="Buyer")
    asset_id: int = Field(ge=0)
    amount: int = Field(ge=0, description="amount to buy")


class SellRequest(BaseModel):
    caller: str = Field(description="Seller")
    asset_id: int = Field(ge=0)
    beneficiary: str = Field(description="Account receiving the refund")
    amount: int = Field(ge=0, description="amount to sell")


class AirdropRequest(BaseModel):
    caller: str = Field(description="Registered minter of the asset")
    asset_id: int = Field(ge=0)
    beneficiaries: List[str] = Field(description="Accounts receiving the airdrop, in order")
    amount: int = Field(ge=0, description="amount per beneficiary")


class ReserveMintRequest(BaseModel):
    caller: str = Field(description="Account depositing the reserve currency")
    asset_id: int = Field(ge=0)
    reserve_amount: int = Field(ge=0, description="Reserve currency to deposit")


class ReserveBurnRequest(BaseModel):
    caller: str = Field(description="Account burning its tokens")
    asset_id: int = Field(ge=0)
    beneficiary: str = Field(description="Account receiving the reserve payout")
    amount: int = Field(ge=0, description="amount to burn")


class AssetQuery(BaseModel):
    asset_id: int = Field(ge=0)


class QuoteQuery(BaseModel):
    asset_id: int = Field(ge=0)
    action: CurveTransactionAction = Field(description="Quote a buy or a sell")
    amount: int = Field(ge=0, description="amount to buy / sell")


class CurveStatusQuery(BaseModel):
    curve_type: CurveTypeName = Field(description="The bonding curve type to use")
    exponent: int = Field(1, ge=0)
    slope: int = Field(1, ge=0)
    max_supply: int = Field(gt=0, description="Upper end of the plotted issuance range")
    points: int = Field(16, ge=1, le=1000, description="Number of plotted intervals")


class FundRequest(BaseModel):
    account: str
    amount: int = Field(ge=0, description="Reserve currency to credit")


class BalanceQuery(BaseModel):
    account: str
    asset_id: Optional[int] = Field(None, ge=0, description="Defaults to the reserve currency")


asset_tag = Tag(
    name="Bonding Curve Assets",
    description="Create, mint, trade and airdrop bonding curve assets",
)

curve_status_tag = Tag(
    name="Bonding Curve Status",
    description="Get the shape of a bonding curve for plotting and additional info",
)

reserve_tag = Tag(
    name="Reserve Curve",
    description="Mint and burn against a reserve pool priced by the power curve",
)

account_tag = Tag(
    name="Accounts",
    description="Balances on the in-memory ledger",
)


def curve_status(params: CurveParams, max_supply: int, points: int) -> CurveStatus:
    """
    Samples the integral of a curve at 'points' + 1 evenly spaced issuance values and
    attaches the validation report. Variants without an integral only get the report.
    """
    options = {"max_supply": max_supply, "points": points}
    status = CurveStatus(curve=params)

    if params.curve_type != CurveType.LINEAR:
        status.report = CommonValidator.run_all_validations(params, options)
        return status

    curve = curve_for(params)
    status.report = LinearCurveValidator.run_all_validations(curve, params, options)
    if not status.report["errors"]:
        for i in range(points + 1):
            issuance = max_supply * i // points
            status.points.append((issuance, curve.integral(issuance)))
    return status


def create_app(engine: Optional[BondingCurveEngine] = None) -> OpenAPI:
    app = OpenAPI(__name__, info=info)
    engine = engine or BondingCurveEngine(InMemoryLedger())
    app.config["ENGINE"] = engine

    @app.errorhandler(BondingCurveError)
    def handle_engine_error(e: BondingCurveError):
        status = 404 if isinstance(e, AssetDoesNotExist) else 400
        logger.info(f"request failed with {e.kind}: {e}")
        return jsonify({"error": e.kind, "message": str(e)}), status

    @app.errorhandler(ValueError)
    def handle_value_error(e: ValueError):
        return jsonify({"error": "ValueError", "message": str(e)}), 400

    @app.post("/assets", summary="Create Asset", tags=[asset_tag])
    def create_asset(body: CreateAssetRequest):
        """
        Registers a bonding curve asset and mints the initial amount to its creator
        """
        params = CurveParams(
            curve_type=CurveType.from_str(body.curve_type.value),
            exponent=body.exponent,
            slope=body.slope,
        )
        result = engine.create_asset(
            body.caller,
            body.asset_id,
            body.max_supply,
            params,
            body.mint_amount,
            body.name,
            body.symbol,
            body.decimals,
        )
        return jsonify(asdict(result)), 201

    @app.post("/assets/mint", summary="Mint Asset", tags=[asset_tag])
    def mint_asset(body: MintRequest):
        return jsonify(asdict(engine.mint_asset(body.caller, body.asset_id, body.amount)))

    @app.post("/assets/buy", summary="Buy Asset", tags=[asset_tag])
    def buy_asset(body: BuyRequest):
        return jsonify(asdict(engine.buy_asset(body.caller, body.asset_id, body.amount)))

    @app.post("/assets/sell", summary="Sell Asset", tags=[asset_tag])
    def sell_asset(body: SellRequest):
        return jsonify(asdict(engine.sell_asset(body.caller, body.asset_id, body.beneficiary, body.amount)))

    @app.post("/assets/airdrop", summary="Airdrop Asset", tags=[asset_tag])
    def air_drop(body: AirdropRequest):
        return jsonify(asdict(engine.air_drop(body.caller, body.asset_id, body.beneficiaries, body.amount)))

    @app.post("/assets/reserve/mint", summary="Mint Against Reserve", tags=[reserve_tag])
    def mint_with_reserve(body: ReserveMintRequest):
        """
        Deposits reserve currency into the asset's pool and mints the power curve purchase return
        """
        return jsonify(asdict(engine.mint_with_reserve(body.caller, body.asset_id, body.reserve_amount)))

    @app.post("/assets/reserve/burn", summary="Burn For Reserve", tags=[reserve_tag])
    def burn_for_reserve(body: ReserveBurnRequest):
        return jsonify(asdict(engine.burn_for_reserve(body.caller, body.asset_id, body.beneficiary, body.amount)))

    @app.get("/assets/reserve/report", summary="Reserve Curve Report", tags=[reserve_tag])
    def reserve_report(query: AssetQuery):
        """
        Validation report of the asset's power curve at its current supply and reserve pool
        """
        return jsonify({"asset_id": query.asset_id, "report": engine.reserve_minter.report(query.asset_id)})

    @app.get("/assets/spot-price", summary="Spot Price", tags=[asset_tag])
    def spot_price(query: AssetQuery):
        """
        Returns the integral of the asset's curve at its current issuance
        """
        return jsonify({"asset_id": query.asset_id, "price": engine.spot_price(query.asset_id)})

    @app.get("/assets/quote", summary="Quote Trade", tags=[asset_tag])
    def quote(query: QuoteQuery):
        """
        Returns what a buy would cost or a sell would return at the current issuance
        """
        side = OrderSide.from_str(query.action.name)
        value = engine.trading.quote(query.asset_id, query.amount, side)
        return jsonify({"asset_id": query.asset_id, "action": query.action.value, "amount": query.amount, "value": value})

    @app.get("/curve/status", summary="Curve Status", tags=[curve_status_tag])
    def status(query: CurveStatusQuery):
        """
        Return a representation of the curve which can be plotted visually by the caller,
        along with the validation report of its parameters.
        """
        params = CurveParams(
            curve_type=CurveType.from_str(query.curve_type.value),
            exponent=query.exponent,
            slope=query.slope,
        )
        result = curve_status(params, query.max_supply, query.points)
        return jsonify({
            "curve_type": str(params.curve_type),
            "exponent": params.exponent,
            "slope": params.slope,
            "points": [list(p) for p in result.points],
            "report": result.report,
        })

    @app.post("/accounts/fund", summary="Fund Account", tags=[account_tag])
    def fund(body: FundRequest):
        engine.ledger.deposit(engine.native_currency_id, body.account, body.amount)
        balance = engine.ledger.free_balance(engine.native_currency_id, body.account)
        return jsonify({"account": body.account, "asset_id": engine.native_currency_id, "balance": balance})

    @app.get("/accounts/balance", summary="Account Balance", tags=[account_tag])
    def balance(query: BalanceQuery):
        asset_id = engine.native_currency_id if query.asset_id is None else query.asset_id
        return jsonify({
            "account": query.account,
            "asset_id": asset_id,
            "balance": engine.ledger.free_balance(asset_id, query.account),
        })

    return app


app = create_app()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    debug = os.environ.get("BONDING_CORE_DEBUG", "").lower() in ("1", "true", "yes")
    app.run(debug=debug)


if __name__ == "__main__":
    main()
