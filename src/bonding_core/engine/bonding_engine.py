import logging
from typing import Any, List, Optional, Sequence, Union

from bonding_core.common.enums import CurveType
from bonding_core.common.errors import (
    AssetAlreadyExists,
    InsufficientBalanceToReserve,
    MintAmountGreaterThanMaxSupply,
)
from bonding_core.common.math import ensure_amount
from bonding_core.common.model import (
    AssetAirDropped,
    AssetBought,
    AssetBurnedForReserve,
    AssetCreated,
    AssetMinted,
    AssetMintedWithReserve,
    AssetSold,
    BondingAsset,
    CurveParams,
    TokenMetadata,
)
from bonding_core.curves.single.power import DEFAULT_PRECISION
from bonding_core.engine.airdrop import AirdropBatcher
from bonding_core.engine.mint_ledger import MintLedger
from bonding_core.engine.reserve_minter import DEFAULT_RESERVE_POWER, ReserveCurveMinter
from bonding_core.engine.trading import TradingEngine
from bonding_core.engine.transaction import transactional
from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


class BondingCurveEngine:
    """
        Entry point for every caller-facing operation:
          - create_asset
          - mint_asset
          - buy_asset
          - sell_asset
          - air_drop
          - spot_price
          - mint_with_reserve / burn_for_reserve

        Operations run one at a time and each one is a single transaction over the ledger and
        the registry. Completion records are appended to 'events' only once an operation has
        committed.
    """

    def __init__(self, ledger: MultiAssetLedger, registry: Optional[AssetRegistry] = None, **kwargs):
        self.ledger = ledger
        self.registry = registry or AssetRegistry(ledger)
        self.events: List[Any] = []

        self.options = {
            "native_currency_id": 0,
            "creator_asset_deposit": 10,
            "reserve_curve_power": DEFAULT_RESERVE_POWER,
            "reserve_curve_precision": DEFAULT_PRECISION,
            "airdrop_requires_minter": True,
        }

        for k, v in kwargs.items():
            if k in self.options:
                self.options[k] = v
            else:
                if "custom" not in self.options:
                    self.options["custom"] = {}
                self.options["custom"][k] = v

        self.mint_ledger = MintLedger(self.ledger, self.registry)
        self.trading = TradingEngine(
            self.ledger, self.registry, native_currency_id=self.options["native_currency_id"]
        )
        self.airdrops = AirdropBatcher(
            self.ledger, self.registry, requires_minter=self.options["airdrop_requires_minter"]
        )
        self.reserve_minter = ReserveCurveMinter(
            self.ledger,
            self.registry,
            native_currency_id=self.options["native_currency_id"],
            power=self.options["reserve_curve_power"],
            precision=self.options["reserve_curve_precision"],
        )

    @property
    def native_currency_id(self) -> int:
        return self.options["native_currency_id"]

    def get_asset(self, asset_id: int) -> BondingAsset:
        return self.registry.get(asset_id)

    def create_asset(
        self,
        caller: str,
        asset_id: int,
        max_supply: int,
        curve: Union[CurveParams, CurveType],
        mint_amount: int,
        name: str,
        symbol: str,
        decimals: int,
    ) -> AssetCreated:
        """
        Registers a new bonding curve asset owned and minted by 'caller', then mints
        'mint_amount' of it to the caller.

        :raises InsufficientBalanceToReserve: the caller cannot cover the creation deposit.
        :raises AssetAlreadyExists: the id is already issued or registered, or is the reserve
            currency id.
        :raises MintAmountGreaterThanMaxSupply: 'mint_amount' is not below 'max_supply'.
        """
        if isinstance(curve, CurveType):
            curve = CurveParams(curve_type=curve)
        ensure_amount(max_supply, "max_supply")
        ensure_amount(mint_amount, "mint_amount")
        metadata = TokenMetadata(name=name, symbol=symbol, decimals=decimals)

        if asset_id == self.native_currency_id:
            raise AssetAlreadyExists(f"Asset {asset_id} is the reserve currency.")

        with transactional(self.ledger, self.registry, "create_asset"):
            deposit = self.options["creator_asset_deposit"]
            if not self.ledger.can_reserve(self.native_currency_id, caller, deposit):
                raise InsufficientBalanceToReserve(f"{caller} cannot reserve the creation deposit {deposit}.")

            asset = self.registry.create(caller, asset_id, curve, max_supply, metadata)

            if not mint_amount < max_supply:
                raise MintAmountGreaterThanMaxSupply(
                    f"Initial mint {mint_amount} must be below max supply {max_supply}."
                )
            minted = self.mint_ledger.mint(caller, asset_id, mint_amount)

        created = AssetCreated(asset_id=asset_id, creator=caller, curve_id=asset.curve_id)
        self.events.extend([minted, created])
        logger.info(f"asset {asset_id} ({symbol}) created by {caller} with curve id {asset.curve_id}")
        return created

    def mint_asset(self, caller: str, asset_id: int, amount: int) -> AssetMinted:
        minted = self.mint_ledger.mint(caller, asset_id, amount)
        self.events.append(minted)
        return minted

    def buy_asset(self, caller: str, asset_id: int, amount: int) -> AssetBought:
        bought = self.trading.buy(caller, asset_id, amount)
        self.events.append(bought)
        return bought

    def sell_asset(self, caller: str, asset_id: int, beneficiary: str, amount: int) -> AssetSold:
        sold = self.trading.sell(caller, asset_id, amount, beneficiary)
        self.events.append(sold)
        return sold

    def air_drop(self, caller: str, asset_id: int, beneficiaries: Sequence[str], amount: int) -> AssetAirDropped:
        dropped = self.airdrops.airdrop(caller, asset_id, beneficiaries, amount)
        self.events.append(dropped)
        return dropped

    def spot_price(self, asset_id: int) -> int:
        return self.trading.spot_price(asset_id)

    def quote_buy(self, asset_id: int, amount: int) -> int:
        return self.trading.quote_buy(asset_id, amount)

    def quote_sell(self, asset_id: int, amount: int) -> int:
        return self.trading.quote_sell(asset_id, amount)

    def mint_with_reserve(self, caller: str, asset_id: int, reserve_amount: int) -> AssetMintedWithReserve:
        minted = self.reserve_minter.mint(caller, asset_id, reserve_amount)
        self.events.append(minted)
        return minted

    def burn_for_reserve(self, caller: str, asset_id: int, beneficiary: str, amount: int) -> AssetBurnedForReserve:
        burned = self.reserve_minter.burn(caller, asset_id, amount, beneficiary)
        self.events.append(burned)
        return burned
