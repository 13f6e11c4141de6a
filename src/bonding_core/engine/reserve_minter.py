import logging
from dataclasses import replace
from typing import Any, Dict

from bonding_core.common.errors import (
    ArithmeticOverflow,
    InsufficientBalanceForPurchase,
    MintAmountGreaterThanMaxSupply,
    MintAmountOverflow,
)
from bonding_core.common.math import checked_add, ensure_amount
from bonding_core.common.model import AssetBurnedForReserve, AssetMintedWithReserve, BondingAsset, Power
from bonding_core.curves.single.power import DEFAULT_PRECISION, PowerCurve
from bonding_core.curves.utils.power_curve_helper import PowerCurveHelper
from bonding_core.engine.transaction import transactional
from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry
from bonding_core.validation.power_validator import PowerCurveValidator


logger = logging.getLogger(__name__)

DEFAULT_RESERVE_POWER = Power(base_n=10, base_d=10, exp_n=1, exp_d=1)


def reserve_account(asset_id: int) -> str:
    """The ledger account holding the reserve currency deposited against 'asset_id'."""
    return f"reserve/{asset_id}"


class ReserveCurveMinter:
    """
    Mints and burns an asset against a reserve pool priced by the Bancor-style PowerCurve.

      - mint: the caller deposits reserve currency into the asset's pool and receives
        purchase_return(supply, pool, ratio, deposit) freshly issued tokens
      - burn: the caller destroys tokens and the pool pays sale_return(supply, pool, ratio,
        amount) to a beneficiary

    'supply' is the ledger issuance of the asset, 'pool' the reserve balance of
    reserve_account(asset_id) and 'ratio' the nominal reserve ratio of the asset's curve type.
    Preconditions are checked with PowerCurveHelper.validate_preconditions before any
    pricing; on a mint the incoming deposit already counts towards the pool.
    """

    def __init__(
        self,
        ledger: MultiAssetLedger,
        registry: AssetRegistry,
        native_currency_id: int = 0,
        power: Power = DEFAULT_RESERVE_POWER,
        precision: int = DEFAULT_PRECISION,
    ):
        self.ledger = ledger
        self.registry = registry
        self.native_currency_id = native_currency_id
        self.curve = PowerCurve(power, precision)

    def _state(self, asset: BondingAsset):
        supply = self.ledger.total_issuance(asset.asset_id)
        pool = self.ledger.free_balance(self.native_currency_id, reserve_account(asset.asset_id))
        ratio = PowerCurve.for_curve_type(asset.curve.curve_type)
        return supply, pool, ratio

    def mint(self, caller: str, asset_id: int, reserve_amount: int) -> AssetMintedWithReserve:
        """
        Deposits 'reserve_amount' of the reserve currency and mints the purchase return to
        'caller'. Minted tokens count towards the asset's minted total and minting cap.

        :raises AssetDoesNotExist: unknown asset.
        :raises InvalidCurveParameters: nothing issued yet, or an empty pool and no deposit.
        :raises InsufficientBalanceForPurchase: the caller cannot pay the deposit.
        :raises MintAmountOverflow: the minted total overflows.
        :raises MintAmountGreaterThanMaxSupply: the minted total would pass the minting cap.
        """
        ensure_amount(reserve_amount, "reserve_amount")

        with transactional(self.ledger, self.registry, "reserve mint"):
            asset = self.registry.get(asset_id)
            supply, pool, ratio = self._state(asset)
            PowerCurveHelper.validate_preconditions(
                supply, checked_add(pool, reserve_amount), ratio, self.curve.power
            )

            if self.ledger.free_balance(self.native_currency_id, caller) < reserve_amount:
                raise InsufficientBalanceForPurchase(
                    f"{caller} cannot deposit {reserve_amount} into the reserve of asset {asset_id}."
                )

            minted = self.curve.purchase_return(supply, pool, ratio, reserve_amount)
            logger.debug(f"asset {asset_id}: supply={supply} pool={pool} ratio={ratio} minted={minted}")

            previous = asset.mint_data.current_mint_amount or 0
            try:
                new_total = checked_add(previous, minted)
            except ArithmeticOverflow as e:
                raise MintAmountOverflow(f"Minted total of asset {asset_id} overflows.") from e
            if new_total > asset.effective_cap:
                raise MintAmountGreaterThanMaxSupply(
                    f"Reserve mint of {minted} brings asset {asset_id} to {new_total}, over its cap {asset.effective_cap}."
                )

            self.ledger.transfer(self.native_currency_id, caller, reserve_account(asset_id), reserve_amount)
            self.ledger.deposit(asset_id, caller, minted)
            self.registry.update_mint_data(
                asset_id, replace(asset.mint_data, current_mint_amount=new_total)
            )

        logger.info(f"{caller} deposited {reserve_amount} into the reserve of asset {asset_id}, minted {minted}")
        return AssetMintedWithReserve(
            account=caller, asset_id=asset_id, reserve_amount=reserve_amount, minted=minted
        )

    def burn(self, caller: str, asset_id: int, amount: int, beneficiary: str) -> AssetBurnedForReserve:
        """
        Burns 'amount' of the caller's tokens and pays the sale return out of the reserve pool
        to 'beneficiary'. The minted total is a running counter and is not reduced.

        :raises AssetDoesNotExist: unknown asset.
        :raises InvalidCurveParameters: nothing issued or an empty pool.
        :raises LedgerError: the caller cannot withdraw 'amount', or the pool cannot pay.
        """
        ensure_amount(amount)

        with transactional(self.ledger, self.registry, "reserve burn"):
            asset = self.registry.get(asset_id)
            supply, pool, ratio = self._state(asset)
            PowerCurveHelper.validate_preconditions(supply, pool, ratio, self.curve.power)
            self.ledger.ensure_can_withdraw(asset_id, caller, amount)

            reserve_amount = self.curve.sale_return(supply, pool, ratio, amount)
            logger.debug(f"asset {asset_id}: supply={supply} pool={pool} ratio={ratio} returned={reserve_amount}")

            self.ledger.withdraw(asset_id, caller, amount)
            self.ledger.transfer(self.native_currency_id, reserve_account(asset_id), beneficiary, reserve_amount)

        logger.info(f"{caller} burned {amount} of asset {asset_id} for {reserve_amount} paid to {beneficiary}")
        return AssetBurnedForReserve(
            account=caller,
            beneficiary=beneficiary,
            asset_id=asset_id,
            amount=amount,
            reserve_amount=reserve_amount,
        )

    def report(self, asset_id: int) -> Dict[str, Any]:
        """PowerCurveValidator report for the asset at its current supply and pool. Read-only."""
        asset = self.registry.get(asset_id)
        supply, pool, ratio = self._state(asset)
        return PowerCurveValidator.run_all_validations(self.curve, supply, pool, ratio)
