import logging

from bonding_core.common.enums import OrderSide
from bonding_core.common.errors import (
    InsufficientBalanceForPurchase,
    MintAmountGreaterThanMaxSupply,
    MintUninitiated,
)
from bonding_core.common.math import checked_add, checked_sub, ensure_amount
from bonding_core.common.model import AssetBought, AssetSold, BondingAsset
from bonding_core.curves.curve_factory import curve_for
from bonding_core.engine.transaction import transactional
from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


class TradingEngine:
    """
    Buys and sells bonding curve assets against their minter.

    The price of a trade is the area under the asset's curve between the issuance before and
    after it:
        cost(buy)   = integral(issuance + amount) - integral(issuance)
        return(sell) = integral(issuance) - integral(issuance - amount)

    Both legs of a trade (reserve currency and asset) move through the ledger inside one
    transaction, so a trade either settles completely or not at all.
    """

    def __init__(self, ledger: MultiAssetLedger, registry: AssetRegistry, native_currency_id: int = 0):
        self.ledger = ledger
        self.registry = registry
        self.native_currency_id = native_currency_id

    def _buy_cost(self, asset: BondingAsset, issuance_before: int, amount: int) -> int:
        curve = curve_for(asset.curve)
        issuance_after = checked_add(issuance_before, amount)
        integral_before = curve.integral_before(issuance_before)
        integral_after = curve.integral_after(issuance_after)
        logger.debug(
            f"asset {asset.asset_id}: issuance {issuance_before} -> {issuance_after}, "
            f"integral {integral_before} -> {integral_after}"
        )
        return checked_sub(integral_after, integral_before)

    def _sell_return(self, asset: BondingAsset, issuance_before: int, amount: int) -> int:
        curve = curve_for(asset.curve)
        issuance_after = checked_sub(issuance_before, amount)
        integral_before = curve.integral_before(issuance_before)
        integral_after = curve.integral_after(issuance_after)
        logger.debug(
            f"asset {asset.asset_id}: issuance {issuance_before} -> {issuance_after}, "
            f"integral {integral_before} -> {integral_after}"
        )
        return checked_sub(integral_before, integral_after)

    def buy(self, buyer: str, asset_id: int, amount: int) -> AssetBought:
        """
        Buys 'amount' of 'asset_id' from the minter's previously minted supply.

        :raises AssetDoesNotExist: unknown asset.
        :raises MintUninitiated: nothing has been minted yet.
        :raises MintAmountGreaterThanMaxSupply: 'amount' is not below the minted total, or the
            post-trade issuance would pass the minting cap.
        :raises InsufficientBalanceForPurchase: the buyer cannot pay the cost.
        """
        ensure_amount(amount)

        with transactional(self.ledger, self.registry, "buy"):
            asset = self.registry.get(asset_id)

            minted = asset.mint_data.current_mint_amount
            if minted is None:
                raise MintUninitiated(f"Nothing has been minted for asset {asset_id}.")
            if not amount < minted:
                raise MintAmountGreaterThanMaxSupply(
                    f"Cannot buy {amount} of asset {asset_id}, only {minted} minted."
                )

            issuance_before = self.ledger.total_issuance(asset_id)
            if checked_add(issuance_before, amount) > asset.effective_cap:
                raise MintAmountGreaterThanMaxSupply(
                    f"Buying {amount} of asset {asset_id} exceeds its cap {asset.effective_cap}."
                )

            cost = self._buy_cost(asset, issuance_before, amount)
            logger.debug(f"cost to buy {amount} of asset {asset_id} is {cost}")

            if self.ledger.free_balance(self.native_currency_id, buyer) < cost:
                raise InsufficientBalanceForPurchase(f"{buyer} cannot afford {cost} for {amount} of asset {asset_id}.")

            self.ledger.transfer(self.native_currency_id, buyer, asset.minter, cost)
            self.ledger.transfer(asset_id, asset.minter, buyer, amount)

        logger.info(f"{buyer} bought {amount} of asset {asset_id} for {cost}")
        return AssetBought(buyer=buyer, asset_id=asset_id, amount=amount, cost=cost)

    def sell(self, seller: str, asset_id: int, amount: int, beneficiary: str) -> AssetSold:
        """
        Sells 'amount' of 'asset_id' back to the minter; the refund goes to 'beneficiary',
        which may be a different account from 'seller'.

        :raises AssetDoesNotExist: unknown asset.
        :raises LedgerError: the seller cannot withdraw 'amount', or the minter cannot pay
            the refund.
        """
        ensure_amount(amount)

        with transactional(self.ledger, self.registry, "sell"):
            asset = self.registry.get(asset_id)
            self.ledger.ensure_can_withdraw(asset_id, seller, amount)

            issuance_before = self.ledger.total_issuance(asset_id)
            return_amount = self._sell_return(asset, issuance_before, amount)
            logger.debug(f"return amount selling {amount} of asset {asset_id} is {return_amount}")

            self.ledger.transfer(asset_id, seller, asset.minter, amount)
            self.ledger.transfer(self.native_currency_id, asset.minter, beneficiary, return_amount)

        logger.info(f"{seller} sold {amount} of asset {asset_id} for {return_amount} paid to {beneficiary}")
        return AssetSold(
            seller=seller,
            beneficiary=beneficiary,
            asset_id=asset_id,
            amount=amount,
            return_amount=return_amount,
        )

    def spot_price(self, asset_id: int) -> int:
        """The integral at the current issuance. Read-only."""
        asset = self.registry.get(asset_id)
        issuance = self.ledger.total_issuance(asset_id)
        return curve_for(asset.curve).integral_before(issuance)

    def quote(self, asset_id: int, amount: int, side: OrderSide) -> int:
        """
        What buying (cost) or selling (return) 'amount' would settle for at the current
        issuance. Read-only, no balance or cap checks.
        """
        ensure_amount(amount)
        asset = self.registry.get(asset_id)
        issuance = self.ledger.total_issuance(asset_id)
        if side == OrderSide.BUY:
            return self._buy_cost(asset, issuance, amount)
        return self._sell_return(asset, issuance, amount)

    def quote_buy(self, asset_id: int, amount: int) -> int:
        return self.quote(asset_id, amount, OrderSide.BUY)

    def quote_sell(self, asset_id: int, amount: int) -> int:
        return self.quote(asset_id, amount, OrderSide.SELL)
