import logging
from dataclasses import replace

from bonding_core.common.errors import (
    ArithmeticOverflow,
    InvalidMinter,
    MintAmountGreaterThanMaxSupply,
    MintAmountOverflow,
)
from bonding_core.common.math import checked_add, ensure_amount
from bonding_core.common.model import AssetMinted
from bonding_core.engine.transaction import transactional
from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


class MintLedger:
    """
    Mints new units of an asset to its minter while keeping the running minted total.

    The new total must stay within the minting cap (itself bounded by max_supply) before
    anything is credited on the ledger.
    """

    def __init__(self, ledger: MultiAssetLedger, registry: AssetRegistry):
        self.ledger = ledger
        self.registry = registry

    def mint(self, caller: str, asset_id: int, amount: int) -> AssetMinted:
        """
        Credits 'amount' of 'asset_id' to the minter and persists the new minted total.

        :raises AssetDoesNotExist: unknown asset.
        :raises InvalidMinter: 'caller' is not the registered minter.
        :raises MintAmountOverflow: the minted total overflows.
        :raises MintAmountGreaterThanMaxSupply: the minted total would pass the minting cap.
        """
        ensure_amount(amount)

        with transactional(self.ledger, self.registry, "mint"):
            asset = self.registry.get(asset_id)
            if caller != asset.minter:
                raise InvalidMinter(f"{caller} is not the minter of asset {asset_id}.")

            previous = asset.mint_data.current_mint_amount or 0
            try:
                new_total = checked_add(previous, amount)
            except ArithmeticOverflow as e:
                raise MintAmountOverflow(f"Minted total of asset {asset_id} overflows.") from e

            if new_total > asset.effective_cap:
                raise MintAmountGreaterThanMaxSupply(
                    f"Minting {amount} brings asset {asset_id} to {new_total}, over its cap {asset.effective_cap}."
                )

            self.ledger.deposit(asset_id, caller, amount)
            self.registry.update_mint_data(
                asset_id, replace(asset.mint_data, current_mint_amount=new_total)
            )

        logger.info(f"minted {amount} of asset {asset_id} to {caller}, total minted {new_total}")
        return AssetMinted(minter=caller, asset_id=asset_id, amount=amount)
