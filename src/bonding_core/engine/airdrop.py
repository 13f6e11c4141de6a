import logging
from typing import Sequence

from bonding_core.common.errors import ArithmeticOverflow, InvalidMinter, MintAmountOverflow
from bonding_core.common.math import checked_mul, ensure_amount
from bonding_core.common.model import AssetAirDropped
from bonding_core.engine.transaction import transactional
from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


class AirdropBatcher:
    """Distributes the same amount of an asset from its minter to many accounts, all or nothing."""

    def __init__(self, ledger: MultiAssetLedger, registry: AssetRegistry, requires_minter: bool = True):
        self.ledger = ledger
        self.registry = registry
        self.requires_minter = requires_minter

    def airdrop(self, caller: str, asset_id: int, beneficiaries: Sequence[str], amount: int) -> AssetAirDropped:
        ensure_amount(amount)
        beneficiaries = tuple(beneficiaries)

        with transactional(self.ledger, self.registry, "airdrop"):
            asset = self.registry.get(asset_id)
            if self.requires_minter and caller != asset.minter:
                raise InvalidMinter(f"{caller} cannot airdrop tokens of asset {asset_id}.")

            try:
                total = checked_mul(amount, len(beneficiaries))
            except ArithmeticOverflow as e:
                raise MintAmountOverflow(f"Airdrop total of asset {asset_id} overflows.") from e
            self.ledger.ensure_can_withdraw(asset_id, asset.minter, total)

            for beneficiary in beneficiaries:
                self.ledger.transfer(asset_id, asset.minter, beneficiary, amount)

        logger.info(f"airdropped {amount} of asset {asset_id} to {len(beneficiaries)} accounts")
        return AssetAirDropped(
            asset_id=asset_id,
            amount=amount,
            source=asset.minter,
            beneficiaries=beneficiaries,
        )
