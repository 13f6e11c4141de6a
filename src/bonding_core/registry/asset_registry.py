import logging
from dataclasses import replace
from typing import Dict, Iterator, Tuple

from bonding_core.common.errors import (
    AssetAlreadyExists,
    AssetDoesNotExist,
    MintAmountGreaterThanMaxSupply,
)
from bonding_core.common.math import ensure_amount
from bonding_core.common.model import BondingAsset, CurveParams, MintingData, TokenMetadata
from bonding_core.ledger.base import MultiAssetLedger


logger = logging.getLogger(__name__)


class AssetRegistry:
    """
    Keyed store of BondingAsset records plus the curve id counter.

    The counter belongs to the registry instance and is read-then-incremented on every
    allocation, which is only safe under the engine's single-writer execution model.
    """

    def __init__(self, ledger: MultiAssetLedger):
        self._ledger = ledger
        self._assets: Dict[int, BondingAsset] = {}
        self._next_curve_id = 0

    @property
    def next_curve_id(self) -> int:
        return self._next_curve_id

    def _next_id(self) -> int:
        curve_id = self._next_curve_id
        self._next_curve_id += 1
        return curve_id

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[BondingAsset]:
        return iter(self._assets.values())

    def contains(self, asset_id: int) -> bool:
        return asset_id in self._assets

    def create(
        self,
        creator: str,
        asset_id: int,
        curve: CurveParams,
        max_supply: int,
        metadata: TokenMetadata,
    ) -> BondingAsset:
        """
        Registers a new asset with the creator as its minter and max_supply as its minting cap.

        :raises AssetAlreadyExists: if the ledger already issued 'asset_id' or a record exists.
        """
        ensure_amount(max_supply, "max_supply")
        if self._ledger.total_issuance(asset_id) != 0 or self.contains(asset_id):
            raise AssetAlreadyExists(f"Asset {asset_id} already exists.")

        asset = BondingAsset(
            creator=creator,
            asset_id=asset_id,
            curve=curve,
            max_supply=max_supply,
            metadata=metadata,
            curve_id=self._next_id(),
            mint_data=MintingData(minter=creator, minting_cap=max_supply, current_mint_amount=None),
        )
        self._assets[asset_id] = asset
        logger.debug(f"registered asset {asset_id} with curve id {asset.curve_id}")
        return asset

    def get(self, asset_id: int) -> BondingAsset:
        try:
            return self._assets[asset_id]
        except KeyError:
            raise AssetDoesNotExist(f"Asset {asset_id} does not exist.") from None

    def update_mint_data(self, asset_id: int, mint_data: MintingData) -> BondingAsset:
        """
        Replaces the mint bookkeeping of an asset. The rest of the record never changes.

        :raises MintAmountGreaterThanMaxSupply: the cap exceeds max_supply, or the minted
            total exceeds the cap (max_supply when no cap is set).
        """
        asset = self.get(asset_id)
        if mint_data.minting_cap is not None and mint_data.minting_cap > asset.max_supply:
            raise MintAmountGreaterThanMaxSupply(
                f"Minting cap {mint_data.minting_cap} exceeds max supply {asset.max_supply}."
            )
        cap = asset.max_supply if mint_data.minting_cap is None else mint_data.minting_cap
        if mint_data.current_mint_amount is not None and mint_data.current_mint_amount > cap:
            raise MintAmountGreaterThanMaxSupply(
                f"Minted total {mint_data.current_mint_amount} of asset {asset_id} exceeds its cap {cap}."
            )
        updated = replace(asset, mint_data=mint_data)
        self._assets[asset_id] = updated
        return updated

    def snapshot(self) -> Tuple[Dict[int, BondingAsset], int]:
        # records are frozen, a shallow copy is enough
        return dict(self._assets), self._next_curve_id

    def restore(self, snapshot: Tuple[Dict[int, BondingAsset], int]):
        assets, next_curve_id = snapshot
        self._assets = dict(assets)
        self._next_curve_id = next_curve_id
