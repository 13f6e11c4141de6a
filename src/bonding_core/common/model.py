from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bonding_core.common.enums import CurveType


@dataclass(frozen=True)
class TokenMetadata:
    """Descriptive metadata of a bonding curve token."""
    name: str
    symbol: str
    decimals: int

    def __post_init__(self):
        if not 0 <= self.decimals <= 255:
            raise ValueError("Token decimals must fit into a single byte.")


@dataclass(frozen=True)
class CurveParams:
    """Encapsulates the curve variant of an asset and the parameters its integral needs."""
    curve_type: CurveType
    exponent: int = 1
    slope: int = 1

    def __post_init__(self):
        if not isinstance(self.curve_type, CurveType):
            raise ValueError("Invalid curve type.")
        if self.exponent < 0:
            raise ValueError("Exponent must be non-negative.")
        if self.slope < 0:
            raise ValueError("Slope must be non-negative.")


@dataclass(frozen=True)
class Power:
    """Fixed-point power parameters of the Bancor-style curve: (base_n / base_d) ^ (exp_n / exp_d)."""
    base_n: int
    base_d: int
    exp_n: int = 1
    exp_d: int = 1


@dataclass(frozen=True)
class MintingData:
    """
    Mint bookkeeping of an asset. 'current_mint_amount' is None until the first mint,
    which is not the same thing as having minted zero tokens.
    """
    minter: str
    minting_cap: Optional[int] = None
    current_mint_amount: Optional[int] = None


@dataclass(frozen=True)
class BondingAsset:
    """The persistent record of one bonding curve asset."""
    creator: str
    asset_id: int
    curve: CurveParams
    max_supply: int
    metadata: TokenMetadata
    curve_id: int
    mint_data: MintingData

    @property
    def minter(self) -> str:
        return self.mint_data.minter

    @property
    def effective_cap(self) -> int:
        """The minting cap, falling back to the hard max supply when none is set."""
        if self.mint_data.minting_cap is None:
            return self.max_supply
        return self.mint_data.minting_cap


@dataclass(frozen=True)
class AssetCreated:
    asset_id: int
    creator: str
    curve_id: int


@dataclass(frozen=True)
class AssetMinted:
    minter: str
    asset_id: int
    amount: int


@dataclass(frozen=True)
class AssetBought:
    buyer: str
    asset_id: int
    amount: int
    cost: int


@dataclass(frozen=True)
class AssetSold:
    seller: str
    beneficiary: str
    asset_id: int
    amount: int
    return_amount: int


@dataclass(frozen=True)
class AssetAirDropped:
    asset_id: int
    amount: int
    source: str
    beneficiaries: Tuple[str, ...]


@dataclass(frozen=True)
class AssetMintedWithReserve:
    account: str
    asset_id: int
    reserve_amount: int
    minted: int


@dataclass(frozen=True)
class AssetBurnedForReserve:
    account: str
    beneficiary: str
    asset_id: int
    amount: int
    reserve_amount: int


@dataclass
class CurveStatus:
    """Sampled integral values of a curve, for plotting, together with its validation report."""
    curve: CurveParams
    points: List[Tuple[int, int]] = field(default_factory=list)
    report: Dict[str, Any] = field(default_factory=dict)
