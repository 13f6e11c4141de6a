"""
Error taxonomy for the bonding curve engine.

Every error is permanent for the call that raised it: nothing is retried and nothing is
partially applied. Callers change inputs or state and resubmit.

Categories:
- Asset lifecycle errors: creation, lookup and minting rules
- Trade errors: purchases the buyer cannot afford
- Curve arithmetic errors: checked 128-bit arithmetic that would overflow, underflow or
  divide by zero
- Ledger errors: raised by the multi-asset ledger and propagated unchanged
"""


class BondingCurveError(Exception):
    """Base class for all engine errors. ``kind`` is the stable name of the error."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class InsufficientBalanceToReserve(BondingCurveError):
    """Raised when the creator cannot afford the asset creation deposit."""


class AssetAlreadyExists(BondingCurveError):
    """Raised when the asset id already has ledger issuance or a registry record."""


class AssetDoesNotExist(BondingCurveError):
    """Raised when an operation references an unregistered asset id."""


class InvalidMinter(BondingCurveError):
    """Raised when the caller is not the registered minter of the asset."""


class MintUninitiated(BondingCurveError):
    """Raised when a trade is attempted before anything was minted."""


class MintAmountGreaterThanMaxSupply(BondingCurveError):
    """Raised when a mint or trade would exceed the available or capped supply."""


class MintAmountOverflow(BondingCurveError):
    """Raised when accumulating minted amounts overflows."""


class CurveTypeNotDefined(BondingCurveError):
    """Raised when a curve variant has no integral implementation."""


class InsufficientBalanceForPurchase(BondingCurveError):
    """Raised when the buyer cannot afford the computed cost."""


class InvalidCurveParameters(BondingCurveError):
    """Raised when curve inputs fail their preconditions."""


class CurveArithmeticError(BondingCurveError):
    """Base class for checked arithmetic failures."""


class ArithmeticOverflow(CurveArithmeticError):
    """Raised when a result does not fit into an unsigned 128-bit integer."""


class ArithmeticUnderflow(CurveArithmeticError):
    """Raised when a result would be negative, e.g. a non-monotonic curve."""


class DivisionByZero(CurveArithmeticError):
    """Raised when a curve computation divides by zero."""


class LedgerError(BondingCurveError):
    """Base class for errors surfaced by the multi-asset ledger."""


class InsufficientBalance(LedgerError):
    """Raised when an account cannot withdraw the requested amount."""


class BelowMinimumBalance(LedgerError):
    """Raised when a withdrawal would leave an account with dust below the existential deposit."""


class BalanceOverflow(LedgerError):
    """Raised when a credit would overflow a balance or the total issuance."""
