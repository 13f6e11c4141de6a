import logging
from typing import Dict, Optional, Tuple

from bonding_core.common.errors import (
    ArithmeticOverflow,
    BalanceOverflow,
    BelowMinimumBalance,
    InsufficientBalance,
)
from bonding_core.common.math import checked_add, ensure_amount
from bonding_core.ledger.base import MultiAssetLedger


logger = logging.getLogger(__name__)


class InMemoryLedger(MultiAssetLedger):
    """
    A dictionary-backed multi-asset ledger.

    Balances are keyed by (asset_id, account). An account's balance of an asset may be zero
    or at least that asset's existential deposit; anything in between is dust and rejected
    with BelowMinimumBalance, and credits that would leave such dust are rejected as well.
    """

    def __init__(self, existential_deposits: Optional[Dict[int, int]] = None):
        self._balances: Dict[Tuple[int, str], int] = {}
        self._issuance: Dict[int, int] = {}
        self._existential_deposits = dict(existential_deposits or {})

    def existential_deposit(self, asset_id: int) -> int:
        return self._existential_deposits.get(asset_id, 0)

    def total_issuance(self, asset_id: int) -> int:
        return self._issuance.get(asset_id, 0)

    def free_balance(self, asset_id: int, account: str) -> int:
        return self._balances.get((asset_id, account), 0)

    def ensure_can_withdraw(self, asset_id: int, account: str, amount: int):
        ensure_amount(amount)
        balance = self.free_balance(asset_id, account)
        if amount > balance:
            raise InsufficientBalance(
                f"{account} holds {balance} of asset {asset_id}, cannot withdraw {amount}."
            )
        remaining = balance - amount
        if 0 < remaining < self.existential_deposit(asset_id):
            raise BelowMinimumBalance(
                f"Withdrawing {amount} of asset {asset_id} leaves {account} with dust {remaining}."
            )

    def can_reserve(self, asset_id: int, account: str, amount: int) -> bool:
        return self.free_balance(asset_id, account) >= ensure_amount(amount)

    def _ensure_can_credit(self, asset_id: int, account: str, amount: int) -> int:
        try:
            new_balance = checked_add(self.free_balance(asset_id, account), amount)
        except ArithmeticOverflow as e:
            raise BalanceOverflow(str(e)) from e
        if 0 < new_balance < self.existential_deposit(asset_id):
            raise BelowMinimumBalance(
                f"Crediting {amount} of asset {asset_id} leaves {account} below the existential deposit."
            )
        return new_balance

    def _set_balance(self, asset_id: int, account: str, balance: int):
        if balance == 0:
            self._balances.pop((asset_id, account), None)
        else:
            self._balances[(asset_id, account)] = balance

    def deposit(self, asset_id: int, account: str, amount: int):
        ensure_amount(amount)
        new_balance = self._ensure_can_credit(asset_id, account, amount)
        try:
            new_issuance = checked_add(self.total_issuance(asset_id), amount)
        except ArithmeticOverflow as e:
            raise BalanceOverflow(f"Total issuance of asset {asset_id} overflows.") from e

        self._set_balance(asset_id, account, new_balance)
        self._issuance[asset_id] = new_issuance
        logger.debug(f"deposit {amount} of asset {asset_id} to {account}")

    def withdraw(self, asset_id: int, account: str, amount: int):
        self.ensure_can_withdraw(asset_id, account, amount)
        self._set_balance(asset_id, account, self.free_balance(asset_id, account) - amount)
        self._issuance[asset_id] = self.total_issuance(asset_id) - amount
        logger.debug(f"withdraw {amount} of asset {asset_id} from {account}")

    def transfer(self, asset_id: int, source: str, dest: str, amount: int):
        self.ensure_can_withdraw(asset_id, source, amount)
        if source == dest or amount == 0:
            return

        new_dest_balance = self._ensure_can_credit(asset_id, dest, amount)
        self._set_balance(asset_id, source, self.free_balance(asset_id, source) - amount)
        self._set_balance(asset_id, dest, new_dest_balance)
        logger.debug(f"transfer {amount} of asset {asset_id} from {source} to {dest}")

    def snapshot(self):
        return dict(self._balances), dict(self._issuance)

    def restore(self, snapshot):
        balances, issuance = snapshot
        self._balances = dict(balances)
        self._issuance = dict(issuance)
