from abc import ABC, abstractmethod
from typing import Any


class MultiAssetLedger(ABC):
    """
    Abstract base class for the multi-asset ledger the engine trades against.
    Assets are identified by integer ids, accounts by strings.
    """

    @abstractmethod
    def total_issuance(self, asset_id: int) -> int:
        """
        Returns the total issuance of an asset.

        :param asset_id: int - The asset to look up.
        :return: int: Sum of all balances of that asset, 0 if the asset is unknown.
        """
        pass

    @abstractmethod
    def free_balance(self, asset_id: int, account: str) -> int:
        """
        Returns the balance an account can spend.

        :param asset_id: int
        :param account: str
        :return: int
        """
        pass

    @abstractmethod
    def ensure_can_withdraw(self, asset_id: int, account: str, amount: int):
        """
        Raises a LedgerError if 'account' cannot withdraw 'amount' of 'asset_id'.
        """
        pass

    @abstractmethod
    def can_reserve(self, asset_id: int, account: str, amount: int) -> bool:
        """
        Whether 'account' holds enough of 'asset_id' to have 'amount' reserved.
        """
        pass

    @abstractmethod
    def deposit(self, asset_id: int, account: str, amount: int):
        """
        Credits newly issued 'amount' of 'asset_id' to 'account'.
        """
        pass

    @abstractmethod
    def withdraw(self, asset_id: int, account: str, amount: int):
        """
        Debits and burns 'amount' of 'asset_id' from 'account'.
        """
        pass

    @abstractmethod
    def transfer(self, asset_id: int, source: str, dest: str, amount: int):
        """
        Moves 'amount' of 'asset_id' from 'source' to 'dest'. Either both balances change or
        neither does.
        """
        pass

    @abstractmethod
    def snapshot(self) -> Any:
        """
        Captures the ledger state so a failed operation can be undone with restore().
        """
        pass

    @abstractmethod
    def restore(self, snapshot: Any):
        """
        Puts the ledger back into the state captured by snapshot().
        """
        pass
