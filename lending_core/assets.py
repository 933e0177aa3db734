"""Store-backed fungible asset balances."""
from __future__ import annotations

import logging

from .errors import InsufficientBalance
from .fixed_point import checked_add, require_positive
from .interfaces.storage import KeyValueStore

logger = logging.getLogger(__name__)


def _balance_key(asset_ref: str, account: str) -> str:
    return f"balance:{asset_ref}:{account}"


class StoreAssetLedger:
    """Token balances kept in the same store as the lending ledger.

    Sharing the store puts transfers inside the caller's transaction, so a
    transfer and the ledger write it accompanies commit or roll back together.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def balance(self, asset_ref: str, account: str) -> int:
        return int(self._store.get_or(_balance_key(asset_ref, account), 0))

    def mint(self, asset_ref: str, recipient: str, amount: int) -> None:
        """Credit ``amount`` out of thin air (local faucet)."""
        require_positive(amount)
        key = _balance_key(asset_ref, recipient)
        self._store.set(key, checked_add(self.balance(asset_ref, recipient), amount))
        logger.info("Minted %d %s to %s", amount, asset_ref, recipient)

    def transfer(self, asset_ref: str, sender: str, recipient: str, amount: int) -> None:
        require_positive(amount)
        sender_balance = self.balance(asset_ref, sender)
        if sender_balance < amount:
            raise InsufficientBalance(
                f"'{sender}' holds {sender_balance} {asset_ref}, needs {amount}"
            )
        with self._store.transaction():
            self._store.set(_balance_key(asset_ref, sender), sender_balance - amount)
            self._store.set(
                _balance_key(asset_ref, recipient),
                checked_add(self.balance(asset_ref, recipient), amount),
            )
        logger.debug("Transferred %d %s from %s to %s", amount, asset_ref, sender, recipient)
