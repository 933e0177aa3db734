"""Position ledger: protocol config record plus per-account balances."""
from __future__ import annotations

import logging
from enum import Enum

from ..errors import InvalidAmount, NotInitialized
from ..interfaces.storage import KeyValueStore
from ..models import AccountPosition, ProtocolConfig

logger = logging.getLogger(__name__)

CONFIG_KEY = "config"


class RecordKind(Enum):
    COLLATERAL = "collateral"
    DEBT = "debt"


def position_key(kind: RecordKind, account: str) -> str:
    """Composite key ``<kind>:<account>`` for one balance record."""
    return f"{kind.value}:{account}"


class PositionLedger:
    """Sole writer of the protocol config and account position records.

    Missing balance records read as zero: positions come into existence on
    their first write and are never deleted.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Protocol config
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        return self._store.get(CONFIG_KEY) is not None

    def load_config(self) -> ProtocolConfig:
        raw = self._store.get(CONFIG_KEY)
        if raw is None:
            raise NotInitialized("Protocol has not been initialized")
        return ProtocolConfig.from_record(raw)

    def save_config(self, config: ProtocolConfig) -> None:
        self._store.set(CONFIG_KEY, config.to_record())

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def _read(self, kind: RecordKind, account: str) -> int:
        return int(self._store.get_or(position_key(kind, account), 0))

    def _write(self, kind: RecordKind, account: str, amount: int) -> None:
        if amount < 0:
            raise InvalidAmount(f"{kind.value} balance of '{account}' would go negative")
        self._store.set(position_key(kind, account), amount)

    def collateral_of(self, account: str) -> int:
        return self._read(RecordKind.COLLATERAL, account)

    def debt_of(self, account: str) -> int:
        return self._read(RecordKind.DEBT, account)

    def set_collateral(self, account: str, amount: int) -> None:
        self._write(RecordKind.COLLATERAL, account, amount)

    def set_debt(self, account: str, amount: int) -> None:
        self._write(RecordKind.DEBT, account, amount)

    def get_position(self, account: str) -> AccountPosition:
        return AccountPosition(
            account=account,
            collateral_amount=self.collateral_of(account),
            debt_amount=self.debt_of(account),
        )
