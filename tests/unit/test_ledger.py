"""Unit tests for the position ledger."""
from __future__ import annotations

import pytest

from lending_core.errors import InvalidAmount, NotInitialized
from lending_core.models import AccountPosition, ProtocolConfig
from lending_core.services.ledger import PositionLedger, RecordKind, position_key
from lending_core.storage import InMemoryStore


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def ledger(store: InMemoryStore) -> PositionLedger:
    return PositionLedger(store)


class TestPositionKeys:
    def test_composite_key(self) -> None:
        assert position_key(RecordKind.COLLATERAL, "alice") == "collateral:alice"
        assert position_key(RecordKind.DEBT, "alice") == "debt:alice"


class TestConfigRecord:
    def test_missing_config(self, ledger: PositionLedger) -> None:
        assert not ledger.is_initialized()
        with pytest.raises(NotInitialized):
            ledger.load_config()

    def test_save_and_load(
        self, ledger: PositionLedger, sample_protocol_config: ProtocolConfig
    ) -> None:
        ledger.save_config(sample_protocol_config)
        assert ledger.is_initialized()
        assert ledger.load_config() == sample_protocol_config

    def test_corrupt_config_record_is_not_patched(
        self,
        ledger: PositionLedger,
        store: InMemoryStore,
        sample_protocol_config: ProtocolConfig,
    ) -> None:
        record = sample_protocol_config.to_record()
        del record["mock_price"]
        store.set("config", record)
        with pytest.raises(KeyError):
            ledger.load_config()


class TestPositions:
    def test_missing_position_reads_zero(self, ledger: PositionLedger) -> None:
        assert ledger.get_position("alice") == AccountPosition("alice", 0, 0)

    def test_reads_do_not_create_records(
        self, ledger: PositionLedger, store: InMemoryStore
    ) -> None:
        ledger.get_position("alice")
        assert store.keys() == []

    def test_writes_are_keyed_per_account(
        self, ledger: PositionLedger, store: InMemoryStore
    ) -> None:
        ledger.set_collateral("alice", 10)
        ledger.set_debt("bob", 3)
        assert store.get("collateral:alice") == 10
        assert store.get("debt:bob") == 3
        assert ledger.get_position("alice") == AccountPosition("alice", 10, 0)
        assert ledger.get_position("bob") == AccountPosition("bob", 0, 3)

    def test_negative_balance_rejected(self, ledger: PositionLedger) -> None:
        with pytest.raises(InvalidAmount):
            ledger.set_debt("alice", -1)
        assert ledger.debt_of("alice") == 0
