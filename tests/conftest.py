"""Shared test fixtures and sample data."""
from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from lending_core.assets import StoreAssetLedger
from lending_core.auth import SignerSet
from lending_core.models import AccountPosition, ProtocolConfig
from lending_core.services import LendingProtocol
from lending_core.storage import InMemoryStore
from tests.constants import (
    ADMIN,
    ALICE,
    BOB,
    COLLATERAL,
    CUSTODY,
    DEBT,
    LTV_BPS,
    PRICE,
)


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def restore_root_logger():
    """configure_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Collaborator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def auth() -> SignerSet:
    return SignerSet()


@pytest.fixture()
def assets(store: InMemoryStore) -> StoreAssetLedger:
    return StoreAssetLedger(store)


@pytest.fixture()
def protocol(
    store: InMemoryStore, auth: SignerSet, assets: StoreAssetLedger
) -> LendingProtocol:
    """Uninitialized protocol."""
    return LendingProtocol(store, auth, assets, custody=CUSTODY)


@pytest.fixture()
def initialized(protocol: LendingProtocol, auth: SignerSet) -> LendingProtocol:
    with auth.signed_by(ADMIN):
        protocol.initialize(ADMIN, COLLATERAL, DEBT, LTV_BPS, mock_price=PRICE)
    return protocol


@pytest.fixture()
def funded(
    initialized: LendingProtocol, assets: StoreAssetLedger
) -> LendingProtocol:
    """Initialized protocol with a funded custody and two funded users."""
    assets.mint(DEBT, CUSTODY, 10**15)
    assets.mint(COLLATERAL, ALICE, 10**12)
    assets.mint(COLLATERAL, BOB, 10**12)
    return initialized


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_protocol_config() -> ProtocolConfig:
    return ProtocolConfig(
        admin=ADMIN,
        collateral_asset_ref=COLLATERAL,
        debt_asset_ref=DEBT,
        ltv_bps=LTV_BPS,
        mock_price=PRICE,
    )


@pytest.fixture()
def sample_position() -> AccountPosition:
    return AccountPosition(
        account=ALICE, collateral_amount=1_000_000_000, debt_amount=250_000_000
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    protocol:
      admin: GADMIN
      collateral_asset: KALE
      debt_asset: USDC
      ltv_bps: 5000
      price_source: mock
      mock_price: 5000000
    storage:
      path: state.json
    custody: lending-core
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
