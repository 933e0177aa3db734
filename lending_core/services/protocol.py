"""Lending protocol: public operations over the position ledger."""
from __future__ import annotations

import logging

from ..errors import (
    AlreadyInitialized,
    InsufficientHealthFactor,
    InvalidConfiguration,
)
from ..fixed_point import BPS_SCALE, checked_add, require_i128, require_positive
from ..interfaces.asset_transfer import AssetTransfer
from ..interfaces.authenticator import Authenticator
from ..interfaces.price_source import PriceSource
from ..interfaces.storage import KeyValueStore
from ..models import (
    DEFAULT_MOCK_PRICE,
    AccountPosition,
    HealthReport,
    PositionSummary,
    PriceSourceMode,
    ProtocolConfig,
)
from ..oracles import select_price_source
from . import health
from .ledger import PositionLedger

logger = logging.getLogger(__name__)

DEFAULT_CUSTODY = "lending-core"


class LendingProtocol:
    """Single-asset collateralized lending position manager.

    Every state-changing operation runs inside one store transaction: any
    failure (authorization, missing config, overflow, health check, asset
    transfer) rolls back everything the call wrote.
    """

    def __init__(
        self,
        store: KeyValueStore,
        auth: Authenticator,
        assets: AssetTransfer,
        custody: str = DEFAULT_CUSTODY,
        external_price_source: PriceSource | None = None,
    ) -> None:
        self._store = store
        self._auth = auth
        self._assets = assets
        self._ledger = PositionLedger(store)
        self._external_price_source = external_price_source
        self.custody = custody

    @property
    def ledger(self) -> PositionLedger:
        return self._ledger

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------

    def initialize(
        self,
        admin: str,
        collateral_asset_ref: str,
        debt_asset_ref: str,
        ltv_bps: int,
        price_source_mode: PriceSourceMode = PriceSourceMode.MOCK,
        mock_price: int = DEFAULT_MOCK_PRICE,
    ) -> ProtocolConfig:
        """Write the protocol config record. Allowed exactly once."""
        with self._store.transaction():
            self._auth.require_caller_is(admin)
            if self._ledger.is_initialized():
                raise AlreadyInitialized("Protocol is already initialized")
            if not 0 <= ltv_bps <= BPS_SCALE:
                raise InvalidConfiguration(
                    f"ltv_bps must be within [0, {BPS_SCALE}], got {ltv_bps}"
                )
            require_i128(mock_price, "Mock price")
            config = ProtocolConfig(
                admin=admin,
                collateral_asset_ref=collateral_asset_ref,
                debt_asset_ref=debt_asset_ref,
                ltv_bps=ltv_bps,
                price_source_mode=price_source_mode,
                mock_price=mock_price,
            )
            self._ledger.save_config(config)

        logger.info(
            "Initialized: admin=%s collateral=%s debt=%s ltv=%d bps source=%s",
            admin, collateral_asset_ref, debt_asset_ref, ltv_bps,
            price_source_mode.value,
        )
        return config

    def set_mock_price(self, price: int) -> None:
        """Overwrite the mock price.

        Any i128 is accepted, including zero and negative values.
        """
        require_i128(price, "Mock price")
        with self._store.transaction():
            config = self._ledger.load_config()
            self._auth.require_caller_is(config.admin)
            self._ledger.save_config(config.with_mock_price(price))
        logger.info("Mock price set to %d", price)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def get_mock_price(self) -> int:
        return self._ledger.load_config().mock_price

    def get_ltv(self) -> int:
        return self._ledger.load_config().ltv_bps

    def get_admin(self) -> str:
        return self._ledger.load_config().admin

    def get_position(self, account: str) -> AccountPosition:
        return self._ledger.get_position(account)

    def check_health_factor(self, account: str) -> HealthReport:
        """Evaluate the committed position of ``account``."""
        config = self._ledger.load_config()
        position = self._ledger.get_position(account)
        return self._evaluate(config, position.collateral_amount, position.debt_amount)

    def available_to_borrow(self, account: str) -> int:
        config = self._ledger.load_config()
        position = self._ledger.get_position(account)
        capacity = self._capacity(config, position.collateral_amount)
        return health.available_to_borrow(capacity, position.debt_amount)

    def position_summary(self, account: str) -> PositionSummary:
        config = self._ledger.load_config()
        position = self._ledger.get_position(account)
        quote = self._price_source(config).get_price()
        capacity = health.max_borrow_value(
            position.collateral_amount, config.ltv_bps, quote.price, quote.decimals
        )
        report = health.evaluate(
            position.collateral_amount, position.debt_amount,
            config.ltv_bps, quote.price, quote.decimals,
        )
        return PositionSummary(
            account=account,
            collateral_amount=position.collateral_amount,
            debt_amount=position.debt_amount,
            collateral_value=health.collateral_value(
                position.collateral_amount, quote.price, quote.decimals
            ),
            max_borrow_value=capacity,
            available_to_borrow=health.available_to_borrow(capacity, position.debt_amount),
            health_factor_bps=report.health_factor_bps,
            risk=health.classify_risk(report.health_factor_bps),
        )

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------

    def deposit(self, caller: str, amount: int) -> None:
        """Move ``amount`` of collateral into custody and credit ``caller``."""
        require_positive(amount)
        with self._store.transaction():
            self._auth.require_caller_is(caller)
            config = self._ledger.load_config()
            self._assets.transfer(config.collateral_asset_ref, caller, self.custody, amount)
            new_collateral = checked_add(self._ledger.collateral_of(caller), amount)
            self._ledger.set_collateral(caller, new_collateral)
        logger.info("Deposit: %s +%d collateral (total %d)", caller, amount, new_collateral)

    def borrow(self, caller: str, amount: int) -> None:
        """Borrow ``amount`` of the debt asset if the position stays healthy.

        The candidate debt is evaluated directly; nothing is written until
        the health check has passed.
        """
        require_positive(amount)
        with self._store.transaction():
            self._auth.require_caller_is(caller)
            config = self._ledger.load_config()
            position = self._ledger.get_position(caller)
            new_debt = checked_add(position.debt_amount, amount)

            report = self._evaluate(config, position.collateral_amount, new_debt)
            if not report.is_healthy:
                logger.warning(
                    "Borrow rejected: %s requested %d, health factor would be %d bps",
                    caller, amount, report.health_factor_bps,
                )
                raise InsufficientHealthFactor(caller, report)

            self._ledger.set_debt(caller, new_debt)
            self._assets.transfer(config.debt_asset_ref, self.custody, caller, amount)
        logger.info(
            "Borrow: %s +%d debt (total %d, hf %d bps)",
            caller, amount, new_debt, report.health_factor_bps,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _price_source(self, config: ProtocolConfig) -> PriceSource:
        return select_price_source(config, self._ledger, self._external_price_source)

    def _evaluate(
        self, config: ProtocolConfig, collateral_amount: int, debt_amount: int
    ) -> HealthReport:
        if debt_amount == 0:
            # debt-free positions never need a quote
            return health.evaluate(collateral_amount, 0, config.ltv_bps, 0, 0)
        quote = self._price_source(config).get_price()
        return health.evaluate(
            collateral_amount, debt_amount, config.ltv_bps, quote.price, quote.decimals
        )

    def _capacity(self, config: ProtocolConfig, collateral_amount: int) -> int:
        quote = self._price_source(config).get_price()
        return health.max_borrow_value(
            collateral_amount, config.ltv_bps, quote.price, quote.decimals
        )
