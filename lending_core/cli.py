"""Command-line interface for the lending core."""
from __future__ import annotations

import argparse
import logging
import sys

from .assets import StoreAssetLedger
from .auth import SignerSet
from .config import AppConfig, load_config
from .errors import LendingError
from .fixed_point import MAX_INT
from .logging_setup import configure_logging
from .services import LendingProtocol
from .storage import JsonFileStore

logger = logging.getLogger(__name__)

_ADMIN_COMMANDS = {"init", "set-price"}


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lending-core",
        description="Single-asset collateralized lending core",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--signer",
        default=None,
        help="Identity authorizing this invocation (default: admin or ACCOUNT)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("init", help="Initialize the protocol from config")

    set_price = sub.add_parser("set-price", help="Set the mock collateral price")
    set_price.add_argument("price", type=int, help="Price at 7 decimals")

    sub.add_parser("price", help="Show the mock collateral price")
    sub.add_parser("ltv", help="Show the loan-to-value cap in bps")

    fund = sub.add_parser("fund", help="Mint asset units to an account (local faucet)")
    fund.add_argument("asset")
    fund.add_argument("account")
    fund.add_argument("amount", type=int)

    for name, help_text in (
        ("deposit", "Deposit collateral"),
        ("borrow", "Borrow the debt asset"),
    ):
        op = sub.add_parser(name, help=help_text)
        op.add_argument("account")
        op.add_argument("amount", type=int)

    for name, help_text in (
        ("health", "Show (collateral_value, debt_value, health_factor_bps)"),
        ("position", "Show the full position summary"),
    ):
        view = sub.add_parser(name, help=help_text)
        view.add_argument("account")

    return parser


def _resolve_signer(args: argparse.Namespace, config: AppConfig) -> str | None:
    if args.signer:
        return args.signer
    if args.command in _ADMIN_COMMANDS:
        return config.protocol.admin
    return getattr(args, "account", None)


def _format_hf(hf_bps: int) -> str:
    if hf_bps == MAX_INT:
        return "inf (no debt)"
    return f"{hf_bps} bps ({hf_bps / 100:.2f}%)"


def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    config = load_config(args.config)
    store = JsonFileStore(config.storage.path)
    signer = _resolve_signer(args, config)
    auth = SignerSet([signer] if signer else [])
    assets = StoreAssetLedger(store)
    protocol = LendingProtocol(store, auth, assets, custody=config.custody)

    if args.command == "init":
        params = config.protocol
        protocol.initialize(
            params.admin,
            params.collateral_asset,
            params.debt_asset,
            params.ltv_bps,
            price_source_mode=params.price_source_mode,
            mock_price=params.mock_price,
        )
    elif args.command == "set-price":
        protocol.set_mock_price(args.price)
    elif args.command == "price":
        print(protocol.get_mock_price())
    elif args.command == "ltv":
        print(protocol.get_ltv())
    elif args.command == "fund":
        assets.mint(args.asset, args.account, args.amount)
    elif args.command == "deposit":
        protocol.deposit(args.account, args.amount)
    elif args.command == "borrow":
        protocol.borrow(args.account, args.amount)
    elif args.command == "health":
        report = protocol.check_health_factor(args.account)
        print(f"collateral_value={report.collateral_value}")
        print(f"debt_value={report.debt_value}")
        print(f"health_factor={_format_hf(report.health_factor_bps)}")
    elif args.command == "position":
        summary = protocol.position_summary(args.account)
        print(f"account={summary.account}")
        print(f"collateral_amount={summary.collateral_amount}")
        print(f"debt_amount={summary.debt_amount}")
        print(f"collateral_value={summary.collateral_value}")
        print(f"max_borrow_value={summary.max_borrow_value}")
        print(f"available_to_borrow={summary.available_to_borrow}")
        print(f"health_factor={_format_hf(summary.health_factor_bps)}")
        print(f"risk={summary.risk.value}")


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    try:
        _run(args)
    except LendingError as e:
        logger.error("%s failed: %s", args.command, e)
        sys.exit(1)
