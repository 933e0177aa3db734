"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import DEFAULT_MOCK_PRICE, PriceSourceMode

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProtocolParamsConfig:
    admin: str = ""
    collateral_asset: str = ""
    debt_asset: str = ""
    ltv_bps: int = 5000
    price_source: str = PriceSourceMode.MOCK.value
    mock_price: int = DEFAULT_MOCK_PRICE

    @property
    def price_source_mode(self) -> PriceSourceMode:
        return PriceSourceMode(self.price_source)


@dataclass(frozen=True)
class StorageConfig:
    path: Path = Path("lending_state.json")


@dataclass(frozen=True)
class AppConfig:
    protocol: ProtocolParamsConfig = field(default_factory=ProtocolParamsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    custody: str = "lending-core"


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_protocol(raw: dict[str, Any]) -> ProtocolParamsConfig:
    return ProtocolParamsConfig(
        admin=str(raw.get("admin", "")),
        collateral_asset=str(raw.get("collateral_asset", "")),
        debt_asset=str(raw.get("debt_asset", "")),
        ltv_bps=int(raw.get("ltv_bps", 5000)),
        price_source=str(raw.get("price_source", PriceSourceMode.MOCK.value)).lower(),
        mock_price=int(raw.get("mock_price", DEFAULT_MOCK_PRICE)),
    )


def _build_storage(raw: dict[str, Any], base_dir: Path) -> StorageConfig:
    path = Path(raw.get("path", StorageConfig.path))
    if not path.is_absolute():
        path = base_dir / path
    return StorageConfig(path=path)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        protocol=_build_protocol(raw.get("protocol", {})),
        storage=_build_storage(raw.get("storage", {}), config_path.resolve().parent),
        custody=str(raw.get("custody", "lending-core")),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    proto = cfg.protocol
    if not proto.admin:
        raise ValueError("Protocol admin must be configured")
    if not proto.collateral_asset or not proto.debt_asset:
        raise ValueError("Both collateral_asset and debt_asset must be configured")
    if proto.collateral_asset == proto.debt_asset:
        raise ValueError("collateral_asset and debt_asset must differ")
    if not 0 <= proto.ltv_bps <= 10_000:
        raise ValueError(f"ltv_bps must be within [0, 10000], got {proto.ltv_bps}")
    if proto.price_source not in {m.value for m in PriceSourceMode}:
        raise ValueError(f"Unknown price_source '{proto.price_source}'")
    if not cfg.custody:
        raise ValueError("custody identity must not be empty")
