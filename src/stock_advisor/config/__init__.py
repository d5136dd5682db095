"""Config loading and freezing."""

from stock_advisor.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from stock_advisor.config.models import (
    AdvisorConfig,
    BacktestSettings,
    MonitoringConfig,
    PortfolioConfig,
    StrategyConfig,
)

__all__ = [
    "AdvisorConfig",
    "BacktestSettings",
    "MonitoringConfig",
    "PortfolioConfig",
    "StrategyConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
