"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stock_advisor.advisor.models import RecommendationConfig
from stock_advisor.simulator.models import BacktestConfig


@dataclass(frozen=True)
class StrategyConfig:
    name: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BacktestSettings:
    initial_capital: float = 10000.0
    lookback_days: int = 365
    simulator: BacktestConfig = field(default_factory=BacktestConfig)


@dataclass(frozen=True)
class PortfolioConfig:
    initial_cash: float = 100000.0


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class AdvisorConfig:
    name: str
    version: str
    run_id_prefix: str
    symbols: list[str]
    strategies: list[StrategyConfig]
    backtest: BacktestSettings = field(default_factory=BacktestSettings)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    portfolio: PortfolioConfig = field(default_factory=PortfolioConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def strategy(self, name: str) -> StrategyConfig:
        for entry in self.strategies:
            if entry.name == name:
                return entry
        raise ValueError(f"Strategy not configured: {name}")
