"""Backtest simulation."""

from stock_advisor.simulator.backtest import BacktestSimulator
from stock_advisor.simulator.compare import StrategyComparison, compare_strategies
from stock_advisor.simulator.models import (
    BacktestConfig,
    BacktestResult,
    BacktestRun,
    EquityPoint,
    RoundTrip,
)

__all__ = [
    "BacktestConfig",
    "BacktestResult",
    "BacktestRun",
    "BacktestSimulator",
    "EquityPoint",
    "RoundTrip",
    "StrategyComparison",
    "compare_strategies",
]
