"""Run several strategies over one series and rank them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from stock_advisor.market.models import PriceBar
from stock_advisor.simulator.backtest import BacktestSimulator
from stock_advisor.simulator.models import BacktestRun
from stock_advisor.strategy.registry import Strategy


@dataclass(frozen=True)
class StrategyComparison:
    runs: list[BacktestRun]
    best_strategy: Optional[str]
    average_return_percent: float
    average_sharpe: float
    profitable_strategies: int


def _rank_key(run: BacktestRun) -> tuple:
    result = run.result
    return (-result.total_return, -result.sharpe_ratio, result.strategy_name)


def compare_strategies(
    bars: Sequence[PriceBar],
    strategies: Iterable[Strategy],
    initial_capital: float,
    simulator: Optional[BacktestSimulator] = None,
    symbol: str = "",
) -> StrategyComparison:
    simulator = simulator or BacktestSimulator()
    runs = [simulator.run(bars, strategy, initial_capital, symbol=symbol) for strategy in strategies]
    if not runs:
        return StrategyComparison([], None, 0.0, 0.0, 0)

    ranked = sorted(runs, key=_rank_key)
    total = len(ranked)
    return StrategyComparison(
        runs=ranked,
        best_strategy=ranked[0].result.strategy_name,
        average_return_percent=sum(run.result.total_return_percent for run in ranked) / total,
        average_sharpe=sum(run.result.sharpe_ratio for run in ranked) / total,
        profitable_strategies=sum(1 for run in ranked if run.result.total_return > 0),
    )
