"""Backtest data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional

from stock_advisor.market.models import Trade


@dataclass(frozen=True)
class BacktestConfig:
    annualization_days: int = 252


@dataclass(frozen=True)
class EquityPoint:
    date: date
    equity: float
    cash: float
    shares: int


@dataclass(frozen=True)
class RoundTrip:
    entry: Trade
    exit: Trade

    @property
    def profit(self) -> float:
        return self.exit.total - self.entry.total

    @property
    def return_pct(self) -> float:
        return (self.exit.price - self.entry.price) / self.entry.price * 100.0

    @property
    def is_win(self) -> bool:
        return self.exit.total > self.entry.total


@dataclass(frozen=True)
class BacktestResult:
    strategy_name: str
    start_date: date
    end_date: date
    initial_capital: float
    final_value: float
    total_return: float
    total_return_percent: float
    trade_count: int
    win_rate: float
    sharpe_ratio: float
    max_drawdown: float
    avg_trade_return: float


@dataclass(frozen=True)
class BacktestRun:
    result: BacktestResult
    trades: list[Trade] = field(default_factory=list)
    equity_curve: list[EquityPoint] = field(default_factory=list)
    open_shares: int = 0
    final_cash: Optional[float] = None

    def __iter__(self) -> Iterator:
        # unpacks as (result, trades)
        yield self.result
        yield self.trades
