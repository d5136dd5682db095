"""All-in/all-out backtest simulator."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from stock_advisor.errors import InvalidQuantity
from stock_advisor.market.models import PriceBar, Signal, Trade, TradeSide
from stock_advisor.market.series import validate_series
from stock_advisor.monitoring.audit import AuditLog
from stock_advisor.simulator.metrics import (
    average_trade_return,
    equity_returns,
    max_drawdown,
    pair_round_trips,
    sharpe_ratio,
    win_rate,
)
from stock_advisor.simulator.models import BacktestConfig, BacktestResult, BacktestRun, EquityPoint
from stock_advisor.strategy.registry import Strategy


class BacktestSimulator:
    """Walks a series bar by bar, acting on the strategy's signal at each close.

    The simulator keeps no state between runs; every intermediate value lives
    in ``run`` so instances can be shared across threads.
    """

    def __init__(self, config: Optional[BacktestConfig] = None, audit_log: Optional[AuditLog] = None) -> None:
        self.config = config or BacktestConfig()
        self._audit_log = audit_log

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def run(
        self,
        bars: Sequence[PriceBar],
        strategy: Strategy,
        initial_capital: float,
        symbol: str = "",
    ) -> BacktestRun:
        if isinstance(initial_capital, bool) or not initial_capital > 0:
            raise InvalidQuantity("initial_capital", initial_capital)
        series = validate_series(bars)

        cash = float(initial_capital)
        shares_held = 0
        trades: list[Trade] = []
        equity_curve: list[EquityPoint] = []

        for index in range(strategy.warmup, len(series)):
            bar = series[index]
            signal = strategy.signal_at(series, index)

            if signal == Signal.BUY and shares_held == 0 and bar.close > 0 and cash >= bar.close:
                shares = math.floor(cash / bar.close)
                trade = Trade(date=bar.date, side=TradeSide.BUY, shares=shares, price=bar.close, symbol=symbol)
                cash -= trade.total
                shares_held = shares
                trades.append(trade)
            elif signal == Signal.SELL and shares_held > 0:
                trade = Trade(date=bar.date, side=TradeSide.SELL, shares=shares_held, price=bar.close, symbol=symbol)
                cash += trade.total
                shares_held = 0
                trades.append(trade)

            equity_curve.append(
                EquityPoint(date=bar.date, equity=cash + shares_held * bar.close, cash=cash, shares=shares_held)
            )

        last_close = series[-1].close
        final_value = cash + shares_held * last_close
        total_return = final_value - initial_capital
        trips = pair_round_trips(trades)

        result = BacktestResult(
            strategy_name=strategy.name,
            start_date=series[0].date,
            end_date=series[-1].date,
            initial_capital=float(initial_capital),
            final_value=final_value,
            total_return=total_return,
            total_return_percent=total_return / initial_capital * 100.0,
            trade_count=len(trades),
            win_rate=win_rate(trips),
            sharpe_ratio=sharpe_ratio(equity_returns(equity_curve), self.config.annualization_days),
            max_drawdown=max_drawdown(equity_curve),
            avg_trade_return=average_trade_return(trips),
        )
        self._log(
            "backtest_completed",
            {
                "symbol": symbol,
                "strategy": strategy.name,
                "bars": len(series),
                "trades": len(trades),
                "final_value": final_value,
                "total_return_percent": result.total_return_percent,
                "open_shares": shares_held,
            },
        )
        return BacktestRun(
            result=result,
            trades=trades,
            equity_curve=equity_curve,
            open_shares=shares_held,
            final_cash=cash,
        )
