"""Performance metrics computed from a backtest's trades and equity curve."""

from __future__ import annotations

import math
from typing import Sequence

from stock_advisor.market.models import Trade, TradeSide
from stock_advisor.simulator.models import EquityPoint, RoundTrip


def pair_round_trips(trades: Sequence[Trade]) -> list[RoundTrip]:
    trips: list[RoundTrip] = []
    entry: Trade | None = None
    for trade in trades:
        if trade.side == TradeSide.BUY:
            entry = trade
        elif entry is not None:
            trips.append(RoundTrip(entry=entry, exit=trade))
            entry = None
    return trips


def win_rate(trips: Sequence[RoundTrip]) -> float:
    if not trips:
        return 0.0
    wins = sum(1 for trip in trips if trip.is_win)
    return wins / len(trips) * 100.0


def average_trade_return(trips: Sequence[RoundTrip]) -> float:
    if not trips:
        return 0.0
    return sum(trip.return_pct for trip in trips) / len(trips)


def equity_returns(curve: Sequence[EquityPoint]) -> list[float]:
    returns: list[float] = []
    for previous, current in zip(curve, curve[1:]):
        if previous.equity == 0:
            continue
        returns.append((current.equity - previous.equity) / previous.equity * 100.0)
    return returns


def sharpe_ratio(returns: Sequence[float], annualization_days: int = 252) -> float:
    if len(returns) < 2:
        return 0.0
    mean = sum(returns) / len(returns)
    variance = sum((value - mean) ** 2 for value in returns) / len(returns)
    stddev = math.sqrt(variance)
    if math.isclose(stddev, 0.0, abs_tol=1e-12):
        return 0.0
    return mean / stddev * math.sqrt(annualization_days)


def max_drawdown(curve: Sequence[EquityPoint]) -> float:
    peak = None
    worst = 0.0
    for point in curve:
        if peak is None or point.equity > peak:
            peak = point.equity
        if peak <= 0:
            continue
        drawdown = (peak - point.equity) / peak * 100.0
        if drawdown > worst:
            worst = drawdown
    return worst
