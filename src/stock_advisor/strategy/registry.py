"""Closed set of strategy variants and their builders."""

from __future__ import annotations

from typing import Callable, Union

from stock_advisor.strategy.breakout import Breakout
from stock_advisor.strategy.crossover import MovingAverageCrossover
from stock_advisor.strategy.mean_reversion import RsiMeanReversion
from stock_advisor.strategy.models import StrategyKind
from stock_advisor.strategy.momentum import Momentum

Strategy = Union[MovingAverageCrossover, RsiMeanReversion, Momentum, Breakout]

_BUILDERS: dict[StrategyKind, Callable[[dict], Strategy]] = {
    StrategyKind.MA_CROSSOVER: MovingAverageCrossover.from_dict,
    StrategyKind.RSI_MEAN_REVERSION: RsiMeanReversion.from_dict,
    StrategyKind.MOMENTUM: Momentum.from_dict,
    StrategyKind.BREAKOUT: Breakout.from_dict,
}

_DISPLAY_NAMES: dict[str, StrategyKind] = {
    MovingAverageCrossover.name.lower(): StrategyKind.MA_CROSSOVER,
    RsiMeanReversion.name.lower(): StrategyKind.RSI_MEAN_REVERSION,
    Momentum.name.lower(): StrategyKind.MOMENTUM,
    Breakout.name.lower(): StrategyKind.BREAKOUT,
}

DESCRIPTIONS: dict[StrategyKind, str] = {
    StrategyKind.MA_CROSSOVER: (
        "Generates buy signals when short-term moving average crosses above long-term, "
        "and sell signals on the opposite crossover."
    ),
    StrategyKind.RSI_MEAN_REVERSION: (
        "Buys when RSI indicates oversold conditions (below 30) and sells when overbought (above 70)."
    ),
    StrategyKind.MOMENTUM: (
        "Follows strong price trends by buying on positive momentum and selling on negative momentum."
    ),
    StrategyKind.BREAKOUT: (
        "Enters positions when price breaks above recent highs and exits on breakdowns below recent lows."
    ),
}


def resolve_kind(name: str | StrategyKind) -> StrategyKind:
    if isinstance(name, StrategyKind):
        return name
    key = str(name).strip().lower()
    try:
        return StrategyKind(key)
    except ValueError:
        pass
    if key in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[key]
    raise ValueError(f"Unknown strategy: {name}")


def build_strategy(name: str | StrategyKind, parameters: dict | None = None) -> Strategy:
    return _BUILDERS[resolve_kind(name)](dict(parameters or {}))


def default_strategies() -> list[Strategy]:
    return [builder({}) for builder in _BUILDERS.values()]


def describe_strategy(name: str | StrategyKind) -> str:
    try:
        return DESCRIPTIONS[resolve_kind(name)]
    except ValueError:
        return "Custom trading strategy based on technical indicators."
