"""Strategy signal generators and indicators."""

from stock_advisor.strategy.breakout import Breakout
from stock_advisor.strategy.crossover import MovingAverageCrossover
from stock_advisor.strategy.indicators import IndicatorSeries
from stock_advisor.strategy.mean_reversion import RsiMeanReversion
from stock_advisor.strategy.models import StrategyKind
from stock_advisor.strategy.momentum import Momentum
from stock_advisor.strategy.registry import (
    Strategy,
    build_strategy,
    default_strategies,
    describe_strategy,
    resolve_kind,
)

__all__ = [
    "Breakout",
    "IndicatorSeries",
    "Momentum",
    "MovingAverageCrossover",
    "RsiMeanReversion",
    "Strategy",
    "StrategyKind",
    "build_strategy",
    "default_strategies",
    "describe_strategy",
    "resolve_kind",
]
