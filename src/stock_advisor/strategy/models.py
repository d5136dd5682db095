"""Strategy identifiers and shared helpers."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from stock_advisor.market.models import PriceBar


class StrategyKind(str, Enum):
    MA_CROSSOVER = "ma_crossover"
    RSI_MEAN_REVERSION = "rsi_mean_reversion"
    MOMENTUM = "momentum"
    BREAKOUT = "breakout"


def closes_through(bars: Sequence[PriceBar], index: int) -> list[float]:
    return [bar.close for bar in bars[: index + 1]]


def can_signal(bars: Sequence[PriceBar], index: int, warmup: int) -> bool:
    return warmup <= index < len(bars)
