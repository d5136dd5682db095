"""RSI mean reversion strategy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence

from stock_advisor.market.models import PriceBar, Signal
from stock_advisor.strategy.indicators import rsi_at
from stock_advisor.strategy.models import StrategyKind, can_signal, closes_through


@dataclass(frozen=True)
class RsiMeanReversion:
    rsi_period: int = 14
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0

    name: ClassVar[str] = "RSI Mean Reversion"
    kind: ClassVar[StrategyKind] = StrategyKind.RSI_MEAN_REVERSION

    def __post_init__(self) -> None:
        if self.rsi_period <= 0:
            raise ValueError("rsi_period must be positive")
        if not 0.0 <= self.rsi_oversold < self.rsi_overbought <= 100.0:
            raise ValueError("RSI thresholds must satisfy 0 <= oversold < overbought <= 100")

    @staticmethod
    def from_dict(data: dict) -> "RsiMeanReversion":
        return RsiMeanReversion(
            rsi_period=int(data.get("rsi_period", 14)),
            rsi_oversold=float(data.get("rsi_oversold", 30.0)),
            rsi_overbought=float(data.get("rsi_overbought", 70.0)),
        )

    @property
    def warmup(self) -> int:
        return self.rsi_period

    def signal_at(self, bars: Sequence[PriceBar], index: int) -> Signal:
        if not can_signal(bars, index, self.warmup):
            return Signal.HOLD
        value = rsi_at(closes_through(bars, index), index, self.rsi_period)
        if value is None:
            return Signal.HOLD
        if value < self.rsi_oversold:
            return Signal.BUY
        if value > self.rsi_overbought:
            return Signal.SELL
        return Signal.HOLD
