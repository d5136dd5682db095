"""Moving-average crossover strategy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence

from stock_advisor.market.models import PriceBar, Signal
from stock_advisor.strategy.indicators import sma_at
from stock_advisor.strategy.models import StrategyKind, can_signal, closes_through


@dataclass(frozen=True)
class MovingAverageCrossover:
    short_window: int = 20
    long_window: int = 50

    name: ClassVar[str] = "Moving Average Crossover"
    kind: ClassVar[StrategyKind] = StrategyKind.MA_CROSSOVER

    def __post_init__(self) -> None:
        if self.short_window <= 0 or self.long_window <= 0:
            raise ValueError("Moving average windows must be positive")
        if self.short_window >= self.long_window:
            raise ValueError("short_window must be smaller than long_window")

    @staticmethod
    def from_dict(data: dict) -> "MovingAverageCrossover":
        return MovingAverageCrossover(
            short_window=int(data.get("short_window", 20)),
            long_window=int(data.get("long_window", 50)),
        )

    @property
    def warmup(self) -> int:
        # both averages must exist on the previous bar as well
        return self.long_window

    def signal_at(self, bars: Sequence[PriceBar], index: int) -> Signal:
        if not can_signal(bars, index, self.warmup):
            return Signal.HOLD
        closes = closes_through(bars, index)
        prev_short = sma_at(closes, index - 1, self.short_window)
        prev_long = sma_at(closes, index - 1, self.long_window)
        short = sma_at(closes, index, self.short_window)
        long = sma_at(closes, index, self.long_window)
        if None in (prev_short, prev_long, short, long):
            return Signal.HOLD

        was_above = prev_short > prev_long
        is_above = short > long
        if is_above and not was_above:
            return Signal.BUY
        if was_above and not is_above:
            return Signal.SELL
        return Signal.HOLD
