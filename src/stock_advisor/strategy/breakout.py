"""Channel breakout strategy (close through the prior N-bar range)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence

from stock_advisor.market.models import PriceBar, Signal
from stock_advisor.strategy.indicators import high_at, low_at
from stock_advisor.strategy.models import StrategyKind, can_signal


@dataclass(frozen=True)
class Breakout:
    lookback: int = 20

    name: ClassVar[str] = "Breakout Strategy"
    kind: ClassVar[StrategyKind] = StrategyKind.BREAKOUT

    def __post_init__(self) -> None:
        if self.lookback <= 0:
            raise ValueError("lookback must be positive")

    @staticmethod
    def from_dict(data: dict) -> "Breakout":
        return Breakout(lookback=int(data.get("lookback", 20)))

    @property
    def warmup(self) -> int:
        return self.lookback

    def signal_at(self, bars: Sequence[PriceBar], index: int) -> Signal:
        if not can_signal(bars, index, self.warmup):
            return Signal.HOLD
        # channel excludes the current bar
        highs = [bar.high for bar in bars[:index]]
        lows = [bar.low for bar in bars[:index]]
        channel_high = high_at(highs, index - 1, self.lookback)
        channel_low = low_at(lows, index - 1, self.lookback)
        if channel_high is None or channel_low is None:
            return Signal.HOLD

        close = bars[index].close
        if close > channel_high:
            return Signal.BUY
        if close < channel_low:
            return Signal.SELL
        return Signal.HOLD
