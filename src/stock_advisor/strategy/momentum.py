"""Trailing momentum strategy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Sequence

from stock_advisor.market.models import PriceBar, Signal
from stock_advisor.strategy.indicators import momentum_at
from stock_advisor.strategy.models import StrategyKind, can_signal, closes_through


@dataclass(frozen=True)
class Momentum:
    lookback: int = 10
    buy_threshold_pct: float = 2.0
    sell_threshold_pct: float = -2.0

    name: ClassVar[str] = "Momentum Strategy"
    kind: ClassVar[StrategyKind] = StrategyKind.MOMENTUM

    def __post_init__(self) -> None:
        if self.lookback <= 0:
            raise ValueError("lookback must be positive")
        if self.buy_threshold_pct <= 0 or self.sell_threshold_pct >= 0:
            raise ValueError("buy_threshold_pct must be positive and sell_threshold_pct negative")

    @staticmethod
    def from_dict(data: dict) -> "Momentum":
        return Momentum(
            lookback=int(data.get("lookback", 10)),
            buy_threshold_pct=float(data.get("buy_threshold_pct", 2.0)),
            sell_threshold_pct=float(data.get("sell_threshold_pct", -2.0)),
        )

    @property
    def warmup(self) -> int:
        return self.lookback

    def signal_at(self, bars: Sequence[PriceBar], index: int) -> Signal:
        if not can_signal(bars, index, self.warmup):
            return Signal.HOLD
        value = momentum_at(closes_through(bars, index), index, self.lookback)
        if value is None:
            return Signal.HOLD
        if value > self.buy_threshold_pct:
            return Signal.BUY
        if value < self.sell_threshold_pct:
            return Signal.SELL
        return Signal.HOLD
