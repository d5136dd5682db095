"""Technical indicators over plain price sequences.

Point helpers (``*_at``) evaluate one index using only values up to and
including it and return ``None`` when the trailing window is not satisfied.
Series helpers return a list aligned with the input, ``None`` marking the
indices that lack history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from stock_advisor.market.models import PriceBar


def _check_window(window: int) -> None:
    if window <= 0:
        raise ValueError(f"Window must be positive, got {window}")


def _in_range(values: Sequence[float], index: int) -> bool:
    return 0 <= index < len(values)


def sma_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index + 1 < window:
        return None
    slice_ = values[index - window + 1 : index + 1]
    return sum(slice_) / window


def average_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    """Mean over up to ``window`` values ending at ``index``; partial windows allowed."""
    _check_window(window)
    if not _in_range(values, index):
        return None
    slice_ = values[max(0, index - window + 1) : index + 1]
    return sum(slice_) / len(slice_)


def rsi_at(values: Sequence[float], index: int, window: int = 14) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index < window:
        return None
    deltas = [values[i] - values[i - 1] for i in range(1, index + 1)]
    avg_gain = sum(delta for delta in deltas[:window] if delta > 0) / window
    avg_loss = -sum(delta for delta in deltas[:window] if delta < 0) / window
    for delta in deltas[window:]:
        gain = delta if delta > 0 else 0.0
        loss = -delta if delta < 0 else 0.0
        avg_gain = (avg_gain * (window - 1) + gain) / window
        avg_loss = (avg_loss * (window - 1) + loss) / window
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def momentum_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index < window:
        return None
    base = values[index - window]
    if base == 0:
        return None
    return (values[index] - base) / base * 100.0


def high_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index + 1 < window:
        return None
    return max(values[index - window + 1 : index + 1])


def low_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index + 1 < window:
        return None
    return min(values[index - window + 1 : index + 1])


def daily_returns(values: Sequence[float]) -> list[float]:
    """Percentage change between consecutive values, skipping zero bases."""
    returns: list[float] = []
    for previous, current in zip(values, values[1:]):
        if previous == 0:
            continue
        returns.append((current - previous) / previous * 100.0)
    return returns


def return_stddev_at(values: Sequence[float], index: int, window: int) -> Optional[float]:
    _check_window(window)
    if not _in_range(values, index) or index < window:
        return None
    returns = daily_returns(values[index - window : index + 1])
    if len(returns) < 2:
        return None
    mean = sum(returns) / len(returns)
    variance = sum((value - mean) ** 2 for value in returns) / len(returns)
    return variance**0.5


def _series(
    values: Sequence[float],
    window: int,
    point: Callable[[Sequence[float], int, int], Optional[float]],
) -> list[Optional[float]]:
    _check_window(window)
    return [point(values, index, window) for index in range(len(values))]


def simple_moving_average(closes: Sequence[float], window: int) -> list[Optional[float]]:
    return _series(closes, window, sma_at)


def rsi(closes: Sequence[float], window: int = 14) -> list[Optional[float]]:
    _check_window(window)
    output: list[Optional[float]] = [None] * len(closes)
    if len(closes) <= window:
        return output
    # single pass of the same smoothing rsi_at applies per index
    avg_gain = 0.0
    avg_loss = 0.0
    for i in range(1, len(closes)):
        delta = closes[i] - closes[i - 1]
        gain = delta if delta > 0 else 0.0
        loss = -delta if delta < 0 else 0.0
        if i <= window:
            avg_gain += gain / window
            avg_loss += loss / window
            if i < window:
                continue
        else:
            avg_gain = (avg_gain * (window - 1) + gain) / window
            avg_loss = (avg_loss * (window - 1) + loss) / window
        if avg_loss == 0:
            output[i] = 100.0
        else:
            output[i] = 100.0 - (100.0 / (1.0 + avg_gain / avg_loss))
    return output


def momentum(closes: Sequence[float], window: int) -> list[Optional[float]]:
    return _series(closes, window, momentum_at)


def recent_high(highs: Sequence[float], window: int) -> list[Optional[float]]:
    return _series(highs, window, high_at)


def recent_low(lows: Sequence[float], window: int) -> list[Optional[float]]:
    return _series(lows, window, low_at)


@dataclass
class IndicatorSeries:
    """Column view over a bar list, for repeated point lookups."""

    closes: list[float] = field(default_factory=list)
    highs: list[float] = field(default_factory=list)
    lows: list[float] = field(default_factory=list)
    volumes: list[float] = field(default_factory=list)

    @classmethod
    def from_bars(cls, bars: Sequence[PriceBar]) -> "IndicatorSeries":
        series = cls()
        for bar in bars:
            series.update(bar)
        return series

    def update(self, bar: PriceBar) -> None:
        self.closes.append(bar.close)
        self.highs.append(bar.high)
        self.lows.append(bar.low)
        self.volumes.append(bar.volume)

    def __len__(self) -> int:
        return len(self.closes)

    def _last(self, index: Optional[int]) -> int:
        return len(self.closes) - 1 if index is None else index

    def sma(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return sma_at(self.closes, self._last(index), window)

    def rsi(self, window: int = 14, index: Optional[int] = None) -> Optional[float]:
        return rsi_at(self.closes, self._last(index), window)

    def momentum(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return momentum_at(self.closes, self._last(index), window)

    def recent_high(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return high_at(self.highs, self._last(index), window)

    def recent_low(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return low_at(self.lows, self._last(index), window)

    def average_volume(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return average_at(self.volumes, self._last(index), window)

    def return_stddev(self, window: int, index: Optional[int] = None) -> Optional[float]:
        return return_stddev_at(self.closes, self._last(index), window)
