import math

import pytest

from stock_advisor.market import PriceBar
from stock_advisor.strategy import IndicatorSeries
from stock_advisor.strategy.indicators import (
    average_at,
    daily_returns,
    momentum_at,
    return_stddev_at,
    rsi,
    rsi_at,
    simple_moving_average,
    sma_at,
)


def test_sma_requires_full_window():
    closes = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert sma_at(closes, 3, 5) is None
    assert sma_at(closes, 4, 5) == pytest.approx(3.0)
    assert simple_moving_average(closes, 2) == [None, 1.5, 2.5, 3.5, 4.5]


def test_window_must_be_positive():
    with pytest.raises(ValueError):
        sma_at([1.0, 2.0], 1, 0)
    with pytest.raises(ValueError):
        rsi([1.0, 2.0], 0)


def test_average_allows_partial_window():
    assert average_at([10.0, 20.0], 1, 20) == pytest.approx(15.0)
    assert average_at([], 0, 5) is None


def test_rsi_extremes():
    rising = [float(value) for value in range(1, 21)]
    falling = list(reversed(rising))
    assert rsi_at(rising, 13, 14) is None
    assert rsi_at(rising, 14, 14) == 100.0
    assert rsi_at(falling, 19, 14) == pytest.approx(0.0)


def test_rsi_series_matches_point_values():
    closes = [100.0 + 5.0 * math.sin(i / 3.0) + 0.1 * i for i in range(60)]
    series = rsi(closes, 14)
    for index, value in enumerate(series):
        point = rsi_at(closes, index, 14)
        if point is None:
            assert value is None
        else:
            assert value == pytest.approx(point)
            assert 0.0 <= value <= 100.0


def test_momentum_percent_change():
    closes = [100.0] * 10 + [110.0]
    assert momentum_at(closes, 9, 10) is None
    assert momentum_at(closes, 10, 10) == pytest.approx(10.0)


def test_return_stddev_flat_series_is_zero():
    closes = [50.0] * 30
    assert return_stddev_at(closes, 10, 20) is None
    assert return_stddev_at(closes, 29, 20) == pytest.approx(0.0)
    assert daily_returns([100.0, 110.0, 99.0]) == pytest.approx([10.0, -10.0])


def test_indicator_series_defaults_to_last_index():
    bars = [
        PriceBar(date=None, open=c, high=c + 1, low=c - 1, close=c, volume=1000 + i)
        for i, c in enumerate(float(100 + i) for i in range(30))
    ]
    series = IndicatorSeries.from_bars(bars)
    assert len(series) == 30
    assert series.sma(5) == pytest.approx(127.0)
    assert series.sma(5, index=4) == pytest.approx(102.0)
    assert series.recent_high(3) == pytest.approx(130.0)
    assert series.recent_low(3) == pytest.approx(126.0)
    assert series.rsi(14) == 100.0
    assert series.average_volume(50) == pytest.approx(1014.5)
