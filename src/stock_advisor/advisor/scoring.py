"""Heuristic scoring rules for the recommendation engine.

Every score starts from a neutral 50 and moves by fixed contributions; an
indicator that cannot be computed for lack of history contributes nothing.
The reasoning text is derived from the same ``MarketSnapshot`` the scores
use, so identical inputs give identical text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from stock_advisor.advisor.models import RecommendationConfig, RiskLevel, ScoreWeights
from stock_advisor.market.models import PriceBar, Quote, Signal
from stock_advisor.strategy.indicators import IndicatorSeries

NEUTRAL = 50.0


@dataclass(frozen=True)
class MarketSnapshot:
    price: float
    change_percent: float
    market_cap: float
    sma_short: Optional[float]
    sma_long: Optional[float]
    rsi: Optional[float]
    momentum: Optional[float]
    short_momentum: Optional[float]
    range_high: float
    range_low: float
    volume_ratio: Optional[float]
    volatility: Optional[float]

    @property
    def range_position(self) -> float:
        span = self.range_high - self.range_low
        if span <= 0:
            return 0.5
        return min(1.0, max(0.0, (self.price - self.range_low) / span))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _direction(value: float, reference: float) -> int:
    if value > reference:
        return 1
    if value < reference:
        return -1
    return 0


def take_snapshot(quote: Quote, bars: Sequence[PriceBar], config: RecommendationConfig) -> MarketSnapshot:
    series = IndicatorSeries.from_bars(bars)
    range_highs = series.highs[-config.range_window :] + [quote.price]
    range_lows = series.lows[-config.range_window :] + [quote.price]
    average_volume = series.average_volume(config.volume_window)
    volume_ratio = None
    if average_volume:
        volume_ratio = quote.volume / average_volume
    return MarketSnapshot(
        price=quote.price,
        change_percent=quote.change_percent,
        market_cap=quote.market_cap,
        sma_short=series.sma(config.short_sma_window),
        sma_long=series.sma(config.long_sma_window),
        rsi=series.rsi(config.rsi_period),
        momentum=series.momentum(config.momentum_window),
        short_momentum=series.momentum(config.sentiment_momentum_window),
        range_high=max(range_highs),
        range_low=min(range_lows),
        volume_ratio=volume_ratio,
        volatility=series.return_stddev(config.volatility_window),
    )


def technical_score(snapshot: MarketSnapshot) -> float:
    score = NEUTRAL
    if snapshot.sma_short is not None:
        score += 10.0 * _direction(snapshot.price, snapshot.sma_short)
        if snapshot.sma_long is not None:
            score += 10.0 * _direction(snapshot.sma_short, snapshot.sma_long)
    if snapshot.rsi is not None:
        if 30.0 <= snapshot.rsi <= 70.0:
            score += (snapshot.rsi - 50.0) * 0.5
        else:
            score -= 10.0
    if snapshot.momentum is not None:
        score += clamp(snapshot.momentum, -15.0, 15.0)
    return clamp(score)


def fundamental_score(snapshot: MarketSnapshot) -> float:
    score = NEUTRAL
    score += (0.5 - snapshot.range_position) * 40.0
    if snapshot.volume_ratio is not None:
        if snapshot.volume_ratio >= 1.5:
            score += 5.0
        elif snapshot.volume_ratio <= 0.5:
            score -= 5.0
    if snapshot.market_cap >= 200e9:
        score += 10.0
    elif snapshot.market_cap >= 10e9:
        score += 5.0
    elif 0 < snapshot.market_cap < 2e9:
        score -= 5.0
    return clamp(score)


def sentiment_score(snapshot: MarketSnapshot) -> float:
    score = NEUTRAL
    if snapshot.short_momentum is not None:
        score += clamp(snapshot.short_momentum * 2.0, -25.0, 25.0)
    if snapshot.volume_ratio is not None and snapshot.volume_ratio >= 1.5:
        score += 10.0 * _direction(snapshot.change_percent, 0.0)
    score += clamp(snapshot.change_percent * 2.0, -10.0, 10.0)
    return clamp(score)


def composite_score(technical: float, fundamental: float, sentiment: float, weights: ScoreWeights) -> float:
    weighted = technical * weights.technical + fundamental * weights.fundamental + sentiment * weights.sentiment
    return clamp(weighted / weights.total())


def action_for(composite: float, config: RecommendationConfig) -> Signal:
    if composite >= config.buy_threshold:
        return Signal.BUY
    if composite <= config.sell_threshold:
        return Signal.SELL
    return Signal.HOLD


def confidence_for(composite: float) -> float:
    return min(100.0, abs(composite - NEUTRAL) * 2.0)


def risk_level_for(volatility: Optional[float], config: RecommendationConfig) -> RiskLevel:
    if volatility is None or volatility < config.low_risk_max_volatility:
        return RiskLevel.LOW
    if volatility < config.medium_risk_max_volatility:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def price_levels(price: float, action: Signal, risk: RiskLevel, config: RecommendationConfig) -> tuple[float, float]:
    offsets = config.offsets[risk]
    # a SELL call targets the downside, so the levels flip around the price
    direction = -1.0 if action == Signal.SELL else 1.0
    target = price * (1.0 + direction * offsets.target_pct / 100.0)
    stop = price * (1.0 - direction * offsets.stop_pct / 100.0)
    return target, stop


def _trend_reason(snapshot: MarketSnapshot, config: RecommendationConfig) -> str:
    if snapshot.sma_short is None:
        return f"Not enough history to assess the trend (needs {config.short_sma_window} bars)"
    words = {1: "above", -1: "below", 0: "at"}
    price_vs_short = _direction(snapshot.price, snapshot.sma_short)
    text = (
        f"Price {snapshot.price:.2f} is {words[price_vs_short]} the "
        f"{config.short_sma_window}-day SMA ({snapshot.sma_short:.2f})"
    )
    alignment = price_vs_short
    if snapshot.sma_long is not None:
        short_vs_long = _direction(snapshot.sma_short, snapshot.sma_long)
        text += (
            f" and the {config.short_sma_window}-day SMA is {words[short_vs_long]} the "
            f"{config.long_sma_window}-day SMA ({snapshot.sma_long:.2f})"
        )
        alignment = price_vs_short if price_vs_short == short_vs_long else 0
    label = {1: "Bullish trend", -1: "Bearish trend", 0: "Mixed trend"}[alignment]
    return f"{label}: {text}"


def _rsi_reason(snapshot: MarketSnapshot, config: RecommendationConfig) -> str:
    if snapshot.rsi is None:
        return f"RSI unavailable (needs {config.rsi_period + 1} bars)"
    if snapshot.rsi > 70.0:
        return f"RSI at {snapshot.rsi:.1f} signals overbought conditions"
    if snapshot.rsi < 30.0:
        return f"RSI at {snapshot.rsi:.1f} signals oversold conditions"
    return f"RSI at {snapshot.rsi:.1f} is in the neutral zone"


def _momentum_reason(snapshot: MarketSnapshot, config: RecommendationConfig) -> str:
    if snapshot.momentum is None:
        return f"Momentum unavailable (needs {config.momentum_window + 1} bars)"
    if snapshot.momentum > 0:
        tone = "positive"
    elif snapshot.momentum < 0:
        tone = "negative"
    else:
        tone = "flat"
    return f"{config.momentum_window}-day momentum is {tone} at {snapshot.momentum:+.2f}%"


def _range_reason(snapshot: MarketSnapshot) -> str:
    return (
        f"Price sits at {snapshot.range_position * 100:.0f}% of its 52-week range "
        f"({snapshot.range_low:.2f} - {snapshot.range_high:.2f})"
    )


def _volume_reason(snapshot: MarketSnapshot, config: RecommendationConfig) -> str:
    if snapshot.volume_ratio is None:
        return "Volume history unavailable"
    if snapshot.volume_ratio >= 1.5:
        tone = "a volume surge"
    elif snapshot.volume_ratio <= 0.5:
        tone = "light trading"
    else:
        tone = "normal activity"
    return (
        f"Volume is {snapshot.volume_ratio:.1f}x the {config.volume_window}-day average, {tone}"
    )


def _volatility_reason(snapshot: MarketSnapshot, risk: RiskLevel) -> str:
    if snapshot.volatility is None:
        return f"Volatility unavailable; risk defaults to {risk.value}"
    return f"Daily volatility of {snapshot.volatility:.2f}% puts risk at {risk.value}"


def build_reasoning(snapshot: MarketSnapshot, risk: RiskLevel, config: RecommendationConfig) -> list[str]:
    return [
        _trend_reason(snapshot, config),
        _rsi_reason(snapshot, config),
        _momentum_reason(snapshot, config),
        _range_reason(snapshot),
        _volume_reason(snapshot, config),
        _volatility_reason(snapshot, risk),
    ]
