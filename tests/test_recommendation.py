from datetime import date, timedelta

import pytest

from stock_advisor.advisor import (
    MarketSnapshot,
    RecommendationConfig,
    RecommendationEngine,
    RiskLevel,
    ScoreWeights,
    action_for,
    composite_score,
)
from stock_advisor.advisor.scoring import (
    confidence_for,
    fundamental_score,
    price_levels,
    risk_level_for,
    sentiment_score,
    technical_score,
)
from stock_advisor.errors import InsufficientData, InvalidQuantity
from stock_advisor.market import PriceBar, Quote, Signal, quote_from_series
from stock_advisor.monitoring import AuditLog


def _bars(closes):
    start = date(2023, 1, 2)
    return [
        PriceBar(
            date=start + timedelta(days=i),
            open=close,
            high=close + 1.0,
            low=close - 1.0,
            close=close,
            volume=1_000_000.0,
        )
        for i, close in enumerate(closes)
    ]


def _bullish_snapshot():
    return MarketSnapshot(
        price=110.0,
        change_percent=3.0,
        market_cap=300e9,
        sma_short=105.0,
        sma_long=100.0,
        rsi=65.0,
        momentum=12.0,
        short_momentum=5.0,
        range_high=200.0,
        range_low=100.0,
        volume_ratio=2.0,
        volatility=1.0,
    )


def _bearish_snapshot():
    return MarketSnapshot(
        price=90.0,
        change_percent=-3.0,
        market_cap=0.0,
        sma_short=95.0,
        sma_long=100.0,
        rsi=35.0,
        momentum=-12.0,
        short_momentum=-5.0,
        range_high=95.0,
        range_low=50.0,
        volume_ratio=2.0,
        volatility=3.5,
    )


def test_action_thresholds_are_inclusive():
    config = RecommendationConfig()
    assert action_for(65.0, config) == Signal.BUY
    assert action_for(64.99, config) == Signal.HOLD
    assert action_for(35.0, config) == Signal.SELL
    assert action_for(35.01, config) == Signal.HOLD


def test_confidence_scales_distance_from_neutral():
    assert confidence_for(50.0) == 0.0
    assert confidence_for(80.0) == pytest.approx(60.0)
    assert confidence_for(20.0) == pytest.approx(60.0)
    assert confidence_for(100.0) == 100.0


def test_risk_levels_by_volatility():
    config = RecommendationConfig()
    assert risk_level_for(None, config) == RiskLevel.LOW
    assert risk_level_for(1.0, config) == RiskLevel.LOW
    assert risk_level_for(1.5, config) == RiskLevel.MEDIUM
    assert risk_level_for(2.9, config) == RiskLevel.MEDIUM
    assert risk_level_for(3.0, config) == RiskLevel.HIGH


def test_price_levels_follow_action_direction():
    config = RecommendationConfig()
    target, stop = price_levels(100.0, Signal.BUY, RiskLevel.LOW, config)
    assert (target, stop) == (pytest.approx(105.0), pytest.approx(97.0))
    target, stop = price_levels(100.0, Signal.HOLD, RiskLevel.HIGH, config)
    assert (target, stop) == (pytest.approx(115.0), pytest.approx(92.0))
    target, stop = price_levels(100.0, Signal.SELL, RiskLevel.MEDIUM, config)
    assert (target, stop) == (pytest.approx(90.0), pytest.approx(105.0))


def test_bullish_snapshot_scores():
    snapshot = _bullish_snapshot()
    technical = technical_score(snapshot)
    fundamental = fundamental_score(snapshot)
    sentiment = sentiment_score(snapshot)
    assert technical == pytest.approx(89.5)
    assert fundamental == pytest.approx(81.0)
    assert sentiment == pytest.approx(76.0)

    composite = composite_score(technical, fundamental, sentiment, ScoreWeights())
    assert composite == pytest.approx(84.25)
    assert action_for(composite, RecommendationConfig()) == Signal.BUY


def test_bearish_snapshot_scores():
    snapshot = _bearish_snapshot()
    technical = technical_score(snapshot)
    fundamental = fundamental_score(snapshot)
    sentiment = sentiment_score(snapshot)
    assert technical == pytest.approx(10.5)
    assert sentiment == pytest.approx(24.0)

    composite = composite_score(technical, fundamental, sentiment, ScoreWeights())
    assert composite == pytest.approx(21.8833, abs=1e-3)
    assert action_for(composite, RecommendationConfig()) == Signal.SELL


def test_missing_indicators_leave_scores_neutral():
    snapshot = MarketSnapshot(
        price=100.0,
        change_percent=0.0,
        market_cap=0.0,
        sma_short=None,
        sma_long=None,
        rsi=None,
        momentum=None,
        short_momentum=None,
        range_high=100.0,
        range_low=100.0,
        volume_ratio=None,
        volatility=None,
    )
    assert technical_score(snapshot) == 50.0
    assert fundamental_score(snapshot) == 50.0
    assert sentiment_score(snapshot) == 50.0


def test_engine_on_steady_uptrend():
    bars = _bars([100.0 + i for i in range(300)])
    quote = quote_from_series("AAPL", bars)
    engine = RecommendationEngine()

    first = engine.recommend(quote, bars)
    second = engine.recommend(quote, bars)

    assert first == second
    assert first.action == Signal.HOLD
    assert first.risk_level == RiskLevel.LOW
    assert first.confidence == pytest.approx(abs(first.composite_score - 50.0) * 2.0)
    assert first.target_price > quote.price > first.stop_loss
    assert len(first.reasoning) == 6
    assert first.reasoning[0].startswith("Bullish trend")
    assert "overbought" in first.reasoning[1]
    for score in (first.technical_score, first.fundamental_score, first.sentiment_score):
        assert 0.0 <= score <= 100.0


def test_engine_with_short_history():
    bars = _bars([100.0, 101.0, 99.5])
    recommendation = RecommendationEngine().recommend(quote_from_series("NEW", bars), bars)
    assert recommendation.risk_level == RiskLevel.LOW
    assert recommendation.reasoning[0].startswith("Not enough history")
    assert recommendation.reasoning[1].startswith("RSI unavailable")


def test_engine_rejects_bad_inputs():
    engine = RecommendationEngine()
    bars = _bars([100.0] * 30)
    bad_quote = Quote(
        symbol="BAD",
        price=0.0,
        open=0.0,
        high=0.0,
        low=0.0,
        previous_close=0.0,
        change=0.0,
        change_percent=0.0,
        volume=0.0,
    )
    with pytest.raises(InvalidQuantity):
        engine.recommend(bad_quote, bars)
    with pytest.raises(InsufficientData):
        engine.recommend(quote_from_series("OK", bars), [])


def test_engine_writes_audit_event(tmp_path):
    audit = AuditLog(tmp_path / "audit.log")
    bars = _bars([100.0 + i for i in range(60)])
    RecommendationEngine(audit_log=audit).recommend(quote_from_series("MSFT", bars), bars)

    events = list(audit.events("recommendation_generated"))
    assert len(events) == 1
    assert events[0]["payload"]["symbol"] == "MSFT"
    assert events[0]["payload"]["bars"] == 60


def test_config_validates_thresholds():
    with pytest.raises(ValueError):
        RecommendationConfig(buy_threshold=40.0, sell_threshold=35.0)
    with pytest.raises(ValueError):
        ScoreWeights(technical=0.0, fundamental=0.0, sentiment=0.0)
