"""Recommendation engine combining technical, fundamental and sentiment scores."""

from __future__ import annotations

from typing import Optional, Sequence

from stock_advisor.advisor.models import Recommendation, RecommendationConfig
from stock_advisor.advisor.scoring import (
    action_for,
    build_reasoning,
    composite_score,
    confidence_for,
    fundamental_score,
    price_levels,
    risk_level_for,
    sentiment_score,
    take_snapshot,
    technical_score,
)
from stock_advisor.errors import require_positive_price
from stock_advisor.market.models import PriceBar, Quote
from stock_advisor.market.series import validate_series
from stock_advisor.monitoring.audit import AuditLog


class RecommendationEngine:
    def __init__(self, config: Optional[RecommendationConfig] = None, audit_log: Optional[AuditLog] = None) -> None:
        self.config = config or RecommendationConfig()
        self._audit_log = audit_log

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def recommend(self, quote: Quote, bars: Sequence[PriceBar]) -> Recommendation:
        require_positive_price(quote.price)
        series = validate_series(bars)
        snapshot = take_snapshot(quote, series, self.config)

        technical = technical_score(snapshot)
        fundamental = fundamental_score(snapshot)
        sentiment = sentiment_score(snapshot)
        composite = composite_score(technical, fundamental, sentiment, self.config.weights)

        action = action_for(composite, self.config)
        risk = risk_level_for(snapshot.volatility, self.config)
        target, stop = price_levels(quote.price, action, risk, self.config)

        recommendation = Recommendation(
            action=action,
            confidence=confidence_for(composite),
            risk_level=risk,
            technical_score=technical,
            fundamental_score=fundamental,
            sentiment_score=sentiment,
            composite_score=composite,
            target_price=target,
            stop_loss=stop,
            reasoning=build_reasoning(snapshot, risk, self.config),
        )
        self._log(
            "recommendation_generated",
            {
                "symbol": quote.symbol,
                "action": action.value,
                "composite_score": composite,
                "risk_level": risk.value,
                "bars": len(series),
            },
        )
        return recommendation
