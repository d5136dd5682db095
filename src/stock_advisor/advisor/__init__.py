"""Recommendation engine."""

from stock_advisor.advisor.engine import RecommendationEngine
from stock_advisor.advisor.models import (
    PriceOffsets,
    Recommendation,
    RecommendationConfig,
    RiskLevel,
    ScoreWeights,
)
from stock_advisor.advisor.scoring import MarketSnapshot, action_for, composite_score

__all__ = [
    "MarketSnapshot",
    "PriceOffsets",
    "Recommendation",
    "RecommendationConfig",
    "RecommendationEngine",
    "RiskLevel",
    "ScoreWeights",
    "action_for",
    "composite_score",
]
