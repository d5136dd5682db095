"""Recommendation models and scoring configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stock_advisor.market.models import Signal


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class ScoreWeights:
    technical: float = 0.5
    fundamental: float = 0.3
    sentiment: float = 0.2

    def __post_init__(self) -> None:
        if min(self.technical, self.fundamental, self.sentiment) < 0:
            raise ValueError("Score weights must be non-negative")
        if self.total() <= 0:
            raise ValueError("Score weights must not all be zero")

    def total(self) -> float:
        return self.technical + self.fundamental + self.sentiment


@dataclass(frozen=True)
class PriceOffsets:
    target_pct: float
    stop_pct: float


def _default_offsets() -> dict[RiskLevel, PriceOffsets]:
    return {
        RiskLevel.LOW: PriceOffsets(target_pct=5.0, stop_pct=3.0),
        RiskLevel.MEDIUM: PriceOffsets(target_pct=10.0, stop_pct=5.0),
        RiskLevel.HIGH: PriceOffsets(target_pct=15.0, stop_pct=8.0),
    }


@dataclass(frozen=True)
class RecommendationConfig:
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    buy_threshold: float = 65.0
    sell_threshold: float = 35.0
    short_sma_window: int = 20
    long_sma_window: int = 50
    rsi_period: int = 14
    momentum_window: int = 20
    sentiment_momentum_window: int = 5
    volume_window: int = 20
    range_window: int = 252
    volatility_window: int = 20
    low_risk_max_volatility: float = 1.5
    medium_risk_max_volatility: float = 3.0
    offsets: dict[RiskLevel, PriceOffsets] = field(default_factory=_default_offsets)

    def __post_init__(self) -> None:
        if not self.sell_threshold < 50.0 < self.buy_threshold:
            raise ValueError("Thresholds must satisfy sell_threshold < 50 < buy_threshold")
        if self.low_risk_max_volatility >= self.medium_risk_max_volatility:
            raise ValueError("low_risk_max_volatility must be below medium_risk_max_volatility")
        missing = [level.value for level in RiskLevel if level not in self.offsets]
        if missing:
            raise ValueError(f"Missing price offsets for: {', '.join(missing)}")


@dataclass(frozen=True)
class Recommendation:
    action: Signal
    confidence: float
    risk_level: RiskLevel
    technical_score: float
    fundamental_score: float
    sentiment_score: float
    composite_score: float
    target_price: float
    stop_loss: float
    reasoning: list[str] = field(default_factory=list)
