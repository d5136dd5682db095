"""Portfolio holding models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Holding:
    symbol: str
    shares: int
    average_price: float
    current_price: float

    @property
    def cost_basis(self) -> float:
        return self.shares * self.average_price

    @property
    def total_value(self) -> float:
        return self.shares * self.current_price

    @property
    def gain_loss(self) -> float:
        return self.total_value - self.cost_basis

    @property
    def gain_loss_percent(self) -> float:
        if self.cost_basis == 0:
            return 0.0
        return self.gain_loss / self.cost_basis * 100.0


@dataclass(frozen=True)
class PortfolioSnapshot:
    cash: float
    total_value: float
    gain_loss: float
    gain_loss_percent: float
    realized_gain_loss: float
    holdings: list[Holding] = field(default_factory=list)
