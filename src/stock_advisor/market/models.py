"""Market data structures shared by the engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from stock_advisor.errors import require_positive_price, require_positive_shares


class Signal(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class PriceBar:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    open: float
    high: float
    low: float
    previous_close: float
    change: float
    change_percent: float
    volume: float
    market_cap: float = 0.0
    name: str = ""


@dataclass(frozen=True)
class Trade:
    date: date
    side: TradeSide
    shares: int
    price: float
    symbol: str = ""
    total: float = field(init=False)

    def __post_init__(self) -> None:
        require_positive_shares(self.shares)
        require_positive_price(self.price)
        object.__setattr__(self, "side", TradeSide(self.side))
        object.__setattr__(self, "total", self.shares * self.price)
