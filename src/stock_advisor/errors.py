"""Typed errors raised by the engines and the ledger."""

from __future__ import annotations

from typing import Optional


class AdvisorError(Exception):
    """Base class for recoverable advisor errors."""


class InsufficientData(AdvisorError):
    def __init__(self, required: int, available: int, what: str = "series") -> None:
        self.required = required
        self.available = available
        self.what = what
        super().__init__(f"{what} needs at least {required} bars, got {available}")


class InvalidSeries(AdvisorError, ValueError):
    pass


class InvalidQuantity(AdvisorError, ValueError):
    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")


class InsufficientFunds(AdvisorError):
    def __init__(self, required: float, available: float) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Order costs {required:.2f} but only {available:.2f} cash is available")


class NoSuchHolding(AdvisorError, KeyError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"No holding for {self.symbol}"


class InsufficientShares(AdvisorError):
    def __init__(self, symbol: str, requested: int, held: int) -> None:
        self.symbol = symbol
        self.requested = requested
        self.held = held
        super().__init__(f"Cannot sell {requested} {symbol}: only {held} held")


def require_positive_shares(shares: object, field: str = "shares") -> int:
    if isinstance(shares, bool) or not isinstance(shares, int) or shares <= 0:
        raise InvalidQuantity(field, shares)
    return shares


def require_positive_price(price: object, field: str = "price") -> float:
    if isinstance(price, bool) or not isinstance(price, (int, float)) or not price > 0:
        raise InvalidQuantity(field, price)
    return float(price)


def describe(error: Exception) -> dict[str, Optional[object]]:
    """Flatten an error into an audit-friendly payload."""
    payload: dict[str, Optional[object]] = {"error": type(error).__name__, "message": str(error)}
    for key in ("required", "available", "symbol", "requested", "held", "field", "value"):
        if hasattr(error, key):
            payload[key] = getattr(error, key)
    return payload
