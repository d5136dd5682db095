"""Cash and holdings ledger with weighted-average cost basis."""

from __future__ import annotations

import math
import threading
from dataclasses import replace
from datetime import date
from typing import Optional

from stock_advisor.errors import (
    AdvisorError,
    InsufficientFunds,
    InsufficientShares,
    InvalidQuantity,
    NoSuchHolding,
    describe,
    require_positive_price,
    require_positive_shares,
)
from stock_advisor.market.models import Trade, TradeSide
from stock_advisor.monitoring.audit import AuditLog
from stock_advisor.portfolio.models import Holding, PortfolioSnapshot


class PortfolioLedger:
    """Owns one portfolio's cash and holdings.

    Mutations are serialized by an instance lock and validated before any
    field changes, so a rejected operation leaves the ledger untouched.
    ``get_gain_loss`` reports unrealized gain/loss of open holdings only;
    realized results of sells are available from ``get_realized_gain_loss``.
    """

    def __init__(self, initial_cash: float, audit_log: Optional[AuditLog] = None) -> None:
        if isinstance(initial_cash, bool) or not initial_cash >= 0:
            raise InvalidQuantity("initial_cash", initial_cash)
        self._cash = float(initial_cash)
        self._holdings: dict[str, Holding] = {}
        self._trades: list[Trade] = []
        self._realized = 0.0
        self._lock = threading.RLock()
        self._audit_log = audit_log

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def _reject(self, operation: str, symbol: str, error: AdvisorError) -> AdvisorError:
        self._log("portfolio_rejected", {"operation": operation, "symbol": symbol, **describe(error)})
        return error

    def buy(self, symbol: str, shares: int, price: float, on: Optional[date] = None) -> Trade:
        with self._lock:
            try:
                require_positive_shares(shares)
                require_positive_price(price)
            except InvalidQuantity as exc:
                raise self._reject("buy", symbol, exc) from None
            cost = shares * price
            if cost > self._cash and not math.isclose(cost, self._cash, rel_tol=1e-9, abs_tol=1e-9):
                raise self._reject("buy", symbol, InsufficientFunds(required=cost, available=self._cash))

            trade = Trade(date=on or date.today(), side=TradeSide.BUY, shares=shares, price=price, symbol=symbol)
            existing = self._holdings.get(symbol)
            if existing is None:
                self._holdings[symbol] = Holding(
                    symbol=symbol,
                    shares=shares,
                    average_price=float(price),
                    current_price=float(price),
                )
            else:
                total_shares = existing.shares + shares
                existing.average_price = (existing.cost_basis + cost) / total_shares
                existing.shares = total_shares
                existing.current_price = float(price)
            # clamp float residue from an exact spend
            self._cash = max(0.0, self._cash - cost)
            self._trades.append(trade)
            self._log("portfolio_trade", self._trade_payload(trade))
            return trade

    def sell(self, symbol: str, shares: int, price: float, on: Optional[date] = None) -> Trade:
        with self._lock:
            try:
                require_positive_shares(shares)
                require_positive_price(price)
            except InvalidQuantity as exc:
                raise self._reject("sell", symbol, exc) from None
            holding = self._holdings.get(symbol)
            if holding is None:
                raise self._reject("sell", symbol, NoSuchHolding(symbol))
            if shares > holding.shares:
                raise self._reject("sell", symbol, InsufficientShares(symbol, shares, holding.shares))

            trade = Trade(date=on or date.today(), side=TradeSide.SELL, shares=shares, price=price, symbol=symbol)
            self._realized += (price - holding.average_price) * shares
            holding.shares -= shares
            holding.current_price = float(price)
            if holding.shares == 0:
                del self._holdings[symbol]
            self._cash += trade.total
            self._trades.append(trade)
            self._log("portfolio_trade", self._trade_payload(trade))
            return trade

    def update_price(self, symbol: str, price: float) -> None:
        with self._lock:
            require_positive_price(price)
            holding = self._holdings.get(symbol)
            if holding is None:
                return
            holding.current_price = float(price)

    def get_holdings(self) -> list[Holding]:
        with self._lock:
            return [replace(holding) for holding in self._holdings.values()]

    def get_holding(self, symbol: str) -> Optional[Holding]:
        with self._lock:
            holding = self._holdings.get(symbol)
            return replace(holding) if holding is not None else None

    def get_cash(self) -> float:
        with self._lock:
            return self._cash

    def get_total_value(self) -> float:
        with self._lock:
            return self._cash + sum(holding.total_value for holding in self._holdings.values())

    def get_gain_loss(self) -> float:
        with self._lock:
            return sum(holding.gain_loss for holding in self._holdings.values())

    def get_gain_loss_percent(self) -> float:
        with self._lock:
            gain_loss = self.get_gain_loss()
            invested = self.get_total_value() - gain_loss
            if invested == 0:
                return 0.0
            return gain_loss / invested * 100.0

    def get_realized_gain_loss(self) -> float:
        with self._lock:
            return self._realized

    def get_trades(self) -> list[Trade]:
        with self._lock:
            return list(self._trades)

    def snapshot(self) -> PortfolioSnapshot:
        with self._lock:
            return PortfolioSnapshot(
                cash=self._cash,
                total_value=self.get_total_value(),
                gain_loss=self.get_gain_loss(),
                gain_loss_percent=self.get_gain_loss_percent(),
                realized_gain_loss=self._realized,
                holdings=self.get_holdings(),
            )

    @staticmethod
    def _trade_payload(trade: Trade) -> dict:
        return {
            "symbol": trade.symbol,
            "side": trade.side.value,
            "shares": trade.shares,
            "price": trade.price,
            "total": trade.total,
            "date": trade.date.isoformat(),
        }
