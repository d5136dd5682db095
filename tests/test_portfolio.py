import threading
from datetime import date

import pytest

from stock_advisor.errors import InsufficientFunds, InsufficientShares, InvalidQuantity, NoSuchHolding
from stock_advisor.market import TradeSide
from stock_advisor.monitoring import AuditLog
from stock_advisor.portfolio import PortfolioLedger


def test_buys_average_the_cost_basis():
    ledger = PortfolioLedger(initial_cash=100000)
    ledger.buy("AAPL", 50, 175)
    ledger.buy("AAPL", 30, 140)

    holding = ledger.get_holding("AAPL")
    assert holding.shares == 80
    # (50 * 175 + 30 * 140) / 80
    assert holding.average_price == pytest.approx(161.875)
    assert holding.current_price == pytest.approx(140.0)
    assert ledger.get_cash() == pytest.approx(100000 - 8750 - 4200)


def test_partial_sell_keeps_average_price():
    ledger = PortfolioLedger(initial_cash=100000)
    ledger.buy("AAPL", 50, 175)
    ledger.buy("AAPL", 30, 140)
    trade = ledger.sell("AAPL", 20, 180, on=date(2024, 3, 1))

    holding = ledger.get_holding("AAPL")
    assert trade.side == TradeSide.SELL
    assert trade.total == pytest.approx(3600.0)
    assert holding.shares == 60
    assert holding.average_price == pytest.approx(161.875)
    assert ledger.get_realized_gain_loss() == pytest.approx((180 - 161.875) * 20)


def test_full_liquidation_removes_holding():
    ledger = PortfolioLedger(initial_cash=10000)
    ledger.buy("TSLA", 10, 240)
    ledger.sell("TSLA", 10, 250)

    assert ledger.get_holding("TSLA") is None
    assert ledger.get_holdings() == []
    assert ledger.get_cash() == pytest.approx(10100.0)
    assert ledger.get_gain_loss() == 0.0
    assert ledger.get_realized_gain_loss() == pytest.approx(100.0)


def test_unknown_sell_leaves_cash_untouched():
    ledger = PortfolioLedger(initial_cash=5000)
    with pytest.raises(NoSuchHolding) as excinfo:
        ledger.sell("NFLX", 1, 500)
    assert str(excinfo.value) == "No holding for NFLX"
    assert ledger.get_cash() == 5000
    assert ledger.get_trades() == []


def test_rejections_do_not_mutate():
    ledger = PortfolioLedger(initial_cash=1000)
    ledger.buy("MSFT", 2, 380)

    with pytest.raises(InsufficientFunds):
        ledger.buy("MSFT", 1, 380)
    with pytest.raises(InsufficientShares):
        ledger.sell("MSFT", 3, 390)
    for shares, price in ((0, 100), (-1, 100), (1.5, 100), (True, 100), (1, 0), (1, -5)):
        with pytest.raises(InvalidQuantity):
            ledger.buy("MSFT", shares, price)

    holding = ledger.get_holding("MSFT")
    assert holding.shares == 2
    assert holding.average_price == pytest.approx(380.0)
    assert ledger.get_cash() == pytest.approx(240.0)
    assert len(ledger.get_trades()) == 1


def test_holdings_are_copies():
    ledger = PortfolioLedger(initial_cash=1000)
    ledger.buy("AAPL", 1, 100)
    ledger.get_holdings()[0].shares = 999
    assert ledger.get_holding("AAPL").shares == 1


def test_price_updates_drive_gain_loss():
    ledger = PortfolioLedger(initial_cash=100000)
    ledger.buy("AAPL", 10, 100)
    ledger.update_price("AAPL", 110)
    ledger.update_price("GOOGL", 150)

    assert ledger.get_gain_loss() == pytest.approx(100.0)
    assert ledger.get_total_value() == pytest.approx(99000 + 1100)
    assert ledger.get_gain_loss_percent() == pytest.approx(0.1)
    assert ledger.get_holding("GOOGL") is None
    with pytest.raises(InvalidQuantity):
        ledger.update_price("AAPL", 0)

    snapshot = ledger.snapshot()
    assert snapshot.cash == pytest.approx(99000.0)
    assert snapshot.holdings[0].gain_loss_percent == pytest.approx(10.0)


def test_concurrent_buys_never_overdraw():
    ledger = PortfolioLedger(initial_cash=5000)
    results: list[str] = []
    lock = threading.Lock()

    def worker() -> None:
        try:
            ledger.buy("AAPL", 10, 100)
            outcome = "filled"
        except InsufficientFunds:
            outcome = "rejected"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count("filled") == 5
    assert results.count("rejected") == 5
    assert ledger.get_cash() == pytest.approx(0.0)
    assert ledger.get_holding("AAPL").shares == 50


def test_ledger_audits_trades_and_rejections(tmp_path):
    audit = AuditLog(tmp_path / "audit.log")
    ledger = PortfolioLedger(initial_cash=1000, audit_log=audit)
    ledger.buy("AAPL", 5, 100)
    with pytest.raises(InsufficientFunds):
        ledger.buy("AAPL", 50, 100)

    trades = list(audit.events("portfolio_trade"))
    rejected = list(audit.events("portfolio_rejected"))
    assert trades[0]["payload"]["side"] == "BUY"
    assert rejected[0]["payload"]["error"] == "InsufficientFunds"
    assert rejected[0]["payload"]["operation"] == "buy"


def test_negative_initial_cash_rejected():
    with pytest.raises(InvalidQuantity):
        PortfolioLedger(initial_cash=-1)


def test_spending_exact_cash_with_float_residue():
    ledger = PortfolioLedger(initial_cash=0.3)
    ledger.buy("X", 3, 0.1)

    assert ledger.get_cash() == 0.0
    assert ledger.get_holding("X").shares == 3
    with pytest.raises(InsufficientFunds):
        ledger.buy("X", 1, 0.1)
