from stock_advisor.errors import InsufficientShares, NoSuchHolding
from stock_advisor.portfolio import PortfolioLedger


ledger = PortfolioLedger(initial_cash=100000)
ledger.buy("AAPL", 50, 175)
ledger.buy("GOOGL", 30, 140)
ledger.buy("MSFT", 40, 380)
ledger.buy("TSLA", 25, 240)

ledger.update_price("AAPL", 182.5)
ledger.update_price("TSLA", 221.0)

for holding in ledger.get_holdings():
    print(
        f"{holding.symbol}: {holding.shares} @ {holding.average_price:.2f} "
        f"-> {holding.current_price:.2f} ({holding.gain_loss:+.2f}, {holding.gain_loss_percent:+.2f}%)"
    )

print("Cash:", round(ledger.get_cash(), 2))
print("Total value:", round(ledger.get_total_value(), 2))
print("Unrealized gain/loss:", round(ledger.get_gain_loss(), 2))

try:
    ledger.sell("NFLX", 10, 500)
except NoSuchHolding as exc:
    print("Rejected:", exc)

try:
    ledger.sell("AAPL", 500, 182.5)
except InsufficientShares as exc:
    print("Rejected:", exc)
