import math
from datetime import date, timedelta

from stock_advisor.advisor import RecommendationEngine
from stock_advisor.market import PriceBar, quote_from_series
from stock_advisor.simulator import BacktestSimulator, compare_strategies
from stock_advisor.strategy import default_strategies


start = date(2024, 1, 1)
bars = []
for day in range(365):
    close = 150.0 + 0.08 * day + 12.0 * math.sin(day / 15.0)
    bars.append(
        PriceBar(
            date=start + timedelta(days=day),
            open=close - 0.5,
            high=close + 1.5,
            low=close - 1.5,
            close=close,
            volume=1_000_000 + 50_000 * (day % 7),
        )
    )

simulator = BacktestSimulator()
for strategy in default_strategies():
    result, trades = simulator.run(bars, strategy, 10000)
    print(
        f"{result.strategy_name}: {result.total_return_percent:+.2f}% over {result.trade_count} trades, "
        f"win rate {result.win_rate:.1f}%, sharpe {result.sharpe_ratio:.2f}, max drawdown {result.max_drawdown:.2f}%"
    )

comparison = compare_strategies(bars, default_strategies(), 10000)
print("Best strategy:", comparison.best_strategy)

quote = quote_from_series("DEMO", bars, market_cap=50e9)
recommendation = RecommendationEngine().recommend(quote, bars)
print("Recommendation:", recommendation.action.value, f"{recommendation.confidence:.1f}%", recommendation.risk_level.value)
for reason in recommendation.reasoning:
    print(" -", reason)
