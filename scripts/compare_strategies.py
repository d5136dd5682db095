from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from stock_advisor.config import load_config
from stock_advisor.market import load_series
from stock_advisor.reporting import comparison_report
from stock_advisor.simulator import BacktestSimulator, compare_strategies
from stock_advisor.strategy import build_strategy


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--series", required=True)
    parser.add_argument("--symbol", default="")
    parser.add_argument("--output", required=True)
    args = parser.parse_args()

    config = load_config(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    bars = load_series(args.series)[-config.backtest.lookback_days :]
    strategies = [build_strategy(entry.name, entry.parameters) for entry in config.strategies]
    comparison = compare_strategies(
        bars,
        strategies,
        config.backtest.initial_capital,
        simulator=BacktestSimulator(config.backtest.simulator),
        symbol=args.symbol,
    )

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "symbol": args.symbol,
        "comparison": comparison_report(comparison),
    }
    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Best strategy: {comparison.best_strategy}")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
