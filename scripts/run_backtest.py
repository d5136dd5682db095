from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from stock_advisor.config import compute_config_hash, load_config
from stock_advisor.market import load_series
from stock_advisor.monitoring import AuditLog
from stock_advisor.reporting import backtest_report
from stock_advisor.simulator import BacktestSimulator
from stock_advisor.strategy import build_strategy


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--series", required=True, help="CSV or JSON with date,open,high,low,close,volume")
    parser.add_argument("--strategy", required=True, help="Configured strategy name, e.g. momentum")
    parser.add_argument("--symbol", default="")
    parser.add_argument("--capital", type=float, default=None)
    parser.add_argument("--output", required=True)
    args = parser.parse_args()

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    audit = AuditLog(
        config.monitoring.audit_log_path,
        run_id=f"{config.run_id_prefix}-{datetime.now(timezone.utc):%Y%m%dT%H%M%S}",
        config_hash=compute_config_hash(config_path),
    )
    strategy_config = config.strategy(args.strategy)
    strategy = build_strategy(strategy_config.name, strategy_config.parameters)
    capital = args.capital if args.capital is not None else config.backtest.initial_capital

    bars = load_series(args.series)[-config.backtest.lookback_days :]
    simulator = BacktestSimulator(config.backtest.simulator, audit_log=audit)
    run = simulator.run(bars, strategy, capital, symbol=args.symbol)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "config_path": str(config_path),
        "series_path": str(args.series),
        "symbol": args.symbol,
        "backtest": backtest_report(run),
    }
    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
