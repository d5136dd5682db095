from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from stock_advisor.advisor import RecommendationEngine
from stock_advisor.config import load_config
from stock_advisor.market import load_series, quote_from_series
from stock_advisor.monitoring import AuditLog
from stock_advisor.reporting import recommendation_report


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--series", required=True)
    parser.add_argument("--symbol", required=True)
    parser.add_argument("--name", default="")
    parser.add_argument("--market-cap", type=float, default=0.0)
    parser.add_argument("--output", required=True)
    args = parser.parse_args()

    config = load_config(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    bars = load_series(args.series)
    quote = quote_from_series(args.symbol, bars, name=args.name, market_cap=args.market_cap)
    engine = RecommendationEngine(config.recommendation, audit_log=AuditLog(config.monitoring.audit_log_path))
    recommendation = engine.recommend(quote, bars)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "symbol": quote.symbol,
        "price": quote.price,
        "recommendation": recommendation_report(recommendation),
    }
    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"{quote.symbol}: {recommendation.action.value} ({recommendation.confidence:.1f}% confidence)")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
