from __future__ import annotations

import json
import os
from pathlib import Path

import streamlit as st


def _load_json(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def _format_currency(value: float) -> str:
    return f"${value:,.2f}"


def _signed_pct(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def _render_recommendation(report: dict) -> None:
    rec = report.get("recommendation", {})
    st.subheader(f"Recommendation for {report.get('symbol', '?')}")

    col_a, col_b, col_c = st.columns(3)
    col_a.metric("Action", rec.get("action", "n/a"))
    col_b.metric("Confidence", f"{rec.get('confidence', 0.0):.1f}%")
    col_c.metric("Risk Level", rec.get("risk_level", "n/a"))

    col_d, col_e, col_f = st.columns(3)
    col_d.metric("Technical Score", f"{rec.get('technical_score', 0.0):.1f}")
    col_e.metric("Fundamental Score", f"{rec.get('fundamental_score', 0.0):.1f}")
    col_f.metric("Sentiment Score", f"{rec.get('sentiment_score', 0.0):.1f}")

    col_g, col_h = st.columns(2)
    col_g.metric("Target Price", _format_currency(rec.get("target_price", 0.0)))
    col_h.metric("Stop Loss", _format_currency(rec.get("stop_loss", 0.0)))

    st.subheader("Analysis Details")
    for index, reason in enumerate(rec.get("reasoning", []), start=1):
        st.write(f"{index}. {reason}")


def _render_backtest(report: dict) -> None:
    backtest = report.get("backtest", {})
    summary = backtest.get("summary", {})
    st.subheader(summary.get("strategy_name", "Backtest"))
    st.caption(backtest.get("description", ""))

    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric("Initial Capital", _format_currency(summary.get("initial_capital", 0.0)))
    col_b.metric("Final Value", _format_currency(summary.get("final_value", 0.0)))
    col_c.metric("Total Return", _signed_pct(summary.get("total_return_percent", 0.0)))
    col_d.metric("Total Trades", str(summary.get("trade_count", 0)))

    col_e, col_f, col_g, col_h = st.columns(4)
    col_e.metric("Win Rate", f"{summary.get('win_rate', 0.0):.1f}%")
    col_f.metric("Sharpe Ratio", f"{summary.get('sharpe_ratio', 0.0):.2f}")
    col_g.metric("Max Drawdown", f"{summary.get('max_drawdown', 0.0):.2f}%")
    col_h.metric("Avg Trade Return", _signed_pct(summary.get("avg_trade_return", 0.0)))

    curve = backtest.get("equity_curve", [])
    if curve:
        st.line_chart({"equity": [point["equity"] for point in curve]})

    trades = backtest.get("trades", [])
    st.subheader("Trade History")
    if trades:
        st.dataframe(trades[:20])
        if len(trades) > 20:
            st.caption(f"Showing first 20 of {len(trades)} trades")
    else:
        st.info("No trades executed")
    st.caption(f"Backtested from {summary.get('start_date')} to {summary.get('end_date')}")


def main() -> None:
    st.set_page_config(page_title="Stock Advisor", layout="wide")
    st.title("Stock Advisor Reports")

    default_path = os.getenv("ADVISOR_REPORT_PATH", "reports/backtest.json")
    report_path = Path(st.sidebar.text_input("Report path", value=default_path))
    report = _load_json(report_path)
    if report is None:
        st.warning(f"No report found at {report_path}")
        return

    if "recommendation" in report:
        _render_recommendation(report)
    if "backtest" in report:
        _render_backtest(report)
    if "comparison" in report:
        st.subheader("Strategy Comparison")
        st.write(f"Best strategy: {report['comparison'].get('best_strategy')}")
        st.dataframe(report["comparison"].get("runs", []))


if __name__ == "__main__":
    main()
