"""Convert engine results into JSON-ready dicts."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from stock_advisor.advisor.models import Recommendation
from stock_advisor.market.models import Trade
from stock_advisor.portfolio.models import Holding, PortfolioSnapshot
from stock_advisor.simulator.compare import StrategyComparison
from stock_advisor.simulator.models import BacktestRun
from stock_advisor.strategy.registry import describe_strategy


def trade_report(trade: Trade) -> dict[str, Any]:
    return {
        "date": trade.date.isoformat(),
        "symbol": trade.symbol,
        "type": trade.side.value,
        "shares": trade.shares,
        "price": trade.price,
        "total": trade.total,
    }


def backtest_report(run: BacktestRun) -> dict[str, Any]:
    summary = asdict(run.result)
    summary["start_date"] = run.result.start_date.isoformat()
    summary["end_date"] = run.result.end_date.isoformat()
    return {
        "summary": summary,
        "description": describe_strategy(run.result.strategy_name),
        "open_shares": run.open_shares,
        "trades": [trade_report(trade) for trade in run.trades],
        "equity_curve": [
            {"date": point.date.isoformat(), "equity": point.equity} for point in run.equity_curve
        ],
    }


def comparison_report(comparison: StrategyComparison) -> dict[str, Any]:
    return {
        "best_strategy": comparison.best_strategy,
        "average_return_percent": comparison.average_return_percent,
        "average_sharpe": comparison.average_sharpe,
        "profitable_strategies": comparison.profitable_strategies,
        "runs": [backtest_report(run)["summary"] for run in comparison.runs],
    }


def recommendation_report(recommendation: Recommendation) -> dict[str, Any]:
    return {
        "action": recommendation.action.value,
        "confidence": recommendation.confidence,
        "risk_level": recommendation.risk_level.value,
        "technical_score": recommendation.technical_score,
        "fundamental_score": recommendation.fundamental_score,
        "sentiment_score": recommendation.sentiment_score,
        "composite_score": recommendation.composite_score,
        "target_price": recommendation.target_price,
        "stop_loss": recommendation.stop_loss,
        "reasoning": list(recommendation.reasoning),
    }


def holding_report(holding: Holding) -> dict[str, Any]:
    return {
        "symbol": holding.symbol,
        "shares": holding.shares,
        "average_price": holding.average_price,
        "current_price": holding.current_price,
        "total_value": holding.total_value,
        "gain_loss": holding.gain_loss,
        "gain_loss_percent": holding.gain_loss_percent,
    }


def portfolio_report(snapshot: PortfolioSnapshot) -> dict[str, Any]:
    return {
        "cash": snapshot.cash,
        "total_value": snapshot.total_value,
        "gain_loss": snapshot.gain_loss,
        "gain_loss_percent": snapshot.gain_loss_percent,
        "realized_gain_loss": snapshot.realized_gain_loss,
        "holdings": [holding_report(holding) for holding in snapshot.holdings],
    }
