"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from stock_advisor.advisor.models import PriceOffsets, RecommendationConfig, RiskLevel, ScoreWeights
from stock_advisor.config.models import (
    AdvisorConfig,
    BacktestSettings,
    MonitoringConfig,
    PortfolioConfig,
    StrategyConfig,
)
from stock_advisor.simulator.models import BacktestConfig
from stock_advisor.strategy.registry import build_strategy


def load_config(path: str | Path) -> AdvisorConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)
    symbols = list(_require(data, "symbols"))

    strategies = [_parse_strategy(entry) for entry in _require(data, "strategies")]
    if not strategies:
        raise ValueError("At least one strategy must be configured")

    return AdvisorConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        symbols=symbols,
        strategies=strategies,
        backtest=_parse_backtest(data.get("backtest", {})),
        recommendation=_parse_recommendation(data.get("recommendation", {})),
        portfolio=_parse_portfolio(data.get("portfolio", {})),
        monitoring=_parse_monitoring(data.get("monitoring", {})),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def _lock_path_for(path: Path, lock_path: Optional[str | Path]) -> Path:
    if lock_path is None:
        return path.with_suffix(path.suffix + ".lock.json")
    return Path(lock_path)


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    lock_path = _lock_path_for(path, lock_path)
    payload = {
        "config_path": str(path),
        "config_hash": compute_config_hash(path),
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    lock_path = _lock_path_for(path, lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    return payload.get("config_hash") == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_strategy(data: dict[str, Any]) -> StrategyConfig:
    config = StrategyConfig(
        name=str(_require(data, "name")),
        parameters=dict(data.get("parameters", {}) or {}),
    )
    # fail at load time on unknown names or bad parameters
    build_strategy(config.name, config.parameters)
    return config


def _parse_backtest(data: dict[str, Any]) -> BacktestSettings:
    return BacktestSettings(
        initial_capital=float(data.get("initial_capital", 10000.0)),
        lookback_days=int(data.get("lookback_days", 365)),
        simulator=BacktestConfig(annualization_days=int(data.get("annualization_days", 252))),
    )


def _parse_recommendation(data: dict[str, Any]) -> RecommendationConfig:
    defaults = RecommendationConfig()
    weights = data.get("weights", {}) or {}
    offsets = dict(defaults.offsets)
    for level, payload in (data.get("offsets", {}) or {}).items():
        try:
            risk = RiskLevel(str(level).upper())
        except ValueError as exc:
            raise ValueError(f"Invalid risk level in offsets: {level}") from exc
        offsets[risk] = PriceOffsets(
            target_pct=float(_require(payload, "target_pct")),
            stop_pct=float(_require(payload, "stop_pct")),
        )

    return RecommendationConfig(
        weights=ScoreWeights(
            technical=float(weights.get("technical", defaults.weights.technical)),
            fundamental=float(weights.get("fundamental", defaults.weights.fundamental)),
            sentiment=float(weights.get("sentiment", defaults.weights.sentiment)),
        ),
        buy_threshold=float(data.get("buy_threshold", defaults.buy_threshold)),
        sell_threshold=float(data.get("sell_threshold", defaults.sell_threshold)),
        short_sma_window=int(data.get("short_sma_window", defaults.short_sma_window)),
        long_sma_window=int(data.get("long_sma_window", defaults.long_sma_window)),
        rsi_period=int(data.get("rsi_period", defaults.rsi_period)),
        momentum_window=int(data.get("momentum_window", defaults.momentum_window)),
        sentiment_momentum_window=int(data.get("sentiment_momentum_window", defaults.sentiment_momentum_window)),
        volume_window=int(data.get("volume_window", defaults.volume_window)),
        range_window=int(data.get("range_window", defaults.range_window)),
        volatility_window=int(data.get("volatility_window", defaults.volatility_window)),
        low_risk_max_volatility=float(data.get("low_risk_max_volatility", defaults.low_risk_max_volatility)),
        medium_risk_max_volatility=float(
            data.get("medium_risk_max_volatility", defaults.medium_risk_max_volatility)
        ),
        offsets=offsets,
    )


def _parse_portfolio(data: dict[str, Any]) -> PortfolioConfig:
    return PortfolioConfig(initial_cash=float(data.get("initial_cash", 100000.0)))


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")))


def serialize_config(config: AdvisorConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["recommendation"]["offsets"] = {
        level.value: asdict(offsets) for level, offsets in config.recommendation.offsets.items()
    }
    return payload
