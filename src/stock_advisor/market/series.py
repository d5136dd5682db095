"""Historical series validation and file adapters."""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Sequence

from stock_advisor.errors import InsufficientData, InvalidSeries
from stock_advisor.market.models import PriceBar, Quote

CSV_FIELDS = ("date", "open", "high", "low", "close", "volume")


def validate_series(bars: Sequence[PriceBar]) -> list[PriceBar]:
    if not bars:
        raise InsufficientData(required=1, available=0)
    ordered = list(bars)
    for bar in ordered:
        prices = (bar.open, bar.high, bar.low, bar.close)
        if not all(isinstance(price, (int, float)) and price > 0 for price in prices):
            raise InvalidSeries(f"Bar prices must be positive on {bar.date}: {prices}")
    for previous, current in zip(ordered, ordered[1:]):
        if current.date <= previous.date:
            raise InvalidSeries(
                f"Dates must be strictly increasing: {current.date.isoformat()} follows {previous.date.isoformat()}"
            )
    return ordered


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # tolerate full timestamps, only the calendar day matters
    return date.fromisoformat(text[:10])


def bar_from_dict(data: dict[str, Any]) -> PriceBar:
    missing = [key for key in CSV_FIELDS[:5] if key not in data]
    if missing:
        raise InvalidSeries(f"Bar is missing fields: {', '.join(missing)}")
    try:
        return PriceBar(
            date=_parse_date(data["date"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume") or 0.0),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidSeries(f"Malformed bar: {data}") from exc


def bar_to_dict(bar: PriceBar) -> dict[str, Any]:
    return {
        "date": bar.date.isoformat(),
        "open": bar.open,
        "high": bar.high,
        "low": bar.low,
        "close": bar.close,
        "volume": bar.volume,
    }


def load_series(path: str | Path) -> list[PriceBar]:
    path = Path(path)
    if path.suffix.lower() == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(payload, dict):
            payload = payload.get("bars", [])
        if not isinstance(payload, list):
            raise InvalidSeries("JSON series must be a list of bars")
        bars = [bar_from_dict(item) for item in payload]
    else:
        with path.open(newline="", encoding="utf-8") as handle:
            bars = [bar_from_dict(row) for row in csv.DictReader(handle)]
    return validate_series(bars)


def save_series(path: str | Path, bars: Iterable[PriceBar]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [bar_to_dict(bar) for bar in bars]
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(rows, indent=2), encoding="utf-8")
        return path
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    return path


def quote_from_series(
    symbol: str,
    bars: Sequence[PriceBar],
    name: str = "",
    market_cap: float = 0.0,
) -> Quote:
    """Build a quote from the last bar, using the bar before it as previous close."""
    ordered = validate_series(bars)
    last = ordered[-1]
    previous_close = ordered[-2].close if len(ordered) > 1 else last.open
    change = last.close - previous_close
    change_percent = (change / previous_close * 100.0) if previous_close else 0.0
    return Quote(
        symbol=symbol,
        name=name or symbol,
        price=last.close,
        open=last.open,
        high=last.high,
        low=last.low,
        previous_close=previous_close,
        change=change,
        change_percent=change_percent,
        volume=last.volume,
        market_cap=market_cap,
    )
