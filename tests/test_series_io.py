import json
from datetime import date, timedelta

import pytest

from stock_advisor.errors import InsufficientData, InvalidSeries
from stock_advisor.market import PriceBar, load_series, quote_from_series, save_series


def _bars(count=5):
    start = date(2024, 2, 1)
    return [
        PriceBar(
            date=start + timedelta(days=i),
            open=100.0 + i,
            high=101.0 + i,
            low=99.0 + i,
            close=100.5 + i,
            volume=1000.0 * (i + 1),
        )
        for i in range(count)
    ]


def test_csv_save_and_load(tmp_path):
    path = save_series(tmp_path / "data" / "aapl.csv", _bars())
    assert path.exists()
    assert load_series(path) == _bars()


def test_json_wrapped_bars_with_timestamps(tmp_path):
    path = tmp_path / "msft.json"
    path.write_text(
        json.dumps(
            {
                "bars": [
                    {"date": "2024-01-02T00:00:00Z", "open": 1, "high": 2, "low": 0.5, "close": 1.5},
                    {"date": "2024-01-03T00:00:00Z", "open": 1.5, "high": 2.5, "low": 1, "close": 2, "volume": 10},
                ]
            }
        ),
        encoding="utf-8",
    )
    bars = load_series(path)
    assert [bar.date for bar in bars] == [date(2024, 1, 2), date(2024, 1, 3)]
    assert bars[0].volume == 0.0
    assert bars[1].close == 2.0


def test_malformed_rows_are_rejected(tmp_path):
    missing = tmp_path / "missing.csv"
    missing.write_text("date,open,high,low\n2024-01-02,1,2,0.5\n", encoding="utf-8")
    with pytest.raises(InvalidSeries):
        load_series(missing)

    garbage = tmp_path / "garbage.csv"
    garbage.write_text("date,open,high,low,close\n2024-01-02,abc,2,0.5,1\n", encoding="utf-8")
    with pytest.raises(InvalidSeries):
        load_series(garbage)


def test_out_of_order_and_empty_series(tmp_path):
    bars = _bars()
    path = save_series(tmp_path / "unordered.json", [bars[2], bars[1]])
    with pytest.raises(InvalidSeries):
        load_series(path)

    empty = tmp_path / "empty.json"
    empty.write_text("[]", encoding="utf-8")
    with pytest.raises(InsufficientData):
        load_series(empty)


def test_quote_from_series_uses_previous_close():
    quote = quote_from_series("AAPL", _bars(), market_cap=3e12)
    assert quote.price == pytest.approx(104.5)
    assert quote.previous_close == pytest.approx(103.5)
    assert quote.change == pytest.approx(1.0)
    assert quote.change_percent == pytest.approx(1.0 / 103.5 * 100.0)
    assert quote.volume == 5000.0
    assert quote.name == "AAPL"


def test_zero_price_bar_is_rejected(tmp_path):
    path = tmp_path / "zero.csv"
    path.write_text(
        "date,open,high,low,close\n2024-01-02,1,2,0.5,1\n2024-01-03,1,1,0,0\n",
        encoding="utf-8",
    )
    with pytest.raises(InvalidSeries):
        load_series(path)
