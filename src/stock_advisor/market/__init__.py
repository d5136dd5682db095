"""Market data types and series adapters."""

from stock_advisor.market.models import PriceBar, Quote, Signal, Trade, TradeSide
from stock_advisor.market.series import (
    bar_from_dict,
    bar_to_dict,
    load_series,
    quote_from_series,
    save_series,
    validate_series,
)

__all__ = [
    "PriceBar",
    "Quote",
    "Signal",
    "Trade",
    "TradeSide",
    "bar_from_dict",
    "bar_to_dict",
    "load_series",
    "quote_from_series",
    "save_series",
    "validate_series",
]
