"""Portfolio ledger."""

from stock_advisor.portfolio.ledger import PortfolioLedger
from stock_advisor.portfolio.models import Holding, PortfolioSnapshot

__all__ = ["Holding", "PortfolioLedger", "PortfolioSnapshot"]
