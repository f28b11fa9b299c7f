from .engine import compute_net_worth, value_portfolio
from .models import HoldingValuation, PortfolioValuation, Quote

__all__ = [
    "HoldingValuation",
    "PortfolioValuation",
    "Quote",
    "compute_net_worth",
    "value_portfolio",
]
