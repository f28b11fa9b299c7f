from .feed import FeedError, PriceFeed, QuoteBook, quotes_from_rows
from .simulator import BACKUP_MARKET, SimulatedPriceFeed

__all__ = [
    "BACKUP_MARKET",
    "FeedError",
    "PriceFeed",
    "QuoteBook",
    "SimulatedPriceFeed",
    "quotes_from_rows",
]
