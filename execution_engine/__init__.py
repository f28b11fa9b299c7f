from .errors import (
    InsufficientFunds,
    InsufficientHoldings,
    InvalidAmount,
    QuoteUnavailable,
    TradeError,
)
from .executor import QuoteSource, TradeExecutor, TradeResult
from .journal import TransactionLog
from .models import TradeDirection, TradeOrigin, TradeRequest, Transaction
from .notifications import Notification, NotificationCenter, NotificationLevel

__all__ = [
    "InsufficientFunds",
    "InsufficientHoldings",
    "InvalidAmount",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "QuoteSource",
    "QuoteUnavailable",
    "TradeDirection",
    "TradeError",
    "TradeExecutor",
    "TradeOrigin",
    "TradeRequest",
    "TradeResult",
    "Transaction",
    "TransactionLog",
]
