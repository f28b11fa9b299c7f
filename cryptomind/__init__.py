from .config import DeskSettings
from .logging_setup import configure_logging
from .session import DeskSnapshot, TradingSession

__all__ = [
    "DeskSettings",
    "DeskSnapshot",
    "TradingSession",
    "configure_logging",
]
