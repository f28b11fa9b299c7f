"""Typed trade failures.

The string form of each error is the message shown to the user.
"""


class TradeError(ValueError):
    """Base class for trades rejected by the executor."""


class QuoteUnavailable(TradeError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(f"No current price for {asset_id}")
        self.asset_id = asset_id


class InsufficientFunds(TradeError):
    def __init__(self, required: float, available: float) -> None:
        super().__init__("Insufficient USD Balance")
        self.required = required
        self.available = available


class InsufficientHoldings(TradeError):
    def __init__(self, asset_id: str, symbol: str, requested: float, available: float) -> None:
        super().__init__(f"Insufficient {symbol.upper()} Balance")
        self.asset_id = asset_id
        self.symbol = symbol
        self.requested = requested
        self.available = available


class InvalidAmount(TradeError):
    def __init__(self, value: object = None) -> None:
        super().__init__("Please enter a valid amount")
        self.value = value
