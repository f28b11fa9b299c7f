"""Market data and valuation schemas."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Quote:
    """Immutable market snapshot for one asset."""

    asset_id: str
    symbol: str
    current_price: float
    high_24h: float
    low_24h: float
    market_cap: float = 0.0
    total_volume: float = 0.0
    name: str = ""
    price_change_percentage_24h: float = 0.0

    @property
    def display_name(self) -> str:
        return self.name or self.symbol.upper()

    def to_dict(self) -> Dict[str, object]:
        return {
            "asset_id": self.asset_id,
            "symbol": self.symbol,
            "name": self.name,
            "current_price": self.current_price,
            "high_24h": self.high_24h,
            "low_24h": self.low_24h,
            "market_cap": self.market_cap,
            "total_volume": self.total_volume,
            "price_change_percentage_24h": self.price_change_percentage_24h,
        }


@dataclass(frozen=True)
class HoldingValuation:
    asset_id: str
    symbol: str
    quantity: float
    price: float
    market_value: float
    average_cost: float
    cost_value: float
    unrealized_pnl: float
    pnl_percent: Optional[float]
    priced_from_quote: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "asset_id": self.asset_id,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "price": self.price,
            "market_value": self.market_value,
            "average_cost": self.average_cost,
            "cost_value": self.cost_value,
            "unrealized_pnl": self.unrealized_pnl,
            "pnl_percent": self.pnl_percent,
            "priced_from_quote": self.priced_from_quote,
        }


@dataclass(frozen=True)
class PortfolioValuation:
    """Deterministic valuation output for a ledger snapshot."""

    cash_balance: float
    holdings: Tuple[HoldingValuation, ...]
    holdings_value: float
    net_worth: float
    unpriced_assets: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "cash_balance": self.cash_balance,
            "holdings": [item.to_dict() for item in self.holdings],
            "holdings_value": self.holdings_value,
            "net_worth": self.net_worth,
            "unpriced_assets": list(self.unpriced_assets),
        }
