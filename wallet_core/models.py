"""Domain models for the wallet ledger."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Holding:
    """Quantity and average cost of one held asset."""

    asset_id: str
    symbol: str
    quantity: float
    average_cost: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "asset_id": self.asset_id,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "average_cost": self.average_cost,
        }


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the ledger state."""

    cash_balance: float
    holdings: Tuple[Holding, ...]

    def get_holding(self, asset_id: str) -> Optional[Holding]:
        for holding in self.holdings:
            if holding.asset_id == asset_id:
                return holding
        return None

    def to_dict(self) -> Dict[str, object]:
        return {
            "cash_balance": self.cash_balance,
            "holdings": [holding.to_dict() for holding in self.holdings],
        }
