"""Domain models for trade execution."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class TradeDirection(Enum):
    BUY = "BUY"
    SELL = "SELL"


class TradeOrigin(Enum):
    MANUAL = "MANUAL"
    AUTO = "AUTO"


@dataclass(frozen=True)
class TradeRequest:
    asset_id: str
    direction: TradeDirection
    notional_usd: float
    origin: TradeOrigin = TradeOrigin.MANUAL
    rationale: Optional[str] = None
    confidence: Optional[float] = None


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one executed trade."""

    transaction_id: str
    sequence: int
    direction: TradeDirection
    asset_id: str
    symbol: str
    quantity: float
    price: float
    notional_usd: float
    timestamp: str
    origin: TradeOrigin
    rationale: Optional[str] = None
    confidence: Optional[float] = None

    @property
    def is_auto(self) -> bool:
        return self.origin == TradeOrigin.AUTO

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {
            "transaction_id": self.transaction_id,
            "sequence": self.sequence,
            "direction": self.direction.value,
            "asset_id": self.asset_id,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "price": self.price,
            "notional_usd": self.notional_usd,
            "timestamp": self.timestamp,
            "origin": self.origin.value,
        }
        if self.rationale is not None:
            result["rationale"] = self.rationale
        if self.confidence is not None:
            result["confidence"] = self.confidence
        return result
