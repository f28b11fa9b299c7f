"""Scheduler states, oracle decisions and cycle reports."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class SchedulerState(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"


class DecisionAction(Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class Decision:
    action: DecisionAction
    amount_usd: float
    reason: str
    confidence: float

    @classmethod
    def hold(cls, reason: str, confidence: float = 0.0) -> "Decision":
        return cls(action=DecisionAction.HOLD, amount_usd=0.0, reason=reason, confidence=confidence)

    def to_dict(self) -> Dict[str, object]:
        return {
            "action": self.action.value,
            "amount_usd": self.amount_usd,
            "reason": self.reason,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class CycleReport:
    """Outcome of one scheduler cycle."""

    asset_id: Optional[str]
    action: DecisionAction
    summary: str
    transaction_id: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = False

    @property
    def traded(self) -> bool:
        return self.transaction_id is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "asset_id": self.asset_id,
            "action": self.action.value,
            "summary": self.summary,
            "transaction_id": self.transaction_id,
            "error": self.error,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class SchedulerStatus:
    state: SchedulerState
    analyzing_asset_id: Optional[str]
    last_action: Optional[str]
    cycles_completed: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "state": self.state.value,
            "analyzing_asset_id": self.analyzing_asset_id,
            "last_action": self.last_action,
            "cycles_completed": self.cycles_completed,
        }
