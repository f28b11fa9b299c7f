"""Deterministic offline decision oracle."""

from dataclasses import dataclass
from typing import Optional

from core.models import Quote
from execution_controller.modes import Decision, DecisionAction
from wallet_core.models import Holding


@dataclass(frozen=True)
class RuleThresholds:
    stop_loss_pct: float = -5.0
    take_profit_pct: float = 10.0
    momentum_pct: float = 2.0
    range_band: float = 0.15
    min_confidence: float = 60.0


class RuleBasedOracle:
    """Stop-loss, take-profit, 24h-range and momentum rules.

    Rules are checked in that order; the first match wins. Trade sizes stay
    within 1-15% of the cash balance (BUY) or the holding value (SELL).
    """

    def __init__(self, thresholds: Optional[RuleThresholds] = None) -> None:
        self._thresholds = thresholds or RuleThresholds()

    def decide(self, quote: Quote, cash_balance: float, holding: Optional[Holding]) -> Decision:
        decision = self._evaluate(quote, cash_balance, holding)
        if (
            decision.action != DecisionAction.HOLD
            and decision.confidence < self._thresholds.min_confidence
        ):
            return Decision.hold(f"Low confidence: {decision.reason}", decision.confidence)
        if decision.action != DecisionAction.HOLD and decision.amount_usd <= 0:
            return Decision.hold(f"Nothing to trade: {decision.reason}", decision.confidence)
        return decision

    def _evaluate(self, quote: Quote, cash_balance: float, holding: Optional[Holding]) -> Decision:
        limits = self._thresholds
        price = quote.current_price
        holding_value = holding.quantity * price if holding is not None else 0.0

        pnl_pct: Optional[float] = None
        if holding is not None and holding.average_cost > 0:
            pnl_pct = (price - holding.average_cost) / holding.average_cost * 100.0

        if pnl_pct is not None and pnl_pct <= limits.stop_loss_pct:
            return _sell(holding_value, 0.15, f"Hit {pnl_pct:.1f}% stop-loss", 85.0)
        if pnl_pct is not None and pnl_pct >= limits.take_profit_pct:
            return _sell(holding_value, 0.15, f"Take-profit at +{pnl_pct:.1f}%", 80.0)

        span = quote.high_24h - quote.low_24h
        position = (price - quote.low_24h) / span if span > 0 else 0.5

        if position >= 1 - limits.range_band and holding_value > 0:
            return _sell(holding_value, 0.05, "Near 24h high; taking profit", 65.0)
        if position <= limits.range_band and cash_balance > 0:
            return _buy(cash_balance, 0.10, "Near 24h low; accumulating", 70.0)
        if quote.price_change_percentage_24h > limits.momentum_pct and cash_balance > 0:
            return _buy(
                cash_balance,
                0.05,
                f"Momentum +{quote.price_change_percentage_24h:.1f}% in 24h",
                62.0,
            )
        return Decision.hold("No actionable signal", 50.0)


def _buy(cash_balance: float, fraction: float, reason: str, confidence: float) -> Decision:
    return Decision(
        action=DecisionAction.BUY,
        amount_usd=round(cash_balance * fraction, 2),
        reason=reason,
        confidence=confidence,
    )


def _sell(holding_value: float, fraction: float, reason: str, confidence: float) -> Decision:
    return Decision(
        action=DecisionAction.SELL,
        amount_usd=round(holding_value * fraction, 2),
        reason=reason,
        confidence=confidence,
    )
