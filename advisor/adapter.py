"""Text-completion decision oracle: prompt building and response parsing."""

from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, Dict, Optional

from core.models import Quote
from execution_controller.controller import OracleFailure
from execution_controller.modes import Decision, DecisionAction
from wallet_core.models import Holding

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def build_decision_prompt(quote: Quote, cash_balance: float, holding: Optional[Holding]) -> str:
    if holding is not None and holding.average_cost > 0:
        pnl = (quote.current_price - holding.average_cost) / holding.average_cost * 100
        entry = f"Avg Buy Price: ${holding.average_cost:.2f} (Current PnL: {pnl:.2f}%)"
    else:
        entry = "Not currently held."
    held_units = holding.quantity if holding is not None else 0

    return "\n".join(
        [
            "Identity: Autonomous trading subroutine.",
            "Task: Analyze market data and decide on one trade.",
            "",
            f"Asset: {quote.display_name} ({quote.symbol})",
            f"Current Price: ${quote.current_price}",
            f"24h Change: {quote.price_change_percentage_24h}%",
            f"24h Range: High ${quote.high_24h} / Low ${quote.low_24h}",
            f"Market Cap: ${quote.market_cap}",
            "",
            "Wallet State:",
            f"USD Available: ${cash_balance}",
            f"Holdings: {held_units} units",
            entry,
            "",
            "Decision Logic:",
            "1. Volatility: near the 24h low consider accumulation (BUY); near the 24h high consider profit taking (SELL).",
            "2. Stop-loss: if held and PnL is below -5%, heavily consider SELL.",
            "3. Take-profit: if held and PnL is above 10%, heavily consider SELL.",
            "4. Momentum: if the 24h change is above 2% and rising, consider BUY.",
            "",
            "Constraints:",
            "- Trade amount: 1% - 15% of available balance (BUY) or holdings (SELL).",
            "- If confidence < 60, HOLD.",
            "",
            "Return JSON only:",
            '{"decision": "BUY" | "SELL" | "HOLD", "amountUSD": number, "reason": string, "confidence": 0-100}',
        ]
    )


def parse_decision(raw: str) -> Decision:
    """Parse an oracle response, tolerating markdown code fences."""

    if not isinstance(raw, str) or not raw.strip():
        raise OracleFailure("Oracle returned an empty response.")

    text = _FENCE.sub("", raw.strip()).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OracleFailure("Oracle returned invalid JSON.") from exc
    if not isinstance(data, dict):
        raise OracleFailure("Oracle response must be a JSON object.")

    action_value = data.get("decision", data.get("action"))
    action = DecisionAction.__members__.get(str(action_value).strip().upper())
    if action is None:
        raise OracleFailure(f"Unsupported decision: {action_value!r}")

    amount = _number(data, ("amountUSD", "amount_usd"), required=True)
    confidence = _number(data, ("confidence",), required=False)
    reason = str(data.get("reason") or "No rationale provided.")

    return Decision(action=action, amount_usd=amount, reason=reason, confidence=confidence)


def _number(data: Dict[str, Any], keys: tuple, required: bool) -> float:
    for key in keys:
        if key in data:
            value = data[key]
            break
    else:
        if required:
            raise OracleFailure(f"Oracle response is missing {keys[0]}.")
        return 0.0

    if isinstance(value, bool):
        raise OracleFailure(f"{keys[0]} must be numeric.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise OracleFailure(f"{keys[0]} must be numeric.") from exc
    if not math.isfinite(number):
        raise OracleFailure(f"{keys[0]} must be finite.")
    return number


class PromptDecisionOracle:
    """Decision oracle over any text-completion callable.

    Transport to a model provider belongs to ``complete``; this class only
    builds the prompt and interprets the answer.
    """

    def __init__(self, complete: Callable[[str], str], min_confidence: float = 60.0) -> None:
        self._complete = complete
        self._min_confidence = min_confidence

    def decide(self, quote: Quote, cash_balance: float, holding: Optional[Holding]) -> Decision:
        prompt = build_decision_prompt(quote, cash_balance, holding)
        try:
            raw = self._complete(prompt)
        except OracleFailure:
            raise
        except Exception as exc:
            raise OracleFailure("Decision provider request failed.") from exc

        decision = parse_decision(raw)
        if decision.action != DecisionAction.HOLD and decision.confidence < self._min_confidence:
            return Decision.hold(
                f"Low confidence ({decision.confidence:.0f}): {decision.reason}",
                confidence=decision.confidence,
            )
        return decision
