"""Autonomous trading loop driven by an external decision oracle."""

import logging
import math
import random
import threading
from typing import Optional, Protocol, Sequence, Tuple

from core.models import Quote
from execution_engine.executor import TradeExecutor
from execution_engine.models import TradeDirection, TradeOrigin, TradeRequest
from execution_engine.notifications import NotificationCenter
from wallet_core.models import Holding

from .modes import CycleReport, Decision, DecisionAction, SchedulerState, SchedulerStatus
from .policy import SamplingPolicy
from .timer import PeriodicTask

logger = logging.getLogger(__name__)


class OracleFailure(RuntimeError):
    """Raised when the decision oracle errors or returns unusable output."""


class DecisionOracle(Protocol):
    def decide(self, quote: Quote, cash_balance: float, holding: Optional[Holding]) -> Decision:
        ...


class MarketListing(Protocol):
    def listing(self) -> Sequence[Quote]:
        ...


_DIRECTIONS = {
    DecisionAction.BUY: TradeDirection.BUY,
    DecisionAction.SELL: TradeDirection.SELL,
}


class AutoTradeScheduler:
    """IDLE/RUNNING state machine that trades through the shared executor.

    Nothing raised by the oracle or the executor escapes a cycle, and a
    failed cycle never leaves the RUNNING state.
    """

    def __init__(
        self,
        executor: TradeExecutor,
        market: MarketListing,
        oracle: DecisionOracle,
        policy: Optional[SamplingPolicy] = None,
        rng: Optional[random.Random] = None,
        notifications: Optional[NotificationCenter] = None,
    ) -> None:
        self._executor = executor
        self._market = market
        self._oracle = oracle
        self._policy = policy or SamplingPolicy()
        self._rng = rng or random.Random()
        self._notifications = notifications
        self._state = SchedulerState.IDLE
        self._analyzing: Optional[str] = None
        self._last_action: Optional[str] = None
        self._cycles = 0
        self._cycle_lock = threading.Lock()
        self._task: Optional[PeriodicTask] = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def analyzing_asset_id(self) -> Optional[str]:
        return self._analyzing

    @property
    def last_action(self) -> Optional[str]:
        return self._last_action

    @property
    def policy(self) -> SamplingPolicy:
        return self._policy

    def enable(self) -> None:
        if self._state != SchedulerState.RUNNING:
            logger.info("Auto-trading enabled")
        self._state = SchedulerState.RUNNING

    def disable(self) -> None:
        if self._state != SchedulerState.IDLE:
            logger.info("Auto-trading disabled")
        self._state = SchedulerState.IDLE

    def status(self) -> SchedulerStatus:
        return SchedulerStatus(
            state=self._state,
            analyzing_asset_id=self._analyzing,
            last_action=self._last_action,
            cycles_completed=self._cycles,
        )

    def start(self) -> None:
        """Run ``tick`` every policy period on a background thread."""

        if self._task is None:
            self._task = PeriodicTask(
                self._policy.period_seconds, self.tick, name="AutoTradeScheduler"
            )
        self._task.start()

    def shutdown(self) -> None:
        if self._task is not None:
            self._task.stop()
            self._task = None
        self.disable()

    def tick(self) -> Optional[CycleReport]:
        if self._state != SchedulerState.RUNNING:
            return None

        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("Previous auto-trade cycle still in flight; skipping tick")
            return CycleReport(
                asset_id=None,
                action=DecisionAction.HOLD,
                summary="Previous cycle still running",
                skipped=True,
            )
        try:
            report = self._run_cycle()
            self._cycles += 1
            self._last_action = report.summary
        finally:
            self._cycle_lock.release()
        return report

    def _run_cycle(self) -> CycleReport:
        candidate = self._policy.pick(self._market.listing(), self._rng)
        if candidate is None:
            return CycleReport(
                asset_id=None,
                action=DecisionAction.HOLD,
                summary="HOLD - no market data available",
            )

        self._analyzing = candidate.asset_id
        try:
            decision, failure = self._consult(candidate)
            return self._act(candidate, decision, failure)
        finally:
            self._analyzing = None

    def _consult(self, quote: Quote) -> Tuple[Decision, Optional[str]]:
        snapshot = self._executor.snapshot()
        holding = snapshot.get_holding(quote.asset_id)
        try:
            decision = self._oracle.decide(quote, snapshot.cash_balance, holding)
            if not isinstance(decision, Decision):
                raise OracleFailure(f"Oracle returned {type(decision).__name__}, not a decision")
            _check_decision(decision)
        except Exception as exc:
            logger.exception("Decision oracle failed for %s", quote.asset_id)
            reason = str(exc) or type(exc).__name__
            return Decision.hold(f"Oracle failure: {reason}"), type(exc).__name__
        return decision, None

    def _act(self, quote: Quote, decision: Decision, failure: Optional[str]) -> CycleReport:
        symbol = quote.symbol.upper()
        direction = _DIRECTIONS.get(decision.action)

        if direction is None:
            return CycleReport(
                asset_id=quote.asset_id,
                action=DecisionAction.HOLD,
                summary=f"HOLD {symbol} - {decision.reason}",
                error=failure,
            )

        if not decision.amount_usd > 0:
            return CycleReport(
                asset_id=quote.asset_id,
                action=decision.action,
                summary=f"HOLD {symbol} - no {decision.action.value} amount given ({decision.reason})",
            )

        request = TradeRequest(
            asset_id=quote.asset_id,
            direction=direction,
            notional_usd=decision.amount_usd,
            origin=TradeOrigin.AUTO,
            rationale=decision.reason,
            confidence=decision.confidence,
        )
        result = self._executor.try_execute(request)
        if not result.ok:
            return CycleReport(
                asset_id=quote.asset_id,
                action=decision.action,
                summary=f"SKIPPED {direction.value} {symbol} - {result.error}",
                error=type(result.error).__name__,
            )

        if self._notifications is not None:
            self._notifications.info(f"AI Executed: {direction.value} {symbol}")
        return CycleReport(
            asset_id=quote.asset_id,
            action=decision.action,
            summary=f"{direction.value} {symbol} - {decision.reason}",
            transaction_id=result.transaction.transaction_id,
        )


def _check_decision(decision: Decision) -> None:
    if not isinstance(decision.action, DecisionAction):
        raise OracleFailure(f"Unsupported decision action: {decision.action!r}")
    amount = decision.amount_usd
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not math.isfinite(amount):
        raise OracleFailure(f"Decision amount must be a finite number, got {amount!r}")
