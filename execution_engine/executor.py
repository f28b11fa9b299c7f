"""Validates trade requests and applies them to the ledger."""

import logging
import math
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Tuple

from core.models import Quote
from wallet_core.ledger import Ledger
from wallet_core.models import LedgerSnapshot

from .errors import (
    InsufficientFunds,
    InsufficientHoldings,
    InvalidAmount,
    QuoteUnavailable,
    TradeError,
)
from .journal import TransactionLog
from .models import TradeDirection, TradeOrigin, TradeRequest, Transaction

logger = logging.getLogger(__name__)

SELL_TOLERANCE = 1e-9


class QuoteSource(Protocol):
    def get(self, asset_id: str) -> Optional[Quote]:
        ...


@dataclass(frozen=True)
class TradeResult:
    request: TradeRequest
    transaction: Optional[Transaction] = None
    error: Optional[TradeError] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


class TradeExecutor:
    """Single writer for the ledger and the transaction log.

    Every mutation happens under one lock, so manual and scheduled trades
    never interleave. A trade either mutates the ledger and appends exactly
    one transaction, or leaves both untouched.
    """

    def __init__(
        self,
        ledger: Ledger,
        quotes: QuoteSource,
        journal: TransactionLog,
        time_provider: Optional[Callable[[], str]] = None,
        id_provider: Optional[Callable[[], str]] = None,
        sell_tolerance: float = SELL_TOLERANCE,
    ) -> None:
        self._ledger = ledger
        self._quotes = quotes
        self._journal = journal
        self._time_provider = time_provider or _utc_timestamp
        self._id_provider = id_provider or _new_transaction_id
        self._sell_tolerance = sell_tolerance
        self._lock = threading.RLock()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def journal(self) -> TransactionLog:
        return self._journal

    def snapshot(self) -> LedgerSnapshot:
        """Consistent read of the ledger, taken between trades."""

        with self._lock:
            return self._ledger.snapshot()

    def read(self) -> Tuple[LedgerSnapshot, Tuple[Transaction, ...]]:
        """Ledger snapshot and transaction log, both taken between the same two trades."""

        with self._lock:
            return self._ledger.snapshot(), self._journal.all()

    def execute(self, request: TradeRequest) -> Transaction:
        with self._lock:
            try:
                transaction = self._execute_locked(request)
            except TradeError as exc:
                level = logging.INFO if request.origin == TradeOrigin.AUTO else logging.WARNING
                logger.log(
                    level,
                    "Rejected %s %s %s for %r: %s",
                    request.origin.value,
                    _direction_label(request),
                    request.asset_id,
                    request.notional_usd,
                    exc,
                )
                raise

        logger.info(
            "Executed %s %s %.8f %s @ %.8f (%.2f USD) id=%s",
            transaction.origin.value,
            transaction.direction.value,
            transaction.quantity,
            transaction.symbol,
            transaction.price,
            transaction.notional_usd,
            transaction.transaction_id,
        )
        return transaction

    def try_execute(self, request: TradeRequest) -> TradeResult:
        try:
            transaction = self.execute(request)
        except TradeError as exc:
            return TradeResult(request=request, error=exc)
        return TradeResult(request=request, transaction=transaction)

    def _execute_locked(self, request: TradeRequest) -> Transaction:
        if not isinstance(request.direction, TradeDirection):
            raise TradeError(f"Unsupported trade direction: {request.direction!r}")
        notional = _validate_notional(request.notional_usd)

        quote = self._quotes.get(request.asset_id)
        if quote is None or not quote.current_price > 0:
            raise QuoteUnavailable(request.asset_id)

        price = quote.current_price
        quantity = notional / price

        if request.direction == TradeDirection.BUY:
            if self._ledger.cash_balance < notional:
                raise InsufficientFunds(required=notional, available=self._ledger.cash_balance)
            holding = self._ledger.get_holding(request.asset_id)
            held = holding.quantity if holding else 0.0
            if not quantity > 0 or held + quantity <= self._ledger.dust_threshold:
                raise InvalidAmount(request.notional_usd)
        else:
            holding = self._ledger.get_holding(request.asset_id)
            available = holding.quantity if holding else 0.0
            if holding is None or not self._covers(available, quantity):
                raise InsufficientHoldings(
                    asset_id=request.asset_id,
                    symbol=quote.symbol,
                    requested=quantity,
                    available=available,
                )
            quantity = min(quantity, available)

        transaction = Transaction(
            transaction_id=self._id_provider(),
            sequence=len(self._journal) + 1,
            direction=request.direction,
            asset_id=request.asset_id,
            symbol=quote.symbol,
            quantity=quantity,
            price=price,
            notional_usd=notional,
            timestamp=self._time_provider(),
            origin=request.origin,
            rationale=request.rationale,
            confidence=request.confidence,
        )

        before = self._ledger.snapshot()
        try:
            if request.direction == TradeDirection.BUY:
                self._ledger.apply_buy(
                    asset_id=request.asset_id,
                    symbol=quote.symbol,
                    quantity=quantity,
                    fill_price=price,
                    usd_spent=notional,
                )
            else:
                self._ledger.apply_sell(
                    asset_id=request.asset_id,
                    quantity=quantity,
                    usd_received=notional,
                )
            self._journal.append(transaction)
        except Exception:
            self._ledger.restore(before)
            raise
        return transaction

    def _covers(self, available: float, requested: float) -> bool:
        if requested <= available:
            return True
        return math.isclose(requested, available, rel_tol=self._sell_tolerance, abs_tol=0.0)


def _validate_notional(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidAmount(value)
    amount = float(value)
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(value)
    return amount


def _direction_label(request: TradeRequest) -> str:
    if isinstance(request.direction, TradeDirection):
        return request.direction.value
    return str(request.direction)


def _new_transaction_id() -> str:
    return uuid.uuid4().hex


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
