"""One trading session: the owned wallet state and everything that touches it."""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from core.engine import value_portfolio
from core.models import PortfolioValuation, Quote
from execution_controller.controller import AutoTradeScheduler, DecisionOracle
from execution_controller.modes import CycleReport, SchedulerStatus
from execution_controller.policy import SamplingPolicy
from execution_controller.timer import PeriodicTask
from execution_engine.errors import InvalidAmount, TradeError
from execution_engine.executor import TradeExecutor
from execution_engine.journal import TransactionLog
from execution_engine.models import TradeDirection, TradeOrigin, TradeRequest, Transaction
from execution_engine.notifications import Notification, NotificationCenter
from market_feed.feed import PriceFeed, QuoteBook
from market_feed.simulator import SimulatedPriceFeed
from wallet_core.ledger import Ledger
from wallet_core.models import LedgerSnapshot

from .config import DeskSettings

logger = logging.getLogger(__name__)

Amount = Union[float, int, str]


@dataclass(frozen=True)
class DeskSnapshot:
    """Everything the dashboard shows, read at one moment."""

    wallet: LedgerSnapshot
    valuation: PortfolioValuation
    transactions: Tuple[Transaction, ...]
    autotrade: SchedulerStatus
    quote_count: int

    @property
    def net_worth(self) -> float:
        return self.valuation.net_worth

    def to_dict(self) -> Dict[str, object]:
        return {
            "wallet": self.wallet.to_dict(),
            "valuation": self.valuation.to_dict(),
            "net_worth": self.net_worth,
            "transactions": [item.to_dict() for item in self.transactions],
            "autotrade": self.autotrade.to_dict(),
            "quote_count": self.quote_count,
        }


class TradingSession:
    """Owns the ledger and wires the executor, scheduler and feeds around it.

    Manual trades and scheduled trades both go through the same executor.
    """

    def __init__(
        self,
        oracle: DecisionOracle,
        settings: Optional[DeskSettings] = None,
        feed: Optional[PriceFeed] = None,
        rng: Optional[random.Random] = None,
        time_provider: Optional[Callable[[], str]] = None,
        id_provider: Optional[Callable[[], str]] = None,
    ) -> None:
        self._settings = settings or DeskSettings()
        seed = self._settings.random_seed
        self._feed = feed or SimulatedPriceFeed(rng=random.Random(seed))

        self._ledger = Ledger(self._settings.seed_balance, dust_threshold=self._settings.dust_threshold)
        self._journal = TransactionLog()
        self._quotes = QuoteBook()
        self._notifications = NotificationCenter(
            history=self._settings.notification_history,
            time_provider=time_provider,
        )
        self._executor = TradeExecutor(
            ledger=self._ledger,
            quotes=self._quotes,
            journal=self._journal,
            time_provider=time_provider,
            id_provider=id_provider,
        )
        self._scheduler = AutoTradeScheduler(
            executor=self._executor,
            market=self._quotes,
            oracle=oracle,
            policy=SamplingPolicy(
                top_n=self._settings.autotrade_top_n,
                period_seconds=self._settings.autotrade_period_seconds,
            ),
            rng=rng or random.Random(seed),
            notifications=self._notifications,
        )
        self._refresher = PeriodicTask(
            self._settings.quote_refresh_seconds, self.refresh_quotes, name="QuoteRefresher"
        )
        self.refresh_quotes()

    @property
    def settings(self) -> DeskSettings:
        return self._settings

    @property
    def quotes(self) -> QuoteBook:
        return self._quotes

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    @property
    def scheduler(self) -> AutoTradeScheduler:
        return self._scheduler

    @property
    def journal(self) -> TransactionLog:
        return self._journal

    def refresh_quotes(self) -> bool:
        return self._quotes.refresh(self._feed)

    def trade(self, direction: Union[TradeDirection, str], asset_id: str, amount_usd: Amount) -> Transaction:
        """Execute a manual trade; failures are notified and re-raised."""

        try:
            request = TradeRequest(
                asset_id=asset_id,
                direction=_parse_direction(direction),
                notional_usd=_parse_amount(amount_usd),
                origin=TradeOrigin.MANUAL,
            )
            transaction = self._executor.execute(request)
        except TradeError as exc:
            self._notifications.error(str(exc))
            raise

        verb = "bought" if transaction.direction == TradeDirection.BUY else "sold"
        quote = self._quotes.get(asset_id)
        label = quote.display_name if quote is not None else transaction.symbol.upper()
        self._notifications.success(f"Successfully {verb} {label}")
        return transaction

    def buy(self, asset_id: str, amount_usd: Amount) -> Transaction:
        return self.trade(TradeDirection.BUY, asset_id, amount_usd)

    def sell(self, asset_id: str, amount_usd: Amount) -> Transaction:
        return self.trade(TradeDirection.SELL, asset_id, amount_usd)

    def enable_autotrade(self) -> SchedulerStatus:
        self._scheduler.enable()
        return self._scheduler.status()

    def disable_autotrade(self) -> SchedulerStatus:
        self._scheduler.disable()
        return self._scheduler.status()

    def run_autotrade_cycle(self) -> Optional[CycleReport]:
        return self._scheduler.tick()

    def autotrade_status(self) -> SchedulerStatus:
        return self._scheduler.status()

    def ledger_snapshot(self) -> LedgerSnapshot:
        return self._executor.snapshot()

    def valuation(self) -> PortfolioValuation:
        return value_portfolio(self._executor.snapshot(), self._quotes.as_mapping())

    def net_worth(self) -> float:
        return self.valuation().net_worth

    def transactions(self) -> Tuple[Transaction, ...]:
        return self._journal.all()

    def recent_notifications(self) -> Tuple[Notification, ...]:
        return self._notifications.recent()

    def listing(self) -> Tuple[Quote, ...]:
        return self._quotes.listing()

    def snapshot(self) -> DeskSnapshot:
        wallet, transactions = self._executor.read()
        return DeskSnapshot(
            wallet=wallet,
            valuation=value_portfolio(wallet, self._quotes.as_mapping()),
            transactions=transactions,
            autotrade=self._scheduler.status(),
            quote_count=len(self._quotes),
        )

    def start(self) -> None:
        """Start the periodic quote refresher and the scheduler thread."""

        self._refresher.start()
        self._scheduler.start()

    def shutdown(self) -> None:
        self._refresher.stop()
        self._scheduler.shutdown()
        logger.info("Trading session stopped")


def _parse_direction(value: Union[TradeDirection, str]) -> TradeDirection:
    if isinstance(value, TradeDirection):
        return value
    direction = TradeDirection.__members__.get(str(value).strip().upper())
    if direction is None:
        raise TradeError(f"Unsupported trade direction: {value}")
    return direction


def _parse_amount(value: Amount) -> float:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise InvalidAmount(value) from exc
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidAmount(value)
    return float(value)
