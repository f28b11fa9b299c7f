"""Latest-snapshot quote storage fed by an external price feed."""

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from core.models import Quote

logger = logging.getLogger(__name__)


class FeedError(RuntimeError):
    """Raised when a price feed cannot produce quotes."""


class PriceFeed(Protocol):
    def get_quotes(self) -> Sequence[Quote]:
        ...


class QuoteBook:
    """Holds the most recent quote snapshot in listing order.

    Readers always see a whole snapshot; a refresh swaps it in one step.
    """

    def __init__(self, quotes: Iterable[Quote] = ()) -> None:
        self._lock = threading.Lock()
        self._listing: Tuple[Quote, ...] = ()
        self._by_id: Dict[str, Quote] = {}
        self.update(quotes)

    def update(self, quotes: Iterable[Quote]) -> int:
        listing: List[Quote] = []
        by_id: Dict[str, Quote] = {}
        for quote in quotes:
            if quote.asset_id in by_id:
                continue
            by_id[quote.asset_id] = quote
            listing.append(quote)
        with self._lock:
            self._listing = tuple(listing)
            self._by_id = by_id
        return len(listing)

    def refresh(self, feed: PriceFeed) -> bool:
        """Pull from ``feed``; the previous snapshot survives a failed or empty pull."""

        try:
            quotes = list(feed.get_quotes())
        except FeedError as exc:
            logger.warning("Quote refresh failed: %s", exc)
            return False
        if not quotes:
            logger.warning("Quote refresh returned no quotes; keeping previous snapshot")
            return False
        count = self.update(quotes)
        logger.debug("Quote snapshot refreshed with %d assets", count)
        return True

    def get(self, asset_id: str) -> Optional[Quote]:
        with self._lock:
            return self._by_id.get(asset_id)

    def listing(self) -> Tuple[Quote, ...]:
        with self._lock:
            return self._listing

    def as_mapping(self) -> Mapping[str, Quote]:
        with self._lock:
            return dict(self._by_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listing)


def quotes_from_rows(rows: Iterable[Mapping[str, Any]]) -> Tuple[Quote, ...]:
    """Convert provider-shaped market rows into quotes, dropping unpriced rows."""

    quotes: List[Quote] = []
    for row in rows:
        try:
            quote = _quote_from_row(row)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping market row %r: %s", row.get("id"), exc)
            continue
        quotes.append(quote)
    return tuple(quotes)


def _quote_from_row(row: Mapping[str, Any]) -> Quote:
    price = float(row["current_price"])
    if not price > 0:
        raise ValueError("current_price must be positive.")
    return Quote(
        asset_id=str(row["id"]),
        symbol=str(row["symbol"]),
        name=str(row.get("name") or ""),
        current_price=price,
        high_24h=_optional_float(row.get("high_24h"), price),
        low_24h=_optional_float(row.get("low_24h"), price),
        market_cap=_optional_float(row.get("market_cap"), 0.0),
        total_volume=_optional_float(row.get("total_volume"), 0.0),
        price_change_percentage_24h=_optional_float(
            row.get("price_change_percentage_24h"), 0.0
        ),
    )


def _optional_float(value: Any, default: float) -> float:
    if value is None:
        return default
    return float(value)
