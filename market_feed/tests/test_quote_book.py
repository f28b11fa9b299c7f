"""Unit tests for quote snapshots and the offline price feed."""

import random
import unittest

from core.models import Quote
from market_feed.feed import FeedError, QuoteBook, quotes_from_rows
from market_feed.simulator import BACKUP_MARKET, SimulatedPriceFeed


def _quote(asset_id: str, price: float) -> Quote:
    return Quote(asset_id=asset_id, symbol=asset_id[:3], current_price=price, high_24h=price, low_24h=price)


class StaticFeed:
    def __init__(self, quotes) -> None:
        self.quotes = quotes

    def get_quotes(self):
        return self.quotes


class BrokenFeed:
    def get_quotes(self):
        raise FeedError("rate limited")


class QuoteBookTests(unittest.TestCase):
    def test_update_keeps_listing_order_and_drops_duplicates(self) -> None:
        book = QuoteBook()
        count = book.update([_quote("beta", 2.0), _quote("alpha", 1.0), _quote("beta", 3.0)])

        self.assertEqual(count, 2)
        self.assertEqual([item.asset_id for item in book.listing()], ["beta", "alpha"])
        self.assertEqual(book.get("beta").current_price, 2.0)
        self.assertIsNone(book.get("gamma"))

    def test_refresh_replaces_snapshot(self) -> None:
        book = QuoteBook([_quote("alpha", 1.0)])

        self.assertTrue(book.refresh(StaticFeed([_quote("beta", 5.0)])))
        self.assertEqual(len(book), 1)
        self.assertIsNone(book.get("alpha"))

    def test_failed_or_empty_refresh_keeps_previous_snapshot(self) -> None:
        book = QuoteBook([_quote("alpha", 1.0)])

        with self.assertLogs("market_feed.feed", level="WARNING"):
            self.assertFalse(book.refresh(BrokenFeed()))
            self.assertFalse(book.refresh(StaticFeed([])))

        self.assertEqual(book.get("alpha").current_price, 1.0)

    def test_mapping_is_a_copy(self) -> None:
        book = QuoteBook([_quote("alpha", 1.0)])
        mapping = book.as_mapping()
        book.update([_quote("beta", 2.0)])

        self.assertIn("alpha", mapping)
        self.assertNotIn("beta", mapping)


class QuoteRowTests(unittest.TestCase):
    def test_rows_without_usable_price_are_skipped(self) -> None:
        rows = [
            {"id": "alpha", "symbol": "alp", "current_price": 10, "high_24h": None},
            {"id": "beta", "symbol": "bet", "current_price": None},
            {"id": "gamma", "symbol": "gam", "current_price": 0},
            {"symbol": "missing-id", "current_price": 3},
        ]
        with self.assertLogs("market_feed.feed", level="WARNING"):
            quotes = quotes_from_rows(rows)

        self.assertEqual([item.asset_id for item in quotes], ["alpha"])
        self.assertEqual(quotes[0].high_24h, 10.0)
        self.assertEqual(quotes[0].display_name, "ALP")


class SimulatedPriceFeedTests(unittest.TestCase):
    def test_backup_listing_without_jitter(self) -> None:
        quotes = SimulatedPriceFeed(jitter=False).get_quotes()

        self.assertEqual(len(quotes), len(BACKUP_MARKET))
        self.assertEqual(quotes[0].asset_id, "bitcoin")
        self.assertEqual(quotes[0].current_price, 64230.50)

    def test_jitter_stays_within_a_tenth_of_a_percent(self) -> None:
        feed = SimulatedPriceFeed(rng=random.Random(5))
        for _ in range(20):
            for quote, row in zip(feed.get_quotes(), BACKUP_MARKET):
                self.assertLessEqual(abs(quote.current_price / row["current_price"] - 1), 0.001 + 1e-12)

    def test_seeded_feeds_agree(self) -> None:
        first = SimulatedPriceFeed(rng=random.Random(9)).get_quotes()
        second = SimulatedPriceFeed(rng=random.Random(9)).get_quotes()
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
