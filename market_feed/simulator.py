"""Offline price feed that jitters a fixed large-cap listing."""

import random
from typing import Any, Dict, Optional, Sequence, Tuple

from core.models import Quote

from .feed import quotes_from_rows

BACKUP_MARKET: Tuple[Dict[str, Any], ...] = (
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "current_price": 64230.50,
        "price_change_percentage_24h": 2.45,
        "market_cap": 1_200_000_000_000,
        "total_volume": 35_000_000_000,
        "high_24h": 65000,
        "low_24h": 63000,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "current_price": 3450.12,
        "price_change_percentage_24h": 1.15,
        "market_cap": 400_000_000_000,
        "total_volume": 1_500_000_000,
        "high_24h": 3550,
        "low_24h": 3400,
    },
    {
        "id": "solana",
        "symbol": "sol",
        "name": "Solana",
        "current_price": 145.20,
        "price_change_percentage_24h": -5.4,
        "market_cap": 65_000_000_000,
        "total_volume": 4_000_000_000,
        "high_24h": 155,
        "low_24h": 142,
    },
    {
        "id": "binancecoin",
        "symbol": "bnb",
        "name": "BNB",
        "current_price": 590.50,
        "price_change_percentage_24h": 0.5,
        "market_cap": 87_000_000_000,
        "total_volume": 1_200_000_000,
        "high_24h": 595,
        "low_24h": 585,
    },
    {
        "id": "ripple",
        "symbol": "xrp",
        "name": "XRP",
        "current_price": 0.62,
        "price_change_percentage_24h": -0.8,
        "market_cap": 34_000_000_000,
        "total_volume": 1_100_000_000,
        "high_24h": 0.63,
        "low_24h": 0.61,
    },
    {
        "id": "cardano",
        "symbol": "ada",
        "name": "Cardano",
        "current_price": 0.45,
        "price_change_percentage_24h": 1.2,
        "market_cap": 16_000_000_000,
        "total_volume": 400_000_000,
        "high_24h": 0.46,
        "low_24h": 0.44,
    },
    {
        "id": "dogecoin",
        "symbol": "doge",
        "name": "Dogecoin",
        "current_price": 0.12,
        "price_change_percentage_24h": 8.5,
        "market_cap": 17_000_000_000,
        "total_volume": 2_000_000_000,
        "high_24h": 0.13,
        "low_24h": 0.11,
    },
    {
        "id": "polkadot",
        "symbol": "dot",
        "name": "Polkadot",
        "current_price": 7.20,
        "price_change_percentage_24h": -2.1,
        "market_cap": 10_000_000_000,
        "total_volume": 200_000_000,
        "high_24h": 7.50,
        "low_24h": 7.10,
    },
)

_PRICE_JITTER = 0.001
_CHANGE_JITTER = 0.1


class SimulatedPriceFeed:
    """Each call returns the backup listing with +/-0.1% price noise."""

    def __init__(
        self,
        rows: Sequence[Dict[str, Any]] = BACKUP_MARKET,
        rng: Optional[random.Random] = None,
        jitter: bool = True,
    ) -> None:
        self._rows = tuple(dict(row) for row in rows)
        self._rng = rng or random.Random()
        self._jitter = jitter

    def get_quotes(self) -> Tuple[Quote, ...]:
        if not self._jitter:
            return quotes_from_rows(self._rows)
        return quotes_from_rows(self._jittered(row) for row in self._rows)

    def _jittered(self, row: Dict[str, Any]) -> Dict[str, Any]:
        price_factor = 1 + self._rng.uniform(-_PRICE_JITTER, _PRICE_JITTER)
        change_offset = self._rng.uniform(-_CHANGE_JITTER, _CHANGE_JITTER)
        updated = dict(row)
        updated["current_price"] = row["current_price"] * price_factor
        updated["price_change_percentage_24h"] = (
            row["price_change_percentage_24h"] + change_offset
        )
        return updated
