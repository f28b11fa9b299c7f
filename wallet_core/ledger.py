"""Authoritative wallet state: USD cash plus per-asset holdings."""

import logging
from typing import Dict, Optional, Tuple

from .models import Holding, LedgerSnapshot

logger = logging.getLogger(__name__)

DUST_THRESHOLD = 1e-6


class Ledger:
    """Pure state container.

    The ledger performs arithmetic only. Callers are expected to validate
    trades before applying them; in this project that is the trade executor,
    which is also the only writer.
    """

    def __init__(self, cash_balance: float, dust_threshold: float = DUST_THRESHOLD) -> None:
        if cash_balance < 0:
            raise ValueError("cash_balance must be non-negative.")
        self._cash = float(cash_balance)
        self._holdings: Dict[str, Holding] = {}
        self._dust_threshold = dust_threshold

    @property
    def cash_balance(self) -> float:
        return self._cash

    @property
    def dust_threshold(self) -> float:
        return self._dust_threshold

    def get_holding(self, asset_id: str) -> Optional[Holding]:
        return self._holdings.get(asset_id)

    def holdings(self) -> Tuple[Holding, ...]:
        return tuple(self._holdings[key] for key in sorted(self._holdings))

    def apply_buy(
        self,
        asset_id: str,
        symbol: str,
        quantity: float,
        fill_price: float,
        usd_spent: float,
    ) -> Holding:
        existing = self._holdings.get(asset_id)
        existing_quantity = existing.quantity if existing else 0.0
        existing_cost = existing.average_cost if existing else 0.0

        new_quantity = existing_quantity + quantity
        average_cost = (existing_quantity * existing_cost + usd_spent) / new_quantity

        holding = Holding(
            asset_id=asset_id,
            symbol=existing.symbol if existing else symbol,
            quantity=new_quantity,
            average_cost=average_cost,
        )
        self._cash -= usd_spent
        self._holdings[asset_id] = holding
        logger.debug(
            "Ledger buy %s qty=%.8f @ %.8f; holding now %.8f @ %.8f",
            asset_id,
            quantity,
            fill_price,
            holding.quantity,
            holding.average_cost,
        )
        return holding

    def apply_sell(self, asset_id: str, quantity: float, usd_received: float) -> Optional[Holding]:
        """Debit ``quantity`` and credit cash; returns None if the holding was closed."""

        existing = self._holdings.get(asset_id)
        if existing is None:
            raise KeyError(f"No holding for asset_id: {asset_id}")

        remaining = existing.quantity - quantity
        self._cash += usd_received

        if remaining <= self._dust_threshold:
            del self._holdings[asset_id]
            logger.debug("Ledger sell %s closed holding", asset_id)
            return None

        holding = Holding(
            asset_id=existing.asset_id,
            symbol=existing.symbol,
            quantity=remaining,
            average_cost=existing.average_cost,
        )
        self._holdings[asset_id] = holding
        return holding

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(cash_balance=self._cash, holdings=self.holdings())

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._cash = snapshot.cash_balance
        self._holdings = {holding.asset_id: holding for holding in snapshot.holdings}
