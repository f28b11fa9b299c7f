"""Determinism and invariant tests for portfolio valuation."""

import unittest

from core.engine import compute_net_worth, value_portfolio
from core.models import Quote
from wallet_core.models import Holding, LedgerSnapshot


def _quote(asset_id: str, price: float) -> Quote:
    return Quote(asset_id=asset_id, symbol=asset_id[:3], current_price=price, high_24h=price, low_24h=price)


class ValuationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.snapshot = LedgerSnapshot(
            cash_balance=40000.0,
            holdings=(
                Holding(asset_id="alpha", symbol="alp", quantity=100.0, average_cost=100.0),
                Holding(asset_id="beta", symbol="bet", quantity=2.0, average_cost=50.0),
            ),
        )

    def test_net_worth_is_cash_plus_market_value(self) -> None:
        quotes = {"alpha": _quote("alpha", 120.0), "beta": _quote("beta", 25.0)}

        self.assertAlmostEqual(compute_net_worth(self.snapshot, quotes), 40000.0 + 12000.0 + 50.0)

    def test_same_input_same_output(self) -> None:
        quotes = {"alpha": _quote("alpha", 120.0), "beta": _quote("beta", 25.0)}

        first = value_portfolio(self.snapshot, quotes)
        second = value_portfolio(self.snapshot, quotes)

        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_missing_quote_falls_back_to_cost_basis(self) -> None:
        valuation = value_portfolio(self.snapshot, {"alpha": _quote("alpha", 80.0)})

        beta = valuation.holdings[1]
        self.assertFalse(beta.priced_from_quote)
        self.assertAlmostEqual(beta.market_value, 100.0)
        self.assertAlmostEqual(beta.unrealized_pnl, 0.0)
        self.assertEqual(valuation.unpriced_assets, ("beta",))
        self.assertAlmostEqual(valuation.net_worth, 40000.0 + 8000.0 + 100.0)

    def test_profit_and_loss(self) -> None:
        valuation = value_portfolio(self.snapshot, {"alpha": _quote("alpha", 90.0), "beta": _quote("beta", 60.0)})
        alpha, beta = valuation.holdings

        self.assertAlmostEqual(alpha.unrealized_pnl, -1000.0)
        self.assertAlmostEqual(alpha.pnl_percent, -10.0)
        self.assertAlmostEqual(beta.pnl_percent, 20.0)

    def test_cash_only_wallet(self) -> None:
        valuation = value_portfolio(LedgerSnapshot(cash_balance=50000.0, holdings=()), {})

        self.assertEqual(valuation.net_worth, 50000.0)
        self.assertEqual(valuation.holdings_value, 0)
        self.assertEqual(valuation.to_dict()["holdings"], [])


if __name__ == "__main__":
    unittest.main()
