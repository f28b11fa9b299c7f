"""Pure valuation engine for ledger snapshots."""

from typing import List, Mapping, Optional

from wallet_core.models import Holding, LedgerSnapshot

from .models import HoldingValuation, PortfolioValuation, Quote


def _value_holding(holding: Holding, quote: Optional[Quote]) -> HoldingValuation:
    priced_from_quote = quote is not None
    price = quote.current_price if priced_from_quote else holding.average_cost
    market_value = holding.quantity * price
    cost_value = holding.quantity * holding.average_cost
    unrealized_pnl = market_value - cost_value
    pnl_percent = (
        (price - holding.average_cost) / holding.average_cost * 100.0
        if holding.average_cost > 0
        else None
    )
    return HoldingValuation(
        asset_id=holding.asset_id,
        symbol=holding.symbol,
        quantity=holding.quantity,
        price=price,
        market_value=market_value,
        average_cost=holding.average_cost,
        cost_value=cost_value,
        unrealized_pnl=unrealized_pnl,
        pnl_percent=pnl_percent,
        priced_from_quote=priced_from_quote,
    )


def value_portfolio(
    snapshot: LedgerSnapshot, quotes_by_asset_id: Mapping[str, Quote]
) -> PortfolioValuation:
    """Value every holding at its latest quote, falling back to cost basis."""

    valuations: List[HoldingValuation] = []
    unpriced: List[str] = []
    for holding in snapshot.holdings:
        quote = quotes_by_asset_id.get(holding.asset_id)
        if quote is None:
            unpriced.append(holding.asset_id)
        valuations.append(_value_holding(holding, quote))

    holdings_value = sum(item.market_value for item in valuations)
    return PortfolioValuation(
        cash_balance=snapshot.cash_balance,
        holdings=tuple(valuations),
        holdings_value=holdings_value,
        net_worth=snapshot.cash_balance + holdings_value,
        unpriced_assets=tuple(sorted(unpriced)),
    )


def compute_net_worth(
    snapshot: LedgerSnapshot, quotes_by_asset_id: Mapping[str, Quote]
) -> float:
    """Cash plus the market value of every holding."""

    return value_portfolio(snapshot, quotes_by_asset_id).net_worth
