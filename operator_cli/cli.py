"""Operator CLI for the simulated trading desk."""

from __future__ import annotations

import argparse
import json
import random
import sys
from typing import List, Optional, Tuple

from advisor.heuristic import RuleBasedOracle, RuleThresholds
from cryptomind.config import DeskSettings
from cryptomind.logging_setup import configure_logging
from cryptomind.session import TradingSession
from execution_engine.errors import TradeError
from execution_engine.models import TradeDirection
from market_feed.simulator import SimulatedPriceFeed


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="cryptomind")
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quotes_parser = subparsers.add_parser("quotes")
    quotes_parser.add_argument("--seed", type=int)
    quotes_parser.set_defaults(func=_show_quotes)

    trade_parser = subparsers.add_parser("trade")
    _add_session_args(trade_parser)
    trade_parser.add_argument(
        "--step",
        action="append",
        required=True,
        help="DIRECTION:ASSET_ID:USD, e.g. BUY:bitcoin:1000",
    )
    trade_parser.set_defaults(func=_run_trades)

    autotrade_parser = subparsers.add_parser("autotrade")
    _add_session_args(autotrade_parser)
    autotrade_parser.add_argument("--ticks", type=int, default=10)
    autotrade_parser.add_argument("--top-n", type=int)
    autotrade_parser.set_defaults(func=_run_autotrade)

    serve_parser = subparsers.add_parser("serve")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=_serve)

    args = parser.parse_args(argv)
    configure_logging(args.log_level, stream=sys.stderr)

    try:
        return args.func(args)
    except (TradeError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2


def _add_session_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cash", type=float)
    parser.add_argument("--seed", type=int)


def _show_quotes(args: argparse.Namespace) -> int:
    feed = SimulatedPriceFeed(rng=random.Random(args.seed))
    print(json.dumps({"quotes": [quote.to_dict() for quote in feed.get_quotes()]}, indent=2))
    return 0


def _run_trades(args: argparse.Namespace) -> int:
    steps = [_parse_step(raw) for raw in args.step]
    session = _build_session(args)
    for direction, asset_id, amount in steps:
        session.trade(direction, asset_id, amount)
    print(json.dumps(session.snapshot().to_dict(), indent=2))
    return 0


def _run_autotrade(args: argparse.Namespace) -> int:
    if args.ticks <= 0:
        raise ValueError("--ticks must be positive.")
    session = _build_session(args, top_n=args.top_n)
    session.enable_autotrade()
    reports = []
    for _ in range(args.ticks):
        report = session.run_autotrade_cycle()
        if report is not None:
            reports.append(report.to_dict())
    session.disable_autotrade()

    output = session.snapshot().to_dict()
    output["cycles"] = reports
    print(json.dumps(output, indent=2))
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("web.app:app", host=args.host, port=args.port)
    return 0


def _build_session(args: argparse.Namespace, top_n: Optional[int] = None) -> TradingSession:
    overrides = {}
    if args.cash is not None:
        overrides["seed_balance"] = args.cash
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if top_n is not None:
        overrides["autotrade_top_n"] = top_n
    settings = DeskSettings(**overrides)
    oracle = RuleBasedOracle(RuleThresholds(min_confidence=settings.min_confidence))
    return TradingSession(oracle=oracle, settings=settings)


def _parse_step(raw: str) -> Tuple[TradeDirection, str, str]:
    parts = raw.split(":")
    if len(parts) != 3 or not parts[1]:
        raise ValueError("Trade step must be formatted as DIRECTION:ASSET_ID:USD.")
    direction = TradeDirection.__members__.get(parts[0].strip().upper())
    if direction is None:
        raise ValueError(f"Unsupported trade direction: {parts[0]}")
    return direction, parts[1].strip(), parts[2].strip()


if __name__ == "__main__":
    raise SystemExit(main())
