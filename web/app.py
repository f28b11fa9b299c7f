"""Local-first FastAPI surface for the simulated trading desk."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from advisor.heuristic import RuleBasedOracle, RuleThresholds
from cryptomind.config import DeskSettings
from cryptomind.logging_setup import configure_logging
from cryptomind.session import TradingSession
from execution_engine.errors import TradeError

_SESSION: Optional[TradingSession] = None


@asynccontextmanager
async def _lifespan(_app: FastAPI):
    session = _get_session()
    configure_logging(session.settings.log_level)
    session.start()
    try:
        yield
    finally:
        session.shutdown()


app = FastAPI(
    title="CryptoMind Desk",
    description="Simulated trading desk with an autonomous trader",
    lifespan=_lifespan,
)


class TradeBody(BaseModel):
    asset_id: str
    direction: str
    amount_usd: Union[float, str]


class AutoTradeToggle(BaseModel):
    enabled: bool


@app.middleware("http")
async def _local_only(request: Request, call_next):
    client = request.client
    if client is not None:
        host = client.host
        if host not in {"127.0.0.1", "::1", "testclient"}:
            return JSONResponse({"error": "Remote access disabled."}, status_code=403)
    return await call_next(request)


async def _handle_trade_error(request: Request, exc: Exception):
    return JSONResponse({"error": str(exc), "kind": type(exc).__name__}, status_code=400)


for _exc_class in (TradeError, ValueError):
    app.add_exception_handler(_exc_class, _handle_trade_error)


@app.get("/api/status")
def status():
    session = _get_session()
    snapshot = session.snapshot()
    return {
        "cash_balance": snapshot.wallet.cash_balance,
        "net_worth": snapshot.net_worth,
        "autotrade": snapshot.autotrade.to_dict(),
        "quote_count": snapshot.quote_count,
        "transaction_count": len(snapshot.transactions),
    }


@app.get("/api/quotes")
async def list_quotes():
    session = _get_session()
    return {"quotes": [quote.to_dict() for quote in session.listing()]}


@app.post("/api/quotes/refresh")
async def refresh_quotes():
    session = _get_session()
    refreshed = session.refresh_quotes()
    return {"refreshed": refreshed, "quote_count": len(session.quotes)}


@app.get("/api/wallet")
def wallet():
    session = _get_session()
    snapshot = session.snapshot()
    return {
        "wallet": snapshot.wallet.to_dict(),
        "valuation": snapshot.valuation.to_dict(),
    }


@app.post("/api/trades")
def submit_trade(payload: TradeBody):
    session = _get_session()
    transaction = session.trade(payload.direction, payload.asset_id, payload.amount_usd)
    return {
        "transaction": transaction.to_dict(),
        "cash_balance": session.ledger_snapshot().cash_balance,
    }


@app.get("/api/transactions")
async def list_transactions():
    session = _get_session()
    return {"transactions": [item.to_dict() for item in session.transactions()]}


@app.post("/api/autotrade")
async def set_autotrade(payload: AutoTradeToggle):
    session = _get_session()
    if payload.enabled:
        status_ = session.enable_autotrade()
    else:
        status_ = session.disable_autotrade()
    return status_.to_dict()


@app.post("/api/autotrade/tick")
def run_autotrade_tick():
    session = _get_session()
    report = session.run_autotrade_cycle()
    return {
        "report": report.to_dict() if report is not None else None,
        "autotrade": session.autotrade_status().to_dict(),
    }


@app.get("/api/notifications")
async def list_notifications():
    session = _get_session()
    return {"notifications": [item.to_dict() for item in session.recent_notifications()]}


def _get_session() -> TradingSession:
    global _SESSION
    if _SESSION is None:
        settings = DeskSettings()
        oracle = RuleBasedOracle(RuleThresholds(min_confidence=settings.min_confidence))
        _SESSION = TradingSession(oracle=oracle, settings=settings)
    return _SESSION


def _set_session(session: TradingSession) -> None:
    global _SESSION
    _SESSION = session


def _reset_state() -> None:
    global _SESSION
    if _SESSION is not None:
        _SESSION.shutdown()
    _SESSION = None
