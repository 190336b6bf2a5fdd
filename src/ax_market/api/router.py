"""ax_market REST endpoints.

GET  /markets                         — all markets (optional ?status=)
GET  /markets/trending                — top 10 open markets by volume
GET  /markets/leaderboard             — top predictors over resolved markets
GET  /markets/user/{user_id}/bets     — every bet placed by a user
GET  /markets/{market_id}             — single market
POST /markets                         — create market
POST /markets/{market_id}/bet         — place bet
PUT  /markets/{market_id}/close       — stop accepting bets
PUT  /markets/{market_id}/resolve     — settle market
GET  /markets/{market_id}/activity    — 20 most recent bets

Static paths are declared before /{market_id} so they are not captured by it.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from src.ax_market.api.dependencies import get_ledger_service
from src.ax_market.application.schemas import (
    BetOut,
    CreateMarketRequest,
    MarketOut,
    PlaceBetRequest,
    PlaceBetResponse,
    ResolveMarketRequest,
    ResolveMarketResponse,
    UserStatsOut,
)
from src.ax_market.application.service import MarketLedgerService

router = APIRouter(prefix="/markets", tags=["markets"])

Ledger = Annotated[MarketLedgerService, Depends(get_ledger_service)]


@router.get("", response_model=list[MarketOut])
async def list_markets(
    ledger: Ledger,
    status: Literal["open", "closed", "resolved"] | None = Query(None),
) -> list[MarketOut]:
    return await ledger.list_markets(status)


@router.get("/trending", response_model=list[MarketOut])
async def list_trending(ledger: Ledger) -> list[MarketOut]:
    return await ledger.list_trending()


@router.get("/leaderboard", response_model=list[UserStatsOut])
async def get_leaderboard(
    ledger: Ledger,
    limit: int = Query(10, ge=1, le=100),
) -> list[UserStatsOut]:
    return await ledger.get_leaderboard(limit)


@router.get("/user/{user_id}/bets", response_model=list[BetOut])
async def list_user_bets(user_id: str, ledger: Ledger) -> list[BetOut]:
    return await ledger.list_user_bets(user_id)


@router.get("/{market_id}", response_model=MarketOut)
async def get_market(market_id: str, ledger: Ledger) -> MarketOut:
    return await ledger.get_market(market_id)


@router.post("", response_model=MarketOut, status_code=201)
async def create_market(req: CreateMarketRequest, ledger: Ledger) -> MarketOut:
    return await ledger.create_market(req)


@router.post("/{market_id}/bet", response_model=PlaceBetResponse, status_code=201)
async def place_bet(
    market_id: str, req: PlaceBetRequest, ledger: Ledger
) -> PlaceBetResponse:
    return await ledger.place_bet(market_id, req.user_id, req.prediction, req.amount)


@router.put("/{market_id}/close", response_model=MarketOut)
async def close_market(market_id: str, ledger: Ledger) -> MarketOut:
    return await ledger.close_market(market_id)


@router.put("/{market_id}/resolve", response_model=ResolveMarketResponse)
async def resolve_market(
    market_id: str, req: ResolveMarketRequest, ledger: Ledger
) -> ResolveMarketResponse:
    return await ledger.resolve_market(market_id, req.result)


@router.get("/{market_id}/activity", response_model=list[BetOut])
async def get_activity(market_id: str, ledger: Ledger) -> list[BetOut]:
    return await ledger.get_activity(market_id)
