"""MarketLedgerService — market lifecycle, price impact and settlement.

Every mutation of a market (bet, close, resolve) runs under that market's
asyncio.Lock so concurrent requests cannot interleave a read of
odds/volume with another request's write. Reads never lock.
All validation happens before any state is touched: a rejected request
leaves the store unchanged.
"""

import asyncio
import logging
from collections import defaultdict

from src.ax_common.datetime_utils import utc_now
from src.ax_common.enums import MarketStatus
from src.ax_common.errors import (
    MarketAlreadyResolvedError,
    MarketNotClosableError,
    MarketNotFoundError,
    MarketNotOpenError,
)
from src.ax_common.id_generator import generate_id
from src.ax_market.application.schemas import (
    BetOut,
    CreateMarketRequest,
    MarketOut,
    PlaceBetResponse,
    ResolveMarketResponse,
    UserStatsOut,
)
from src.ax_market.domain.models import Bet, Market
from src.ax_market.domain.pricing import (
    apply_bet,
    odds_for_side,
    seed_odds,
    validate_amount,
    validate_prediction,
)
from src.ax_market.domain.repository import MarketStoreProtocol
from src.ax_market.domain.settlement import settle_bets, validate_result
from src.ax_market.domain.stats import compute_user_stats, rank_leaderboard
from src.ax_market.infrastructure.memory import InMemoryMarketStore

logger = logging.getLogger(__name__)

ACTIVITY_LIMIT = 20
TRENDING_LIMIT = 10
LEADERBOARD_LIMIT = 10


class MarketLedgerService:
    def __init__(self, store: MarketStoreProtocol | None = None) -> None:
        self._store: MarketStoreProtocol = store or InMemoryMarketStore()
        self._market_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def _require_market(self, market_id: str) -> Market:
        market = await self._store.get_market(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def _lock_for(self, market_id: str) -> asyncio.Lock:
        """The market's lock; raises MarketNotFoundError before creating one.

        Markets are never deleted, so the lock map grows only with markets.
        Callers re-read the market once the lock is held.
        """
        await self._require_market(market_id)
        return self._market_locks[market_id]

    # -- commands ---------------------------------------------------------

    async def create_market(self, req: CreateMarketRequest) -> MarketOut:
        odds_yes, odds_no = seed_odds(req.initial_odds)
        now = utc_now()
        market = Market(
            id=generate_id("market"),
            applicant_profile_id=req.applicant_profile_id,
            school_name=req.school_name,
            decision_type=req.decision_type.value,
            decision_date=req.decision_date,
            current_odds_yes=odds_yes,
            current_odds_no=odds_no,
            total_volume=0.0,
            unique_participants=0,
            status=MarketStatus.OPEN.value,
            actual_result=None,
            resolved_at=None,
            closed_at=None,
            created_at=now,
            updated_at=now,
        )
        await self._store.add_market(market)
        logger.info("market created id=%s school=%s odds_yes=%.2f",
                    market.id, market.school_name, odds_yes)
        return MarketOut.from_domain(market)

    async def place_bet(
        self, market_id: str, user_id: str, prediction: str, amount: float
    ) -> PlaceBetResponse:
        prediction = validate_prediction(prediction)
        amount = validate_amount(amount)

        async with await self._lock_for(market_id):
            market = await self._require_market(market_id)
            if market.status != MarketStatus.OPEN:
                raise MarketNotOpenError(market_id)

            existing = await self._store.list_bets_for_market(market_id)
            now = utc_now()
            bet = Bet(
                id=generate_id("bet"),
                market_id=market_id,
                user_id=user_id,
                prediction=prediction,
                amount=amount,
                odds_at_bet=odds_for_side(
                    market.current_odds_yes, market.current_odds_no, prediction
                ),
                payout=0,
                created_at=now,
            )

            market.current_odds_yes, market.current_odds_no = apply_bet(
                market.current_odds_yes, market.total_volume, prediction, amount
            )
            market.total_volume += amount
            market.unique_participants = len({b.user_id for b in existing} | {user_id})
            market.updated_at = now

            await self._store.record_bet(market, bet)

        logger.info(
            "bet placed market=%s user=%s %s %.2f @ %.2f -> yes=%.2f",
            market_id, user_id, prediction, amount, bet.odds_at_bet,
            market.current_odds_yes,
        )
        return PlaceBetResponse(bet=BetOut.from_domain(bet), market=MarketOut.from_domain(market))

    async def close_market(self, market_id: str) -> MarketOut:
        """Stop accepting bets. Only an open market can be closed."""
        async with await self._lock_for(market_id):
            market = await self._require_market(market_id)
            if market.status != MarketStatus.OPEN:
                raise MarketNotClosableError(market_id, market.status)
            now = utc_now()
            market.status = MarketStatus.CLOSED.value
            market.closed_at = now
            market.updated_at = now
            await self._store.save_market(market)

        logger.info("market closed id=%s", market_id)
        return MarketOut.from_domain(market)

    async def resolve_market(self, market_id: str, result: str) -> ResolveMarketResponse:
        """Settle an open or closed market. Resolution is final."""
        result = validate_result(result)

        async with await self._lock_for(market_id):
            market = await self._require_market(market_id)
            if market.status == MarketStatus.RESOLVED:
                raise MarketAlreadyResolvedError(market_id)

            now = utc_now()
            market.status = MarketStatus.RESOLVED.value
            market.actual_result = result
            market.resolved_at = now
            market.updated_at = now
            bets = settle_bets(await self._store.list_bets_for_market(market_id), result)
            await self._store.record_settlement(market, bets)

        logger.info(
            "market resolved id=%s result=%s bets=%d paid=%d",
            market_id, result, len(bets), sum(b.payout for b in bets),
        )
        return ResolveMarketResponse(
            market=MarketOut.from_domain(market),
            bets=[BetOut.from_domain(b) for b in bets],
        )

    # -- queries ----------------------------------------------------------

    async def get_market(self, market_id: str) -> MarketOut:
        return MarketOut.from_domain(await self._require_market(market_id))

    async def list_markets(self, status: str | None = None) -> list[MarketOut]:
        return [MarketOut.from_domain(m) for m in await self._store.list_markets(status)]

    async def get_activity(self, market_id: str, limit: int = ACTIVITY_LIMIT) -> list[BetOut]:
        bets = await self._store.list_bets_for_market(market_id)
        # reversed() first so bets sharing a timestamp still come out newest first
        recent = sorted(reversed(bets), key=lambda b: b.created_at, reverse=True)[:limit]
        return [BetOut.from_domain(b) for b in recent]

    async def list_trending(self, limit: int = TRENDING_LIMIT) -> list[MarketOut]:
        markets = await self._store.list_markets(MarketStatus.OPEN.value)
        top = sorted(markets, key=lambda m: m.total_volume, reverse=True)[:limit]
        return [MarketOut.from_domain(m) for m in top]

    async def list_user_bets(self, user_id: str) -> list[BetOut]:
        return [BetOut.from_domain(b) for b in await self._store.list_bets_for_user(user_id)]

    async def get_leaderboard(self, limit: int = LEADERBOARD_LIMIT) -> list[UserStatsOut]:
        markets = await self._store.list_markets(MarketStatus.RESOLVED.value)
        bets = await self._store.list_all_bets()
        ranked = rank_leaderboard(compute_user_stats(markets, bets), limit)
        return [UserStatsOut.from_domain(s) for s in ranked]
