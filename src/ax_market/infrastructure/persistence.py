"""SqlMarketStore — PostgreSQL implementation of MarketStoreProtocol.

All queries use raw text() SQL (no ORM). Each public method opens its own
session; writes that touch a market and its bets share one transaction.
Alembic migrations (001_create_markets.py, 002_create_bets.py) are the
authoritative DDL source.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.ax_market.domain.models import Bet, Market

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_MARKET_COLUMNS = """
    id, applicant_profile_id, school_name, decision_type, decision_date,
    current_odds_yes, current_odds_no, total_volume, unique_participants,
    status, actual_result, resolved_at, closed_at, created_at, updated_at
"""

_BET_COLUMNS = """
    id, market_id, user_id, prediction, amount, odds_at_bet, payout, created_at
"""

_GET_MARKET_SQL = text(f"SELECT {_MARKET_COLUMNS} FROM markets WHERE id = :market_id")

_LIST_MARKETS_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT)
    ORDER BY created_at ASC, id ASC
""")

_INSERT_MARKET_SQL = text("""
    INSERT INTO markets (
        id, applicant_profile_id, school_name, decision_type, decision_date,
        current_odds_yes, current_odds_no, total_volume, unique_participants,
        status, actual_result, resolved_at, closed_at, created_at, updated_at
    ) VALUES (
        :id, :applicant_profile_id, :school_name, :decision_type, :decision_date,
        :current_odds_yes, :current_odds_no, :total_volume, :unique_participants,
        :status, :actual_result, :resolved_at, :closed_at, :created_at, :updated_at
    )
""")

_UPDATE_MARKET_SQL = text("""
    UPDATE markets
    SET current_odds_yes = :current_odds_yes,
        current_odds_no = :current_odds_no,
        total_volume = :total_volume,
        unique_participants = :unique_participants,
        status = :status,
        actual_result = :actual_result,
        resolved_at = :resolved_at,
        closed_at = :closed_at,
        updated_at = :updated_at
    WHERE id = :id
""")

_BETS_FOR_MARKET_SQL = text(f"""
    SELECT {_BET_COLUMNS} FROM bets
    WHERE market_id = :market_id
    ORDER BY created_at ASC, id ASC
""")

_BETS_FOR_USER_SQL = text(f"""
    SELECT {_BET_COLUMNS} FROM bets
    WHERE user_id = :user_id
    ORDER BY created_at ASC, id ASC
""")

_ALL_BETS_SQL = text(f"SELECT {_BET_COLUMNS} FROM bets ORDER BY created_at ASC, id ASC")

_INSERT_BET_SQL = text("""
    INSERT INTO bets (id, market_id, user_id, prediction, amount, odds_at_bet, payout, created_at)
    VALUES (:id, :market_id, :user_id, :prediction, :amount, :odds_at_bet, :payout, :created_at)
""")

_UPDATE_PAYOUT_SQL = text("UPDATE bets SET payout = :payout WHERE id = :id")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_market(row: object) -> Market:
    return Market(
        id=row.id,  # type: ignore[attr-defined]
        applicant_profile_id=row.applicant_profile_id,  # type: ignore[attr-defined]
        school_name=row.school_name,  # type: ignore[attr-defined]
        decision_type=row.decision_type,  # type: ignore[attr-defined]
        decision_date=row.decision_date,  # type: ignore[attr-defined]
        current_odds_yes=row.current_odds_yes,  # type: ignore[attr-defined]
        current_odds_no=row.current_odds_no,  # type: ignore[attr-defined]
        total_volume=row.total_volume,  # type: ignore[attr-defined]
        unique_participants=row.unique_participants,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        actual_result=row.actual_result,  # type: ignore[attr-defined]
        resolved_at=row.resolved_at,  # type: ignore[attr-defined]
        closed_at=row.closed_at,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=row.id,  # type: ignore[attr-defined]
        market_id=row.market_id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        prediction=row.prediction,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        odds_at_bet=row.odds_at_bet,  # type: ignore[attr-defined]
        payout=row.payout,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _market_params(m: Market) -> dict[str, object]:
    return {
        "id": m.id,
        "applicant_profile_id": m.applicant_profile_id,
        "school_name": m.school_name,
        "decision_type": m.decision_type,
        "decision_date": m.decision_date,
        "current_odds_yes": m.current_odds_yes,
        "current_odds_no": m.current_odds_no,
        "total_volume": m.total_volume,
        "unique_participants": m.unique_participants,
        "status": m.status,
        "actual_result": m.actual_result,
        "resolved_at": m.resolved_at,
        "closed_at": m.closed_at,
        "created_at": m.created_at,
        "updated_at": m.updated_at,
    }


def _bet_params(b: Bet) -> dict[str, object]:
    return {
        "id": b.id,
        "market_id": b.market_id,
        "user_id": b.user_id,
        "prediction": b.prediction,
        "amount": b.amount,
        "odds_at_bet": b.odds_at_bet,
        "payout": b.payout,
        "created_at": b.created_at,
    }


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SqlMarketStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_market(self, market_id: str) -> Market | None:
        async with self._session_factory() as db:
            result = await db.execute(_GET_MARKET_SQL, {"market_id": market_id})
            row = result.fetchone()
            return _row_to_market(row) if row else None

    async def list_markets(self, status: str | None = None) -> list[Market]:
        async with self._session_factory() as db:
            result = await db.execute(_LIST_MARKETS_SQL, {"status": status})
            return [_row_to_market(row) for row in result.fetchall()]

    async def add_market(self, market: Market) -> None:
        async with self._session_factory() as db, db.begin():
            await db.execute(_INSERT_MARKET_SQL, _market_params(market))

    async def save_market(self, market: Market) -> None:
        async with self._session_factory() as db, db.begin():
            await db.execute(_UPDATE_MARKET_SQL, _market_params(market))

    async def list_bets_for_market(self, market_id: str) -> list[Bet]:
        async with self._session_factory() as db:
            result = await db.execute(_BETS_FOR_MARKET_SQL, {"market_id": market_id})
            return [_row_to_bet(row) for row in result.fetchall()]

    async def list_bets_for_user(self, user_id: str) -> list[Bet]:
        async with self._session_factory() as db:
            result = await db.execute(_BETS_FOR_USER_SQL, {"user_id": user_id})
            return [_row_to_bet(row) for row in result.fetchall()]

    async def list_all_bets(self) -> list[Bet]:
        async with self._session_factory() as db:
            result = await db.execute(_ALL_BETS_SQL)
            return [_row_to_bet(row) for row in result.fetchall()]

    async def record_bet(self, market: Market, bet: Bet) -> None:
        async with self._session_factory() as db, db.begin():
            await db.execute(_INSERT_BET_SQL, _bet_params(bet))
            await db.execute(_UPDATE_MARKET_SQL, _market_params(market))

    async def record_settlement(self, market: Market, bets: list[Bet]) -> None:
        async with self._session_factory() as db, db.begin():
            await db.execute(_UPDATE_MARKET_SQL, _market_params(market))
            for bet in bets:
                await db.execute(_UPDATE_PAYOUT_SQL, {"id": bet.id, "payout": bet.payout})
