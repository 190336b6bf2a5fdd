# tests/unit/test_market_persistence.py
"""Unit tests for SqlMarketStore using a MagicMock session factory."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ax_market.domain.models import Bet, Market
from src.ax_market.infrastructure.persistence import SqlMarketStore


def _make_market_row(**kwargs):
    """Build a mock DB row with all market columns."""
    row = MagicMock()
    row.id = kwargs.get("id", "market-1")
    row.applicant_profile_id = "profile-1"
    row.school_name = kwargs.get("school_name", "Stanford")
    row.decision_type = "REA"
    row.decision_date = "2026-12-12"
    row.current_odds_yes = 60.0
    row.current_odds_no = 40.0
    row.total_volume = 100.0
    row.unique_participants = 1
    row.status = kwargs.get("status", "open")
    row.actual_result = None
    row.resolved_at = None
    row.closed_at = None
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _make_bet_row(bet_id: str = "bet-1"):
    row = MagicMock()
    row.id = bet_id
    row.market_id = "market-1"
    row.user_id = "alice"
    row.prediction = "yes"
    row.amount = 100.0
    row.odds_at_bet = 50.0
    row.payout = 0
    row.created_at = datetime.now(UTC)
    return row


def _market() -> Market:
    now = datetime.now(UTC)
    return Market(
        id="market-1", applicant_profile_id="profile-1", school_name="Stanford",
        decision_type="REA", decision_date=None, current_odds_yes=60.0,
        current_odds_no=40.0, total_volume=100.0, unique_participants=1,
        status="open", actual_result=None, resolved_at=None, closed_at=None,
        created_at=now, updated_at=now,
    )


def _bet(bet_id: str = "bet-1", payout: int = 0) -> Bet:
    return Bet(
        id=bet_id, market_id="market-1", user_id="alice", prediction="yes",
        amount=100.0, odds_at_bet=50.0, payout=payout, created_at=datetime.now(UTC),
    )


@pytest.fixture
def db():
    session = MagicMock()
    session.execute = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    tx = MagicMock()
    tx.__aenter__ = AsyncMock(return_value=tx)
    tx.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=tx)
    return session


@pytest.fixture
def store(db) -> SqlMarketStore:
    return SqlMarketStore(MagicMock(return_value=db))


class TestGetMarket:
    async def test_returns_market_when_found(self, db, store) -> None:
        result_mock = MagicMock()
        result_mock.fetchone.return_value = _make_market_row(id="market-7")
        db.execute.return_value = result_mock

        market = await store.get_market("market-7")

        assert market is not None
        assert market.id == "market-7"
        assert market.current_odds_yes == 60.0
        params = db.execute.call_args[0][1]
        assert params == {"market_id": "market-7"}

    async def test_returns_none_when_not_found(self, db, store) -> None:
        result_mock = MagicMock()
        result_mock.fetchone.return_value = None
        db.execute.return_value = result_mock

        assert await store.get_market("market-missing") is None


class TestListMarkets:
    async def test_passes_status_filter(self, db, store) -> None:
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [_make_market_row(id=f"market-{i}") for i in range(3)]
        db.execute.return_value = result_mock

        markets = await store.list_markets("open")

        assert [m.id for m in markets] == ["market-0", "market-1", "market-2"]
        assert db.execute.call_args[0][1] == {"status": "open"}

    async def test_no_filter_binds_null(self, db, store) -> None:
        result_mock = MagicMock()
        result_mock.fetchall.return_value = []
        db.execute.return_value = result_mock

        assert await store.list_markets() == []
        assert db.execute.call_args[0][1] == {"status": None}


class TestBets:
    async def test_list_bets_for_market(self, db, store) -> None:
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [_make_bet_row("bet-1"), _make_bet_row("bet-2")]
        db.execute.return_value = result_mock

        bets = await store.list_bets_for_market("market-1")

        assert [b.id for b in bets] == ["bet-1", "bet-2"]
        assert bets[0].odds_at_bet == 50.0


class TestWrites:
    async def test_add_market_runs_in_transaction(self, db, store) -> None:
        await store.add_market(_market())

        db.begin.assert_called_once()
        params = db.execute.call_args[0][1]
        assert params["id"] == "market-1"
        assert params["school_name"] == "Stanford"

    async def test_record_bet_inserts_bet_then_updates_market(self, db, store) -> None:
        await store.record_bet(_market(), _bet())

        assert db.execute.await_count == 2
        first, second = db.execute.call_args_list
        assert "INSERT INTO bets" in str(first[0][0])
        assert first[0][1]["id"] == "bet-1"
        assert "UPDATE markets" in str(second[0][0])
        assert second[0][1]["total_volume"] == 100.0
        db.begin.assert_called_once()

    async def test_record_settlement_updates_each_payout(self, db, store) -> None:
        bets = [_bet("bet-1", payout=200), _bet("bet-2", payout=0)]

        await store.record_settlement(_market(), bets)

        assert db.execute.await_count == 3
        payout_params = [c[0][1] for c in db.execute.call_args_list[1:]]
        assert payout_params == [
            {"id": "bet-1", "payout": 200},
            {"id": "bet-2", "payout": 0},
        ]
