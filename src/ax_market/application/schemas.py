"""Pydantic schemas for ax_market requests and responses.

The JSON surface is camelCase (applicantProfileId, currentOddsYes, ...).
Requests also accept the snake_case field names.
"""

from typing import Literal

from pydantic import Field

from src.ax_common.datetime_utils import iso_or_none
from src.ax_common.enums import DecisionType
from src.ax_common.schemas import CamelModel
from src.ax_market.domain.models import Bet, Market, UserStats

# Column widths in alembic/versions (001_create_markets, 002_create_bets)
MAX_ID_LENGTH = 64
MAX_SCHOOL_NAME_LENGTH = 255

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(CamelModel):
    applicant_profile_id: str = Field(min_length=1, max_length=MAX_ID_LENGTH)
    school_name: str = Field(min_length=1, max_length=MAX_SCHOOL_NAME_LENGTH)
    decision_type: DecisionType
    decision_date: str | None = Field(default=None, max_length=MAX_ID_LENGTH)
    initial_odds: float | None = Field(default=None, allow_inf_nan=False)


class PlaceBetRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=MAX_ID_LENGTH)
    prediction: Literal["yes", "no"]
    amount: float = Field(gt=0, allow_inf_nan=False, strict=True)


class ResolveMarketRequest(CamelModel):
    result: Literal["accepted", "rejected"]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketOut(CamelModel):
    id: str
    applicant_profile_id: str
    school_name: str
    decision_type: str
    decision_date: str | None
    current_odds_yes: float
    current_odds_no: float
    total_volume: float
    unique_participants: int
    status: str
    actual_result: str | None
    resolved_at: str | None
    closed_at: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, m: Market) -> "MarketOut":
        return cls(
            id=m.id,
            applicant_profile_id=m.applicant_profile_id,
            school_name=m.school_name,
            decision_type=m.decision_type,
            decision_date=m.decision_date,
            current_odds_yes=m.current_odds_yes,
            current_odds_no=m.current_odds_no,
            total_volume=m.total_volume,
            unique_participants=m.unique_participants,
            status=m.status,
            actual_result=m.actual_result,
            resolved_at=iso_or_none(m.resolved_at),
            closed_at=iso_or_none(m.closed_at),
            created_at=m.created_at.isoformat(),
            updated_at=m.updated_at.isoformat(),
        )


class BetOut(CamelModel):
    id: str
    market_id: str
    user_id: str
    prediction: str
    amount: float
    odds_at_bet: float
    payout: int
    created_at: str

    @classmethod
    def from_domain(cls, b: Bet) -> "BetOut":
        return cls(
            id=b.id,
            market_id=b.market_id,
            user_id=b.user_id,
            prediction=b.prediction,
            amount=b.amount,
            odds_at_bet=b.odds_at_bet,
            payout=b.payout,
            created_at=b.created_at.isoformat(),
        )


class PlaceBetResponse(CamelModel):
    bet: BetOut
    market: MarketOut


class ResolveMarketResponse(CamelModel):
    market: MarketOut
    bets: list[BetOut]


class UserStatsOut(CamelModel):
    user_id: str
    total_bets: int
    correct_predictions: int
    accuracy_rate: float
    total_credits_won: int
    total_credits_lost: float
    rank: int

    @classmethod
    def from_domain(cls, s: UserStats) -> "UserStatsOut":
        return cls(
            user_id=s.user_id,
            total_bets=s.total_bets,
            correct_predictions=s.correct_predictions,
            accuracy_rate=s.accuracy_rate,
            total_credits_won=s.total_credits_won,
            total_credits_lost=s.total_credits_lost,
            rank=s.rank,
        )
