"""Domain models for ax_market — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Market:
    """One admissions proposition: will the applicant get into the school."""

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
    resolved_at: datetime | None
    closed_at: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass
class Bet:
    """A stake on one side of a market. Only `payout` changes after creation."""

    id: str
    market_id: str
    user_id: str
    prediction: str
    amount: float
    odds_at_bet: float
    payout: int
    created_at: datetime


@dataclass
class UserStats:
    """Per-user track record over bets on resolved markets."""

    user_id: str
    total_bets: int
    correct_predictions: int
    accuracy_rate: float
    total_credits_won: int
    total_credits_lost: float
    rank: int = 0
