"""Odds seeding and per-bet price impact.

Odds are percentages. Only the YES side is clamped; NO is always derived
as 100 - YES so the pair sums to exactly 100.

Price impact of a bet:
    weight = amount / (total_volume + amount)    # share of post-bet volume
    shift  = weight * MAX_SHIFT
A first bet on an empty market always moves the odds by the full
MAX_SHIFT points; later bets move them proportionally less.
"""

import math

from src.ax_common.enums import Prediction
from src.ax_common.errors import InvalidArgumentError

MIN_ODDS = 5.0
MAX_ODDS = 95.0
DEFAULT_ODDS = 50.0
MAX_SHIFT = 10.0


def clamp_odds(odds_yes: float) -> float:
    """Clamp a YES probability into [MIN_ODDS, MAX_ODDS]."""
    return min(MAX_ODDS, max(MIN_ODDS, odds_yes))


def seed_odds(initial_odds: float | None) -> tuple[float, float]:
    """Return (yes, no) for a new market. None means 50/50."""
    if initial_odds is None:
        initial_odds = DEFAULT_ODDS
    if not math.isfinite(initial_odds):
        raise InvalidArgumentError("initialOdds must be a finite number")
    yes = clamp_odds(float(initial_odds))
    return yes, 100.0 - yes


def validate_amount(amount: object) -> float:
    """Return amount as float, or raise if it is not a finite number > 0."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidArgumentError("amount must be a number")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidArgumentError("amount must be a finite number greater than 0")
    return float(amount)


def validate_prediction(prediction: str) -> str:
    try:
        return Prediction(prediction).value
    except ValueError:
        raise InvalidArgumentError(f"prediction must be 'yes' or 'no', got {prediction!r}") from None


def price_shift(total_volume: float, amount: float) -> float:
    weight = amount / (total_volume + amount)
    return weight * MAX_SHIFT


def apply_bet(
    odds_yes: float, total_volume: float, prediction: str, amount: float
) -> tuple[float, float]:
    """Return the (yes, no) odds after a bet of `amount` on `prediction`."""
    shift = price_shift(total_volume, amount)
    if prediction == Prediction.YES:
        new_yes = clamp_odds(odds_yes + shift)
    else:
        new_yes = clamp_odds(odds_yes - shift)
    return new_yes, 100.0 - new_yes


def odds_for_side(odds_yes: float, odds_no: float, prediction: str) -> float:
    return odds_yes if prediction == Prediction.YES else odds_no
