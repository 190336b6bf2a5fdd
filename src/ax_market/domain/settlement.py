"""Market settlement — decide winners and compute payouts.

A bet wins iff (result=accepted and prediction=yes) or
(result=rejected and prediction=no). Winners are paid at the odds they
locked in when betting, not at the closing odds:
    payout = floor(amount * (100 / odds_at_bet))
Losers keep payout = 0.
"""

import math

from src.ax_common.enums import MarketResult, Prediction
from src.ax_common.errors import InvalidArgumentError
from src.ax_market.domain.models import Bet


def validate_result(result: str) -> str:
    try:
        return MarketResult(result).value
    except ValueError:
        raise InvalidArgumentError(
            f"result must be 'accepted' or 'rejected', got {result!r}"
        ) from None


def is_winning_bet(prediction: str, result: str) -> bool:
    return (result == MarketResult.ACCEPTED and prediction == Prediction.YES) or (
        result == MarketResult.REJECTED and prediction == Prediction.NO
    )


def calc_payout(amount: float, odds_at_bet: float) -> int:
    return math.floor(amount * (100 / odds_at_bet))


def settle_bets(bets: list[Bet], result: str) -> list[Bet]:
    """Write payouts onto every bet in place and return the same list."""
    for bet in bets:
        if is_winning_bet(bet.prediction, result):
            bet.payout = calc_payout(bet.amount, bet.odds_at_bet)
        else:
            bet.payout = 0
    return bets
