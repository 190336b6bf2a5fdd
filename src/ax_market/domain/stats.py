"""Leaderboard — per-user track record over resolved markets."""

from collections import defaultdict

from src.ax_common.enums import MarketStatus
from src.ax_market.domain.models import Bet, Market, UserStats
from src.ax_market.domain.settlement import is_winning_bet


def compute_user_stats(markets: list[Market], bets: list[Bet]) -> list[UserStats]:
    """Aggregate bets on resolved markets into unranked UserStats."""
    results = {
        m.id: m.actual_result
        for m in markets
        if m.status == MarketStatus.RESOLVED and m.actual_result is not None
    }
    by_user: dict[str, list[tuple[Bet, str]]] = defaultdict(list)
    for bet in bets:
        result = results.get(bet.market_id)
        if result is not None:
            by_user[bet.user_id].append((bet, result))

    stats: list[UserStats] = []
    for user_id, settled in by_user.items():
        won = [b for b, r in settled if is_winning_bet(b.prediction, r)]
        lost = [b for b, r in settled if not is_winning_bet(b.prediction, r)]
        stats.append(
            UserStats(
                user_id=user_id,
                total_bets=len(settled),
                correct_predictions=len(won),
                accuracy_rate=round(len(won) * 100 / len(settled), 1),
                total_credits_won=sum(b.payout for b in won),
                total_credits_lost=sum(b.amount for b in lost),
            )
        )
    return stats


def rank_leaderboard(stats: list[UserStats], limit: int) -> list[UserStats]:
    """Sort by credits won, then accuracy, then user_id; assign 1-based ranks."""
    ordered = sorted(
        stats,
        key=lambda s: (-s.total_credits_won, -s.accuracy_rate, s.user_id),
    )[:limit]
    for i, s in enumerate(ordered, start=1):
        s.rank = i
    return ordered
