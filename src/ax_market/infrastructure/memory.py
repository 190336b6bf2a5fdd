"""InMemoryMarketStore — process-lifetime implementation of MarketStoreProtocol.

State is lost on restart. Objects are copied on the way in and out so a
caller mutating a returned Market does not change stored state until it
calls a save/record method.
"""

from dataclasses import replace

from src.ax_market.domain.models import Bet, Market


class InMemoryMarketStore:
    def __init__(self) -> None:
        self._markets: dict[str, Market] = {}
        self._bets: dict[str, Bet] = {}

    async def get_market(self, market_id: str) -> Market | None:
        market = self._markets.get(market_id)
        return replace(market) if market else None

    async def list_markets(self, status: str | None = None) -> list[Market]:
        return [
            replace(m)
            for m in self._markets.values()
            if status is None or m.status == status
        ]

    async def add_market(self, market: Market) -> None:
        self._markets[market.id] = replace(market)

    async def save_market(self, market: Market) -> None:
        self._markets[market.id] = replace(market)

    async def list_bets_for_market(self, market_id: str) -> list[Bet]:
        return [replace(b) for b in self._bets.values() if b.market_id == market_id]

    async def list_bets_for_user(self, user_id: str) -> list[Bet]:
        return [replace(b) for b in self._bets.values() if b.user_id == user_id]

    async def list_all_bets(self) -> list[Bet]:
        return [replace(b) for b in self._bets.values()]

    async def record_bet(self, market: Market, bet: Bet) -> None:
        self._markets[market.id] = replace(market)
        self._bets[bet.id] = replace(bet)

    async def record_settlement(self, market: Market, bets: list[Bet]) -> None:
        self._markets[market.id] = replace(market)
        for bet in bets:
            self._bets[bet.id] = replace(bet)
