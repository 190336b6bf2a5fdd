# src/ax_market/domain/repository.py
"""Market store Protocol — what the ledger service needs from persistence.

The ledger service only talks to this Protocol. Infrastructure provides
an in-memory implementation (default) and a PostgreSQL one.
Write methods that touch both a market and its bets are a single unit:
implementations must persist both or neither.
"""

from typing import Protocol

from src.ax_market.domain.models import Bet, Market


class MarketStoreProtocol(Protocol):
    async def get_market(self, market_id: str) -> Market | None: ...

    async def list_markets(self, status: str | None = None) -> list[Market]: ...

    async def add_market(self, market: Market) -> None: ...

    async def save_market(self, market: Market) -> None: ...

    async def list_bets_for_market(self, market_id: str) -> list[Bet]: ...

    async def list_bets_for_user(self, user_id: str) -> list[Bet]: ...

    async def list_all_bets(self) -> list[Bet]: ...

    async def record_bet(self, market: Market, bet: Bet) -> None: ...

    async def record_settlement(self, market: Market, bets: list[Bet]) -> None: ...
