"""Ledger service wiring — one process-wide service, store picked from settings."""

from functools import lru_cache

from config.settings import settings
from src.ax_market.application.service import MarketLedgerService
from src.ax_market.domain.repository import MarketStoreProtocol
from src.ax_market.infrastructure.memory import InMemoryMarketStore


def build_store(backend: str) -> MarketStoreProtocol:
    if backend == "memory":
        return InMemoryMarketStore()
    if backend == "postgres":
        # Imported lazily: creating the engine needs asyncpg and a DATABASE_URL.
        from src.ax_common.database import async_session_factory
        from src.ax_market.infrastructure.persistence import SqlMarketStore

        return SqlMarketStore(async_session_factory)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


@lru_cache(maxsize=1)
def get_ledger_service() -> MarketLedgerService:
    """FastAPI dependency: the shared ledger (per-market locks live on it)."""
    return MarketLedgerService(build_store(settings.STORAGE_BACKEND))
