"""Shared test fixtures."""

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.ax_agents.api.dependencies import get_agent_service
from src.ax_agents.application.service import AgentService
from src.ax_market.api.dependencies import get_ledger_service
from src.ax_market.application.service import MarketLedgerService
from src.ax_market.infrastructure.memory import InMemoryMarketStore
from src.main import app


class FakeLLM:
    """Records every call; answers with `reply` (a string or a callable)."""

    def __init__(self, reply: str | Callable[[str | None, str], str] = "ok") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[tuple[str | None, str, int]] = []

    async def complete(self, system: str | None, user: str, max_tokens: int) -> str:
        self.calls.append((system, user, max_tokens))
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(system, user)
        return self.reply


@pytest.fixture
def ledger() -> MarketLedgerService:
    return MarketLedgerService(InMemoryMarketStore())


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def agent_service(fake_llm: FakeLLM) -> AgentService:
    return AgentService(fake_llm)


@pytest.fixture
async def client(ledger: MarketLedgerService, agent_service: AgentService) -> AsyncClient:
    """Async HTTP client with fresh in-memory ledger and a fake LLM."""
    app.dependency_overrides[get_ledger_service] = lambda: ledger
    app.dependency_overrides[get_agent_service] = lambda: agent_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
