"""LLM client Protocol — the agent service only needs one call."""

from typing import Protocol


class LLMClientProtocol(Protocol):
    async def complete(self, system: str | None, user: str, max_tokens: int) -> str:
        """Return the assistant text for one system+user exchange."""
        ...
