from functools import lru_cache

from config.settings import settings
from src.ax_agents.application.service import AgentService
from src.ax_agents.infrastructure.groq_client import GroqClient


@lru_cache(maxsize=1)
def get_agent_service() -> AgentService:
    """FastAPI dependency: agent service backed by the configured Groq model."""
    client = GroqClient(
        api_key=settings.GROQ_API_KEY,
        model=settings.GROQ_MODEL,
        base_url=settings.GROQ_BASE_URL,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )
    return AgentService(client, max_tokens=settings.LLM_MAX_TOKENS)
