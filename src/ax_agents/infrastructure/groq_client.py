"""Groq chat-completions client (OpenAI-compatible HTTP API) over httpx."""

import logging

import httpx

from src.ax_common.errors import LLMUnavailableError

logger = logging.getLogger(__name__)


class GroqClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    async def complete(self, system: str | None, user: str, max_tokens: int) -> str:
        if not self.api_key:
            raise LLMUnavailableError("GROQ_API_KEY is not configured")

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user})
        payload = {"model": self.model, "messages": messages, "max_tokens": max_tokens}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/chat/completions"

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Groq HTTP %d: %s", e.response.status_code, e.response.text[:200])
            raise LLMUnavailableError(f"Upstream model error: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Groq request failed: %s", e)
            raise LLMUnavailableError(f"Upstream model unreachable: {e}") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise LLMUnavailableError("Upstream model returned an unexpected payload") from e
