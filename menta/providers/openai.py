"""OpenAI chat-completions client."""

import httpx

from menta.errors import CompletionError, ConfigurationError
from menta.providers.base import CompletionService
from menta.settings import MentaConfig

OPENAI_URL = "https://api.openai.com/v1"


class OpenAIClient(CompletionService):
    def __init__(self, api_key: str, model: str, base_url: str = OPENAI_URL, timeout: float = 300) -> None:
        self.model = model
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def complete(self, prompt: str) -> str:
        """Send prompt as a single user message and return the reply text."""
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        try:
            response = httpx.post(self._url, headers=self._headers, json=body, timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise CompletionError(f"Completion request failed: {exc}") from exc
        if response.status_code == 401:
            raise CompletionError("Completion service returned 401. Check the key passed with --api-key.")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CompletionError(f"Completion service returned {response.status_code}: {response.text}") from exc

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise CompletionError(f"Unexpected completion payload: {response.text[:200]}") from exc
        return content or ""


def build_completion_service(config: MentaConfig, api_key: str) -> CompletionService:
    match config.ai.provider:
        case "openai":
            return OpenAIClient(api_key, config.ai.model)
        case _:
            raise ConfigurationError(f"Unknown ai.provider '{config.ai.provider}'. Valid: openai")
