"""OpenAI helper for the enrichment service."""

from __future__ import annotations

from typing import List, Optional

from openai import OpenAI

from ..core.config import LLMConfig
from ..core.exceptions import ConfigurationError


class LLMClient:
    """Wraps OpenAI chat completions with the configured defaults."""

    def __init__(self, config: LLMConfig, client: Optional[OpenAI] = None) -> None:
        if client is None:
            if not config.openai_api_key:
                raise ConfigurationError("OPENAI_API_KEY is not configured")
            client = OpenAI(
                api_key=config.openai_api_key,
                timeout=config.timeout_seconds,
                max_retries=0,
            )
        self._client = client
        self.model = config.model
        self.temperature = config.temperature
        self.max_tokens = config.max_tokens
        self.json_mode = config.json_mode

    def run_chat(self, messages: List[dict], *, response_format: Optional[dict] = None) -> str:
        """Execute a chat completion and return the text content."""
        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if response_format is not None:
            kwargs["response_format"] = response_format
        completion = self._client.chat.completions.create(**kwargs)
        return completion.choices[0].message.content or ""
