from __future__ import annotations

from functools import cached_property
from typing import Any, Optional

from openai import AsyncOpenAI


class OpenAIProvider:
    """Single-shot text completion against an OpenAI-compatible chat endpoint.

    The SDK client is built on first use, so a missing credential only fails
    the request that actually needs the model.
    """

    key_env = "OPENAI_API_KEY"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_retries: int = 0,
        temperature: float = 0.2,
        response_format: str = "",
    ):
        self._model = model
        self._api_key = (api_key or "").strip()
        self._base_url = base_url or None
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._temperature = temperature
        self._response_format = response_format

    @property
    def model(self) -> str:
        return self._model

    @cached_property
    def _client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise RuntimeError(f"{self.key_env} is missing")
        kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "base_url": self._base_url,
            "max_retries": self._max_retries,
        }
        if self._timeout_s is not None:
            kwargs["timeout"] = self._timeout_s
        return AsyncOpenAI(**kwargs)

    async def generate(self, prompt: str) -> str:
        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._temperature,
        }
        if self._response_format == "json":
            create_kwargs["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**create_kwargs)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
