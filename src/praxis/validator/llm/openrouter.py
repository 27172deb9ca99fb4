"""
OpenRouter chat-completions provider.

Sends one non-streaming ``POST {base_url}/chat/completions`` request via
httpx and returns the first choice's message content. The API key is
passed in by the caller; a missing key and a non-success response are
both raised as :class:`~praxis.core.errors.VerificationError` subclasses
so a failed call is never mistaken for a non-compliant document.

Examples:
    >>> provider = OpenRouterProvider(api_key=settings.openrouter_api_key)
    >>> provider.complete([Message.system(SYSTEM_PROMPT), Message.user(question)]).content
    'Yes - the document complies ...'

Tags:
    praxis, validator, llm, openrouter, httpx
"""

from __future__ import annotations

from typing import Any

import httpx

from praxis.core.errors import MissingCredentialError, VerificationServiceError
from praxis.validator.llm.protocol import LLMResponse, Message

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "x-ai/grok-4.1-fast"


class OpenRouterProvider:
    """LLM provider backed by the OpenRouter API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def complete(
        self,
        messages: list[Message],
        model: str | None = None,
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        if not self.api_key:
            raise MissingCredentialError("OPENROUTER_API_KEY")

        effective_model = model or self.model
        body: dict[str, Any] = {
            "model": effective_model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens

        try:
            response = self._post(body)
        except httpx.HTTPError as e:
            raise VerificationServiceError(0, str(e), cause=e) from e

        if not response.is_success:
            raise VerificationServiceError(response.status_code, response.text)

        data = None
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError):
            content = ""

        return LLMResponse(
            content=content,
            model=effective_model,
            metadata={"id": data.get("id")} if isinstance(data, dict) else {},
        )

    def _post(self, body: dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/chat/completions"

        if self._client is not None:
            return self._client.post(url, json=body, headers=headers, timeout=self.timeout)

        with httpx.Client(timeout=self.timeout) as client:
            return client.post(url, json=body, headers=headers)
