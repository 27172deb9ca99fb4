"""Mock LLM Provider - deterministic provider for testing.

Supports canned responses, response scripting, and call tracking::

    provider = MockLLMProvider(default_response="Yes - compliant")
    provider.complete([Message.user("...")]).content   # "Yes - compliant"

    provider = MockLLMProvider(sequence=["No\\n- missing owner", "Yes"])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from praxis.validator.llm.protocol import LLMResponse, Message, Role


@dataclass
class MockLLMProvider:
    """Deterministic LLM provider for testing.

    Supports three response modes (checked in order):

    1. ``responses``: substring match against the last user message
    2. ``sequence``: responses returned in order
    3. ``default_response``: fallback for all calls
    """

    default_response: str = "Yes"
    responses: dict[str, str] = field(default_factory=dict)
    sequence: list[str] = field(default_factory=list)
    model_name: str = "mock-model-v1"

    # Tracking
    calls: list[dict[str, Any]] = field(default_factory=list, repr=False)
    _sequence_index: int = field(default=0, repr=False)

    def complete(
        self,
        messages: list[Message],
        model: str | None = None,
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        effective_model = model or self.model_name
        self.calls.append({
            "messages": [m.to_dict() for m in messages],
            "model": effective_model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return LLMResponse(content=self._resolve_content(messages), model=effective_model)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def _resolve_content(self, messages: list[Message]) -> str:
        last_user = next(
            (m.content for m in reversed(messages) if m.role == Role.USER),
            "",
        )
        for needle, response in self.responses.items():
            if needle in last_user:
                return response

        if self._sequence_index < len(self.sequence):
            content = self.sequence[self._sequence_index]
            self._sequence_index += 1
            return content

        return self.default_response
