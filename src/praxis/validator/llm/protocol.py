"""LLM Provider Protocol - the interface the document validator talks to.

Manifesto:
    Document verification needs one completion call, but tests must not
    touch the network and users may route to different backends. The
    validator depends only on ``LLMProvider``; ``OpenRouterProvider``
    and ``MockLLMProvider`` implement it.

ARCHITECTURE
────────────
::

    LLMProvider (Protocol)
      └── .complete(messages, model, temperature, max_tokens) → LLMResponse

    Message(role, content)        chat message
    Role                          system | user | assistant
    LLMResponse(content, model, metadata)

Tags:
    praxis, validator, llm, protocol, provider-interface

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in a conversation."""

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> Message:
        """Create a system message."""
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        """Create a user message."""
        return cls(role=Role.USER, content=content)

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class LLMResponse:
    """Response from an LLM provider.

    Attributes:
        content: Generated text.
        model: Model identifier used.
        metadata: Provider-specific metadata.
    """

    content: str
    model: str
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for completion backends."""

    def complete(
        self,
        messages: list[Message],
        model: str | None = None,
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a completion from messages.

        Raises:
            VerificationError: the backend could not produce a completion.
        """
        ...
