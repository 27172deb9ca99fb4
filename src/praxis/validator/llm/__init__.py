"""Completion backends used by document verification."""

from praxis.validator.llm.mock import MockLLMProvider
from praxis.validator.llm.openrouter import OpenRouterProvider
from praxis.validator.llm.protocol import LLMProvider, LLMResponse, Message, Role

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "Message",
    "MockLLMProvider",
    "OpenRouterProvider",
    "Role",
]
