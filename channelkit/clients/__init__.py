"""API clients for external services."""

from .base import PollResult, RemoteJobClient
from .gemini import GeminiClient
from .llm import LLMClient

__all__ = ["GeminiClient", "LLMClient", "PollResult", "RemoteJobClient"]
