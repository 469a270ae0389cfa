"""Groq provider adapter."""

from __future__ import annotations

from typing import Any

from .base import ProviderError, error_text
from .openai import ChatCompletionsProvider

GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"


class GroqProvider(ChatCompletionsProvider):
    name = "groq"
    display_name = "Groq"
    default_model = "llama-3.3-70b-versatile"
    url = GROQ_CHAT_URL

    def check_error(self, data: dict[str, Any]) -> None:
        # Groq may report an error alongside a partial ``choices`` array.
        # Any present ``error`` key fails the call, even a null or empty one.
        if "error" in data:
            raise ProviderError(
                f"Groq API error: {error_text(data['error'])}", provider=self.name
            )
