"""Mistral provider adapter."""

from __future__ import annotations

from .openai import ChatCompletionsProvider

MISTRAL_CHAT_URL = "https://api.mistral.ai/v1/chat/completions"


class MistralProvider(ChatCompletionsProvider):
    name = "mistral"
    display_name = "Mistral"
    default_model = "mistral-large-latest"
    url = MISTRAL_CHAT_URL
