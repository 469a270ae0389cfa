"""Anthropic provider adapter."""

from __future__ import annotations

from typing import Any

from ..models import ChatRequest
from .base import BaseProvider, ProviderCall, chat_messages

ANTHROPIC_CHAT_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_MAX_TOKENS = 4096


class AnthropicProvider(BaseProvider):
    name = "anthropic"
    display_name = "Anthropic"
    default_model = "claude-3-5-sonnet-20241022"

    def build_request(self, request: ChatRequest) -> ProviderCall:
        payload: dict[str, Any] = {
            "model": self.resolve_model(request),
            "messages": chat_messages(request),
            "max_tokens": ANTHROPIC_MAX_TOKENS,
        }
        headers = {
            "x-api-key": request.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }
        return ProviderCall(url=ANTHROPIC_CHAT_URL, json=payload, headers=headers)

    def extract_content(self, data: dict[str, Any]) -> str:
        return self._dig(data, "content", 0, "text")
