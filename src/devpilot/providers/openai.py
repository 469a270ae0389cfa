"""OpenAI provider adapter and the shared chat-completions wire format."""

from __future__ import annotations

from typing import Any

from ..models import ChatRequest
from .base import BaseProvider, ProviderCall, chat_messages

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"


class ChatCompletionsProvider(BaseProvider):
    """Bearer-authenticated ``{model, messages}`` APIs answering with ``choices``."""

    url: str

    def build_payload(self, request: ChatRequest) -> dict[str, Any]:
        return {
            "model": self.resolve_model(request),
            "messages": chat_messages(request),
        }

    def build_request(self, request: ChatRequest) -> ProviderCall:
        return ProviderCall(
            url=self.url,
            json=self.build_payload(request),
            headers={"Authorization": f"Bearer {request.api_key}"},
        )

    def extract_content(self, data: dict[str, Any]) -> str:
        return self._dig(data, "choices", 0, "message", "content")


class OpenAIProvider(ChatCompletionsProvider):
    name = "openai"
    display_name = "OpenAI"
    default_model = "gpt-4o-mini"
    url = OPENAI_CHAT_URL

    def build_payload(self, request: ChatRequest) -> dict[str, Any]:
        payload = super().build_payload(request)
        payload["temperature"] = 0.7
        return payload
