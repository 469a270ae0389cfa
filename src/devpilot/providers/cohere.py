"""Cohere provider adapter."""

from __future__ import annotations

from typing import Any

from ..models import ChatMessage, ChatRequest
from .base import BaseProvider, ProviderCall

COHERE_CHAT_URL = "https://api.cohere.ai/v1/chat"


class CohereProvider(BaseProvider):
    name = "cohere"
    display_name = "Cohere"
    default_model = "command-r-plus"

    def build_request(self, request: ChatRequest) -> ProviderCall:
        payload: dict[str, Any] = {
            "model": self.resolve_model(request),
            "message": request.prompt,
            "chat_history": [_history_entry(message) for message in request.history],
        }
        return ProviderCall(
            url=COHERE_CHAT_URL,
            json=payload,
            headers={"Authorization": f"Bearer {request.api_key}"},
        )

    def extract_content(self, data: dict[str, Any]) -> str:
        return self._dig(data, "text")


def _history_entry(message: ChatMessage) -> dict[str, str]:
    role = "CHATBOT" if message.role == "assistant" else "USER"
    return {"role": role, "message": message.content}
