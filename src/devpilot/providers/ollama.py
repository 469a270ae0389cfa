"""Ollama provider adapter for the local daemon."""

from __future__ import annotations

from typing import Any

import httpx

from ..models import ChatRequest
from .base import BaseProvider, ProviderCall, chat_messages


class OllamaProvider(BaseProvider):
    name = "ollama"
    display_name = "Ollama"
    default_model = "llama3.1"
    requires_key = False

    @property
    def url(self) -> str:
        return f"{self._settings.ollama_url.rstrip('/')}/api/chat"

    def build_request(self, request: ChatRequest) -> ProviderCall:
        payload: dict[str, Any] = {
            "model": self.resolve_model(request),
            "messages": chat_messages(request),
            "stream": False,
        }
        return ProviderCall(url=self.url, json=payload)

    def extract_content(self, data: dict[str, Any]) -> str:
        return self._dig(data, "message", "content")

    def _network_message(self, exc: httpx.RequestError) -> str:
        return f"Failed to reach Ollama at {self.url}. Check that Ollama is running: {exc}"
