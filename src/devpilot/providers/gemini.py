"""Gemini provider adapter."""

from __future__ import annotations

from typing import Any

from ..models import ChatRequest
from .base import BaseProvider, ProviderCall

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(BaseProvider):
    name = "gemini"
    display_name = "Gemini"
    default_model = "gemini-1.5-flash"

    def build_request(self, request: ChatRequest) -> ProviderCall:
        model_name = _normalize_model(self.resolve_model(request))
        # Roles are dropped: history and prompt become one flat list of parts.
        parts = [{"text": message.content} for message in request.history]
        parts.append({"text": request.prompt})
        return ProviderCall(
            url=f"{GEMINI_BASE_URL}/{model_name}:generateContent",
            json={"contents": [{"parts": parts}]},
            params={"key": request.api_key or ""},
        )

    def extract_content(self, data: dict[str, Any]) -> str:
        return self._dig(data, "candidates", 0, "content", "parts", 0, "text")


def _normalize_model(model_name: str) -> str:
    return model_name.removeprefix("models/")
