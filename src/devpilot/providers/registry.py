"""Provider registry for dependency injection."""

from __future__ import annotations

from .base import BaseProvider


class ProviderRegistry:
    """Simple in-memory registry mapping provider names to adapters.

    Lookups are case-sensitive: ``"OpenAI"`` is not ``"openai"``.
    """

    def __init__(self) -> None:
        self._providers: dict[str, BaseProvider] = {}

    def register(self, provider: BaseProvider) -> None:
        self._providers[provider.name] = provider

    def get(self, name: str) -> BaseProvider | None:
        return self._providers.get(name)

    def available_providers(self) -> list[str]:
        return sorted(self._providers.keys())
