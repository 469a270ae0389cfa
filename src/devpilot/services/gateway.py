"""Gateway service dispatching canonical requests to provider adapters."""

from __future__ import annotations

import uuid

import httpx
import structlog

from ..logging import bind_trace
from ..models import ChatRequest, ChatResponse, CodeRequest, CodeResponse
from ..providers import (
    AnthropicProvider,
    CohereProvider,
    DeepSeekProvider,
    GeminiProvider,
    GroqProvider,
    MistralProvider,
    OllamaProvider,
    OpenAIProvider,
    ProviderRegistry,
)
from ..settings import Settings

logger = structlog.get_logger(__name__)

UNSUPPORTED_PROVIDER_MESSAGE = "Unsupported AI provider."
CODE_PROMPT_TEMPLATE = (
    "Generate a code snippet in {language} for: {description}\n\n"
    "Return only the code, no explanations."
)
CONNECTION_CHECK_PROMPT = "Hello"


class GatewayService:
    """Main entry point for executing chat calls against the configured providers."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(timeout=settings.gateway_timeout_seconds)
        self.providers = self._build_registry(settings)

    def _build_registry(self, settings: Settings) -> ProviderRegistry:
        registry = ProviderRegistry()
        for provider_cls in (
            OpenAIProvider,
            AnthropicProvider,
            GeminiProvider,
            CohereProvider,
            MistralProvider,
            GroqProvider,
            DeepSeekProvider,
            OllamaProvider,
        ):
            registry.register(provider_cls(client=self._client, settings=settings))
        return registry

    async def shutdown(self) -> None:
        await self._client.aclose()

    async def chat(self, request: ChatRequest, trace_id: str | None = None) -> ChatResponse:
        provider = self.providers.get(request.provider)
        if provider is None:
            # Soft failure: the shell renders the notice like any other answer.
            logger.warning("gateway.unsupported_provider", provider=request.provider)
            return ChatResponse(content=UNSUPPORTED_PROVIDER_MESSAGE, supported=False)

        trace_id = trace_id or uuid.uuid4().hex
        bind_trace(trace_id=trace_id, provider=provider.name)
        return await provider.chat(request, trace_id=trace_id)

    async def generate_code(self, request: CodeRequest) -> CodeResponse:
        chat_request = ChatRequest(
            provider=request.provider,
            api_key=request.api_key,
            prompt=build_code_prompt(request),
            history=[],
            model=request.model,
        )
        response = await self.chat(chat_request)
        return CodeResponse(code=response.content, language=request.language)

    async def test_connection(self, provider: str, api_key: str | None) -> bool:
        """Send a greeting prompt; any classified failure propagates to the caller."""

        greeting = ChatRequest(
            provider=provider,
            api_key=api_key,
            prompt=CONNECTION_CHECK_PROMPT,
            history=[],
        )
        await self.chat(greeting)
        return True


def build_code_prompt(request: CodeRequest) -> str:
    return CODE_PROMPT_TEMPLATE.format(
        language=request.language, description=request.description
    )
