"""Provider abstraction for the gateway."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from ..models import ChatMessage, ChatRequest, ChatResponse
from ..settings import Settings

logger = structlog.get_logger(__name__)


class GatewayError(RuntimeError):
    """Base class for every classified provider failure."""

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ConfigurationError(GatewayError):
    """Raised when a provider lacks the credentials to execute requests."""


class NetworkError(GatewayError):
    """Raised when the request could not be delivered or timed out."""


class ProtocolError(GatewayError):
    """Raised when the response body is not a JSON object."""


class InvalidResponseError(GatewayError):
    """Raised when the response parsed but lacks the expected content."""

    def __init__(
        self, message: str, *, provider: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message, provider=provider)
        self.status_code = status_code


class ProviderError(GatewayError):
    """Raised when the provider reports an error in its payload."""


@dataclass(frozen=True)
class ProviderCall:
    """Everything needed to issue one POST to a provider."""

    url: str
    json: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


_MISSING = object()


class BaseProvider(ABC):
    """Shared request template; subclasses describe their wire format."""

    name: str
    display_name: str
    default_model: str
    requires_key: bool = True

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    def resolve_model(self, request: ChatRequest) -> str:
        return request.model or self.default_model

    @abstractmethod
    def build_request(self, request: ChatRequest) -> ProviderCall:
        """Translate the canonical request into this provider's envelope."""

    @abstractmethod
    def extract_content(self, data: dict[str, Any]) -> str:
        """Return the single text payload of a successful response."""

    def check_error(self, data: dict[str, Any]) -> None:
        """Raise ProviderError when the body carries a provider-reported error."""

    async def chat(self, request: ChatRequest, trace_id: str) -> ChatResponse:
        if self.requires_key and not request.api_key:
            raise ConfigurationError(
                f"{self.display_name} API key not provided", provider=self.name
            )

        call = self.build_request(request)
        logger.info(
            "provider.request",
            trace_id=trace_id,
            provider=self.name,
            model=call.json.get("model"),
            history_length=len(request.history),
        )
        if self._settings.log_payloads:
            logger.info("provider.request_body", trace_id=trace_id, body=call.json)

        try:
            response = await self._client.post(
                call.url,
                json=call.json,
                headers={"Content-Type": "application/json", **call.headers},
                params=call.params or None,
                timeout=self._settings.gateway_timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"{self.display_name} request timed out: {exc}", provider=self.name
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(self._network_message(exc), provider=self.name) from exc

        logger.info(
            "provider.response",
            trace_id=trace_id,
            provider=self.name,
            status_code=response.status_code,
        )
        if self._settings.log_payloads:
            logger.info("provider.response_body", trace_id=trace_id, body=response.text)

        data = self._parse_body(response)
        self.check_error(data)
        try:
            content = self.extract_content(data)
        except InvalidResponseError as exc:
            exc.status_code = response.status_code
            raise
        return ChatResponse(content=content)

    def _network_message(self, exc: httpx.RequestError) -> str:
        return f"Failed to send request to {self.display_name}: {exc}"

    def _parse_body(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise ProtocolError(
                f"Failed to parse {self.display_name} response "
                f"(HTTP {response.status_code}): {_truncate(response.text)}",
                provider=self.name,
            ) from exc
        if not isinstance(data, dict):
            raise ProtocolError(
                f"Unexpected {self.display_name} response body: {_truncate(response.text)}",
                provider=self.name,
            )
        return data

    def _invalid(self, data: dict[str, Any]) -> InvalidResponseError:
        detail = ""
        upstream = data.get("error") or data.get("message")
        if upstream:
            detail = f": {error_text(upstream)}"
        return InvalidResponseError(
            f"Invalid response from {self.display_name}{detail}", provider=self.name
        )

    def _dig(self, data: Any, *path: str | int) -> str:
        """Follow keys and indexes into ``data``; the leaf must be a string."""

        node: Any = data
        for step in path:
            if isinstance(step, int):
                node = node[step] if isinstance(node, list) and len(node) > step else _MISSING
            else:
                node = node.get(step, _MISSING) if isinstance(node, dict) else _MISSING
            if node is _MISSING:
                raise self._invalid(data)
        if not isinstance(node, str):
            raise self._invalid(data)
        return node


def chat_messages(request: ChatRequest) -> list[dict[str, str]]:
    """History in order followed by the prompt as the final user turn."""

    messages = [_message_dict(message) for message in request.history]
    messages.append({"role": "user", "content": request.prompt})
    return messages


def _message_dict(message: ChatMessage) -> dict[str, str]:
    return {"role": message.role, "content": message.content}


def error_text(error: Any) -> str:
    if isinstance(error, str):
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return json.dumps(error, ensure_ascii=False)


def _truncate(text: str, limit: int = 2000) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}...[truncated {len(text) - limit} chars]"
