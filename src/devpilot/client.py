"""Async client used by the desktop shell to invoke commands."""

from __future__ import annotations

from typing import Any

import httpx

from .models import ChatRequest, ChatResponse, CodeRequest, CodeResponse, ProjectAnalysis

DEFAULT_BASE_URL = "http://127.0.0.1:8765"


class CommandFailed(RuntimeError):
    """A command returned an error; the message is the rendered error text."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class CommandClient:
    """Thin async wrapper around the ``/commands/*`` endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "CommandClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def invoke(self, command: str, payload: dict[str, Any] | None = None) -> Any:
        response = await self._client.post(f"/commands/{command}", json=payload or {})
        if response.status_code >= 400:
            raise CommandFailed(_error_message(response), status_code=response.status_code)
        return response.json()

    async def chat(
        self, request: ChatRequest, project_path: str | None = None
    ) -> ChatResponse:
        body = request.model_dump()
        if project_path is not None:
            body["project_path"] = project_path
        data = await self.invoke("chat_with_ai", body)
        return ChatResponse.model_validate(data)

    async def generate_code(self, request: CodeRequest) -> CodeResponse:
        data = await self.invoke("generate_code", request.model_dump())
        return CodeResponse.model_validate(data)

    async def test_api_connection(self, provider: str, api_key: str | None) -> bool:
        return bool(
            await self.invoke("test_api_connection", {"provider": provider, "api_key": api_key})
        )

    async def analyze_project(self, path: str | None = None) -> ProjectAnalysis:
        data = await self.invoke("analyze_project_structure", {"path": path})
        return ProjectAnalysis.model_validate(data)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    # Validation failures come back in FastAPI's ``detail`` shape.
    return str(body.get("detail", body)) if isinstance(body, dict) else str(body)
