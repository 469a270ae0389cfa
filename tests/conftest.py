import asyncio
import json

import httpx
import pytest

from devpilot.services.gateway import GatewayService
from devpilot.settings import Settings


class Recorder:
    """MockTransport handler that records requests and replays one canned reply."""

    def __init__(self, body=None, *, status_code=200, raw=None, error=None):
        self.body = body
        self.status_code = status_code
        self.raw = raw
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, text=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict:
        return json.loads(self.last.content)


@pytest.fixture()
def settings():
    return Settings(log_payloads=False, ollama_url="http://localhost:11434")


@pytest.fixture()
def run_gateway(settings):
    """Run ``action(gateway)`` against a gateway whose HTTP calls hit ``recorder``."""

    def _run(recorder, action):
        async def _inner():
            transport = httpx.MockTransport(recorder)
            async with httpx.AsyncClient(transport=transport) as client:
                gateway = GatewayService(settings, client=client)
                return await action(gateway)

        return asyncio.run(_inner())

    return _run


@pytest.fixture()
def make_recorder():
    return Recorder
