"""Run live smoke tests against every provider that has a key in the environment.

Run with:
    OPENAI_API_KEY=... GROQ_API_KEY=... PYTHONPATH=src python scripts/smoke_tests.py

Ollama is always attempted and reports a network error when the daemon is down.
"""

from __future__ import annotations

import asyncio
import os
import textwrap

from devpilot.models import ChatMessage, ChatRequest
from devpilot.services.gateway import GatewayService
from devpilot.settings import Settings

KEY_VARIABLES = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "cohere": "COHERE_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "groq": "GROQ_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "ollama": None,
}

HISTORY = [
    ChatMessage(role="user", content="Remember the word 'lighthouse'."),
    ChatMessage(role="assistant", content="Got it."),
]
PROMPT = "Which word did I ask you to remember? Answer with the word only."


async def main() -> None:
    settings = Settings()
    gateway = GatewayService(settings=settings)
    try:
        for provider, variable in KEY_VARIABLES.items():
            api_key = os.environ.get(variable) if variable else None
            if variable and not api_key:
                print(f"[{provider}] skipped: {variable} not set")
                continue
            request = ChatRequest(
                provider=provider, api_key=api_key, prompt=PROMPT, history=HISTORY
            )
            try:
                response = await gateway.chat(request)
            except Exception as exc:  # noqa: BLE001
                print(f"[{provider}] ERROR ({type(exc).__name__}): {exc}")
            else:
                excerpt = textwrap.shorten(response.content.strip(), width=160) or "<empty>"
                print(f"[{provider}] {excerpt}")
    finally:
        await gateway.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
