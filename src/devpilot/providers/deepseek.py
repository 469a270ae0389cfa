"""DeepSeek provider adapter."""

from __future__ import annotations

from .openai import ChatCompletionsProvider

DEEPSEEK_CHAT_URL = "https://api.deepseek.com/chat/completions"


class DeepSeekProvider(ChatCompletionsProvider):
    name = "deepseek"
    display_name = "DeepSeek"
    default_model = "deepseek-chat"
    url = DEEPSEEK_CHAT_URL
