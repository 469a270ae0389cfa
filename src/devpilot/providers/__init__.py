"""Provider exports."""

from .anthropic import AnthropicProvider
from .base import (
    BaseProvider,
    ConfigurationError,
    GatewayError,
    InvalidResponseError,
    NetworkError,
    ProtocolError,
    ProviderCall,
    ProviderError,
)
from .cohere import CohereProvider
from .deepseek import DeepSeekProvider
from .gemini import GeminiProvider
from .groq import GroqProvider
from .mistral import MistralProvider
from .ollama import OllamaProvider
from .openai import ChatCompletionsProvider, OpenAIProvider
from .registry import ProviderRegistry

__all__ = [
    "BaseProvider",
    "ProviderCall",
    "GatewayError",
    "ConfigurationError",
    "NetworkError",
    "ProtocolError",
    "InvalidResponseError",
    "ProviderError",
    "AnthropicProvider",
    "ChatCompletionsProvider",
    "CohereProvider",
    "DeepSeekProvider",
    "GeminiProvider",
    "GroqProvider",
    "MistralProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "ProviderRegistry",
]
