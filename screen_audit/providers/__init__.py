"""
Vision Providers

Interchangeable transports for the vision model call: Google Gemini,
Anthropic Claude, OpenAI and local models served by Ollama.
"""

from ..models import Config
from .anthropic import AnthropicProvider
from .base import VisionProvider
from .gemini import GeminiProvider
from .local import LocalProvider
from .openai import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "GeminiProvider",
    "LocalProvider",
    "OpenAIProvider",
    "VisionProvider",
    "get_provider",
    "PROVIDER_NAMES",
]

PROVIDER_NAMES = ("gemini", "anthropic", "openai", "local")

# Hosted providers and the label used in configuration errors
_HOSTED = {"gemini": "Gemini", "anthropic": "Anthropic", "openai": "OpenAI"}


def get_provider(provider_name: str, config: Config) -> VisionProvider:
    """
    Build the named provider from configuration.

    Hosted providers need their API key; the local provider only needs
    the Ollama host and model.

    Args:
        provider_name: One of PROVIDER_NAMES
        config: Process configuration

    Raises:
        ValueError: If the name is unknown or the provider has no API key

    Example:
        provider = get_provider("gemini", config)
        client = GenerativeClient(provider, config)
    """
    name = provider_name.lower()

    if name == "local":
        # The worker thread cannot be cancelled; its HTTP timeout must end
        # the request no later than the client's per-call timeout
        return LocalProvider(
            host=config.ollama_host,
            model=config.ollama_model,
            request_timeout=config.call_timeout,
        )

    if name not in PROVIDER_NAMES:
        raise ValueError(f"Unknown provider: {provider_name}. Choose from: {', '.join(PROVIDER_NAMES)}")

    key_var = f"{name.upper()}_API_KEY"
    api_key = getattr(config, f"{name}_api_key")
    if not api_key:
        raise ValueError(f"{_HOSTED[name]} API key not configured. Set {key_var} in .env file")

    if name == "gemini":
        return GeminiProvider(api_key=api_key, model=config.gemini_model)
    if name == "anthropic":
        return AnthropicProvider(api_key=api_key)
    return OpenAIProvider(api_key=api_key)
