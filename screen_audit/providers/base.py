"""
Base Vision Provider Interface

Abstract base class defining the contract for vision model providers.
Providers are thin transports: one prompt plus one image in, raw text
out. Retries, parsing and fallbacks live in GenerativeClient.
"""

import base64
from abc import ABC, abstractmethod

from ..models import ImageInput


class VisionProvider(ABC):
    """
    Common interface of the Gemini, Anthropic, OpenAI and Ollama transports.

    A provider implements ``generate`` (prompt plus screenshot in, text
    out), ``is_available`` (configured and reachable) and ``name``.

    Providers let their library's exceptions propagate unchanged;
    GenerativeClient classifies them (429 -> RateLimited, anything
    else -> TransientCallError).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in log lines ("gemini", "anthropic", "openai" or "local")"""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """
        Run a single text-generation request with an inline image.

        Args:
            prompt: Instruction text
            image: Screenshot to attach
            temperature: Sampling temperature
            max_tokens: Upper bound on response length

        Returns:
            Raw response text (may be empty or wrapped in markdown)
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether a call could be attempted now (key set, server reachable)"""

    @staticmethod
    def _encode_image(image: ImageInput) -> str:
        """Base64-encode image bytes for JSON payloads"""
        return base64.b64encode(image.data).decode("utf-8")
