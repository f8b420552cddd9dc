"""
Ollama Vision Provider

Runs the audit prompts against a vision model served by a local Ollama
instance (LLaVA, BakLLaVA, ...). No API key, no rate limits.
"""

import asyncio

import requests

from ..models import ImageInput
from .base import VisionProvider


class LocalProvider(VisionProvider):
    """
    Vision provider backed by Ollama's HTTP API.

    The model must already be pulled (``ollama pull llava``).

    Example:
        provider = LocalProvider(host="http://gpu-box:11434", model="llava:13b")
        text = await provider.generate(ANALYSIS_PROMPT, image)
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llava",
        request_timeout: float = 60.0
    ):
        """
        Args:
            host: Ollama server URL
            model: Vision model name, as listed by ``ollama list``
            request_timeout: HTTP timeout in seconds. The call runs in a worker
                thread that outlives a cancelled await, so keep this at or
                below the client's call timeout (get_provider does)
        """
        self.host = host.rstrip("/")
        self.model = model
        self.request_timeout = request_timeout

    @property
    def name(self) -> str:
        return "local"

    def is_available(self) -> bool:
        """True when the Ollama server answers on /api/tags"""
        try:
            response = requests.get(f"{self.host}/api/tags", timeout=2)
        except requests.RequestException:
            return False
        return response.ok

    async def generate(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """
        Call /api/generate with the image attached.

        requests is blocking, so the HTTP call runs in a worker thread.

        Raises:
            requests.RequestException: On connection failure or non-2xx status
        """
        payload = {
            "model": self.model,
            "prompt": prompt,
            "images": [self._encode_image(image)],
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        return await asyncio.to_thread(self._post_generate, payload)

    def _post_generate(self, payload: dict) -> str:
        response = requests.post(
            f"{self.host}/api/generate",
            json=payload,
            timeout=self.request_timeout
        )
        response.raise_for_status()
        return response.json().get("response", "")
