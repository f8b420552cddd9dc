"""
Google Gemini Vision Provider

Implements vision analysis using Gemini's multimodal models through
the google-genai async client.
"""

from google import genai
from google.genai import types

from ..models import ImageInput
from .base import VisionProvider


class GeminiProvider(VisionProvider):
    """
    Vision provider using Google's Gemini models.

    Example:
        provider = GeminiProvider(api_key="AIza...")
        text = await provider.generate(ANALYSIS_PROMPT, image)
    """

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (get from https://aistudio.google.com/)
            model: Vision-capable Gemini model (default: gemini-2.5-flash)
        """
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "gemini"

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def generate(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """Send the prompt with the image inlined; returns response text"""
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[
                prompt,
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            ],
            config=types.GenerateContentConfig(
                temperature=temperature,
                top_p=0.95,
                top_k=40,
                max_output_tokens=max_tokens,
            ),
        )
        return response.text or ""
