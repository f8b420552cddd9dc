"""
OpenAI Vision Provider

Implements vision analysis using OpenAI's GPT-4o family.
Images are sent inline as base64 data URLs.
"""

import openai

from ..models import ImageInput
from .base import VisionProvider


class OpenAIProvider(VisionProvider):
    """
    Vision provider using OpenAI's vision-capable chat models.

    Example:
        provider = OpenAIProvider(api_key="sk-...")
        text = await provider.generate(ANALYSIS_PROMPT, image)
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o"
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (get from https://platform.openai.com/api-keys)
            model: OpenAI model to use (default: gpt-4o)
                   Must be a vision-capable model
        """
        self.client = openai.AsyncOpenAI(api_key=api_key)
        self.model = model
        self._api_key = api_key

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "openai"

    def is_available(self) -> bool:
        """True if API key is set"""
        return bool(self._api_key)

    async def generate(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """
        Send screenshot and prompt to the chat completions API.

        Raises:
            openai.APIError: On API failure (RateLimitError for 429)
        """
        data_url = f"data:{image.mime_type};base64,{self._encode_image(image)}"

        response = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": data_url}}
                ]
            }]
        )

        return response.choices[0].message.content or ""
