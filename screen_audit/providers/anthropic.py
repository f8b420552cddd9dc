"""
Anthropic Claude Vision Provider

Sends the audit prompts to a vision-capable Claude model (Claude 3+)
through the async Messages API.
"""

import anthropic

from ..models import ImageInput
from .base import VisionProvider


class AnthropicProvider(VisionProvider):
    """
    Vision provider using Anthropic's Claude models.

    The async client lets an abandoned request be cancelled mid-call.
    Errors are left as ``anthropic.APIStatusError`` subclasses; their
    ``status_code`` is what marks a 429 as rate limited.

    Example:
        provider = AnthropicProvider(api_key="sk-ant-...")
        text = await provider.generate(ANALYSIS_PROMPT, image)
    """

    def __init__(self, api_key: str, model: str = "claude-3-5-sonnet-20241022"):
        """
        Args:
            api_key: Anthropic API key (https://console.anthropic.com/)
            model: Vision-capable Claude model
        """
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "anthropic"

    def is_available(self) -> bool:
        """True if an API key is set"""
        return bool(self._api_key)

    def _content(self, prompt: str, image: ImageInput) -> list[dict]:
        image_block = {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": image.mime_type,
                "data": self._encode_image(image),
            },
        }
        # Claude reads images best when they precede the instruction
        return [image_block, {"type": "text", "text": prompt}]

    async def generate(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """
        Send the screenshot and prompt as one user message.

        Returns:
            Concatenated text blocks of the response

        Raises:
            anthropic.APIError: On API failure (RateLimitError for 429)
        """
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": self._content(prompt, image)}],
        )
        return "".join(block.text for block in response.content if block.type == "text")
