"""
Generative Client

Wraps the vision provider with the resilience the raw call lacks:
per-call timeouts, sequential retries with exponential backoff, JSON
recovery, schema validation, and fallback reports. Callers always get
data back; only cancellation propagates.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from .errors import AuditError, RateLimited, SchemaError, TransientCallError, classify_call_error
from .models import (
    Config,
    DesignSystemGuess,
    GenerativeDegraded,
    GenerativeOk,
    GenerativeOutcome,
    GenerativeRateLimited,
    ImageInput,
)
from .prompts import ACCESSIBILITY_PROMPT, ANALYSIS_PROMPT, DESIGN_SYSTEM_PROMPT
from .providers.base import VisionProvider
from .sanitizer import extract_json
from .validator import degraded_report, rate_limited_report, validate

logger = logging.getLogger(__name__)

FALLBACK_DESIGN_SYSTEMS = [
    DesignSystemGuess(
        name="Custom",
        confidence=50,
        reasoning="Unable to detect - rate limit or processing error",
    ),
]

FALLBACK_ACCESSIBILITY_TIPS = [
    "Manual WCAG 2.1 AA audit required",
    "Test with screen readers",
    "Verify 44px touch targets",
    "Check 4.5:1 contrast ratios",
    "Test keyboard navigation",
]


class GenerativeClient:
    """
    Resilient access to a vision model.

    Retry policy: up to ``config.max_attempts`` calls, each bounded by
    ``config.call_timeout``. After failed attempt i (0-based) the client
    waits ``config.initial_delay * 2**i`` before the next one. Only call
    failures are retried; an unparseable but successful response is not.

    Example:
        client = GenerativeClient(get_provider("gemini", config), config)
        outcome = await client.analyze(image)
        if outcome.status == "rate_limited":
            ...
    """

    def __init__(
        self,
        provider: VisionProvider,
        config: Config,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            provider: Transport for the model call
            config: Retry and timeout settings
            sleep: Awaitable used for backoff waits (injectable for tests)
        """
        self.provider = provider
        self.max_attempts = config.max_attempts
        self.initial_delay = config.initial_delay
        self.call_timeout = config.call_timeout
        self._sleep = sleep

    async def call_with_retry(
        self,
        prompt: str,
        image: ImageInput,
        *,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ) -> str:
        """
        Invoke the provider, retrying call failures with exponential backoff.

        Attempts never overlap: each retry waits out its full backoff
        first. Cancellation interrupts both the call and the wait.

        Returns:
            Raw response text

        Raises:
            TransientCallError: When every attempt failed (RateLimited if
                the last failure was a 429)
        """
        last_error: TransientCallError = TransientCallError("No attempts made")

        for attempt in range(self.max_attempts):
            try:
                return await asyncio.wait_for(
                    self.provider.generate(
                        prompt,
                        image,
                        temperature=temperature,
                        max_tokens=max_tokens,
                    ),
                    timeout=self.call_timeout,
                )
            except Exception as e:
                last_error = classify_call_error(e)

            if attempt < self.max_attempts - 1:
                wait = self.initial_delay * 2 ** attempt
                logger.warning(
                    "%s call failed (%s). Retry %d/%d after %.1fs",
                    self.provider.name, last_error, attempt + 1, self.max_attempts, wait,
                )
                await self._sleep(wait)

        logger.error(
            "%s call failed after %d attempts: %s",
            self.provider.name, self.max_attempts, last_error,
        )
        raise last_error

    async def _request_json(self, prompt: str, image: ImageInput, expected: type, **kwargs) -> Any:
        text = await self.call_with_retry(prompt, image, **kwargs)
        return json.loads(extract_json(text, expected))

    async def analyze(self, image: ImageInput) -> GenerativeOutcome:
        """
        Produce the qualitative UI critique for a screenshot.

        Returns:
            GenerativeOk with the validated report, GenerativeRateLimited
            with the all-zero report when the provider kept returning
            429, or GenerativeDegraded with the neutral all-50 report
            for any other failure
        """
        try:
            data = await self._request_json(ANALYSIS_PROMPT, image, dict, temperature=0.4, max_tokens=8192)
            report = validate(data)
        except RateLimited as e:
            return GenerativeRateLimited(report=rate_limited_report(), error=str(e))
        except AuditError as e:
            logger.warning("AI analysis degraded: %s", e)
            return GenerativeDegraded(report=degraded_report(), error=str(e))
        except Exception as e:
            logger.exception("Unexpected error during AI analysis")
            return GenerativeDegraded(report=degraded_report(), error=f"{type(e).__name__}: {e}")

        logger.debug("AI analysis complete: %s (%s)", report.ui_type, report.design_system)
        return GenerativeOk(report=report)

    async def recommend_design_systems(self, image: ImageInput) -> list[DesignSystemGuess]:
        """
        Identify which design systems the UI resembles.

        Returns:
            Guesses with confidence 0-100; a single "Custom" guess at
            confidence 50 when the model is unavailable or unparseable
        """
        try:
            data = await self._request_json(
                DESIGN_SYSTEM_PROMPT, image, list, temperature=0.3, max_tokens=2048
            )
            guesses = []
            for item in data:
                try:
                    guesses.append(DesignSystemGuess.model_validate(item))
                except ValidationError:
                    logger.debug("Dropping malformed design-system guess: %r", item)
            if not guesses:
                raise SchemaError(["name", "confidence"])
        except AuditError as e:
            logger.warning("Design system detection degraded: %s", e)
            return list(FALLBACK_DESIGN_SYSTEMS)

        return guesses

    async def recommend_accessibility(self, image: ImageInput) -> list[str]:
        """
        Ask for a short list of WCAG recommendations.

        Returns:
            Recommendation strings; five manual-audit steps when the
            model is unavailable or unparseable
        """
        try:
            data = await self._request_json(
                ACCESSIBILITY_PROMPT, image, list, temperature=0.4, max_tokens=3072
            )
            tips = [item for item in data if isinstance(item, str) and item.strip()]
            if not tips:
                raise SchemaError(["<recommendation>"])
        except AuditError as e:
            logger.warning("Accessibility recommendations degraded: %s", e)
            return list(FALLBACK_ACCESSIBILITY_TIPS)

        return tips
