"""
Report Assembler

Main orchestration module: runs the heuristic checks, optionally the
AI analysis, and merges everything into one CompositeReport.
"""

import logging
from typing import Any, Iterable, Optional

from .aggregator import aggregate
from .checks import (
    analyze_keyboard,
    analyze_sizing,
    check_contrast,
    check_wcag,
    coerce_regions,
    group_rows,
    score_hierarchy,
    score_typography,
)
from .client import GenerativeClient
from .models import (
    AuditSignals,
    CompositeReport,
    Config,
    GenerativeDegraded,
    GenerativeOutcome,
    ImageInput,
)
from .providers import get_provider
from .validator import degraded_report

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Orchestrates a complete screenshot audit.

    Coordinates:
    1. Heuristic checks (sizing, keyboard) over detected regions
    2. Vision model analysis (via GenerativeClient), when requested
    3. Contrast, WCAG, typography and hierarchy scoring
    4. Aggregation into one composite report

    Heuristics run in-process with no I/O; the model call is the only
    await point. Every call builds fresh values, so one assembler can
    serve many requests.

    Example:
        config = load_config()
        assembler = ReportAssembler.from_config(config)

        report = await assembler.assemble(image, use_generative=True)
        print(f"Score: {report.overall_score.score}/100")
    """

    def __init__(self, config: Config, client: Optional[GenerativeClient] = None):
        """
        Initialize report assembler.

        Args:
            config: Read-only process configuration
            client: Generative client; None disables the AI branch
        """
        self.config = config
        self.client = client

    @classmethod
    def from_config(
        cls,
        config: Config,
        provider_name: Optional[str] = None
    ) -> "ReportAssembler":
        """
        Build an assembler wired to the configured vision provider.

        If the provider is unknown, unconfigured or unreachable the
        assembler is still returned, without a client; AI requests then
        get the degraded fallback report.
        """
        name = provider_name or config.vision_provider
        try:
            provider = get_provider(name, config)
        except ValueError as e:
            logger.warning("AI analysis unavailable: %s", e)
            return cls(config)

        if not provider.is_available():
            logger.warning("Provider '%s' is not available", name)
            return cls(config)

        return cls(config, GenerativeClient(provider, config))

    async def assemble(
        self,
        image: ImageInput,
        use_generative: bool = False,
        regions: Iterable[Any] = ()
    ) -> CompositeReport:
        """
        Perform a complete audit of one screenshot.

        Workflow:
        1. Validate regions and run the heuristic checks
        2. If requested, await the AI analysis (retries happen inside)
        3. Derive contrast pairs from the AI colour palette
        4. Score WCAG level, typography and hierarchy
        5. Aggregate into the final report

        Args:
            image: Screenshot bytes and mime type
            use_generative: Whether to run the AI analysis
            regions: Detected interactive elements; may be empty

        Returns:
            CompositeReport. AI failures are reflected in
            ``generative_status`` and the fallback report, never raised.

        Raises:
            HeuristicInputError: If region data is malformed
        """
        parsed = coerce_regions(regions)
        sizing = analyze_sizing(parsed)
        keyboard = analyze_keyboard(parsed)

        generative = None
        status = "disabled"
        if use_generative:
            outcome = await self._run_generative(image)
            generative = outcome.report
            status = outcome.status

        contrast = check_contrast(generative.color_palette if generative else None)

        signals = AuditSignals(
            sizing=sizing,
            keyboard=keyboard,
            contrast=contrast,
            typography=score_typography(sizing),
            hierarchy=score_hierarchy(keyboard, rows=len(group_rows(parsed))),
            wcag=check_wcag(contrast, sizing, keyboard),
        )

        report = aggregate(signals, generative, status)
        logger.info(
            "Audit complete: %d/100 (%s), AI %s",
            report.overall_score.score, report.overall_score.label, status,
        )
        return report

    async def _run_generative(self, image: ImageInput) -> GenerativeOutcome:
        if self.client is None:
            logger.warning("AI analysis requested but no provider is configured")
            return GenerativeDegraded(
                report=degraded_report(),
                error="No vision provider configured",
            )
        return await self.client.analyze(image)
