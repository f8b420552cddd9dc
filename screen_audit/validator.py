"""
Response Validator

Enforces the generative report schema on a parsed model response.
Only missing top-level keys fail validation; everything else is
coerced to a safe default so a usable report always comes out.

Also home to the two fallback reports used when no model output
is available at all.
"""

import logging
import math
from typing import Any

from .errors import SchemaError
from .models import ColorPalette, GenerativeReport

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "uiType",
    "designSystem",
    "strengths",
    "weaknesses",
    "accessibilityIssues",
    "recommendations",
    "colorSchemeAnalysis",
    "layoutAnalysis",
    "typographyAnalysis",
    "userExperience",
    "targetAudienceMatch",
    "overallQuality",
    "contrastScore",
    "wcagComplianceScore",
    "colorPalette",
)

STRING_DEFAULTS = {
    "uiType": "Unknown",
    "designSystem": "Custom",
    "colorSchemeAnalysis": "",
    "layoutAnalysis": "",
    "typographyAnalysis": "",
    "userExperience": "",
    "targetAudienceMatch": "",
}

ARRAY_FIELDS = ("strengths", "weaknesses", "accessibilityIssues", "recommendations")

SCORE_FIELDS = ("overallQuality", "contrastScore", "wcagComplianceScore")

PALETTE_BUCKETS = ("primary", "secondary", "accent", "text", "background")

DEFAULT_SCORE = 50


def _coerce_string(value: Any, default: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _coerce_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _coerce_score(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SCORE
    if not math.isfinite(value) or value < 0 or value > 100:
        return DEFAULT_SCORE
    return value


def _coerce_palette(value: Any) -> ColorPalette:
    if not isinstance(value, dict):
        return ColorPalette()
    return ColorPalette(**{bucket: _coerce_string_list(value.get(bucket)) for bucket in PALETTE_BUCKETS})


def validate(data: Any) -> GenerativeReport:
    """
    Validate a parsed model response into a GenerativeReport.

    Rules, in order:
    1. All 15 required keys must be present (SchemaError otherwise)
    2. Array fields that are not lists become empty lists;
       non-string items are dropped
    3. Scores that are not finite numbers in [0, 100] become 50
    4. A malformed colorPalette becomes five empty buckets

    Args:
        data: Result of ``json.loads`` on the sanitized response

    Returns:
        Fully populated GenerativeReport

    Raises:
        SchemaError: If data is not an object or lacks required keys
    """
    if not isinstance(data, dict):
        raise SchemaError(list(REQUIRED_FIELDS))

    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise SchemaError(missing)

    values: dict[str, Any] = {}

    for field, default in STRING_DEFAULTS.items():
        values[field] = _coerce_string(data[field], default)

    for field in ARRAY_FIELDS:
        if not isinstance(data[field], list):
            logger.debug("Coercing %s to empty list", field)
        values[field] = _coerce_string_list(data[field])

    for field in SCORE_FIELDS:
        score = _coerce_score(data[field])
        if score != data[field]:
            logger.debug("Coercing %s=%r to %s", field, data[field], DEFAULT_SCORE)
        values[field] = score

    values["colorPalette"] = _coerce_palette(data["colorPalette"])

    return GenerativeReport.model_validate(values)


def rate_limited_report() -> GenerativeReport:
    """
    Fallback report for a provider that kept returning 429.

    All scores are 0: the analysis did not happen, this is not a
    quality judgment.
    """
    unavailable = "Rate limit exceeded - analysis unavailable"
    return GenerativeReport(
        ui_type="Rate Limit Exceeded",
        design_system="Unable to analyze",
        strengths=["Analysis temporarily unavailable due to API rate limits"],
        weaknesses=["Please try again in a few minutes"],
        accessibility_issues=["API quota exceeded - unable to perform analysis"],
        recommendations=[
            "Wait 60 seconds before analyzing another image",
            "Consider upgrading to a paid API tier for higher limits",
            "Reduce analysis frequency",
            "Use batch processing with delays between requests",
            "Monitor API usage in the provider console",
        ],
        color_scheme_analysis=unavailable,
        layout_analysis=unavailable,
        typography_analysis=unavailable,
        user_experience=unavailable,
        target_audience_match="Unable to determine due to rate limits",
        overall_quality=0,
        contrast_score=0,
        wcag_compliance_score=0,
        color_palette=ColorPalette(),
    )


def degraded_report() -> GenerativeReport:
    """
    Neutral fallback report for any other failure.

    All scores are 50, meaning "insufficient information".
    """
    unavailable = "Unable to analyze due to processing error"
    return GenerativeReport(
        ui_type="Unknown",
        design_system="Custom",
        strengths=["Modern appearance", "Functional layout"],
        weaknesses=["AI analysis unavailable", "Manual review recommended"],
        accessibility_issues=["Unable to perform automated analysis"],
        recommendations=[
            "Perform manual accessibility audit",
            "Test with screen readers (NVDA, JAWS)",
            "Verify color contrast ratios manually",
            "Check keyboard navigation",
            "Validate WCAG 2.1 AA compliance",
        ],
        color_scheme_analysis=unavailable,
        layout_analysis=unavailable,
        typography_analysis=unavailable,
        user_experience="Unable to assess due to processing error",
        target_audience_match="General audience - manual evaluation needed",
        overall_quality=DEFAULT_SCORE,
        contrast_score=DEFAULT_SCORE,
        wcag_compliance_score=DEFAULT_SCORE,
        color_palette=ColorPalette(),
    )
