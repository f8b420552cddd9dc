"""
Score Aggregator

Combines the heuristic reports and the optional AI report into one
composite score. Pure and deterministic: the same signals always give
the same score.

Overall score = unweighted mean of the five category scores, rounded
half up. Every category counts equally.
"""

import math
from typing import Optional

from .models import (
    CATEGORIES,
    AuditSignals,
    CompositeReport,
    ContrastReport,
    GenerativeReport,
    OverallScore,
    WcagReport,
)

WCAG_LEVEL_SCORES = {"AAA": 100, "AA": 85}
WCAG_DEFAULT_SCORE = 50

SIZING_POSSIBLE_SCORE = 90
SIZING_ADJUST_SCORE = 65

LABEL_THRESHOLDS = ((90, "Excellent"), (75, "Good"), (60, "Fair"))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def wcag_score(wcag: Optional[WcagReport]) -> int:
    """AAA -> 100, AA -> 85, anything else (including no report) -> 50"""
    if wcag is None:
        return WCAG_DEFAULT_SCORE
    return WCAG_LEVEL_SCORES.get(wcag.level, WCAG_DEFAULT_SCORE)


def contrast_score(contrast: ContrastReport) -> int:
    """Percentage of light-mode pairs passing AA; 0 when there are no pairs"""
    total = len(contrast.light_mode)
    return round_half_up(100 * contrast.passing_pairs / max(total, 1))


def sizing_score(feasibility: str) -> int:
    return SIZING_POSSIBLE_SCORE if feasibility == "Possible" else SIZING_ADJUST_SCORE


def score_label(score: int) -> str:
    """
    Qualitative label for a 0-100 score.

    >= 90 Excellent, >= 75 Good, >= 60 Fair, else Poor
    """
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return "Poor"


def category_breakdown(signals: AuditSignals) -> dict[str, int]:
    """Per-category scores, keyed in the fixed category order"""
    breakdown = {
        "wcag": wcag_score(signals.wcag),
        "contrast": contrast_score(signals.contrast),
        "typography": signals.typography.readability_score,
        "hierarchy": signals.hierarchy.priority_score,
        "sizing": sizing_score(signals.sizing.feasibility),
    }
    return {category: breakdown[category] for category in CATEGORIES}


def overall_score(signals: AuditSignals) -> OverallScore:
    breakdown = category_breakdown(signals)
    score = round_half_up(sum(breakdown.values()) / len(breakdown))
    return OverallScore(score=score, label=score_label(score), breakdown=breakdown)


def aggregate(
    signals: AuditSignals,
    generative: Optional[GenerativeReport] = None,
    generative_status: str = "disabled",
) -> CompositeReport:
    """
    Build the composite report.

    The AI report is carried through for presentation; it influences
    the score only through the colour palette that feeds the contrast
    signals.

    Args:
        signals: Heuristic and collaborator reports
        generative: AI critique, if the AI branch ran
        generative_status: "ok", "rate_limited", "degraded" or "disabled"

    Returns:
        CompositeReport with overall score, label and breakdown
    """
    return CompositeReport(
        overall_score=overall_score(signals),
        sizing=signals.sizing,
        keyboard=signals.keyboard,
        contrast=signals.contrast,
        typography=signals.typography,
        hierarchy=signals.hierarchy,
        wcag=signals.wcag,
        generative=generative,
        generative_status=generative_status,
    )
