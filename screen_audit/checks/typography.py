"""
Typography and Hierarchy Scores

Readability and visual-priority sub-scores derived from the sizing and
keyboard reports. 50 means nothing was measured.
"""

from ..models import HierarchyReport, KeyboardReport, SizingReport, TypographyReport

UNMEASURED_SCORE = 50


def score_typography(sizing: SizingReport) -> TypographyReport:
    """
    Readability score from measured font sizes.

    Each font size under 16px costs 20 points.
    """
    if not sizing.font_sizes:
        return TypographyReport(readability_score=UNMEASURED_SCORE)

    small = [check for check in sizing.font_sizes if not check.acceptable]
    issues = [f'"{check.element}" uses {check.size}px text (16px recommended)' for check in small]

    return TypographyReport(
        readability_score=max(0, 100 - 20 * len(small)),
        issues=issues,
    )


def score_hierarchy(keyboard: KeyboardReport, rows: int = 0) -> HierarchyReport:
    """
    Visual priority score from the predicted focus order.

    Each missing-focus finding costs 25 points.

    Args:
        keyboard: Keyboard report for the same regions
        rows: Number of row bands (regions within 50px vertically)
    """
    if not keyboard.focus_order:
        return HierarchyReport(priority_score=UNMEASURED_SCORE, rows=0)

    return HierarchyReport(
        priority_score=max(0, 100 - 25 * len(keyboard.missing_labels)),
        rows=rows,
    )

