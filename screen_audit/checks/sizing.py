"""
Touch Target Size Checker

Automated check for minimum touch target sizes.
Validates against WCAG 2.5.5 and mobile accessibility guidelines (44×44px minimum).
"""

import statistics
from typing import Any, Iterable

from ..models import ClickTarget, FontSizeCheck, Region, SizingReport
from .regions import coerce_regions, group_rows, round_px

MIN_TARGET_PX = 44
MIN_FONT_PX = 16
MAX_PROBLEM_AREAS = 10

# Spacing is only judged on screens with more than this many targets
SPACING_DENSITY_LIMIT = 5
# Allowed deviation of a gap from the median gap
SPACING_TOLERANCE_PX = 8
# Neighbours closer than this are flagged as cramped
MIN_GAP_PX = 8


def _row_gaps(rows: list[list[Region]]) -> list[float]:
    gaps = []
    for row in rows:
        for left, right in zip(row, row[1:]):
            gaps.append(right.bbox.x0 - left.bbox.x1)
    return gaps


def _inconsistent_spacing(gaps: list[float]) -> int:
    if len(gaps) < 2:
        return 0
    median = statistics.median(gaps)
    return sum(1 for gap in gaps if abs(gap - median) > SPACING_TOLERANCE_PX)


def analyze_sizing(regions: Iterable[Any] = ()) -> SizingReport:
    """
    Check click target sizes and estimate implementation feasibility.

    Each region's size is the smaller of its width and height; targets
    under 44px are named in ``problem_areas``. Spacing is measured from
    the horizontal gaps between neighbours in the same row.

    Feasibility is "Possible" when no target is undersized and fewer
    than 3 problem areas were found.

    Args:
        regions: Detected regions (Region models or mappings), may be empty

    Returns:
        SizingReport with at most 10 problem areas

    Raises:
        HeuristicInputError: If region data is malformed

    Example:
        report = analyze_sizing([
            {"element": "Save", "bbox": {"x0": 0, "y0": 0, "x1": 30, "y1": 30}}
        ])
        report.problem_areas  # ['"Save" is too small (30px)']
    """
    parsed = coerce_regions(regions)
    problem_areas: list[str] = []
    padding_issues: list[str] = []

    click_targets = []
    for region in parsed:
        smallest = min(region.bbox.width, region.bbox.height)
        size = round_px(smallest)
        meets = smallest >= MIN_TARGET_PX
        if not meets:
            problem_areas.append(f'"{region.element}" is too small ({size}px)')
        click_targets.append(ClickTarget(element=region.element, size=size, meets_44px=meets))

    font_sizes = [
        FontSizeCheck(
            element=region.element,
            size=round_px(region.font_size),
            acceptable=region.font_size >= MIN_FONT_PX,
        )
        for region in parsed
        if region.font_size is not None
    ]

    gaps = _row_gaps(group_rows(parsed))

    if len(parsed) > SPACING_DENSITY_LIMIT:
        inconsistent = _inconsistent_spacing(gaps)
        if inconsistent:
            problem_areas.append(f"{inconsistent} elements with inconsistent spacing detected")

    cramped = sum(1 for gap in gaps if gap < MIN_GAP_PX)
    if cramped:
        padding_issues.append(f"Consider reviewing spacing between {cramped} element groups")

    undersized = sum(1 for target in click_targets if not target.meets_44px)
    feasibility = "Possible" if undersized == 0 and len(problem_areas) < 3 else "Needs Adjustments"

    return SizingReport(
        click_targets=click_targets,
        font_sizes=font_sizes,
        padding_issues=padding_issues,
        feasibility=feasibility,
        problem_areas=problem_areas[:MAX_PROBLEM_AREAS],
    )
