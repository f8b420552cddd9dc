"""
WCAG Conformance Estimate

Rolls contrast, target size and focus findings up into a single
conformance level.
"""

from typing import Optional

from ..models import ContrastReport, KeyboardReport, SizingReport, WcagReport
from .contrast import AA_RATIO, AAA_RATIO


def check_wcag(
    contrast: ContrastReport,
    sizing: SizingReport,
    keyboard: KeyboardReport,
) -> Optional[WcagReport]:
    """
    Estimate the WCAG 2.1 conformance level.

    - Any AA contrast failure or undersized target is an error: level A
    - Only warnings (AA-but-not-AAA contrast, missing focus indicators): level AA
    - Nothing found: level AAA

    Returns:
        WcagReport, or None when there is no evidence to judge
        (no colour pairs and no click targets)
    """
    if not contrast.light_mode and not sizing.click_targets:
        return None

    errors = []
    warnings = []

    for pair in contrast.light_mode:
        if not pair.passes.aa:
            errors.append(
                f"1.4.3 Contrast: {pair.foreground} on {pair.background} "
                f"is {pair.ratio}:1 (needs {AA_RATIO}:1)"
            )
        elif not pair.passes.aaa:
            warnings.append(
                f"1.4.6 Enhanced contrast: {pair.foreground} on {pair.background} "
                f"is {pair.ratio}:1 (AAA needs {AAA_RATIO}:1)"
            )

    for target in sizing.click_targets:
        if not target.meets_44px:
            errors.append(f'2.5.5 Target size: "{target.element}" is {target.size}px (needs 44px)')

    for label in keyboard.missing_labels:
        warnings.append(f"2.4.7 Focus visible: {label}")

    if errors:
        level = "A"
    elif warnings:
        level = "AA"
    else:
        level = "AAA"

    return WcagReport(level=level, errors=errors, warnings=warnings)
