"""
WCAG Contrast Ratio Checker

Computes contrast ratios for every text/background colour pair of a
detected palette. Validates against WCAG 2.1 (4.5:1 AA, 7:1 AAA for
normal text).
"""

import logging
import re
from itertools import product
from typing import Optional

from ..models import ColorPalette, ContrastPair, ContrastPasses, ContrastRecommendation, ContrastReport

logger = logging.getLogger(__name__)

AA_RATIO = 4.5
AAA_RATIO = 7.0

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Convert #RGB or #RRGGBB to an RGB tuple.

    Raises:
        ValueError: If the string is not a hex colour
    """
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Not a hex colour: {hex_color!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """Relative luminance with sRGB gamma correction"""
    def channel(value: int) -> float:
        c = value / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def calculate_contrast_ratio(color1: str, color2: str) -> float:
    """
    Calculate WCAG contrast ratio between two colors.

    Formula: (L1 + 0.05) / (L2 + 0.05)
    where L is relative luminance and L1 is the lighter colour

    Args:
        color1: First color (hex format: #RRGGBB or #RGB)
        color2: Second color (hex format: #RRGGBB or #RGB)

    Returns:
        Contrast ratio (1-21, where 21 is maximum contrast)

    Raises:
        ValueError: If either colour is not valid hex

    Example:
        ratio = calculate_contrast_ratio("#000000", "#FFFFFF")
        assert ratio == 21.0  # Black on white = maximum contrast
    """
    l1 = relative_luminance(hex_to_rgb(color1))
    l2 = relative_luminance(hex_to_rgb(color2))

    if l2 > l1:
        l1, l2 = l2, l1

    return round((l1 + 0.05) / (l2 + 0.05), 2)


def check_contrast(palette: Optional[ColorPalette] = None) -> ContrastReport:
    """
    Check contrast of every text colour against every background colour.

    Invalid colour strings are skipped. Without a palette (AI analysis
    disabled or degraded) the report is empty.

    Args:
        palette: Colour palette extracted by the vision model

    Returns:
        ContrastReport with one pair per text/background combination
        and a recommendation for each text colour failing AA
    """
    if palette is None:
        return ContrastReport()

    pairs = []
    recommendations = []
    flagged = set()

    for foreground, background in product(palette.text, palette.background):
        try:
            ratio = calculate_contrast_ratio(foreground, background)
        except ValueError:
            logger.debug("Skipping pair %r on %r: invalid colour", foreground, background)
            continue

        passes = ContrastPasses(aa=ratio >= AA_RATIO, aaa=ratio >= AAA_RATIO)
        pairs.append(ContrastPair(
            foreground=foreground,
            background=background,
            ratio=ratio,
            passes=passes,
        ))

        if not passes.aa and foreground not in flagged:
            flagged.add(foreground)
            recommendations.append(ContrastRecommendation(
                color=foreground,
                suggestion=(
                    f"{foreground} on {background} is {ratio}:1; "
                    f"darken or lighten it to reach at least {AA_RATIO}:1"
                ),
            ))

    return ContrastReport(light_mode=pairs, recommendations=recommendations)
