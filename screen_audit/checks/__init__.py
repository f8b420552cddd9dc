"""
Heuristic Checks

Deterministic, non-AI analyzers that complement the vision model.
All of them accept an empty region list.
"""

from .contrast import calculate_contrast_ratio, check_contrast
from .keyboard import analyze_keyboard
from .regions import coerce_regions, group_rows
from .sizing import analyze_sizing
from .typography import score_hierarchy, score_typography
from .wcag import check_wcag

__all__ = [
    "analyze_keyboard",
    "analyze_sizing",
    "calculate_contrast_ratio",
    "check_contrast",
    "check_wcag",
    "coerce_regions",
    "group_rows",
    "score_hierarchy",
    "score_typography",
]
