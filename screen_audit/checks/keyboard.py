"""
Keyboard Accessibility Estimate

Predicts tab order and focus coverage from the visual position of
detected interactive elements. A density heuristic, not a rendered-DOM
check: an empty region list is a legitimate "nothing detected" input.
"""

from typing import Any, Iterable

from ..models import FocusEntry, InteractiveElement, KeyboardReport, Region
from .regions import coerce_regions, reading_order

MISSING_FOCUS_MESSAGE = "Focus indicators not detected on some interactive elements"

# Above this many regions focus indicators are assumed to be missing somewhere
FOCUS_DENSITY_LIMIT = 5


def simulate_tab_order(regions: list[Region]) -> list[FocusEntry]:
    """Assign 1-based tab indices following visual reading order"""
    return [
        FocusEntry(element=region.element, tab_index=index)
        for index, region in enumerate(reading_order(regions), 1)
    ]


def detect_missing_focus_states(regions: list[Region]) -> list[str]:
    if len(regions) > FOCUS_DENSITY_LIMIT:
        return [MISSING_FOCUS_MESSAGE]
    return []


def analyze_keyboard(regions: Iterable[Any] = ()) -> KeyboardReport:
    """
    Estimate keyboard navigation quality.

    Args:
        regions: Detected regions (Region models or mappings), may be empty

    Returns:
        KeyboardReport; ``pass`` only when regions exist and no focus
        indicators are missing

    Raises:
        HeuristicInputError: If region data is malformed
    """
    parsed = coerce_regions(regions)
    focus_order = simulate_tab_order(parsed)
    missing_labels = detect_missing_focus_states(parsed)

    return KeyboardReport(
        focus_order=focus_order,
        focus_visibility=not missing_labels,
        interactive_elements=[InteractiveElement(element=r.element) for r in parsed],
        missing_labels=missing_labels,
        pass_or_warn="pass" if not missing_labels and focus_order else "warn",
    )
