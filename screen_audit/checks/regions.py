"""
Region Helpers

Input coercion and reading-order utilities shared by the heuristic checks.
"""

import math
from typing import Any, Iterable

from pydantic import ValidationError

from ..errors import HeuristicInputError
from ..models import Region

# Regions whose top edges are within this many pixels share a row
ROW_TOLERANCE = 50


def coerce_regions(regions: Iterable[Any]) -> list[Region]:
    """
    Turn detector output into Region models.

    Accepts Region instances or plain mappings shaped like
    ``{"element": str, "bbox": {"x0", "y0", "x1", "y1"}}``.

    Raises:
        HeuristicInputError: If any entry is malformed
    """
    if regions is None:
        return []
    if isinstance(regions, (str, bytes, dict)):
        raise HeuristicInputError(f"Expected a list of regions, got {type(regions).__name__}")

    try:
        items = list(regions)
    except TypeError as e:
        raise HeuristicInputError(f"Expected a list of regions: {e}") from e

    coerced = []
    for index, region in enumerate(items):
        if isinstance(region, Region):
            coerced.append(region)
            continue
        try:
            coerced.append(Region.model_validate(region))
        except ValidationError as e:
            raise HeuristicInputError(f"Malformed region at index {index}: {e}") from e
    return coerced


def round_px(value: float) -> int:
    """Round half up, so 43.5px reports as 44px"""
    return int(math.floor(value + 0.5))


def group_rows(regions: list[Region]) -> list[list[Region]]:
    """
    Split regions into row bands, top to bottom.

    Regions are taken in order of their top edge; a region joins the
    current band when its top edge is within the row tolerance of the
    band's topmost region. Each band is ordered left to right. The
    result does not depend on the input order.
    """
    rows: list[list[Region]] = []
    for region in sorted(regions, key=lambda r: (r.bbox.y0, r.bbox.x0)):
        if rows and region.bbox.y0 - rows[-1][0].bbox.y0 <= ROW_TOLERANCE:
            rows[-1].append(region)
        else:
            rows.append([region])
    return [sorted(row, key=lambda r: (r.bbox.x0, r.bbox.y0)) for row in rows]


def reading_order(regions: list[Region]) -> list[Region]:
    """Row bands top to bottom, each read left to right"""
    return [region for row in group_rows(regions) for region in row]
