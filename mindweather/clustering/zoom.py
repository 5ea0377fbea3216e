"""Zoom level -> address granularity, plus region focus targets.

Zoom is the map scale factor reported by the viewport (1.0 = whole country).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

from mindweather.regions import Coordinates, normalize_region_name, region_coordinates

# Zoom scale factors (unitless, same scale as the viewport zoom).
DISTRICT_ZOOM_THRESHOLD = 2.0
NEIGHBORHOOD_ZOOM_THRESHOLD = 4.0

# Zoom applied when a region is selected at region granularity.
REGION_FOCUS_ZOOM = 4.0


class Granularity(IntEnum):
    REGION = 1
    DISTRICT = 2
    NEIGHBORHOOD = 3


GRANULARITY_LABELS: Dict[Granularity, str] = {
    Granularity.REGION: "시/도 단위",
    Granularity.DISTRICT: "구/군 단위",
    Granularity.NEIGHBORHOOD: "읍/면/동 단위",
}


@dataclass(frozen=True)
class MapFocus:
    zoom: float
    center: Coordinates


def resolve_granularity(zoom: float) -> Granularity:
    """Step function over the two zoom thresholds.

    NaN compares false against both thresholds and therefore lands on the
    coarsest level, same as -inf.
    """
    value = float(zoom)
    if math.isnan(value) or value < DISTRICT_ZOOM_THRESHOLD:
        return Granularity.REGION
    if value < NEIGHBORHOOD_ZOOM_THRESHOLD:
        return Granularity.DISTRICT
    return Granularity.NEIGHBORHOOD


def granularity_label(granularity: int) -> str:
    return GRANULARITY_LABELS[Granularity(granularity)]


def focus_on_region(name: str) -> Optional[MapFocus]:
    """Viewport target for a click on a region; `None` if unresolvable."""
    coords = region_coordinates(normalize_region_name(name))
    if coords is None:
        return None
    return MapFocus(zoom=REGION_FOCUS_ZOOM, center=coords)


class ZoomGranularityResolver:
    def resolve(self, zoom: float) -> Granularity:
        return resolve_granularity(zoom)
