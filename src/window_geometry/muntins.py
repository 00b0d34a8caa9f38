"""
Muntins (glazing bars) laid over a pane.

Bars are flat prisms on the glass surface, evenly spaced over the pane:
``rows`` horizontal bars split the height into ``rows + 1`` equal fields,
``columns`` vertical bars split the width likewise. A cross is one bar
of each through the pane center. Crossing bars simply overlap.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

import trimesh

from window_geometry.contracts import PlacedPrism
from window_geometry.depth_layout import DepthLayout
from window_geometry.extrusion import extrude
from window_geometry.profiles import rectangle_profile

logger = logging.getLogger(__name__)

DEFAULT_MUNTIN_WIDTH_MM = 20.0
MAX_MUNTIN_DIVISIONS = 8


class MuntinPattern(Enum):
    NONE = "none"
    GRID = "grid"
    CROSS = "cross"


@dataclass(frozen=True)
class MuntinLayout:
    pattern: MuntinPattern = MuntinPattern.NONE
    rows: int = 0
    columns: int = 0
    bar_width: float = DEFAULT_MUNTIN_WIDTH_MM

    @property
    def divisions(self):
        """(rows, columns) of bars actually drawn."""
        if self.pattern is MuntinPattern.CROSS:
            return 1, 1
        if self.pattern is MuntinPattern.GRID:
            return self.rows, self.columns
        return 0, 0


NO_MUNTINS = MuntinLayout()


def bar_offsets(span: float, count: int) -> List[float]:
    """Centers of ``count`` bars splitting ``span`` (centered on 0) evenly."""
    spacing = span / (count + 1)
    return [-span / 2.0 + i * spacing for i in range(1, count + 1)]


def build_muntins(
    glass_width: float,
    glass_height: float,
    muntins: MuntinLayout,
    layout: DepthLayout,
) -> List[PlacedPrism]:
    """Muntin bars over a pane, in the pane's sash-local space."""
    rows, columns = muntins.divisions
    if rows == 0 and columns == 0:
        return []

    z = layout.glass_surface_z
    bars = []
    # Top to bottom.
    for i, y in enumerate(reversed(bar_offsets(glass_height, rows))):
        mesh = extrude(rectangle_profile(glass_width, muntins.bar_width), layout.muntin_depth)
        bars.append(PlacedPrism(
            name=f"horizontal_{i}",
            mesh=mesh,
            transform=trimesh.transformations.translation_matrix([0.0, y, z]),
        ))
    for i, x in enumerate(bar_offsets(glass_width, columns)):
        mesh = extrude(rectangle_profile(muntins.bar_width, glass_height), layout.muntin_depth)
        bars.append(PlacedPrism(
            name=f"vertical_{i}",
            mesh=mesh,
            transform=trimesh.transformations.translation_matrix([x, 0.0, z]),
        ))

    logger.debug("Built %d muntin bars (%s)", len(bars), muntins.pattern.value)
    return bars
