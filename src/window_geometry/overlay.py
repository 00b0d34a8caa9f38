"""
Opening indicators drawn on the glass of each sash.

Everything here is in sash-local coordinates at ``glass_surface_z``, so the
indicators are carried along by the sash's live transform and always sit
on the visible glass surface.
"""
import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from window_geometry.contracts import OpeningKind, Vec3
from window_geometry.depth_layout import DepthLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlayLine:
    start: Vec3
    end: Vec3


@dataclass(frozen=True)
class OverlayButton:
    """Click target; ``action`` is "turn", "tilt" or "none" for markers."""
    action: str
    position: Vec3
    interactive: bool = True


@dataclass
class SashOverlay:
    index: int
    opening_kind: OpeningKind
    lines: List[OverlayLine] = field(default_factory=list)
    buttons: List[OverlayButton] = field(default_factory=list)

    def line_segments(self) -> np.ndarray:
        """(n, 2, 3) array of line endpoints."""
        if not self.lines:
            return np.zeros((0, 2, 3))
        return np.array([[line.start, line.end] for line in self.lines], dtype=float)


def build_overlay(
    index: int,
    kind: OpeningKind,
    sash_width: float,
    sash_height: float,
    member_w: float,
    layout: DepthLayout,
) -> SashOverlay:
    """Indicator lines and buttons for one sash."""
    z = layout.glass_surface_z
    overlay = SashOverlay(index=index, opening_kind=kind)
    half_w, half_h = sash_width / 2.0, sash_height / 2.0

    if kind is OpeningKind.FIXED:
        arm = member_w
        overlay.lines += [
            OverlayLine((-arm, 0.0, z), (arm, 0.0, z)),
            OverlayLine((0.0, -arm, z), (0.0, arm, z)),
        ]
        overlay.buttons.append(OverlayButton("none", (0.0, 0.0, z), interactive=False))
        return overlay

    if kind in (OpeningKind.TURN_LEFT, OpeningKind.TILT_TURN_LEFT):
        overlay.lines += _turn_lines(1.0, half_w, half_h, member_w, z)
        overlay.buttons.append(OverlayButton("turn", (half_w - member_w, sash_height / 4.0, z)))
    elif kind in (OpeningKind.TURN_RIGHT, OpeningKind.TILT_TURN_RIGHT):
        overlay.lines += _turn_lines(-1.0, half_w, half_h, member_w, z)
        overlay.buttons.append(OverlayButton("turn", (-half_w + member_w, sash_height / 4.0, z)))

    if kind in (OpeningKind.TILT, OpeningKind.TILT_TURN_LEFT, OpeningKind.TILT_TURN_RIGHT):
        apex = (0.0, half_h - member_w, z)
        overlay.lines += [
            OverlayLine(apex, (-sash_width / 3.0, -half_h + 2.0 * member_w, z)),
            OverlayLine(apex, (sash_width / 3.0, -half_h + 2.0 * member_w, z)),
        ]
        overlay.buttons.append(OverlayButton("tilt", apex))

    return overlay


def _turn_lines(free_side, half_w, half_h, member_w, z) -> List[OverlayLine]:
    # From the free edge's midpoint to the two corners on the hinge side.
    start = (free_side * (half_w - member_w), 0.0, z)
    hinge_x = -free_side * (half_w - 2.0 * member_w)
    corner_y = half_h - 2.0 * member_w
    return [
        OverlayLine(start, (hinge_x, corner_y, z)),
        OverlayLine(start, (hinge_x, -corner_y, z)),
    ]
