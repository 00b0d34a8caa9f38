"""
Depth (Z) layout shared by every layer of the window.

All Z offsets used by the frame, sash, glass, muntin and overlay builders
come from ``compute_depth_layout``. Consumers read the fields and
properties here; none of them derives a depth constant of its own.

The frame occupies ``[frame_back, frame_front]`` in window space. The sash
group (``sash_closed_z``, ``glass_z``, ``glass_front_z``) is given as
offsets from the frame's origin, its depth center ``frame_origin_z``; the
``*_z`` properties below turn those into absolute window-space Z for the
closed state, with +Z toward the room.
"""
import logging
import math
from dataclasses import dataclass

from window_geometry.errors import InvalidDimension
from window_geometry.profiles import OUTER_REBATE_DEPTH_RATIO

logger = logging.getLogger(__name__)

SASH_CLOSED_RATIO = 0.15
SASH_DEPTH_RATIO = 0.6
# Extra forward offset while a sash is swung open. A rendering convenience
# that keeps the open sash clear of the frame face; not derived from any
# physical dimension.
SASH_OPEN_EXTRA_RATIO = 0.1
MUNTIN_DEPTH_RATIO = 0.1


@dataclass(frozen=True)
class DepthLayout:
    profile_depth: float
    glass_thickness: float
    frame_back: float
    frame_front: float
    sash_closed_z: float    # from frame_origin_z
    sash_open_extra: float
    sash_depth: float
    glass_z: float          # from frame_origin_z
    glass_front_z: float    # from frame_origin_z
    muntin_depth: float

    @property
    def frame_depth(self) -> float:
        return self.frame_front - self.frame_back

    @property
    def frame_origin_z(self) -> float:
        return (self.frame_back + self.frame_front) / 2.0

    @property
    def rebate_back_z(self) -> float:
        """Exterior end of the outer frame's rebate band."""
        return self.frame_front - OUTER_REBATE_DEPTH_RATIO * self.profile_depth

    @property
    def sash_pivot_z(self) -> float:
        """Hinge line depth; the closed sash's depth center."""
        return self.frame_origin_z + self.sash_closed_z

    @property
    def sash_back_z(self) -> float:
        """Exterior face of a closed sash."""
        return self.sash_pivot_z - self.sash_depth / 2.0

    @property
    def sash_front_z(self) -> float:
        """Interior face of a closed sash."""
        return self.sash_pivot_z + self.sash_depth / 2.0

    @property
    def glass_center_z(self) -> float:
        return self.frame_origin_z + self.glass_z

    @property
    def glass_surface_z(self) -> float:
        """Visible glass surface; the anchor for anything drawn on the glass."""
        return self.frame_origin_z + self.glass_front_z

    @property
    def glass_back_z(self) -> float:
        return self.glass_center_z - self.glass_thickness / 2.0


def compute_depth_layout(profile_depth: float, glass_thickness: float) -> DepthLayout:
    """Derive every depth offset from the profile depth and glass thickness.

    Raises:
        InvalidDimension: profile_depth <= 0 or glass_thickness < 0.
    """
    d = float(profile_depth)
    t = float(glass_thickness)
    if not math.isfinite(d) or d <= 0:
        raise InvalidDimension(f"Profile depth must be positive, got {profile_depth!r}")
    if not math.isfinite(t) or t < 0:
        raise InvalidDimension(f"Glass thickness must be >= 0, got {glass_thickness!r}")

    sash_closed_z = SASH_CLOSED_RATIO * d
    sash_depth = SASH_DEPTH_RATIO * d
    glass_z = sash_closed_z - sash_depth / 2.0 + t / 2.0

    return DepthLayout(
        profile_depth=d,
        glass_thickness=t,
        frame_back=d / 2.0,
        frame_front=3.0 * d / 2.0,
        sash_closed_z=sash_closed_z,
        sash_open_extra=SASH_OPEN_EXTRA_RATIO * d,
        sash_depth=sash_depth,
        glass_z=glass_z,
        glass_front_z=glass_z + t / 2.0,
        muntin_depth=MUNTIN_DEPTH_RATIO * d,
    )
