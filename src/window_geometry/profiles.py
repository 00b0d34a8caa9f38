"""
Cross-section profiles for frame, sash and mullion members.

Profiles are Shapely polygons in (u, v) millimetre coordinates:

- u runs across the member. For ring members u=0 is the ring's outer
  perimeter and u=width is the edge facing the glazed opening. Mullions
  are centered on u=0 because they face glass on both sides.
- v runs through the window depth from the exterior face (v=0) to the
  interior face (v=depth).

Outer frame (L-shape), rebate on the interior side of the opening edge::

    v=d  +----------+
         |          |___  <- rebate (0.3 w wide, 0.3 d deep)
         |              |
    v=0  +--------------+
        u=0            u=w

All builders are pure; identical inputs give identical vertex sequences.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from window_geometry.contracts import CrossSectionPolygon, ProfileKind
from window_geometry.errors import InvalidDimension

logger = logging.getLogger(__name__)

# Outer frame rebate, as fractions of profile width / depth.
OUTER_REBATE_WIDTH_RATIO = 0.3
OUTER_REBATE_DEPTH_RATIO = 0.3

# Mullion stem, as fractions of profile width / depth.
MULLION_STEM_WIDTH_RATIO = 0.4
MULLION_STEM_DEPTH_RATIO = 0.3


@dataclass(frozen=True)
class SashProportions:
    """Sash cross-section ratios.

    ``width_ratio`` is relative to the outer profile width the sash pairs
    with; the face and rebate widths are relative to the sash width, the
    depths to the sash depth.
    """
    width_ratio: float = 0.7
    front_face_ratio: float = 0.85
    overlap_depth_ratio: float = 0.2
    glass_rebate_width_ratio: float = 0.3
    glass_rebate_depth_ratio: float = 0.25


SASH_PROPORTIONS = SashProportions()


def outer_profile(width: float, depth: float) -> CrossSectionPolygon:
    """L-shaped outer frame section with the rebate toward the inside face."""
    w, d = _check_dimensions(width, depth, "outer")
    rebate_w = w * OUTER_REBATE_WIDTH_RATIO
    rebate_d = d * OUTER_REBATE_DEPTH_RATIO

    return _closed_polygon([
        (0.0, 0.0),
        (w, 0.0),
        (w, d - rebate_d),
        (w - rebate_w, d - rebate_d),
        (w - rebate_w, d),
        (0.0, d),
    ])


def sash_profile(width: float, depth: float) -> CrossSectionPolygon:
    """Stepped sash section.

    Args:
        width: Width of the outer frame profile this sash pairs with. The
            sash itself is ``SASH_PROPORTIONS.width_ratio`` of it.
        depth: Depth actually spanned by the sash.

    The back part spans the full sash width; the interior part narrows to
    the front face, which carries a glazing rebate lip on each side of a
    central seat so the glass sits symmetrically.
    """
    w, d = _check_dimensions(width, depth, "sash")
    p = SASH_PROPORTIONS

    sash_w = w * p.width_ratio
    face_inset = (sash_w - sash_w * p.front_face_ratio) / 2.0
    overlap_d = d * p.overlap_depth_ratio
    rebate_w = sash_w * p.glass_rebate_width_ratio
    rebate_d = d * p.glass_rebate_depth_ratio

    return _closed_polygon([
        (0.0, 0.0),
        (sash_w, 0.0),
        (sash_w, d - overlap_d),
        (sash_w - face_inset, d - overlap_d),
        (sash_w - face_inset, d),
        (sash_w - face_inset - rebate_w, d),
        (sash_w - face_inset - rebate_w, d - rebate_d),
        (face_inset + rebate_w, d - rebate_d),
        (face_inset + rebate_w, d),
        (face_inset, d),
        (face_inset, d - overlap_d),
        (0.0, d - overlap_d),
    ])


def mullion_profile(width: float, depth: float) -> CrossSectionPolygon:
    """T-shaped mullion section centered on u=0.

    A narrow stem on the exterior side and a full-width head reaching the
    interior face; the head's shoulders are the glazing rebates for the
    panes on either side.
    """
    w, d = _check_dimensions(width, depth, "mullion")
    half_w = w / 2.0
    half_stem = w * MULLION_STEM_WIDTH_RATIO / 2.0
    stem_d = d * MULLION_STEM_DEPTH_RATIO

    return _closed_polygon([
        (-half_stem, 0.0),
        (half_stem, 0.0),
        (half_stem, stem_d),
        (half_w, stem_d),
        (half_w, d),
        (-half_w, d),
        (-half_w, stem_d),
        (-half_stem, stem_d),
    ])


def rectangle_profile(width: float, depth: float) -> CrossSectionPolygon:
    """Plain rectangle centered on the origin (glazing, test fixtures)."""
    w, d = _check_dimensions(width, depth, "rectangle")
    return _closed_polygon([
        (-w / 2.0, -d / 2.0),
        (w / 2.0, -d / 2.0),
        (w / 2.0, d / 2.0),
        (-w / 2.0, d / 2.0),
    ])


PROFILE_BUILDERS: Dict[ProfileKind, Callable[[float, float], CrossSectionPolygon]] = {
    ProfileKind.OUTER: outer_profile,
    ProfileKind.SASH: sash_profile,
    ProfileKind.MULLION: mullion_profile,
}


def build_profile(kind: ProfileKind, width: float, depth: float) -> CrossSectionPolygon:
    return PROFILE_BUILDERS[kind](width, depth)


def member_width(kind: ProfileKind, profile_width: float) -> float:
    """Width across the member for a nominal (outer) profile width."""
    if kind is ProfileKind.SASH:
        return profile_width * SASH_PROPORTIONS.width_ratio
    return profile_width


def profile_extent(polygon: CrossSectionPolygon) -> Tuple[float, float]:
    """(width, depth) of a section's bounding box."""
    min_u, min_v, max_u, max_v = polygon.bounds
    return (max_u - min_u, max_v - min_v)


# ─── Internal helpers ────────────────────────────────────────────────────────

def _check_dimensions(width: float, depth: float, name: str) -> Tuple[float, float]:
    try:
        w = float(width)
        d = float(depth)
    except (TypeError, ValueError):
        raise InvalidDimension(
            f"{name} profile needs numeric dimensions, got {width!r} x {depth!r}"
        ) from None
    if not (math.isfinite(w) and math.isfinite(d)) or w <= 0 or d <= 0:
        raise InvalidDimension(
            f"{name} profile needs positive dimensions, got {w} x {d}"
        )
    return w, d


def _closed_polygon(points: List[Tuple[float, float]]) -> CrossSectionPolygon:
    polygon = orient(Polygon(points), sign=1.0)
    if not polygon.is_valid or polygon.area <= 0:
        raise InvalidDimension(f"Degenerate profile section: {polygon.wkt}")
    return polygon
