"""
Rectangular frame rings built from four extruded profile segments.

Corner joint convention: the left and right members run the full ring
height, the bottom and top members are shortened by one member width at
each end and butt against them. Each segment is placed by one lookup in
EDGE_PLACEMENTS, so every edge is handled by the same placement function.

Segment local frame: u (profile X), v (profile Y), s (extrusion, +Z).
For every edge, v maps to ring +Z so the rebate side of each profile ends
up on the interior face, and u points from the ring's outer perimeter
toward the opening.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from window_geometry.contracts import (
    Diagnostic, EdgeRole, FrameRing, FrameSegment, ProfileKind, ProfileSpec,
)
from window_geometry.errors import InvalidDimension, WindowGeometryError
from window_geometry.extrusion import extrude
from window_geometry.profiles import build_profile, member_width

logger = logging.getLogger(__name__)

# Total clearance between a sash ring and its bay, per axis.
SASH_CLEARANCE_MM = 3.0


@dataclass(frozen=True)
class EdgePlacement:
    """Fixed orientation and position rule for one edge of a ring.

    ``axes`` are the ring-space images of the local u, v and s axes.
    The segment origin sits at ``anchor * (width/2, height/2)`` plus
    ``inset * member_width``.
    """
    axes: Tuple[Tuple[float, float, float], ...]
    anchor: Tuple[float, float]
    inset: Tuple[float, float]
    horizontal: bool


EDGE_PLACEMENTS: Dict[EdgeRole, EdgePlacement] = {
    EdgeRole.BOTTOM: EdgePlacement(
        axes=((0, 1, 0), (0, 0, 1), (1, 0, 0)),
        anchor=(-1, -1), inset=(1, 0), horizontal=True,
    ),
    EdgeRole.TOP: EdgePlacement(
        axes=((0, -1, 0), (0, 0, 1), (-1, 0, 0)),
        anchor=(1, 1), inset=(-1, 0), horizontal=True,
    ),
    EdgeRole.LEFT: EdgePlacement(
        axes=((1, 0, 0), (0, 0, 1), (0, -1, 0)),
        anchor=(-1, 1), inset=(0, 0), horizontal=False,
    ),
    EdgeRole.RIGHT: EdgePlacement(
        axes=((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
        anchor=(1, -1), inset=(0, 0), horizontal=False,
    ),
}

# (corner, horizontal edge, its end, vertical edge, its end); end 0 is s=0,
# end 1 is s=length.
CORNERS: Tuple[Tuple[str, EdgeRole, int, EdgeRole, int], ...] = (
    ("bottom-left", EdgeRole.BOTTOM, 0, EdgeRole.LEFT, 1),
    ("bottom-right", EdgeRole.BOTTOM, 1, EdgeRole.RIGHT, 0),
    ("top-right", EdgeRole.TOP, 0, EdgeRole.RIGHT, 1),
    ("top-left", EdgeRole.TOP, 1, EdgeRole.LEFT, 0),
)


@dataclass
class CornerJoint:
    """Matching endpoints of two segments meeting at one ring corner."""
    name: str
    horizontal_points: np.ndarray  # (4, 3)
    vertical_points: np.ndarray    # (4, 3)

    @property
    def mismatch(self) -> float:
        return float(np.max(np.linalg.norm(
            self.horizontal_points - self.vertical_points, axis=1,
        )))


def segment_length(role: EdgeRole, width: float, height: float, member_w: float) -> float:
    if EDGE_PLACEMENTS[role].horizontal:
        return width - 2.0 * member_w
    return height


def placement_transform(
    role: EdgeRole, width: float, height: float, member_w: float,
) -> np.ndarray:
    """4x4 transform taking a segment's local (u, v, s) into ring space."""
    placement = EDGE_PLACEMENTS[role]
    transform = np.eye(4)
    transform[:3, :3] = np.array(placement.axes, dtype=float).T
    transform[0, 3] = placement.anchor[0] * width / 2.0 + placement.inset[0] * member_w
    transform[1, 3] = placement.anchor[1] * height / 2.0 + placement.inset[1] * member_w
    return transform


def build_ring(
    width: float,
    height: float,
    profile_width: float,
    profile_depth: float,
    kind: ProfileKind = ProfileKind.OUTER,
    profile: Optional[ProfileSpec] = None,
) -> FrameRing:
    """Extrude and place the four segments of a ring.

    Args:
        width, height: Outer size of the ring in mm.
        profile_width: Nominal (outer frame) profile width. Sash rings use
            the derived sash member width.
        profile_depth: Depth spanned by the ring's members.
        kind: OUTER or SASH.
        profile: Library spec the ring came from, kept for reference.

    Raises:
        InvalidDimension: the ring is too small for its members, or the
            profile dimensions are invalid.
        InvalidLength: a segment length is not positive.
    """
    if kind is ProfileKind.MULLION:
        raise InvalidDimension("Mullion sections do not form rings")

    polygon = build_profile(kind, profile_width, profile_depth)
    member_w = member_width(kind, profile_width)
    if height <= 2.0 * member_w:
        raise InvalidDimension(
            f"Ring height {height:.2f}mm does not fit two {member_w:.2f}mm members"
        )

    segments: Dict[EdgeRole, FrameSegment] = {}
    for role in EdgeRole:
        length = segment_length(role, width, height, member_w)
        segments[role] = FrameSegment(
            role=role,
            mesh=extrude(polygon, length),
            length=length,
            transform=placement_transform(role, width, height, member_w),
        )

    if profile is None:
        profile = ProfileSpec(width=profile_width, depth=profile_depth, kind=kind)

    logger.debug(
        "Built %s ring %.1f x %.1f (member %.1f, depth %.1f)",
        kind.value, width, height, member_w, profile_depth,
    )
    return FrameRing(
        kind=kind,
        width=float(width),
        height=float(height),
        member_width=member_w,
        profile_depth=float(profile_depth),
        profile=profile,
        polygon=polygon,
        segments=segments,
    )


def build_sash_ring(
    bay_width: float, bay_height: float, profile: ProfileSpec, sash_depth: float,
) -> FrameRing:
    """Sash ring sized to a bay less the fixed clearance."""
    return build_ring(
        bay_width - SASH_CLEARANCE_MM,
        bay_height - SASH_CLEARANCE_MM,
        profile.width,
        sash_depth,
        kind=ProfileKind.SASH,
        profile=profile,
    )


def try_build_ring(
    diagnostics: List[Diagnostic], label: str, builder, *args, **kwargs,
) -> Optional[FrameRing]:
    """Run a ring builder; on a geometry error record it and return None.

    A failing ring is omitted so sibling rings still build.
    """
    try:
        return builder(*args, **kwargs)
    except WindowGeometryError as exc:
        logger.warning("Omitting %s: %s", label, exc)
        diagnostics.append(Diagnostic(
            code="ring_omitted", message=f"{label}: {exc}",
        ))
        return None


def corner_joints(ring: FrameRing) -> List[CornerJoint]:
    """Endpoints that adjacent segments must share at each corner.

    At every corner and on both depth faces, the horizontal member's end
    face touches the vertical member's inner face: its outer edge meets
    the vertical member at the perimeter line, its inner edge meets it
    one member width further along.
    """
    mw = ring.member_width
    joints = []
    for name, h_role, h_end, v_role, v_end in CORNERS:
        h_seg = ring.segment(h_role)
        v_seg = ring.segment(v_role)
        s_h = h_seg.length if h_end else 0.0
        s_v = v_seg.length if v_end else 0.0
        # Step from the vertical member's end toward the ring interior.
        s_v_inner = s_v - mw if v_end else s_v + mw

        h_points, v_points = [], []
        for v in (0.0, ring.profile_depth):
            h_points.append(h_seg.to_ring((0.0, v, s_h)))
            v_points.append(v_seg.to_ring((mw, v, s_v)))
            h_points.append(h_seg.to_ring((mw, v, s_h)))
            v_points.append(v_seg.to_ring((mw, v, s_v_inner)))
        joints.append(CornerJoint(name, np.array(h_points), np.array(v_points)))
    return joints


def max_corner_mismatch(ring: FrameRing) -> float:
    return max(joint.mismatch for joint in corner_joints(ring))
