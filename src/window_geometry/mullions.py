"""
Mullion placement between adjacent sashes.

A sash needs support on one of its vertical sides when nothing else holds
that edge: fixed, tilt and tilt-turn sashes need both sides, a pure turn
sash needs the side its free edge swings away from. A boundary gets a
mullion when either neighbour needs support there, unless a manual
override says otherwise.
"""
import logging
from typing import List, Mapping, Optional, Sequence

import numpy as np

from window_geometry.contracts import (
    EdgeRole, MullionOverride, MullionSource, MullionSpec, OpeningKind,
    PlacedPrism, ProfileKind, ProfileSpec,
)
from window_geometry.depth_layout import DepthLayout
from window_geometry.extrusion import extrude
from window_geometry.profiles import build_profile

logger = logging.getLogger(__name__)

_BOTH_SIDES = frozenset({
    OpeningKind.FIXED,
    OpeningKind.TILT,
    OpeningKind.TILT_TURN_LEFT,
    OpeningKind.TILT_TURN_RIGHT,
})

# Edge that swings free when a pure turn sash opens.
_FREE_EDGE = {
    OpeningKind.TURN_LEFT: EdgeRole.RIGHT,
    OpeningKind.TURN_RIGHT: EdgeRole.LEFT,
}

_OVERRIDE_SOURCE = {
    MullionOverride.YES: MullionSource.MANUAL_YES,
    MullionOverride.NO: MullionSource.MANUAL_NO,
}


def needs_support(kind: OpeningKind, side: EdgeRole) -> bool:
    """Whether a sash of ``kind`` needs a mullion on its ``side`` edge."""
    if kind in _BOTH_SIDES:
        return True
    return _FREE_EDGE.get(kind) is side


def place_mullions(
    opening_kinds: Sequence[OpeningKind],
    overrides: Optional[Mapping[int, MullionOverride]] = None,
    inner_width: float = 0.0,
) -> List[MullionSpec]:
    """Decide every boundary between adjacent sashes.

    Args:
        opening_kinds: One kind per sash, left to right.
        overrides: Manual choice per boundary index; missing means auto.
        inner_width: Clear width inside the outer frame; sash bays split it
            equally and ``x_position`` is measured from its left edge.

    Returns:
        One MullionSpec per boundary (``len(opening_kinds) - 1``), required
        or not.
    """
    overrides = overrides or {}
    count = len(opening_kinds)
    bay_width = inner_width / count if count else 0.0

    specs = []
    for i in range(count - 1):
        left, right = opening_kinds[i], opening_kinds[i + 1]
        required = needs_support(left, EdgeRole.RIGHT) or needs_support(right, EdgeRole.LEFT)
        override = overrides.get(i, MullionOverride.AUTO)
        source = _OVERRIDE_SOURCE.get(override, MullionSource.AUTO)
        if source is not MullionSource.AUTO:
            required = override is MullionOverride.YES
        specs.append(MullionSpec(
            boundary_index=i,
            x_position=(i + 1) * bay_width,
            required=required,
            source=source,
        ))
        logger.debug("Boundary %d (%s | %s): required=%s (%s)",
                     i, left.value, right.value, required, source.value)
    return specs


def required_mullions(specs: Sequence[MullionSpec]) -> List[MullionSpec]:
    return [spec for spec in specs if spec.required]


def build_mullion(
    spec: MullionSpec,
    inner_width: float,
    inner_height: float,
    profile: ProfileSpec,
    layout: DepthLayout,
) -> PlacedPrism:
    """Upright mullion prism at a boundary, in window space.

    The T-section stands with its head on the interior face and runs the
    frame's inner height, within the frame's depth range.
    """
    polygon = build_profile(ProfileKind.MULLION, profile.width, profile.depth)
    mesh = extrude(polygon, inner_height)

    transform = np.eye(4)
    # u -> +X, v -> +Z, s -> -Y
    transform[:3, :3] = np.array([
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
        [0.0, 1.0, 0.0],
    ])
    transform[:3, 3] = [
        -inner_width / 2.0 + spec.x_position,
        inner_height / 2.0,
        layout.frame_back,
    ]
    return PlacedPrism(name=f"mullion_{spec.boundary_index}", mesh=mesh, transform=transform)
