"""Data contracts shared by the window geometry modules.

Units are millimetres throughout. World space is right handed: X runs
along the window width, Y up the height, and +Z points toward the room
(the side sashes swing into).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
import trimesh
from shapely.geometry import Polygon

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

# Closed, non-self-intersecting 2D section in (u, v) profile coordinates.
CrossSectionPolygon = Polygon


class ProfileKind(Enum):
    """Frame member families that have their own cross-section."""
    OUTER = "outer"
    SASH = "sash"
    MULLION = "mullion"


class EdgeRole(Enum):
    """Which side of a rectangular ring a segment forms."""
    BOTTOM = "bottom"
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"


class OpeningKind(Enum):
    """How a sash opens."""
    FIXED = "fixed"
    TILT = "tilt"
    TURN_LEFT = "turn-left"
    TURN_RIGHT = "turn-right"
    TILT_TURN_LEFT = "tilt-turn-left"
    TILT_TURN_RIGHT = "tilt-turn-right"

    @property
    def is_hybrid(self) -> bool:
        return self in (OpeningKind.TILT_TURN_LEFT, OpeningKind.TILT_TURN_RIGHT)

    @property
    def is_operable(self) -> bool:
        return self is not OpeningKind.FIXED


class SashMode(Enum):
    """Active mechanism of a tilt-turn sash."""
    TURN = "turn"
    TILT = "tilt"


class MullionOverride(Enum):
    """Per-boundary manual mullion choice."""
    AUTO = "auto"
    YES = "yes"
    NO = "no"


class MullionSource(Enum):
    """Where a mullion decision came from."""
    AUTO = "auto"
    MANUAL_YES = "manualYes"
    MANUAL_NO = "manualNo"


@dataclass(frozen=True)
class ProfileSpec:
    """Nominal cross-section size of a frame member.

    ``width`` is the library width of the outer frame profile the member
    belongs to; sash members derive their own (narrower) width from it.
    """
    width: float
    depth: float
    kind: ProfileKind = ProfileKind.OUTER
    key: str = "custom"
    glass_rebate_depth: float = 0.0
    sightline: float = 0.0


@dataclass
class FrameSegment:
    """One extruded member of a ring.

    ``mesh`` is in local coordinates (profile in XY, extruded along +Z from
    0 to ``length``); ``transform`` maps it into ring space.
    """
    role: EdgeRole
    mesh: trimesh.Trimesh
    length: float
    transform: np.ndarray  # (4, 4)

    def to_ring(self, local_point) -> np.ndarray:
        """Map a local (u, v, s) point into ring space."""
        p = np.append(np.asarray(local_point, dtype=float), 1.0)
        return (self.transform @ p)[:3]

    def placed_mesh(self) -> trimesh.Trimesh:
        mesh = self.mesh.copy()
        mesh.apply_transform(self.transform)
        return mesh


@dataclass
class FrameRing:
    """Four segments forming a rectangular ring centered on the ring origin.

    Ring space: X in [-width/2, width/2], Y in [-height/2, height/2],
    Z in [0, profile_depth].
    """
    kind: ProfileKind
    width: float
    height: float
    member_width: float
    profile_depth: float
    profile: ProfileSpec
    polygon: CrossSectionPolygon
    segments: Dict[EdgeRole, FrameSegment]

    def segment(self, role: EdgeRole) -> FrameSegment:
        return self.segments[role]

    def placed_meshes(self) -> List[trimesh.Trimesh]:
        return [self.segments[role].placed_mesh() for role in EdgeRole]

    def mesh(self) -> trimesh.Trimesh:
        """All four placed segments as one mesh (no boolean union)."""
        return trimesh.util.concatenate(self.placed_meshes())


@dataclass(frozen=True)
class MullionSpec:
    """Decision for one boundary between adjacent sashes.

    ``x_position`` is measured from the frame's left inner edge.
    """
    boundary_index: int
    x_position: float
    required: bool
    source: MullionSource = MullionSource.AUTO


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem that was resolved to a default."""
    code: str
    message: str
    severity: str = "warning"  # "warning" or "info"


@dataclass
class PlacedPrism:
    """A local prism plus the transform that positions it."""
    name: str
    mesh: trimesh.Trimesh
    transform: np.ndarray = field(default_factory=lambda: np.eye(4))

    def placed_mesh(self) -> trimesh.Trimesh:
        mesh = self.mesh.copy()
        mesh.apply_transform(self.transform)
        return mesh
