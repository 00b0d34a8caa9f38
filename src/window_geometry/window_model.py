"""
Whole-window assembly: outer frame, sashes, glass, muntins, mullions and overlays.

Window space is centered on the frame: X in [-width/2, width/2],
Y in [-height/2, height/2], Z as given by the DepthLayout. Each sash has a
local space whose origin is the center of its bay, with window-space Z;
a sash's live transform maps that local space into window space.
"""
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Union

import numpy as np
import trimesh

from window_geometry.config import ResolvedConfig, WindowConfig, resolve_config
from window_geometry.contracts import (
    Diagnostic, FrameRing, MullionSpec, OpeningKind, PlacedPrism, ProfileKind,
)
from window_geometry.depth_layout import DepthLayout, compute_depth_layout
from window_geometry.frame_assembly import (
    SASH_CLEARANCE_MM, build_ring, build_sash_ring, try_build_ring,
)
from window_geometry.glazing import GlassPane, build_glass_pane, glass_for_sash
from window_geometry.kinematics import (
    DEFAULT_KINEMATICS, KinematicsConfig, SashState, motion_transform,
)
from window_geometry.mullions import build_mullion, place_mullions, required_mullions
from window_geometry.muntins import build_muntins
from window_geometry.overlay import SashOverlay, build_overlay
from window_geometry.profiles import member_width

logger = logging.getLogger(__name__)


@dataclass
class SashGeometry:
    """Static geometry of one sash in its local space."""
    index: int
    opening_kind: OpeningKind
    center_x: float
    bay_width: float
    bay_height: float
    ring: Optional[FrameRing] = None
    ring_transform: np.ndarray = field(default_factory=lambda: np.eye(4))
    glass: Optional[GlassPane] = None
    overlay: Optional[SashOverlay] = None
    muntins: List[PlacedPrism] = field(default_factory=list)
    direct_glazed: bool = False

    @property
    def width(self) -> float:
        return self.bay_width - SASH_CLEARANCE_MM

    @property
    def height(self) -> float:
        return self.bay_height - SASH_CLEARANCE_MM

    def ring_meshes(self) -> List[trimesh.Trimesh]:
        """Ring segments placed in sash-local space."""
        if self.ring is None:
            return []
        meshes = self.ring.placed_meshes()
        for mesh in meshes:
            mesh.apply_transform(self.ring_transform)
        return meshes


@dataclass
class WindowGeometry:
    config: ResolvedConfig
    layout: DepthLayout
    inner_width: float
    inner_height: float
    outer_ring: Optional[FrameRing] = None
    outer_transform: np.ndarray = field(default_factory=lambda: np.eye(4))
    sashes: List[SashGeometry] = field(default_factory=list)
    mullion_specs: List[MullionSpec] = field(default_factory=list)
    mullions: List[PlacedPrism] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def required_mullions(self) -> List[MullionSpec]:
        return required_mullions(self.mullion_specs)

    def outer_meshes(self) -> List[trimesh.Trimesh]:
        if self.outer_ring is None:
            return []
        meshes = self.outer_ring.placed_meshes()
        for mesh in meshes:
            mesh.apply_transform(self.outer_transform)
        return meshes


def build_window(config: Union[WindowConfig, ResolvedConfig, None] = None) -> WindowGeometry:
    """Assemble every static part of a window.

    Unusable choices are replaced by defaults and rings that cannot be
    built are left out; both are listed in ``diagnostics``.
    """
    if config is None:
        config = WindowConfig()
    resolved = resolve_config(config) if isinstance(config, WindowConfig) else config
    diagnostics: List[Diagnostic] = list(resolved.diagnostics)

    profile = resolved.profile
    layout = compute_depth_layout(profile.depth, resolved.glass_thickness)
    inner_width = resolved.width - 2.0 * profile.width
    inner_height = resolved.height - 2.0 * profile.width

    outer_ring = try_build_ring(
        diagnostics, "outer frame", build_ring,
        resolved.width, resolved.height, profile.width, profile.depth,
        kind=ProfileKind.OUTER, profile=profile,
    )
    geometry = WindowGeometry(
        config=resolved,
        layout=layout,
        inner_width=inner_width,
        inner_height=inner_height,
        outer_ring=outer_ring,
        outer_transform=trimesh.transformations.translation_matrix(
            [0.0, 0.0, layout.frame_back]
        ),
        diagnostics=diagnostics,
    )

    bay_width = inner_width / resolved.pane_count
    sash_member_w = member_width(ProfileKind.SASH, profile.width)
    for i, kind in enumerate(resolved.opening_kinds):
        sash = SashGeometry(
            index=i,
            opening_kind=kind,
            center_x=-inner_width / 2.0 + (i + 0.5) * bay_width,
            bay_width=bay_width,
            bay_height=inner_height,
        )
        if kind is OpeningKind.FIXED and resolved.direct_glazing_for_fixed:
            sash.direct_glazed = True
            sash.glass = build_glass_pane(bay_width, inner_height, layout)
        else:
            sash.ring = try_build_ring(
                diagnostics, f"sash {i}", build_sash_ring,
                bay_width, inner_height, profile, layout.sash_depth,
            )
            sash.ring_transform = trimesh.transformations.translation_matrix(
                [0.0, 0.0, layout.sash_back_z]
            )
            if sash.ring is not None:
                sash.glass = glass_for_sash(sash.ring, layout)
        if sash.glass is not None:
            sash.muntins = build_muntins(
                sash.glass.width, sash.glass.height, resolved.muntins, layout,
            )
        if resolved.show_overlays:
            sash.overlay = build_overlay(
                i, kind, sash.width, sash.height, sash_member_w, layout,
            )
        geometry.sashes.append(sash)

    geometry.mullion_specs = place_mullions(
        resolved.opening_kinds,
        dict(enumerate(resolved.mullion_overrides)),
        inner_width,
    )
    for spec in geometry.required_mullions:
        geometry.mullions.append(
            build_mullion(spec, inner_width, inner_height, profile, layout)
        )

    logger.info(
        "Built %.0fx%.0f window (%s): %d sashes, %d mullions, %d diagnostics",
        resolved.width, resolved.height, profile.key,
        len(geometry.sashes), len(geometry.mullions), len(diagnostics),
    )
    return geometry


@lru_cache(maxsize=16)
def cached_window(config: WindowConfig) -> WindowGeometry:
    """build_window memoized per config. Callers must not mutate the result."""
    return build_window(config)


def sash_world_transform(
    geometry: WindowGeometry,
    index: int,
    state: Optional[SashState] = None,
    config: KinematicsConfig = DEFAULT_KINEMATICS,
) -> np.ndarray:
    """Live transform of a sash's local space into window space."""
    sash = geometry.sashes[index]
    bay = trimesh.transformations.translation_matrix([sash.center_x, 0.0, 0.0])
    if state is None:
        return bay
    layout = geometry.layout
    return bay @ motion_transform(
        state, sash.width, sash.height,
        layout.sash_pivot_z, layout.sash_open_extra, config,
    )
