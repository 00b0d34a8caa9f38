"""Glass panes seated in sash rings or directly in a frame bay."""
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import trimesh

from window_geometry.contracts import FrameRing
from window_geometry.depth_layout import DepthLayout
from window_geometry.extrusion import extrude
from window_geometry.profiles import rectangle_profile

logger = logging.getLogger(__name__)


@dataclass
class GlassPane:
    """A glass slab centered at ``center_z``.

    Coordinates are sash-local, whether the pane is held by a sash ring or
    glazed directly into the bay; the sash-bay transform places it.
    """
    width: float
    height: float
    thickness: float
    center_z: float
    mesh: trimesh.Trimesh
    transform: np.ndarray

    @property
    def front_z(self) -> float:
        return self.center_z + self.thickness / 2.0

    def placed_mesh(self) -> trimesh.Trimesh:
        mesh = self.mesh.copy()
        mesh.apply_transform(self.transform)
        return mesh


def build_glass_pane(
    width: float,
    height: float,
    layout: DepthLayout,
    center_x: float = 0.0,
) -> Optional[GlassPane]:
    """Glass of the given size centered at ``layout.glass_center_z``.

    Returns None for zero thickness.
    """
    thickness = layout.glass_thickness
    if thickness <= 0:
        logger.info("Glass thickness is 0, no pane built")
        return None

    mesh = extrude(rectangle_profile(width, height), thickness)
    transform = trimesh.transformations.translation_matrix(
        [center_x, 0.0, layout.glass_back_z]
    )
    return GlassPane(
        width=float(width),
        height=float(height),
        thickness=thickness,
        center_z=layout.glass_center_z,
        mesh=mesh,
        transform=transform,
    )


def glass_for_sash(ring: FrameRing, layout: DepthLayout) -> Optional[GlassPane]:
    """Pane filling a sash ring's clear opening, in sash-local space."""
    return build_glass_pane(
        ring.width - 2.0 * ring.member_width,
        ring.height - 2.0 * ring.member_width,
        layout,
    )
