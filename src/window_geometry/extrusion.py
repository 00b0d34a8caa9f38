"""Straight extrusion of a profile section into a prism."""
import logging
import math

import trimesh

from window_geometry.contracts import CrossSectionPolygon
from window_geometry.errors import InvalidDimension, InvalidLength

logger = logging.getLogger(__name__)


def extrude(polygon: CrossSectionPolygon, length: float) -> trimesh.Trimesh:
    """Sweep ``polygon`` along local +Z from 0 to ``length``.

    The profile's (u, v) axes become the prism's local X and Y. The result
    is neither rotated nor translated; placement is the caller's job.

    Raises:
        InvalidLength: ``length`` is not a positive finite number.
        InvalidDimension: the polygon is empty or invalid.
    """
    try:
        length = float(length)
    except (TypeError, ValueError):
        raise InvalidLength(f"Extrusion length must be numeric, got {length!r}") from None
    if not math.isfinite(length) or length <= 0:
        raise InvalidLength(f"Extrusion length must be positive, got {length}")

    if polygon is None or polygon.is_empty or not polygon.is_valid or polygon.area <= 0:
        raise InvalidDimension("Cannot extrude an empty or invalid section")

    mesh = trimesh.creation.extrude_polygon(polygon, height=length)
    logger.debug(
        "Extruded section (%d vertices) to %.2fmm: %d faces",
        len(polygon.exterior.coords) - 1, length, len(mesh.faces),
    )
    return mesh
