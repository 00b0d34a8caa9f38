"""
Window profile catalog.

Realistic width/depth pairs for the outer frame profile, modelled on common
European PVC and aluminium systems, plus the glazing unit thicknesses the
configurator offers. Profile choices from the host arrive either as a key
or as a 1-based option index.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from window_geometry.contracts import ProfileKind, ProfileSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileEntry:
    """A profile system available in the configurator."""

    key: str
    label: str
    width_mm: float            # total frame member width
    depth_mm: float            # frame depth through the wall
    glass_rebate_depth_mm: float
    sightline_mm: float        # visible frame width from inside

    def to_spec(self, kind: ProfileKind = ProfileKind.OUTER) -> ProfileSpec:
        return ProfileSpec(
            width=self.width_mm,
            depth=self.depth_mm,
            kind=kind,
            key=self.key,
            glass_rebate_depth=self.glass_rebate_depth_mm,
            sightline=self.sightline_mm,
        )


PROFILE_LIBRARY = {
    "minimal": ProfileEntry(
        key="minimal",
        label="Minimal (40mm)",
        width_mm=40.0,
        depth_mm=50.0,
        glass_rebate_depth_mm=15.0,
        sightline_mm=25.0,
    ),
    "modern-slim": ProfileEntry(
        key="modern-slim",
        label="Modern Slim (60mm)",
        width_mm=60.0,  # 60mm PVC systems
        depth_mm=70.0,
        glass_rebate_depth_mm=18.0,
        sightline_mm=35.0,
    ),
    "modern-wide": ProfileEntry(
        key="modern-wide",
        label="Modern Wide (80mm)",
        width_mm=80.0,  # 70-82mm PVC systems with thermal break
        depth_mm=82.0,
        glass_rebate_depth_mm=22.0,
        sightline_mm=45.0,
    ),
    "traditional": ProfileEntry(
        key="traditional",
        label="Traditional (100mm)",
        width_mm=100.0,
        depth_mm=90.0,
        glass_rebate_depth_mm=25.0,
        sightline_mm=55.0,
    ),
}

# Order of the host's 1-based profile option list.
PROFILE_CHOICES: Tuple[str, ...] = ("minimal", "modern-slim", "modern-wide", "traditional")

DEFAULT_PROFILE_KEY = "modern-slim"

# Glazing unit thickness in mm by glass type.
GLASS_TYPES = {
    "single": 4.0,
    "double": 24.0,
    "triple": 44.0,
}

DEFAULT_GLASS_THICKNESS_MM = GLASS_TYPES["double"]


def lookup_profile(key: Union[str, int, None]) -> Optional[ProfileEntry]:
    """Find a library entry by key or 1-based option index, or None."""
    if key is None or isinstance(key, bool):
        return None
    if isinstance(key, int):
        if 1 <= key <= len(PROFILE_CHOICES):
            return PROFILE_LIBRARY[PROFILE_CHOICES[key - 1]]
        return None
    text = str(key).strip().lower()
    if text.isdigit():
        return lookup_profile(int(text))
    return PROFILE_LIBRARY.get(text)


def resolve_profile(key: Union[str, int, None]) -> Tuple[ProfileSpec, bool]:
    """Resolve a profile choice to a spec.

    Returns:
        (spec, resolved) where ``resolved`` is False when the key was not
        in the library and the default profile was substituted.
    """
    entry = lookup_profile(key)
    if entry is None:
        logger.warning(
            "Unknown profile key %r, using %s", key, DEFAULT_PROFILE_KEY,
        )
        return PROFILE_LIBRARY[DEFAULT_PROFILE_KEY].to_spec(), False
    return entry.to_spec(), True


def resolve_glass_thickness(value: Union[str, float, int, None]) -> Tuple[float, bool]:
    """Resolve a glass type name or a thickness in mm.

    Returns:
        (thickness_mm, resolved); unknown or negative values fall back to
        double glazing.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_GLASS_THICKNESS_MM, False
    if isinstance(value, str) and value.strip().lower() in GLASS_TYPES:
        return GLASS_TYPES[value.strip().lower()], True
    try:
        thickness = float(value)
    except (TypeError, ValueError):
        thickness = float("nan")
    if not math.isfinite(thickness) or thickness < 0:
        logger.warning(
            "Invalid glass thickness %r, using %.1fmm",
            value, DEFAULT_GLASS_THICKNESS_MM,
        )
        return DEFAULT_GLASS_THICKNESS_MM, False
    return thickness, True
