"""
Window configuration and its resolution to safe values.

``WindowConfig`` holds the raw choices coming from the host (keys, option
numbers, legacy names). ``resolve_config`` turns them into typed values,
replacing anything unusable with a documented default and recording a
Diagnostic for it, so a bad choice never stops the rest of the window
from building.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from window_geometry.contracts import (
    Diagnostic, MullionOverride, OpeningKind, ProfileSpec,
)
from window_geometry.muntins import (
    DEFAULT_MUNTIN_WIDTH_MM, MAX_MUNTIN_DIVISIONS, NO_MUNTINS, MuntinLayout, MuntinPattern,
)
from window_geometry.profile_library import (
    DEFAULT_GLASS_THICKNESS_MM, DEFAULT_PROFILE_KEY, resolve_glass_thickness,
    resolve_profile,
)

logger = logging.getLogger(__name__)

DEFAULT_WIDTH_MM = 1000.0
DEFAULT_HEIGHT_MM = 1200.0
MIN_DIMENSION_MM = 400.0
MAX_DIMENSION_MM = 3000.0
MIN_PANES = 1
MAX_PANES = 3

DEFAULT_OPENING_KINDS: Tuple[OpeningKind, ...] = (
    OpeningKind.TILT_TURN_LEFT,
    OpeningKind.TILT_TURN_RIGHT,
    OpeningKind.TILT_TURN_LEFT,
)

# Host option lists are 1-based in this order.
OPENING_KIND_CHOICES: Tuple[OpeningKind, ...] = (
    OpeningKind.FIXED,
    OpeningKind.TILT,
    OpeningKind.TURN_LEFT,
    OpeningKind.TURN_RIGHT,
    OpeningKind.TILT_TURN_LEFT,
    OpeningKind.TILT_TURN_RIGHT,
)

LEGACY_OPENING_NAMES = {
    "kipp": OpeningKind.TILT,
    "dreh-links": OpeningKind.TURN_LEFT,
    "dreh-rechts": OpeningKind.TURN_RIGHT,
    "dreh-kipp-links": OpeningKind.TILT_TURN_LEFT,
    "dreh-kipp-rechts": OpeningKind.TILT_TURN_RIGHT,
    "fest": OpeningKind.FIXED,
}

# Host mullion option numbers.
MULLION_OVERRIDE_CHOICES = {
    0: MullionOverride.AUTO,
    1: MullionOverride.NO,
    2: MullionOverride.YES,
}

RawValue = Union[str, int, float, None]


@dataclass(frozen=True)
class WindowConfig:
    """User choices for one window. Hashable, so geometry can be cached on it."""
    width_mm: RawValue = DEFAULT_WIDTH_MM
    height_mm: RawValue = DEFAULT_HEIGHT_MM
    pane_count: RawValue = 1
    profile_key: RawValue = DEFAULT_PROFILE_KEY
    opening_kinds: Tuple[RawValue, ...] = ()
    mullion_overrides: Tuple[RawValue, ...] = ()
    glass_thickness_mm: RawValue = DEFAULT_GLASS_THICKNESS_MM
    show_overlays: bool = True
    direct_glazing_for_fixed: bool = False
    muntin_pattern: RawValue = MuntinPattern.NONE.value
    muntin_rows: RawValue = 0
    muntin_columns: RawValue = 0
    muntin_width_mm: RawValue = DEFAULT_MUNTIN_WIDTH_MM

    def __post_init__(self):
        object.__setattr__(self, "opening_kinds", tuple(self.opening_kinds))
        object.__setattr__(self, "mullion_overrides", tuple(self.mullion_overrides))

    @classmethod
    def from_choices(
        cls,
        width_cm: RawValue = None,
        height_cm: RawValue = None,
        panes: RawValue = 1,
        profile: RawValue = DEFAULT_PROFILE_KEY,
        opening_kinds: Sequence[RawValue] = (),
        mullion_overrides: Sequence[RawValue] = (),
        glass: RawValue = DEFAULT_GLASS_THICKNESS_MM,
        show_overlays: bool = True,
        direct_glazing_for_fixed: bool = False,
        muntins: RawValue = MuntinPattern.NONE.value,
        muntin_rows: RawValue = 0,
        muntin_columns: RawValue = 0,
        muntin_width_cm: RawValue = None,
    ) -> "WindowConfig":
        """Build from host property values, where dimensions are in cm."""
        return cls(
            width_mm=_cm_to_mm(width_cm, DEFAULT_WIDTH_MM),
            height_mm=_cm_to_mm(height_cm, DEFAULT_HEIGHT_MM),
            pane_count=panes,
            profile_key=profile,
            opening_kinds=tuple(opening_kinds),
            mullion_overrides=tuple(mullion_overrides),
            glass_thickness_mm=glass,
            show_overlays=show_overlays,
            direct_glazing_for_fixed=direct_glazing_for_fixed,
            muntin_pattern=muntins,
            muntin_rows=muntin_rows,
            muntin_columns=muntin_columns,
            muntin_width_mm=_cm_to_mm(muntin_width_cm, DEFAULT_MUNTIN_WIDTH_MM),
        )


@dataclass(frozen=True)
class ResolvedConfig:
    width: float
    height: float
    pane_count: int
    profile: ProfileSpec
    opening_kinds: Tuple[OpeningKind, ...]
    mullion_overrides: Tuple[MullionOverride, ...]
    glass_thickness: float
    show_overlays: bool = True
    direct_glazing_for_fixed: bool = False
    muntins: MuntinLayout = NO_MUNTINS
    diagnostics: Tuple[Diagnostic, ...] = field(default=(), compare=False)


def parse_opening_kind(value: RawValue) -> Tuple[OpeningKind, bool]:
    """Map a kind name, legacy name or 1-based option to an OpeningKind.

    Returns:
        (kind, resolved); unknown values give (FIXED, False).
    """
    if isinstance(value, OpeningKind):
        return value, True
    if isinstance(value, int) and not isinstance(value, bool):
        if 1 <= value <= len(OPENING_KIND_CHOICES):
            return OPENING_KIND_CHOICES[value - 1], True
        return OpeningKind.FIXED, False
    if isinstance(value, str):
        text = value.strip().lower().replace("_", "-")
        if text.isdigit():
            return parse_opening_kind(int(text))
        if text in LEGACY_OPENING_NAMES:
            return LEGACY_OPENING_NAMES[text], True
        for kind in OpeningKind:
            if kind.value == text:
                return kind, True
    return OpeningKind.FIXED, False


def parse_mullion_override(value: RawValue) -> Tuple[MullionOverride, bool]:
    """Map "auto"/"yes"/"no" or host option 0/1/2 to an override."""
    if value is None:
        return MullionOverride.AUTO, True
    if isinstance(value, MullionOverride):
        return value, True
    if isinstance(value, int) and not isinstance(value, bool):
        if value in MULLION_OVERRIDE_CHOICES:
            return MULLION_OVERRIDE_CHOICES[value], True
        return MullionOverride.AUTO, False
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return parse_mullion_override(int(text))
        for override in MullionOverride:
            if override.value == text:
                return override, True
    return MullionOverride.AUTO, False


def resolve_config(config: WindowConfig) -> ResolvedConfig:
    """Resolve raw choices, defaulting and recording anything unusable."""
    diagnostics: List[Diagnostic] = []

    width = _resolve_dimension(config.width_mm, DEFAULT_WIDTH_MM, "width", diagnostics)
    height = _resolve_dimension(config.height_mm, DEFAULT_HEIGHT_MM, "height", diagnostics)
    pane_count = _resolve_pane_count(config.pane_count, diagnostics)

    profile, ok = resolve_profile(config.profile_key)
    if not ok:
        diagnostics.append(Diagnostic(
            "unknown_profile",
            f"Unknown profile {config.profile_key!r}, using {profile.key}",
        ))

    kinds = []
    for i in range(pane_count):
        if i < len(config.opening_kinds):
            raw = config.opening_kinds[i]
            kind, ok = parse_opening_kind(raw)
            if not ok:
                logger.warning("Unknown opening kind %r for sash %d, using fixed", raw, i)
                diagnostics.append(Diagnostic(
                    "unknown_opening_kind",
                    f"Sash {i}: unknown opening kind {raw!r}, using fixed",
                ))
        else:
            kind = DEFAULT_OPENING_KINDS[i % len(DEFAULT_OPENING_KINDS)]
        kinds.append(kind)

    overrides = []
    for i in range(pane_count - 1):
        raw = config.mullion_overrides[i] if i < len(config.mullion_overrides) else None
        override, ok = parse_mullion_override(raw)
        if not ok:
            logger.warning("Unknown mullion override %r at boundary %d, using auto", raw, i)
            diagnostics.append(Diagnostic(
                "unknown_mullion_override",
                f"Boundary {i}: unknown override {raw!r}, using auto",
            ))
        overrides.append(override)

    glass, ok = resolve_glass_thickness(config.glass_thickness_mm)
    if not ok:
        diagnostics.append(Diagnostic(
            "invalid_glass_thickness",
            f"Glass {config.glass_thickness_mm!r} unusable, using {glass:.0f}mm",
        ))

    return ResolvedConfig(
        width=width,
        height=height,
        pane_count=pane_count,
        profile=profile,
        opening_kinds=tuple(kinds),
        mullion_overrides=tuple(overrides),
        glass_thickness=glass,
        show_overlays=bool(config.show_overlays),
        direct_glazing_for_fixed=bool(config.direct_glazing_for_fixed),
        muntins=_resolve_muntins(config, diagnostics),
        diagnostics=tuple(diagnostics),
    )


# ─── Internal helpers ────────────────────────────────────────────────────────

def _to_float(value: RawValue) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _cm_to_mm(value: RawValue, default_mm: float) -> RawValue:
    number = _to_float(value)
    if number is None:
        return default_mm if value is None else value
    return number * 10.0


def _resolve_dimension(value: RawValue, default: float, name: str,
                       diagnostics: List[Diagnostic]) -> float:
    number = _to_float(value)
    if number is None or number <= 0:
        logger.warning("Invalid %s %r, using %.0fmm", name, value, default)
        diagnostics.append(Diagnostic(
            f"invalid_{name}", f"{name} {value!r} unusable, using {default:.0f}mm",
        ))
        return default
    clamped = min(max(number, MIN_DIMENSION_MM), MAX_DIMENSION_MM)
    if clamped != number:
        logger.info("Clamped %s %.1fmm to %.0fmm", name, number, clamped)
        diagnostics.append(Diagnostic(
            f"clamped_{name}", f"{name} {number:.1f}mm clamped to {clamped:.0f}mm",
            severity="info",
        ))
    return clamped


def _resolve_pane_count(value: RawValue, diagnostics: List[Diagnostic]) -> int:
    number = _to_float(value)
    if number is None:
        logger.warning("Invalid pane count %r, using %d", value, MIN_PANES)
        diagnostics.append(Diagnostic(
            "invalid_pane_count", f"pane count {value!r} unusable, using {MIN_PANES}",
        ))
        return MIN_PANES
    count = min(max(int(round(number)), MIN_PANES), MAX_PANES)
    if count != number:
        logger.info("Clamped pane count %r to %d", value, count)
        diagnostics.append(Diagnostic(
            "clamped_pane_count", f"pane count {value!r} clamped to {count}",
            severity="info",
        ))
    return count


def _resolve_muntins(config: WindowConfig, diagnostics: List[Diagnostic]) -> MuntinLayout:
    raw = config.muntin_pattern
    text = raw.value if isinstance(raw, MuntinPattern) else str(raw).strip().lower()
    pattern = next((p for p in MuntinPattern if p.value == text), None)
    if pattern is None:
        logger.warning("Unknown muntin pattern %r, using none", raw)
        diagnostics.append(Diagnostic(
            "unknown_muntin_pattern", f"Unknown muntin pattern {raw!r}, using none",
        ))
        return NO_MUNTINS
    if pattern is MuntinPattern.NONE:
        return NO_MUNTINS

    rows = _resolve_divisions(config.muntin_rows, "rows", diagnostics)
    columns = _resolve_divisions(config.muntin_columns, "columns", diagnostics)

    width = _to_float(config.muntin_width_mm)
    if width is None or width <= 0:
        logger.warning("Invalid muntin width %r, using %.0fmm",
                       config.muntin_width_mm, DEFAULT_MUNTIN_WIDTH_MM)
        diagnostics.append(Diagnostic(
            "invalid_muntin_width",
            f"muntin width {config.muntin_width_mm!r} unusable, "
            f"using {DEFAULT_MUNTIN_WIDTH_MM:.0f}mm",
        ))
        width = DEFAULT_MUNTIN_WIDTH_MM
    return MuntinLayout(pattern=pattern, rows=rows, columns=columns, bar_width=width)


def _resolve_divisions(value: RawValue, name: str, diagnostics: List[Diagnostic]) -> int:
    number = _to_float(value)
    if number is None:
        logger.warning("Invalid muntin %s %r, using 0", name, value)
        diagnostics.append(Diagnostic(
            f"invalid_muntin_{name}", f"muntin {name} {value!r} unusable, using 0",
        ))
        return 0
    count = min(max(int(round(number)), 0), MAX_MUNTIN_DIVISIONS)
    if count != number:
        diagnostics.append(Diagnostic(
            f"clamped_muntin_{name}", f"muntin {name} {value!r} clamped to {count}",
            severity="info",
        ))
    return count
