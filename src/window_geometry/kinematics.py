"""
Sash opening kinematics.

Every sash owns one SashState. The state machine:

    CLOSED --toggle--> OPENING --arrive--> OPEN --toggle--> CLOSING --arrive--> CLOSED
                                  |                                  ^
                                  +--select other mode--> SWITCHING_MODE
                                        (close to 0, then reopen in the new mode)

Angles approach their target exponentially, ``angle += (target - angle) *
min(rate * dt, 1)``, and snap once within ``snap_tolerance``. The step
factor is clamped to 1, so the angle never passes its target.

A mode change on an open hybrid sash never rotates about two hinges at
once: the new mode only takes effect when the close animation has
actually reached angle 0. A toggle that arrives before then cancels the
pending reopen.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import trimesh

from window_geometry.contracts import OpeningKind, SashMode

logger = logging.getLogger(__name__)


class SashPhase(Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"
    SWITCHING_MODE = "switching_mode"


@dataclass
class KinematicsConfig:
    """Animation and opening parameters."""
    rate: float = 3.0                 # approach rate per second
    snap_tolerance: float = 0.01      # rad
    tilt_angle: float = math.pi / 16  # inward tilt about the bottom edge
    turn_angle: float = 0.6 * math.pi # swing about a side edge


DEFAULT_KINEMATICS = KinematicsConfig()


@dataclass(frozen=True)
class HingeSpec:
    """A hinge line on the sash.

    ``pivot_fraction`` locates the pivot as fractions of the sash width and
    height from the sash center; ``sign`` is the rotation direction that
    swings the sash toward the room.
    """
    name: str
    pivot_fraction: Tuple[float, float]
    axis: Tuple[float, float, float]
    sign: float

    def open_angle(self, config: KinematicsConfig = DEFAULT_KINEMATICS) -> float:
        magnitude = config.tilt_angle if self.name == "tilt" else config.turn_angle
        return self.sign * magnitude

    def pivot(self, sash_width: float, sash_height: float, pivot_z: float) -> np.ndarray:
        return np.array([
            self.pivot_fraction[0] * sash_width,
            self.pivot_fraction[1] * sash_height,
            pivot_z,
        ])


HINGES: Dict[str, HingeSpec] = {
    "tilt": HingeSpec("tilt", (0.0, -0.5), (1.0, 0.0, 0.0), 1.0),
    "turn-left": HingeSpec("turn-left", (-0.5, 0.0), (0.0, 1.0, 0.0), -1.0),
    "turn-right": HingeSpec("turn-right", (0.5, 0.0), (0.0, 1.0, 0.0), 1.0),
}

# Hinges of each kind as (turn-mode hinge, tilt-mode hinge).
_KIND_HINGES: Dict[OpeningKind, Tuple[Optional[str], Optional[str]]] = {
    OpeningKind.FIXED: (None, None),
    OpeningKind.TILT: ("tilt", "tilt"),
    OpeningKind.TURN_LEFT: ("turn-left", "turn-left"),
    OpeningKind.TURN_RIGHT: ("turn-right", "turn-right"),
    OpeningKind.TILT_TURN_LEFT: ("turn-left", "tilt"),
    OpeningKind.TILT_TURN_RIGHT: ("turn-right", "tilt"),
}


def active_hinge(kind: OpeningKind, mode: SashMode = SashMode.TURN) -> Optional[HingeSpec]:
    """Hinge used by ``kind`` in ``mode``; None for fixed sashes."""
    turn_name, tilt_name = _KIND_HINGES[kind]
    name = tilt_name if mode is SashMode.TILT else turn_name
    return HINGES[name] if name else None


@dataclass
class SashState:
    index: int
    opening_kind: OpeningKind
    mode: SashMode = SashMode.TURN
    current_angle: float = 0.0
    target_angle: float = 0.0
    is_open: bool = False
    phase: SashPhase = SashPhase.CLOSED
    pending_mode: Optional[SashMode] = None

    @property
    def hinge(self) -> Optional[HingeSpec]:
        return active_hinge(self.opening_kind, self.mode)

    @property
    def pivot(self) -> Optional[Tuple[float, float]]:
        """Pivot of the active hinge as fractions of the sash size."""
        hinge = self.hinge
        return hinge.pivot_fraction if hinge else None

    @property
    def is_animating(self) -> bool:
        return self.phase in (SashPhase.OPENING, SashPhase.CLOSING, SashPhase.SWITCHING_MODE)


def create_sash_state(index: int, kind: OpeningKind) -> SashState:
    return SashState(index=index, opening_kind=kind)


def open_target(state: SashState, config: KinematicsConfig = DEFAULT_KINEMATICS) -> float:
    hinge = state.hinge
    return hinge.open_angle(config) if hinge else 0.0


def toggle(state: SashState, config: KinematicsConfig = DEFAULT_KINEMATICS) -> SashState:
    """Open a closed sash or close an open one. Fixed sashes ignore it."""
    if not state.opening_kind.is_operable:
        logger.debug("Sash %d is fixed, toggle ignored", state.index)
        return state

    if state.phase is SashPhase.SWITCHING_MODE:
        # Keep closing; the requested mode still applies once at 0.
        state.is_open = False
        state.phase = SashPhase.CLOSING
    elif state.is_open:
        state.is_open = False
        state.target_angle = 0.0
        state.phase = SashPhase.CLOSING
    elif state.phase is SashPhase.CLOSING and state.pending_mode is not None:
        state.is_open = True
        state.phase = SashPhase.SWITCHING_MODE
    else:
        state.is_open = True
        state.target_angle = open_target(state, config)
        state.phase = SashPhase.OPENING

    if state.target_angle == 0.0 and state.current_angle == 0.0:
        _arrive(state, config)
    logger.debug("Sash %d toggled: %s", state.index, state.phase.value)
    return state


def select_mode(
    state: SashState, mode: SashMode, config: KinematicsConfig = DEFAULT_KINEMATICS,
) -> SashState:
    """Request a tilt/turn mode on a hybrid sash.

    A closed sash switches at once. An open one closes first and reopens in
    the new mode; the hinge never changes while the angle is non-zero.
    """
    if not state.opening_kind.is_hybrid:
        return state

    if state.phase is SashPhase.SWITCHING_MODE:
        if mode is state.mode:
            state.pending_mode = None
            state.target_angle = open_target(state, config)
            state.phase = SashPhase.OPENING
        else:
            state.pending_mode = mode
        return state

    if state.phase is SashPhase.CLOSING:
        state.pending_mode = None if mode is state.mode else mode
        return state

    if mode is state.mode:
        return state

    if state.current_angle == 0.0:
        state.mode = mode
        state.pending_mode = None
        if state.is_open:
            state.target_angle = open_target(state, config)
            state.phase = SashPhase.OPENING
        logger.debug("Sash %d mode set to %s", state.index, mode.value)
        return state

    state.pending_mode = mode
    state.target_angle = 0.0
    state.phase = SashPhase.SWITCHING_MODE
    logger.debug("Sash %d closing to switch to %s", state.index, mode.value)
    return state


def toggle_mode(state: SashState, config: KinematicsConfig = DEFAULT_KINEMATICS) -> SashState:
    """Flip between turn and tilt, counting a pending switch as current."""
    requested = state.pending_mode or state.mode
    other = SashMode.TILT if requested is SashMode.TURN else SashMode.TURN
    return select_mode(state, other, config)


def tick(state: SashState, dt: float, config: KinematicsConfig = DEFAULT_KINEMATICS) -> SashState:
    """Advance one animation step of ``dt`` seconds."""
    if dt <= 0 or not state.is_animating:
        return state

    step = min(config.rate * dt, 1.0)
    state.current_angle += (state.target_angle - state.current_angle) * step
    if abs(state.target_angle - state.current_angle) < config.snap_tolerance:
        state.current_angle = state.target_angle
        _arrive(state, config)
    return state


def opening_fraction(state: SashState, config: KinematicsConfig = DEFAULT_KINEMATICS) -> float:
    """How far the sash is open relative to its active hinge, in [0, 1]."""
    target = open_target(state, config)
    if target == 0.0:
        return 0.0
    return min(max(abs(state.current_angle) / abs(target), 0.0), 1.0)


def hinge_transform(
    state: SashState, sash_width: float, sash_height: float, pivot_z: float,
) -> np.ndarray:
    """Rotation of the sash about its active hinge, in sash-local space."""
    hinge = state.hinge
    if hinge is None or state.current_angle == 0.0:
        return np.eye(4)
    return trimesh.transformations.rotation_matrix(
        state.current_angle, hinge.axis,
        point=hinge.pivot(sash_width, sash_height, pivot_z),
    )


def motion_transform(
    state: SashState,
    sash_width: float,
    sash_height: float,
    pivot_z: float,
    open_extra: float,
    config: KinematicsConfig = DEFAULT_KINEMATICS,
) -> np.ndarray:
    """Hinge rotation followed by the forward offset of an opened sash."""
    forward = trimesh.transformations.translation_matrix(
        [0.0, 0.0, open_extra * opening_fraction(state, config)]
    )
    return forward @ hinge_transform(state, sash_width, sash_height, pivot_z)


class SashBank:
    """Per-sash states, sized to the pane count up front."""

    def __init__(self, kinds: Sequence[OpeningKind] = (),
                 config: Optional[KinematicsConfig] = None):
        self.config = config or KinematicsConfig()
        self.states: List[SashState] = []
        self.sync(kinds)

    def sync(self, kinds: Sequence[OpeningKind]) -> None:
        """Match the bank to a new configuration.

        A pane count change resets every sash; otherwise only sashes whose
        opening kind changed are reset.
        """
        kinds = list(kinds)
        if len(kinds) != len(self.states):
            if self.states:
                logger.info("Pane count %d -> %d, resetting sashes",
                            len(self.states), len(kinds))
            self.states = [create_sash_state(i, kind) for i, kind in enumerate(kinds)]
            return
        for i, kind in enumerate(kinds):
            # The old hinge may not exist for the new kind, so restart the sash.
            if self.states[i].opening_kind is not kind:
                self.states[i] = create_sash_state(i, kind)

    def toggle(self, index: int) -> SashState:
        return toggle(self.states[index], self.config)

    def select_mode(self, index: int, mode: SashMode) -> SashState:
        return select_mode(self.states[index], mode, self.config)

    def toggle_mode(self, index: int) -> SashState:
        return toggle_mode(self.states[index], self.config)

    def tick(self, dt: float) -> None:
        for state in self.states:
            tick(state, dt, self.config)

    @property
    def is_animating(self) -> bool:
        return any(state.is_animating for state in self.states)

    def __getitem__(self, index: int) -> SashState:
        return self.states[index]

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[SashState]:
        return iter(self.states)


# ─── Internal ────────────────────────────────────────────────────────────────

def _arrive(state: SashState, config: KinematicsConfig) -> None:
    if state.current_angle != 0.0:
        state.phase = SashPhase.OPEN
        return
    if state.phase is SashPhase.SWITCHING_MODE:
        if state.pending_mode is not None:
            state.mode = state.pending_mode
        state.pending_mode = None
        state.target_angle = open_target(state, config)
        state.phase = SashPhase.OPENING if state.target_angle else SashPhase.CLOSED
        logger.debug("Sash %d closed, reopening in %s mode", state.index, state.mode.value)
        return
    if state.pending_mode is not None:
        state.mode = state.pending_mode
        state.pending_mode = None
    state.phase = SashPhase.CLOSED
