"""Interactive window: current configuration, geometry and sash states."""
import logging
from typing import Dict, List, Optional

import numpy as np
import trimesh

from window_geometry.config import WindowConfig
from window_geometry.contracts import SashMode
from window_geometry.kinematics import KinematicsConfig, SashBank, SashState
from window_geometry.scene import build_scene
from window_geometry.window_model import WindowGeometry, cached_window, sash_world_transform

logger = logging.getLogger(__name__)


class WindowSession:
    """Holds one window between configuration changes and animation ticks.

    Geometry is rebuilt (or fetched from the cache) on ``configure``; sash
    states survive reconfiguration unless the pane count changes, or the
    opening kind of that particular sash changes.
    """

    def __init__(self, config: Optional[WindowConfig] = None,
                 kinematics: Optional[KinematicsConfig] = None):
        self.bank = SashBank(config=kinematics)
        self.config: WindowConfig = WindowConfig()
        self.geometry: Optional[WindowGeometry] = None
        self.configure(config or WindowConfig())

    def configure(self, config: WindowConfig) -> WindowGeometry:
        self.config = config
        self.geometry = cached_window(config)
        self.bank.sync(self.geometry.config.opening_kinds)
        logger.debug("Configured %d sash window", len(self.bank))
        return self.geometry

    @property
    def states(self) -> List[SashState]:
        return self.bank.states

    def toggle(self, index: int) -> SashState:
        return self.bank.toggle(self._check_index(index))

    def select_mode(self, index: int, mode: SashMode) -> SashState:
        return self.bank.select_mode(self._check_index(index), mode)

    def toggle_mode(self, index: int) -> SashState:
        return self.bank.toggle_mode(self._check_index(index))

    def tick(self, dt: float) -> bool:
        """Advance all sashes; returns True while any is still moving."""
        self.bank.tick(dt)
        return self.bank.is_animating

    def settle(self, dt: float = 1.0 / 60.0, max_ticks: int = 10000) -> int:
        """Tick until every sash has arrived. Returns the ticks taken."""
        ticks = 0
        while self.bank.is_animating and ticks < max_ticks:
            self.bank.tick(dt)
            ticks += 1
        return ticks

    def sash_transforms(self) -> Dict[int, np.ndarray]:
        return {
            state.index: sash_world_transform(
                self.geometry, state.index, state, self.bank.config,
            )
            for state in self.bank
        }

    def to_scene(self) -> trimesh.Scene:
        return build_scene(self.geometry, self.bank.states, self.bank.config)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.bank):
            raise IndexError(f"No sash {index}; window has {len(self.bank)}")
        return index
