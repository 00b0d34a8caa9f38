"""
Shared test fixtures for window geometry tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from window_geometry.config import WindowConfig
from window_geometry.contracts import OpeningKind, ProfileKind, ProfileSpec
from window_geometry.depth_layout import compute_depth_layout
from window_geometry.kinematics import KinematicsConfig


@pytest.fixture
def slim_profile():
    """60x70mm modern-slim outer profile."""
    return ProfileSpec(width=60.0, depth=70.0, kind=ProfileKind.OUTER, key="modern-slim")


@pytest.fixture
def layout_70():
    """Depth layout for a 70mm profile with 24mm double glazing."""
    return compute_depth_layout(70.0, 24.0)


@pytest.fixture
def kinematics_config():
    return KinematicsConfig()


@pytest.fixture
def two_pane_config():
    """1000x1200 modern-slim window, tilt-turn-left + tilt-turn-right."""
    return WindowConfig(
        width_mm=1000.0,
        height_mm=1200.0,
        pane_count=2,
        profile_key="modern-slim",
        opening_kinds=(OpeningKind.TILT_TURN_LEFT, OpeningKind.TILT_TURN_RIGHT),
    )
