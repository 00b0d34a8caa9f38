"""Public API for parametric window geometry."""

from window_geometry.config import WindowConfig, resolve_config
from window_geometry.contracts import (
    Diagnostic, EdgeRole, FrameRing, MullionOverride, MullionSpec, OpeningKind,
    ProfileKind, ProfileSpec, SashMode,
)
from window_geometry.depth_layout import DepthLayout, compute_depth_layout
from window_geometry.errors import InvalidDimension, InvalidLength, WindowGeometryError
from window_geometry.frame_assembly import build_ring
from window_geometry.kinematics import KinematicsConfig, SashPhase, SashState
from window_geometry.mullions import place_mullions
from window_geometry.muntins import MuntinLayout, MuntinPattern
from window_geometry.scene import build_scene, summarize
from window_geometry.session import WindowSession
from window_geometry.window_model import WindowGeometry, build_window

__all__ = [
    "DepthLayout",
    "Diagnostic",
    "EdgeRole",
    "FrameRing",
    "InvalidDimension",
    "InvalidLength",
    "KinematicsConfig",
    "MullionOverride",
    "MullionSpec",
    "MuntinLayout",
    "MuntinPattern",
    "OpeningKind",
    "ProfileKind",
    "ProfileSpec",
    "SashMode",
    "SashPhase",
    "SashState",
    "WindowConfig",
    "WindowGeometry",
    "WindowGeometryError",
    "WindowSession",
    "build_ring",
    "build_scene",
    "build_window",
    "compute_depth_layout",
    "place_mullions",
    "resolve_config",
    "summarize",
]
