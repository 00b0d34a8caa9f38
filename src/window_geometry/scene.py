"""
Rendering hand-off: a named trimesh.Scene plus a JSON-ready summary.

Node names:
    outer_frame/<edge>
    sash_<i>/frame/<edge>
    sash_<i>/glass
    sash_<i>/muntin/<bar>
    sash_<i>/overlay
    mullion_<i>
"""
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import trimesh

from window_geometry.kinematics import DEFAULT_KINEMATICS, KinematicsConfig, SashState
from window_geometry.window_model import WindowGeometry, sash_world_transform

logger = logging.getLogger(__name__)


def build_scene(
    geometry: WindowGeometry,
    states: Optional[Sequence[SashState]] = None,
    config: KinematicsConfig = DEFAULT_KINEMATICS,
    include_overlays: Optional[bool] = None,
) -> trimesh.Scene:
    """Place every part of ``geometry`` with the sashes at their live angles."""
    if include_overlays is None:
        include_overlays = geometry.config.show_overlays
    scene = trimesh.Scene()

    if geometry.outer_ring is not None:
        for role, segment in geometry.outer_ring.segments.items():
            name = f"outer_frame/{role.value}"
            scene.add_geometry(
                segment.mesh, node_name=name, geom_name=name,
                transform=geometry.outer_transform @ segment.transform,
            )

    for sash in geometry.sashes:
        state = states[sash.index] if states is not None else None
        world = sash_world_transform(geometry, sash.index, state, config)
        prefix = f"sash_{sash.index}"
        if sash.ring is not None:
            for role, segment in sash.ring.segments.items():
                name = f"{prefix}/frame/{role.value}"
                scene.add_geometry(
                    segment.mesh, node_name=name, geom_name=name,
                    transform=world @ sash.ring_transform @ segment.transform,
                )
        if sash.glass is not None:
            name = f"{prefix}/glass"
            scene.add_geometry(
                sash.glass.mesh, node_name=name, geom_name=name,
                transform=world @ sash.glass.transform,
            )
        for prism in sash.muntins:
            name = f"{prefix}/muntin/{prism.name}"
            scene.add_geometry(
                prism.mesh, node_name=name, geom_name=name,
                transform=world @ prism.transform,
            )
        if include_overlays and sash.overlay is not None and sash.overlay.lines:
            name = f"{prefix}/overlay"
            path = trimesh.load_path(sash.overlay.line_segments())
            scene.add_geometry(path, node_name=name, geom_name=name, transform=world)

    for prism in geometry.mullions:
        scene.add_geometry(
            prism.mesh, node_name=prism.name, geom_name=prism.name,
            transform=prism.transform,
        )

    logger.debug("Scene has %d nodes", len(scene.graph.nodes_geometry))
    return scene


def summarize(
    geometry: WindowGeometry, states: Optional[Sequence[SashState]] = None,
) -> Dict[str, Any]:
    """Plain-data description of a window for JSON output."""
    config = geometry.config
    layout = geometry.layout
    layout_data = asdict(layout)
    layout_data.update(
        frame_depth=layout.frame_depth,
        frame_origin_z=layout.frame_origin_z,
        rebate_back_z=layout.rebate_back_z,
        sash_pivot_z=layout.sash_pivot_z,
        sash_back_z=layout.sash_back_z,
        sash_front_z=layout.sash_front_z,
        glass_center_z=layout.glass_center_z,
        glass_surface_z=layout.glass_surface_z,
        glass_back_z=layout.glass_back_z,
    )

    sashes = []
    for sash in geometry.sashes:
        entry = {
            "index": sash.index,
            "opening_kind": sash.opening_kind.value,
            "center_x_mm": round(sash.center_x, 3),
            "width_mm": round(sash.width, 3),
            "height_mm": round(sash.height, 3),
            "has_ring": sash.ring is not None,
            "direct_glazed": sash.direct_glazed,
            "glass": None,
            "muntin_bars": len(sash.muntins),
        }
        if sash.glass is not None:
            entry["glass"] = {
                "width_mm": round(sash.glass.width, 3),
                "height_mm": round(sash.glass.height, 3),
                "thickness_mm": sash.glass.thickness,
                "front_z_mm": sash.glass.front_z,
            }
        if states is not None:
            state = states[sash.index]
            entry["state"] = {
                "phase": state.phase.value,
                "mode": state.mode.value,
                "angle_rad": round(state.current_angle, 6),
                "is_open": state.is_open,
            }
        sashes.append(entry)

    return {
        "width_mm": config.width,
        "height_mm": config.height,
        "pane_count": config.pane_count,
        "profile": {
            "key": config.profile.key,
            "width_mm": config.profile.width,
            "depth_mm": config.profile.depth,
        },
        "glass_thickness_mm": config.glass_thickness,
        "muntins": {
            "pattern": config.muntins.pattern.value,
            "rows": config.muntins.rows,
            "columns": config.muntins.columns,
            "bar_width_mm": config.muntins.bar_width,
        },
        "inner_width_mm": geometry.inner_width,
        "inner_height_mm": geometry.inner_height,
        "depth_layout": layout_data,
        "sashes": sashes,
        "mullions": [
            {
                "boundary_index": spec.boundary_index,
                "x_position_mm": round(spec.x_position, 3),
                "required": spec.required,
                "source": spec.source.value,
            }
            for spec in geometry.mullion_specs
        ],
        "diagnostics": [asdict(diag) for diag in geometry.diagnostics],
    }


def export_window(
    scene: trimesh.Scene, summary: Dict[str, Any], out_dir: Path,
) -> Dict[str, Path]:
    """Write ``window.glb`` and ``summary.json`` into ``out_dir``."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    glb_path = out_dir / "window.glb"
    summary_path = out_dir / "summary.json"

    scene.export(str(glb_path), file_type="glb")
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)

    logger.info("Wrote %s and %s", glb_path, summary_path)
    return {"glb": glb_path, "summary": summary_path}
