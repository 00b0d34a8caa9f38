#!/usr/bin/env python3
"""Build a window from command line choices and write window.glb + summary.json."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from window_geometry import SashMode, WindowConfig, WindowSession, summarize
from window_geometry.profile_library import DEFAULT_PROFILE_KEY, PROFILE_CHOICES
from window_geometry.scene import export_window


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate parametric window geometry (frame, sashes, glass, muntins, mullions)"
    )
    parser.add_argument("--width-mm", type=float, default=1000.0, help="Overall width")
    parser.add_argument("--height-mm", type=float, default=1200.0, help="Overall height")
    parser.add_argument("--panes", type=int, default=1, help="Number of sashes (1-3)")
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE_KEY,
        help=f"Profile key ({', '.join(PROFILE_CHOICES)}) or 1-based index",
    )
    parser.add_argument(
        "--kind",
        action="append",
        default=[],
        help="Opening kind per sash, left to right (repeatable)",
    )
    parser.add_argument(
        "--mullion",
        action="append",
        default=[],
        help="Mullion override per boundary: auto, yes or no (repeatable)",
    )
    parser.add_argument(
        "--glass", default="double", help="Glass type (single/double/triple) or mm"
    )
    parser.add_argument(
        "--direct-glazing-for-fixed",
        action="store_true",
        help="Glaze fixed panes straight into the frame without a sash ring",
    )
    parser.add_argument(
        "--muntins", default="none", help="Muntin pattern: none, grid or cross"
    )
    parser.add_argument("--muntin-rows", type=int, default=0, help="Horizontal bars (grid)")
    parser.add_argument("--muntin-columns", type=int, default=0, help="Vertical bars (grid)")
    parser.add_argument("--muntin-width", type=float, default=20.0, help="Bar width in mm")
    parser.add_argument("--no-overlays", action="store_true", help="Omit opening indicators")
    parser.add_argument(
        "--open",
        type=int,
        action="append",
        default=[],
        help="Open sash at this index before export (repeatable)",
    )
    parser.add_argument(
        "--tilt",
        type=int,
        action="append",
        default=[],
        help="Put hybrid sash at this index in tilt mode (repeatable)",
    )
    parser.add_argument("--out-dir", default="window_out", help="Output directory")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logs"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = WindowConfig(
        width_mm=args.width_mm,
        height_mm=args.height_mm,
        pane_count=args.panes,
        profile_key=args.profile,
        opening_kinds=tuple(args.kind),
        mullion_overrides=tuple(args.mullion),
        glass_thickness_mm=args.glass,
        show_overlays=not args.no_overlays,
        direct_glazing_for_fixed=args.direct_glazing_for_fixed,
        muntin_pattern=args.muntins,
        muntin_rows=args.muntin_rows,
        muntin_columns=args.muntin_columns,
        muntin_width_mm=args.muntin_width,
    )
    session = WindowSession(config)

    for index in args.tilt:
        if 0 <= index < len(session.states):
            session.select_mode(index, SashMode.TILT)
    for index in args.open:
        if 0 <= index < len(session.states):
            session.toggle(index)
        else:
            logging.getLogger(__name__).warning("No sash %d to open", index)
    ticks = session.settle()

    summary = summarize(session.geometry, session.states)
    summary["animation_ticks"] = ticks
    paths = export_window(session.to_scene(), summary, Path(args.out_dir))

    print(f"Window: {paths['glb']}")
    print(f"Summary: {paths['summary']}")
    for diag in session.geometry.diagnostics:
        print(f"{diag.severity}: {diag.code}: {diag.message}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
