from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent


def test_generate_window_cli_writes_artifacts(tmp_path: Path):
    out_dir = tmp_path / "out"
    cmd = [
        sys.executable,
        str(REPO_ROOT / "scripts" / "generate_window.py"),
        "--width-mm", "1000",
        "--height-mm", "1200",
        "--panes", "2",
        "--kind", "tilt-turn-left",
        "--kind", "dreh-kipp-rechts",
        "--tilt", "1",
        "--open", "0",
        "--open", "1",
        "--out-dir", str(out_dir),
    ]
    proc = subprocess.run(cmd, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
    assert "Window:" in proc.stdout

    assert (out_dir / "window.glb").stat().st_size > 0
    summary = json.loads((out_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["pane_count"] == 2
    assert [m["required"] for m in summary["mullions"]] == [True]
    states = [sash["state"] for sash in summary["sashes"]]
    assert [s["phase"] for s in states] == ["open", "open"]
    assert states[1]["mode"] == "tilt"
    assert summary["diagnostics"] == []


def test_generate_window_cli_reports_defaults(tmp_path: Path):
    cmd = [
        sys.executable,
        str(REPO_ROOT / "scripts" / "generate_window.py"),
        "--profile", "bamboo",
        "--no-overlays",
        "--out-dir", str(tmp_path),
    ]
    proc = subprocess.run(cmd, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
    assert "unknown_profile" in proc.stdout


def test_generate_window_cli_muntins(tmp_path: Path):
    cmd = [
        sys.executable,
        str(REPO_ROOT / "scripts" / "generate_window.py"),
        "--muntins", "grid",
        "--muntin-rows", "2",
        "--muntin-columns", "1",
        "--out-dir", str(tmp_path),
    ]
    proc = subprocess.run(cmd, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    assert summary["muntins"]["pattern"] == "grid"
    assert summary["sashes"][0]["muntin_bars"] == 3
