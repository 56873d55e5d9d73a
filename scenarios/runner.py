"""Scenario sweep runner + auto plot + validation report."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from typing import Dict, List

import numpy as np

from analysis.path_matching import MatchConfig, match_runs
from analysis.reflection_law import check_path, incidence_angles, summarize_paths
from mirror_core.tracer import trace_mirrors
from mirror_io.hdf5_io import CaseData, save_sweep_hdf5
from plots import overlay

SCENARIO_MODULES = {
    "S0": "scenarios.S0_single_mirror",
    "S1": "scenarios.S1_parallel_mirrors",
    "S2": "scenarios.S2_short_mirror",
    "S3": "scenarios.S3_oblique_mirror",
    "S4": "scenarios.S4_degenerate_mirror",
}


@dataclass(frozen=True)
class SweepConfig:
    law_atol: float = 1e-6
    match_tolerance: float = 1e-9
    make_plots: bool = True


def _fmt_angle(theta: float) -> str:
    return "n/a" if np.isnan(theta) else f"{theta:.6f}"


def run_all(
    out_h5: str = "artifacts/mirror_sweep.h5",
    out_plot_dir: str = "artifacts/plots",
    config: SweepConfig | None = None,
) -> str:
    cfg = config or SweepConfig()
    payload: Dict[str, Dict[str, CaseData]] = {}
    report_lines: List[str] = [
        "# Validation Report",
        "",
        "- path length: `|object - mirror point| + |mirror point - viewer|`",
        "- law check: outgoing leg equals the specular reflection of the incoming leg",
        "",
    ]
    all_labels: List[str] = []
    all_lengths: List[float] = []
    failures: List[str] = []

    for sid, mod_name in SCENARIO_MODULES.items():
        mod = import_module(mod_name)
        payload[sid] = {}
        report_lines.append(f"## {sid}")
        for p in mod.build_sweep_params():
            case = mod.run_case(p)
            case_id = p["case_id"]
            frame = case.frame
            paths = frame.ray_paths()
            reasons = {mid: r.failures[0].value for mid, r in frame.mirrors.items() if r.failures}
            payload[sid][case_id] = CaseData(params=p, paths=paths, failures=reasons)

            stats = summarize_paths(paths)
            report_lines.append(f"- case `{case_id}`: mirrors={len(case.mirrors)}, paths={stats['count']}")
            for mid, res in frame.mirrors.items():
                status = "path" if res.ray_path is not None else ", ".join(f.value for f in res.failures) or "no path"
                report_lines.append(f"  - {mid}: {status}, object visible: {res.object_visible}")

            by_id = {m.mirror_id: m for m in case.mirrors}
            for path in paths:
                mirror = by_id[path.mirror_id]
                theta_i, theta_r = incidence_angles(path, mirror)
                report_lines.append(
                    f"  - {path.mirror_id}: reflection at ({path.mirror_point[0]:.3f}, {path.mirror_point[1]:.3f}), "
                    f"length={path.length():.3f}, theta_i={_fmt_angle(theta_i)}, theta_r={_fmt_angle(theta_r)}"
                )
                for msg in check_path(path, mirror, atol=cfg.law_atol):
                    failures.append(f"{sid}:{case_id} {msg}")
                all_labels.append(f"{sid}:{case_id}:{path.mirror_id}")
                all_lengths.append(path.length())

            expected = list(p.get("expect_paths", []))
            got = [path.mirror_id for path in paths]
            if got != expected:
                failures.append(f"{sid}:{case_id} expected paths for {expected}, got {got}")

            if case.viewer is not None and case.object_point is not None and len(case.mirrors) > 1:
                forward = trace_mirrors(case.object_point, case.viewer, case.mirrors)
                backward = trace_mirrors(case.object_point, case.viewer, list(reversed(case.mirrors)))
                _, warns = match_runs(forward, backward, MatchConfig(position_tolerance=cfg.match_tolerance))
                for w in warns:
                    failures.append(f"{sid}:{case_id} order dependence: {w}")

            if cfg.make_plots:
                case_dir = str(Path(out_plot_dir) / sid / case_id)
                virtual = [r.virtual_object for r in frame.mirrors.values() if r.virtual_object is not None]
                overlay.p0_scene_overlay(case.mirrors, case.viewer, case.shape, virtual, paths, case_dir)
                report_lines.append(f"  - plots: [P0]({case_dir}/P0.png)")

        report_lines.append("")

    Path(out_h5).parent.mkdir(parents=True, exist_ok=True)
    save_sweep_hdf5(out_h5, payload)
    if cfg.make_plots and all_lengths:
        overlay.p1_path_lengths(all_labels, all_lengths, out_plot_dir)

    report_lines.append("## Failure Checks")
    if failures:
        for msg in failures:
            report_lines.append(f"- FAIL: {msg}")
    else:
        report_lines.append("- PASS: No automatic failure checks triggered.")

    report_path = Path(out_plot_dir).parent / "report.md"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text("\n".join(report_lines), encoding="utf-8")
    return str(report_path)


if __name__ == "__main__":
    print(run_all())
