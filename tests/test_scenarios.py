import sys
from importlib import import_module
from pathlib import Path

import pytest

from scenarios.runner import SCENARIO_MODULES, SweepConfig, run_all


@pytest.mark.parametrize("sid", sorted(SCENARIO_MODULES))
def test_each_case_matches_expected_paths(sid):
    mod = import_module(SCENARIO_MODULES[sid])
    for params in mod.build_sweep_params():
        case = mod.run_case(params)
        got = [p.mirror_id for p in case.frame.ray_paths()]
        assert got == params["expect_paths"], params["case_id"]


def test_run_all_writes_report_and_h5(tmp_path: Path):
    h5 = tmp_path / "out" / "sweep.h5"
    plots = tmp_path / "out" / "plots"
    report = Path(run_all(str(h5), str(plots), SweepConfig(make_plots=False)))
    text = report.read_text(encoding="utf-8")
    assert h5.exists()
    assert "PASS: No automatic failure checks triggered." in text
    assert "path_not_on_mirror" in text
    assert "degenerate_mirror" in text
    assert "theta_i=n/a" in text
    assert "theta_i=nan" not in text


def test_run_all_with_plots(tmp_path: Path):
    report = Path(run_all(str(tmp_path / "sweep.h5"), str(tmp_path / "plots")))
    assert report.exists()
    assert (tmp_path / "plots" / "S0" / "s0_x200" / "P0.png").exists()
    assert (tmp_path / "plots" / "P1.png").exists()


def test_cli_copies_report(tmp_path: Path, monkeypatch):
    from scripts import run_validation

    out = tmp_path / "report_copy.md"
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_validation", "--out", str(out), "--h5", str(tmp_path / "s.h5"), "--plot-dir", str(tmp_path / "p"), "--no-plots"],
    )
    run_validation.main()
    assert out.exists()
