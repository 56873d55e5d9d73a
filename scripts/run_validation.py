"""Run full mirror scenario validation and store a markdown report.

Usage:
    python -m scripts.run_validation --out artifacts/validation_report.md
"""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path

from scenarios.runner import SweepConfig, run_all


def main() -> None:
    parser = argparse.ArgumentParser(description="Run mirror scenario sweep validation report.")
    parser.add_argument("--out", default="artifacts/validation_report.md", help="Output markdown report path")
    parser.add_argument("--h5", default="artifacts/mirror_sweep.h5", help="HDF5 dump of traced paths")
    parser.add_argument("--plot-dir", default="artifacts/plots", help="Directory for overlay figures")
    parser.add_argument("--no-plots", action="store_true", help="Skip figure generation")
    args = parser.parse_args()

    generated = Path(run_all(args.h5, args.plot_dir, SweepConfig(make_plots=not args.no_plots)))
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if generated.resolve() != out_path.resolve():
        shutil.copyfile(generated, out_path)
    print(out_path)


if __name__ == "__main__":
    main()
