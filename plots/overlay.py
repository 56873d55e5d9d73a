"""Static diagnostic figures for the validation sweep."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence
import warnings

import matplotlib.pyplot as plt
import numpy as np

from mirror_core.geometry import Segment, Vector
from mirror_core.shapes import Shape, VirtualShape
from mirror_core.tracer import RayPath


def _save(fig: plt.Figure, outdir: str, name: str) -> str:
    Path(outdir).mkdir(parents=True, exist_ok=True)
    png = Path(outdir) / f"{name}.png"
    pdf = Path(outdir) / f"{name}.pdf"
    fig.savefig(png, dpi=150, bbox_inches="tight")
    try:
        fig.savefig(pdf, bbox_inches="tight")
    except PermissionError:
        warnings.warn(
            f"Could not write '{pdf}' (permission denied). Saved PNG only.",
            RuntimeWarning,
            stacklevel=2,
        )
    plt.close(fig)
    return str(png)


def _closed(vertices: np.ndarray) -> np.ndarray:
    return np.vstack([vertices, vertices[:1]])


def p0_scene_overlay(
    mirrors: Sequence[Segment],
    viewer: Optional[Vector],
    shape: Optional[Shape],
    virtual_shapes: Sequence[VirtualShape],
    paths: Sequence[RayPath],
    outdir: str,
) -> str:
    fig, ax = plt.subplots()
    for m in mirrors:
        ax.plot([m.start[0], m.end[0]], [m.start[1], m.end[1]], color="0.4", linewidth=3)
    if viewer is not None:
        ax.scatter([viewer[0]], [viewer[1]], color="blue", label="viewer")
    if shape is not None:
        v = _closed(shape.vertices)
        ax.fill(v[:, 0], v[:, 1], color="red", alpha=0.8, label="object")
    for vs in virtual_shapes:
        v = _closed(vs.vertices)
        ax.plot(v[:, 0], v[:, 1], color="red", alpha=0.5, linestyle="--")
    for p in paths:
        for a, b in p.segments():
            if np.allclose(a, b):
                continue
            ax.annotate("", xy=(b[0], b[1]), xytext=(a[0], a[1]), arrowprops={"arrowstyle": "->", "color": "#f3c623"})
        ax.plot(
            [p.mirror_point[0], p.virtual_object_point[0]],
            [p.mirror_point[1], p.virtual_object_point[1]],
            color="#f3a000",
            alpha=0.4,
            linestyle=":",
        )
    ax.set_aspect("equal")
    ax.invert_yaxis()
    ax.set_title("P0 scene overlay")
    if viewer is not None or shape is not None:
        ax.legend(loc="best")
    return _save(fig, outdir, "P0")


def p1_path_lengths(labels: Sequence[str], lengths: Sequence[float], outdir: str) -> str:
    fig, ax = plt.subplots()
    x = np.arange(len(labels))
    ax.bar(x, lengths)
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylabel("path length [px]")
    ax.set_title("P1 single-bounce path lengths")
    return _save(fig, outdir, "P1")
