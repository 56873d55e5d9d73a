"""HDF5 schema for traced mirror-sweep outputs.

The schema stores multiple scenarios and multiple sweep cases per scenario.

Structure:
    /
      meta                       (attrs: created_at, units, eps)
      scenarios/{scenario_id}/cases/{case_id}/
          params_json            (scalar utf-8 JSON)
          paths/
              mirror_id              (L,) variable-length UTF-8
              object_point           (L,2)
              mirror_point           (L,2)
              viewer_point           (L,2)
              virtual_object_point   (L,2)
          failures/
              mirror_id              (K,) variable-length UTF-8
              reason                 (K,) variable-length UTF-8

Example:
    >>> import numpy as np
    >>> from mirror_core.geometry import Segment
    >>> from mirror_core.tracer import trace_single_reflection
    >>> m = Segment.from_coords([200.0, 50.0], [200.0, 350.0], "m1")
    >>> p = trace_single_reflection(np.array([100.0, 100.0]), np.array([100.0, 300.0]), m)
    >>> payload = {"S0": {"case0": {"params": {"mirror_x": 200.0}, "paths": [p]}}}
    >>> save_sweep_hdf5("/tmp/mirror_example.h5", payload)
    >>> loaded, meta = load_sweep_hdf5("/tmp/mirror_example.h5")
    >>> list(loaded.keys())
    ['S0']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import h5py
import numpy as np

from mirror_core.geometry import EPS
from mirror_core.tracer import RayPath

POINT_FIELDS = ("object_point", "mirror_point", "viewer_point", "virtual_object_point")


@dataclass
class CaseData:
    params: Dict[str, Any]
    paths: List[RayPath]
    failures: Dict[str, str] = field(default_factory=dict)


@dataclass
class Hdf5Meta:
    created_at: str
    units: str
    eps: float


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    raise TypeError(f"Unsupported JSON type: {type(obj)}")


def _points_array(paths: Sequence[RayPath], name: str) -> np.ndarray:
    out = np.zeros((len(paths), 2), dtype=np.float64)
    for i, p in enumerate(paths):
        out[i] = np.asarray(getattr(p, name), dtype=np.float64)
    return out


def _as_str(s: Any) -> str:
    return s.decode() if isinstance(s, bytes) else str(s)


def save_sweep_hdf5(
    filepath: str,
    scenarios: Mapping[str, Mapping[str, CaseData | Mapping[str, Any]]],
    units: str = "px",
) -> None:
    """Save sweep outputs to HDF5 using a fixed schema contract."""

    dt = h5py.string_dtype(encoding="utf-8")
    with h5py.File(filepath, "w") as h5:
        meta = h5.create_group("meta")
        meta.attrs["created_at"] = datetime.now(timezone.utc).isoformat()
        meta.attrs["units"] = units
        meta.attrs["eps"] = EPS

        g_scenarios = h5.create_group("scenarios")
        for scenario_id, cases in scenarios.items():
            g_cases = g_scenarios.create_group(str(scenario_id)).create_group("cases")
            for case_id, case in cases.items():
                case_obj = (
                    case
                    if isinstance(case, CaseData)
                    else CaseData(params=dict(case["params"]), paths=list(case["paths"]), failures=dict(case.get("failures", {})))
                )
                g_case = g_cases.create_group(str(case_id))
                g_case.create_dataset("params_json", data=json.dumps(case_obj.params, default=_json_default))

                paths = case_obj.paths
                g_paths = g_case.create_group("paths")
                g_paths.create_dataset("mirror_id", data=np.asarray([p.mirror_id for p in paths], dtype=dt))
                for name in POINT_FIELDS:
                    g_paths.create_dataset(name, data=_points_array(paths, name))

                g_fail = g_case.create_group("failures")
                g_fail.create_dataset("mirror_id", data=np.asarray(list(case_obj.failures.keys()), dtype=dt))
                g_fail.create_dataset("reason", data=np.asarray([str(v) for v in case_obj.failures.values()], dtype=dt))


def load_sweep_hdf5(filepath: str) -> Tuple[Dict[str, Dict[str, CaseData]], Hdf5Meta]:
    """Load sweep HDF5 and reconstruct cases/paths."""

    scenarios: Dict[str, Dict[str, CaseData]] = {}
    with h5py.File(filepath, "r") as h5:
        meta = Hdf5Meta(
            created_at=str(h5["meta"].attrs.get("created_at", "")),
            units=str(h5["meta"].attrs.get("units", "px")),
            eps=float(h5["meta"].attrs.get("eps", EPS)),
        )

        for scenario_id, g_scenario in h5["scenarios"].items():
            scenarios[scenario_id] = {}
            for case_id, g_case in g_scenario["cases"].items():
                params = json.loads(_as_str(g_case["params_json"][()]))
                g_paths = g_case["paths"]

                mirror_ids = [_as_str(s) for s in g_paths["mirror_id"][()]]
                arrays = {name: np.asarray(g_paths[name][()], dtype=np.float64) for name in POINT_FIELDS}
                paths = [
                    RayPath(
                        object_point=arrays["object_point"][i].copy(),
                        mirror_point=arrays["mirror_point"][i].copy(),
                        viewer_point=arrays["viewer_point"][i].copy(),
                        virtual_object_point=arrays["virtual_object_point"][i].copy(),
                        mirror_id=mirror_ids[i],
                    )
                    for i in range(len(mirror_ids))
                ]

                failures: Dict[str, str] = {}
                if "failures" in g_case:
                    ids = [_as_str(s) for s in g_case["failures"]["mirror_id"][()]]
                    reasons = [_as_str(s) for s in g_case["failures"]["reason"][()]]
                    failures = dict(zip(ids, reasons))

                scenarios[scenario_id][case_id] = CaseData(params=params, paths=paths, failures=failures)

    return scenarios, meta


def self_test_roundtrip(filepath: str, atol: float = 1e-12) -> bool:
    """Write->read equivalence self-test on a freshly traced path."""

    from mirror_core.geometry import Segment
    from mirror_core.tracer import trace_single_reflection

    mirror = Segment.from_coords([200.0, 50.0], [200.0, 350.0], "selftest-mirror")
    path = trace_single_reflection(np.array([100.0, 100.0]), np.array([100.0, 300.0]), mirror)
    payload = {"selftest": {"case0": CaseData(params={"seed": 7}, paths=[path], failures={"short": "path_not_on_mirror"})}}
    save_sweep_hdf5(filepath, payload)
    scenarios, _ = load_sweep_hdf5(filepath)
    case = scenarios["selftest"]["case0"]
    if len(case.paths) != 1 or case.failures != {"short": "path_not_on_mirror"}:
        return False
    p2 = case.paths[0]
    return bool(
        p2.mirror_id == path.mirror_id
        and all(np.allclose(getattr(p2, n), getattr(path, n), atol=atol) for n in POINT_FIELDS)
    )
