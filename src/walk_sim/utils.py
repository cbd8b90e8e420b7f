# src/walk_sim/utils.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None  # type: ignore


@dataclass
class WalkResult:
    """Common container for walk outputs."""

    visited: Optional[np.ndarray] = None
    positions: Optional[np.ndarray] = None
    meta: Optional[Dict[str, Any]] = None

    def ensure_meta(self) -> Dict[str, Any]:
        if self.meta is None:
            self.meta = {}
        return self.meta

    @property
    def num_points(self) -> int:
        return 0 if self.positions is None else int(self.positions.shape[0])


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Process-lifetime generator; a None seed draws OS entropy once."""
    return np.random.default_rng(seed)


def save_walk_result(
    path: str | os.PathLike[str], result: WalkResult, *, overwrite: bool = True
) -> Path:
    """
    Serialize a WalkResult to a compressed .npz file and return the path written.
    A missing .npz suffix is appended, as np.savez_compressed would.
    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")
    if not overwrite and path.exists():
        raise FileExistsError(f"{path} already exists")
    out_dir = path.parent
    out_dir.mkdir(parents=True, exist_ok=True)
    out: Dict[str, Any] = {}
    if result.visited is not None:
        out["visited"] = np.asarray(result.visited).astype("uint8")
    if result.positions is not None:
        out["positions"] = np.asarray(result.positions, dtype=np.float64)
    out["meta"] = dict(result.meta or {})
    np.savez_compressed(path, **out)
    return path


def load_walk(path: str | os.PathLike[str]) -> WalkResult:
    """
    Load a walk .npz into a WalkResult.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Missing walk file: {path}")
    with np.load(path, allow_pickle=True) as data:
        visited = data["visited"].astype(np.uint8) if "visited" in data else None
        positions = data["positions"].astype(float) if "positions" in data else None
        meta: Dict[str, Any] = {}
        if "meta" in data:
            meta_raw = data["meta"]
            meta = meta_raw.item() if hasattr(meta_raw, "item") else dict(meta_raw)
    return WalkResult(visited=visited, positions=positions, meta=meta)


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load walk parameters from JSON or TOML.
    """
    path = str(path)
    with open(path, "rb") as fh:
        data = fh.read()
    suffix = Path(path).suffix.lower()
    if suffix in {".json", ""}:
        return json.loads(data.decode("utf-8"))
    if suffix in {".toml", ".tml"}:
        if tomllib is None:
            raise RuntimeError("tomllib is unavailable; cannot parse TOML files")
        return tomllib.loads(data.decode("utf-8"))
    raise ValueError(f"Unsupported parameter file format: {suffix}")
