# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 14:52:36 2026

@author: bboyg
"""

import errno
import logging
from pathlib import Path

import numpy as np
import pandas as pd

from export_params import ExportParams
from state_frames import STATE_DIM, state_headers, frame_from_headers
from trajectory import PPTrajectory
from controller import ControllerSchedule
from trajectory_bundle import TrajectoryBundle

logger = logging.getLogger(__name__)

# Order matters: existence is checked and files are written in this order.
TABLES = ("x", "u", "controller", "affine")

# Grid points within this fraction of dt below end_t still count as on-grid
_GRID_TOL = 1e-9


# ============================================================
# Paths / headers
# ============================================================

def export_paths(prefix, extension: str = ".csv") -> dict:
    """
    <prefix>-x, <prefix>-u, <prefix>-controller, <prefix>-affine
    """
    prefix = str(prefix)
    return {name: Path(f"{prefix}-{name}{extension}") for name in TABLES}


def control_headers(control_names):
    return ["t"] + list(control_names)


def gain_headers(control_dim: int):
    """
    t, then k<i>_<j> for control output i and state j (1-based, row-major).
    """
    headers = ["t"]
    for i in range(control_dim):
        for j in range(STATE_DIM):
            headers.append(f"k{i + 1}_{j + 1}")
    return headers


def affine_headers(control_names):
    return ["t"] + [f"affine_{name}" for name in control_names]


# ============================================================
# Sampling
# ============================================================

def sample_times(end_t: float, dt: float) -> np.ndarray:
    """
    t_k = k * dt for k = 0, 1, ... while t_k <= end_t.

    end_t is only included if it lands on the grid; no shortened final
    step is added.
    """
    dt = float(dt)
    if not dt > 0:
        raise ValueError(f"dt must be > 0, got {dt}")

    end_t = float(end_t)
    if end_t < 0:
        return np.zeros(0)

    n = int(np.floor(end_t / dt + _GRID_TOL))
    t = dt * np.arange(n + 1, dtype=float)

    # k*dt can overshoot end_t by rounding when it lands on the grid
    return np.minimum(t, end_t)


def sample_tables(bundle: TrajectoryBundle, dt: float) -> dict:
    """
    Samples the four streams of a bundle on the same time grid.

    Returns a dict of DataFrames keyed like TABLES; row k of every frame
    corresponds to the same t_k.
    """
    t = sample_times(bundle.end_time, dt)
    m = bundle.control_dim
    n = len(t)

    x_rows = np.zeros((n, STATE_DIM))
    u_rows = np.zeros((n, m))
    k_rows = np.zeros((n, m * STATE_DIM))
    a_rows = np.zeros((n, m))

    gain = bundle.controller.gain
    offset = bundle.controller.offset

    for k, tk in enumerate(t):
        x_rows[k] = np.asarray(bundle.state.evaluate(tk), dtype=float).reshape(STATE_DIM)
        u_rows[k] = np.asarray(bundle.control.evaluate(tk), dtype=float).reshape(m)

        K = np.asarray(gain.evaluate(tk), dtype=float).reshape(m, STATE_DIM)
        k_rows[k] = K.reshape(-1)

        a_rows[k] = np.asarray(offset.evaluate(tk), dtype=float).reshape(m)

    return {
        "x": pd.DataFrame(np.column_stack([t, x_rows]),
                          columns=state_headers(bundle.frame)),
        "u": pd.DataFrame(np.column_stack([t, u_rows]),
                          columns=control_headers(bundle.control_names)),
        "controller": pd.DataFrame(np.column_stack([t, k_rows]),
                                   columns=gain_headers(m)),
        "affine": pd.DataFrame(np.column_stack([t, a_rows]),
                               columns=affine_headers(bundle.control_names)),
    }


# ============================================================
# Writing
# ============================================================

def check_targets(paths):
    """
    Raises FileExistsError for the first path that already exists.
    """
    for path in paths:
        if Path(path).exists():
            raise FileExistsError(
                errno.EEXIST,
                "Not writing trajectory since file exists",
                str(path)
            )


def write_bundle(bundle: TrajectoryBundle, prefix, dt=None, overwrite=None,
                 params: ExportParams = None) -> dict:
    """
    Writes <prefix>-x.csv, <prefix>-u.csv, <prefix>-controller.csv and
    <prefix>-affine.csv.

    Inputs:
        bundle    : TrajectoryBundle (either frame)
        prefix    : path prefix for the four files
        dt        : sampling time, overrides params.dt
        overwrite : overrides params.overwrite
        params    : ExportParams, defaults used if omitted

    Returns:
        dict of written paths keyed like TABLES

    Nothing is created or truncated if any target exists and overwrite is
    off, or if sampling fails.
    """
    if params is None:
        params = ExportParams() if dt is None else ExportParams(dt=dt)

    if dt is None:
        dt = params.dt
    dt = float(dt)
    if not dt > 0:
        raise ValueError(f"dt must be > 0, got {dt}")

    if overwrite is None:
        overwrite = params.overwrite

    paths = export_paths(prefix, params.extension)

    if not overwrite:
        check_targets(paths[name] for name in TABLES)

    tables = sample_tables(bundle, dt)

    for name in TABLES:
        path = paths[name]
        path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Writing: %s", path)
        tables[name].to_csv(
            path,
            index=False,
            float_format=params.float_format,
            lineterminator=params.line_terminator
        )
        logger.debug("%s: %d rows", path, len(tables[name]))

    return paths


# ============================================================
# Reading back
# ============================================================

def load_tables(prefix, extension: str = ".csv") -> dict:
    """
    Reads the four exported tables into DataFrames keyed like TABLES.
    """
    paths = export_paths(prefix, extension)
    return {
        name: pd.read_csv(paths[name], skipinitialspace=True)
        for name in TABLES
    }


def read_bundle(prefix, frame=None, kind: str = "linear",
                extension: str = ".csv") -> TrajectoryBundle:
    """
    Rebuilds a TrajectoryBundle from exported files by interpolating the
    samples (see PPTrajectory.from_samples for `kind`).

    The frame is taken from the state table header unless given.
    """
    tables = load_tables(prefix, extension)
    df_x = tables["x"]
    df_u = tables["u"]
    df_k = tables["controller"]
    df_a = tables["affine"]

    if frame is None:
        frame = frame_from_headers(df_x.columns)
        if frame is None:
            raise ValueError(
                f"cannot infer state frame from columns {list(df_x.columns)}"
            )

    control_names = list(df_u.columns[1:])
    m = len(control_names)

    state = PPTrajectory.from_samples(df_x["t"].to_numpy(),
                                      df_x.iloc[:, 1:].to_numpy(), kind)
    control = PPTrajectory.from_samples(df_u["t"].to_numpy(),
                                        df_u.iloc[:, 1:].to_numpy(), kind)

    K = df_k.iloc[:, 1:].to_numpy().reshape(-1, m, STATE_DIM)
    gain = PPTrajectory.from_samples(df_k["t"].to_numpy(), K, kind)
    offset = PPTrajectory.from_samples(df_a["t"].to_numpy(),
                                       df_a.iloc[:, 1:].to_numpy(), kind)

    return TrajectoryBundle(state, control, ControllerSchedule(gain, offset),
                            frame, control_names)
