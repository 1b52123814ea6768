# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 10:05:17 2026

@author: bboyg
"""

import numpy as np
from scipy.interpolate import PPoly, CubicSpline


class Trajectory:
    """
    Base class for time-indexed trajectories.

    evaluate(t)   -> np.ndarray of shape `shape`
    breakpoints() -> increasing array of segment boundaries; the first and
                     last bound the domain
    """
    shape = ()

    def evaluate(self, t: float) -> np.ndarray:
        raise NotImplementedError

    def breakpoints(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def dim(self) -> int:
        return int(np.prod(self.shape))

    @property
    def start_time(self) -> float:
        return float(self.breakpoints()[0])

    @property
    def end_time(self) -> float:
        return float(self.breakpoints()[-1])


# ------------------------------------------------------------
# Constant value (no time dependence)
# ------------------------------------------------------------
class ConstantTrajectory(Trajectory):
    """
    Same value at every time.

    tspan : (t0, t1) domain reported by breakpoints(); unbounded by default.
    """

    def __init__(self, value, tspan=(-np.inf, np.inf)):
        self.value = np.array(value, dtype=float)
        self.shape = self.value.shape
        self.tspan = (float(tspan[0]), float(tspan[1]))

    def evaluate(self, t: float) -> np.ndarray:
        return self.value.copy()

    def breakpoints(self) -> np.ndarray:
        return np.array(self.tspan, dtype=float)


# ------------------------------------------------------------
# Piecewise polynomial (vector or matrix valued)
# ------------------------------------------------------------
class PPTrajectory(Trajectory):
    """
    Piecewise polynomial trajectory backed by scipy's PPoly.

    pp.c has shape (order+1, n_segments, *shape). Evaluation outside the
    breakpoints is clamped to the end values.
    """

    def __init__(self, pp: PPoly):
        if not isinstance(pp, PPoly):
            raise TypeError(f"expected scipy PPoly, got {type(pp).__name__}")
        self.pp = pp
        self.shape = tuple(pp.c.shape[2:])

    def evaluate(self, t: float) -> np.ndarray:
        x = self.pp.x
        tq = min(max(float(t), x[0]), x[-1])
        return np.asarray(self.pp(tq), dtype=float).reshape(self.shape)

    def breakpoints(self) -> np.ndarray:
        return np.asarray(self.pp.x, dtype=float).copy()

    @staticmethod
    def from_samples(t, values, kind: str = "linear") -> "PPTrajectory":
        """
        Build a trajectory through samples.

        t      : (N,) increasing sample times, N >= 2
        values : (N, *shape) samples
        kind   : "linear" (first-order hold), "zoh" (zero-order hold) or
                 "cubic" (spline)
        """
        t = np.asarray(t, dtype=float)
        values = np.asarray(values, dtype=float)

        if t.ndim != 1 or len(t) < 2:
            raise ValueError("need at least two sample times")
        if values.shape[0] != len(t):
            raise ValueError(
                f"values has {values.shape[0]} samples but t has {len(t)}"
            )
        if np.any(np.diff(t) <= 0):
            raise ValueError("sample times must be strictly increasing")

        if kind == "cubic":
            return PPTrajectory(CubicSpline(t, values, axis=0))

        if kind == "zoh":
            c = values[:-1][np.newaxis]
            return PPTrajectory(PPoly(c, t))

        if kind == "linear":
            dt = np.diff(t).reshape((-1,) + (1,) * (values.ndim - 1))
            slope = np.diff(values, axis=0) / dt
            c = np.stack([slope, values[:-1]])
            return PPTrajectory(PPoly(c, t))

        raise ValueError(f"unknown interpolation kind '{kind}'")

    @staticmethod
    def from_constant(traj: ConstantTrajectory, breaks) -> "PPTrajectory":
        """
        Zero-order piecewise form of a constant trajectory over `breaks`.
        """
        breaks = np.asarray(breaks, dtype=float)
        if len(breaks) < 2:
            raise ValueError("need at least two breakpoints")

        c = np.broadcast_to(traj.value, (1, len(breaks) - 1) + traj.shape).copy()
        return PPTrajectory(PPoly(c, breaks))


# ------------------------------------------------------------
# Point-wise function of another trajectory
# ------------------------------------------------------------
class FunctionTrajectory(Trajectory):
    """
    fn(base.evaluate(t)), sharing the breakpoints of base.
    """

    def __init__(self, base, fn, shape=None):
        self.base = base
        self.fn = fn
        self.shape = tuple(shape) if shape is not None else tuple(output_shape(base))

    def evaluate(self, t: float) -> np.ndarray:
        return np.asarray(self.fn(self.base.evaluate(t)), dtype=float).reshape(self.shape)

    def breakpoints(self) -> np.ndarray:
        return np.asarray(self.base.breakpoints(), dtype=float)


# ============================================================
# Capability checks
# ============================================================

def is_trajectory(obj) -> bool:
    """
    True if obj can be evaluated in time and reports breakpoints.
    """
    return callable(getattr(obj, "evaluate", None)) and \
        callable(getattr(obj, "breakpoints", None))


def check_trajectory(obj, name: str = "trajectory"):
    if not is_trajectory(obj):
        raise TypeError(
            f"{name} must provide evaluate(t) and breakpoints(), "
            f"got {type(obj).__name__}"
        )
    return obj


def output_shape(traj) -> tuple:
    """
    Shape of traj's values. Falls back to evaluating at the first breakpoint
    for trajectory-like objects without a `shape` attribute.
    """
    shape = getattr(traj, "shape", None)
    if shape is not None:
        return tuple(shape)
    t0 = float(np.asarray(traj.breakpoints(), dtype=float)[0])
    return np.asarray(traj.evaluate(t0)).shape


def as_piecewise(traj, breaks):
    """
    Normalises a ConstantTrajectory into a PPTrajectory over `breaks`;
    any other trajectory is returned unchanged.
    """
    if isinstance(traj, ConstantTrajectory):
        return PPTrajectory.from_constant(traj, breaks)
    return traj
