# -*- coding: utf-8 -*-
"""
Created on Tue Jan 20 10:14:02 2026

@author: bboyg
"""

import numpy as np
import pandas as pd

from trajectory import ConstantTrajectory, PPTrajectory
from controller import ControllerSchedule
from trajectory_bundle import TrajectoryBundle
from state_frames import FrameTag, STATE_DIM, state_headers
from utils_frames import deg2rad

G = 9.80665

CONTROL_NAMES = ("elevL", "elevR", "throttle")


def climbing_turn_samples(
    airspeed_m_s: float = 12.0,
    turn_rate_deg_s: float = 30.0,
    climb_rate_m_s: float = 0.5,
    duration_s: float = 4.0,
    time_step_s: float = 0.05,
    start_alt_m: float = 2.0,
) -> pd.DataFrame:
    """
    Steady climbing coordinated turn in the WORLD frame.

    Horizontal motion: circle at constant airspeed, heading = yaw.
    Vertical motion: constant climb rate.
    Attitude: constant bank for a coordinated turn, pitch = flight path angle.

    Output columns:
        t, x, y, z, roll, pitch, yaw, xdot, ydot, zdot, rolldot, pitchdot, yawdot
    """
    T = float(duration_s)
    if T <= 0:
        raise ValueError("duration_s must be > 0")

    V = float(airspeed_m_s)
    omega = deg2rad(turn_rate_deg_s)
    if abs(omega) < 1e-9:
        raise ValueError("turn_rate_deg_s must be non-zero")

    t = np.arange(0.0, T + 1e-9, time_step_s)

    # omega > 0 turns left (z up): left wing down
    bank = -np.arctan2(V * omega, G)
    gamma = np.arctan2(climb_rate_m_s, V)

    radius = V / omega

    x = np.zeros((len(t), STATE_DIM))
    x[:, 0] = radius * np.sin(omega * t)
    x[:, 1] = radius * (1.0 - np.cos(omega * t))
    x[:, 2] = start_alt_m + climb_rate_m_s * t
    x[:, 3] = bank
    x[:, 4] = -gamma  # nose up is negative pitch about +y with z up
    x[:, 5] = omega * t
    x[:, 6] = V * np.cos(omega * t)
    x[:, 7] = V * np.sin(omega * t)
    x[:, 8] = climb_rate_m_s
    x[:, 11] = omega

    return pd.DataFrame(np.column_stack([t, x]), columns=state_headers(FrameTag.WORLD))


def synthetic_gain(t: float, period_s: float) -> np.ndarray:
    """
    Smooth (3, 12) stand-in gain schedule for demos and tests.

    Not the output of an LQR design.
    """
    K = np.zeros((len(CONTROL_NAMES), STATE_DIM))

    # elevons: pitch / roll channels
    K[0, [2, 4, 8, 10]] = [-0.8, -2.0, -0.3, -0.4]
    K[1, [2, 4, 8, 10]] = [-0.8, -2.0, -0.3, -0.4]
    K[0, [3, 9]] = [1.5, 0.2]
    K[1, [3, 9]] = [-1.5, -0.2]

    # throttle: speed / altitude
    K[2, [2, 6, 7, 8]] = [-0.5, -0.6, -0.1, -0.2]

    return K * (1.0 + 0.1 * np.sin(2.0 * np.pi * t / period_s))


def climbing_turn_bundle(duration_s: float = 4.0, time_step_s: float = 0.05,
                         trim=(0.05, 0.05, 0.6), **kwargs) -> TrajectoryBundle:
    """
    WORLD-frame TrajectoryBundle for the climbing turn with a constant trim
    control and the synthetic gain schedule.
    """
    df = climbing_turn_samples(duration_s=duration_s, time_step_s=time_step_s, **kwargs)

    t = df["t"].to_numpy()
    state = PPTrajectory.from_samples(t, df.iloc[:, 1:].to_numpy(), kind="cubic")

    # held constant; the bundle stretches it over the state's time span
    control = ConstantTrajectory(trim)

    gains = np.array([synthetic_gain(tk, duration_s) for tk in t])
    gain = PPTrajectory.from_samples(t, gains, kind="linear")
    offset = PPTrajectory.from_samples(t, np.tile(trim, (len(t), 1)), kind="zoh")

    return TrajectoryBundle(
        state, control, ControllerSchedule(gain, offset),
        frame=FrameTag.WORLD,
        control_names=CONTROL_NAMES
    )
