# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 09:12:40 2026

@author: bboyg
"""

import numpy as np


# ============================================================
# Angle utilities
# ============================================================

def deg2rad(deg: float) -> float:
    """
    Converts angle from degrees to radians.

    """
    return deg * np.pi / 180.0


def rad2deg(rad: float) -> float:
    """
    Converts angle from radians to degrees.

    """
    return rad * 180.0 / np.pi


# ============================================================
# Roll / pitch / yaw rotation (ZYX convention)
# ============================================================

def rpy_to_rotmat(rpy) -> np.ndarray:
    """
    Rotation matrix for roll, pitch, yaw (rad) using the ZYX convention:

        R = Rz(yaw) @ Ry(pitch) @ Rx(roll)

    Returns:
        R (3x3) mapping BODY vectors -> WORLD frame: v_world = R @ v_body
        (use R.T for WORLD -> BODY)
    """
    roll, pitch, yaw = float(rpy[0]), float(rpy[1]), float(rpy[2])

    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    R = np.array([
        [cy * cp,   cy * sp * sr - sy * cr,   cy * sp * cr + sy * sr],
        [sy * cp,   sy * sp * sr + cy * cr,   sy * sp * cr - cy * sr],
        [-sp,       cp * sr,                  cp * cr               ]
    ], dtype=float)

    return R


def rpydot_to_angular_velocity(rpy, rpydot) -> np.ndarray:
    """
    Euler-angle rates -> angular velocity expressed in the WORLD frame.

        omega_world = yawdot * z + pitchdot * (Rz @ y) + rolldot * (Rz @ Ry @ x)
    """
    pitch, yaw = float(rpy[1]), float(rpy[2])

    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    E = np.array([
        [cy * cp,  -sy,  0.0],
        [sy * cp,   cy,  0.0],
        [-sp,       0.0, 1.0]
    ], dtype=float)

    return E @ np.asarray(rpydot, dtype=float)


def angular_velocity_to_rpydot(rpy, omega_world) -> np.ndarray:
    """
    WORLD-frame angular velocity -> Euler-angle rates.

    Inverse of rpydot_to_angular_velocity. Singular at pitch = +/- pi/2
    (divides by cos(pitch)); no clamping is applied there.
    """
    pitch, yaw = float(rpy[1]), float(rpy[2])

    cp, tp = np.cos(pitch), np.tan(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    E_inv = np.array([
        [cy / cp,   sy / cp,   0.0],
        [-sy,       cy,        0.0],
        [cy * tp,   sy * tp,   1.0]
    ], dtype=float)

    return E_inv @ np.asarray(omega_world, dtype=float)


# ============================================================
# Numeric Jacobian
# ============================================================

def numeric_jacobian(f, x: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """
    Central-difference Jacobian of f at x.

    f maps an (n,) array to an (m,) array. Returns (m, n).
    """
    x = np.asarray(x, dtype=float)
    f0 = np.asarray(f(x), dtype=float)
    J = np.zeros((f0.size, x.size))

    for i in range(x.size):
        dx = np.zeros(x.size)
        dx[i] = eps
        f_plus = np.asarray(f(x + dx), dtype=float)
        f_minus = np.asarray(f(x - dx), dtype=float)
        J[:, i] = (f_plus - f_minus) / (2.0 * eps)

    return J
