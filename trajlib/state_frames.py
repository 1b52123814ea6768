# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 09:40:03 2026

@author: bboyg
"""

from enum import Enum
import numpy as np

from utils_frames import (
    rpy_to_rotmat,
    rpydot_to_angular_velocity,
    angular_velocity_to_rpydot,
    numeric_jacobian
)


# ============================================================
# 12-element aircraft state
#
# WORLD frame:
#   x(0:3)  : x, y, z          (world position)
#   x(3:6)  : roll, pitch, yaw
#   x(6:9)  : xdot, ydot, zdot (world velocity)
#   x(9:12) : rolldot, pitchdot, yawdot
#
# BODY frame (onboard state estimator):
#   x(0:3)  : x, y, z          (world position)
#   x(3:6)  : roll, pitch, yaw
#   x(6:9)  : u, v, w          (body velocity)
#   x(9:12) : p, q, r          (body angular velocity)
# ============================================================

STATE_DIM = 12


class FrameTag(Enum):
    WORLD = "world"
    BODY = "body"


_STATE_NAMES = {
    FrameTag.WORLD: ["x", "y", "z", "roll", "pitch", "yaw",
                     "xdot", "ydot", "zdot", "rolldot", "pitchdot", "yawdot"],
    FrameTag.BODY: ["x", "y", "z", "roll", "pitch", "yaw",
                    "u", "v", "w", "p", "q", "r"],
}


def state_headers(frame: FrameTag):
    """
    Column names for an exported state table: time followed by the 12 states.
    """
    return ["t"] + list(_STATE_NAMES[frame])


def frame_from_headers(headers):
    """
    Inverse of state_headers. Returns None if the columns match neither frame.
    """
    headers = [h.strip() for h in headers]
    for frame in FrameTag:
        if headers == state_headers(frame):
            return frame
    return None


# ============================================================
# Point-wise conversion
# ============================================================

def world_to_body(x_world) -> np.ndarray:
    """
    Converts a WORLD-frame state into the BODY frame used by the state
    estimator and exported for online control.

    Position and attitude are copied unchanged. Velocity is rotated into
    the body frame; Euler rates become body angular velocity (p, q, r).
    """
    x_world = np.asarray(x_world, dtype=float).reshape(-1)
    x_body = x_world.copy()

    rpy = x_world[3:6]

    R_body_to_world = rpy_to_rotmat(rpy)
    R_world_to_body = R_body_to_world.T

    uvw = R_world_to_body @ x_world[6:9]

    omega_world = rpydot_to_angular_velocity(rpy, x_world[9:12])
    pqr = R_world_to_body @ omega_world

    x_body[6:9] = uvw
    x_body[9:12] = pqr

    return x_body


def body_to_world(x_body) -> np.ndarray:
    """
    Converts a BODY-frame state back into the WORLD frame.

    Exact inverse of world_to_body away from pitch = +/- pi/2.
    """
    x_body = np.asarray(x_body, dtype=float).reshape(-1)
    x_world = x_body.copy()

    rpy = x_body[3:6]

    R_body_to_world = rpy_to_rotmat(rpy)

    vel_world = R_body_to_world @ x_body[6:9]

    omega_world = R_body_to_world @ x_body[9:12]
    rpydot = angular_velocity_to_rpydot(rpy, omega_world)

    x_world[6:9] = vel_world
    x_world[9:12] = rpydot

    return x_world


# ============================================================
# Transforms between frames
# ============================================================

class FrameTransform:
    """
    Base class for state transforms between frames.

    apply(x) -> x converted from `source` into `target`
    """
    source = None
    target = None

    def apply(self, x) -> np.ndarray:
        raise NotImplementedError

    def inverse(self) -> "FrameTransform":
        raise NotImplementedError

    def __call__(self, x) -> np.ndarray:
        return self.apply(x)

    def jacobian(self, x, eps: float = 1e-6) -> np.ndarray:
        """
        d(apply)/dx at x, (12, 12).
        """
        return numeric_jacobian(self.apply, x, eps)

    def __repr__(self):
        return f"{type(self).__name__}()"


class WorldToBody(FrameTransform):
    source = FrameTag.WORLD
    target = FrameTag.BODY

    def apply(self, x) -> np.ndarray:
        return world_to_body(x)

    def inverse(self) -> FrameTransform:
        return BodyToWorld()


class BodyToWorld(FrameTransform):
    source = FrameTag.BODY
    target = FrameTag.WORLD

    def apply(self, x) -> np.ndarray:
        return body_to_world(x)

    def inverse(self) -> FrameTransform:
        return WorldToBody()


def transform_between(source: FrameTag, target: FrameTag):
    """
    Returns the transform from source to target, or None if they match.
    """
    if source == target:
        return None
    if source == FrameTag.WORLD:
        return WorldToBody()
    return BodyToWorld()
