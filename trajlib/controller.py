# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 11:26:48 2026

@author: bboyg
"""

import numpy as np

from trajectory import Trajectory, check_trajectory, output_shape
from state_frames import STATE_DIM, FrameTransform


class ControllerSchedule:
    """
    Time-varying linear feedback controller around a reference trajectory.

    gain   : trajectory of K(t), shape (m, 12)
    offset : trajectory of the feed-forward control, shape (m,)

    Control law (never evaluated here, only stored / converted / exported):

        u(t) = offset(t) + K(t) @ (x - x_ref(t))
    """

    def __init__(self, gain, offset):
        self.gain = check_trajectory(gain, "gain")
        self.offset = check_trajectory(offset, "offset")

        gain_shape = output_shape(self.gain)
        offset_shape = output_shape(self.offset)

        if len(gain_shape) != 2 or gain_shape[1] != STATE_DIM:
            raise ValueError(
                f"gain must have shape (m, {STATE_DIM}), got {gain_shape}"
            )
        if offset_shape != (gain_shape[0],):
            raise ValueError(
                f"offset shape {offset_shape} does not match gain rows "
                f"({gain_shape[0]},)"
            )

        self.control_dim = gain_shape[0]

    def in_input_frame(self, transform: FrameTransform, x_ref) -> "ControllerSchedule":
        """
        Same controller, accepting states converted by `transform`.

        x_ref is the reference state trajectory in the current (input) frame.
        """
        gain = ReexpressedGainTrajectory(self.gain, x_ref, transform)
        return ControllerSchedule(gain, self.offset)

    def __repr__(self):
        return (f"ControllerSchedule(control_dim={self.control_dim}, "
                f"gain={type(self.gain).__name__}, "
                f"offset={type(self.offset).__name__})")


class ReexpressedGainTrajectory(Trajectory):
    """
    Gain schedule re-expressed for states converted by `transform`.

    With x_new = T(x_old), the deviation law is linearised about the
    converted reference:

        K_new(t) = K_old(t) @ dT^-1/dx_new (T(x_ref(t)))
    """

    def __init__(self, gain, x_ref, transform: FrameTransform):
        self.gain = gain
        self.x_ref = x_ref
        self.transform = transform
        self.inverse = transform.inverse()
        self.shape = tuple(output_shape(gain))

    def evaluate(self, t: float) -> np.ndarray:
        K_old = np.asarray(self.gain.evaluate(t), dtype=float).reshape(self.shape)
        x_new_ref = self.transform(self.x_ref.evaluate(t))
        J_inv = self.inverse.jacobian(x_new_ref)
        return K_old @ J_inv

    def breakpoints(self) -> np.ndarray:
        return np.asarray(self.gain.breakpoints(), dtype=float)
