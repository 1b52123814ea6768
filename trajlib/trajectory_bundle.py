# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 13:48:55 2026

@author: bboyg
"""

import logging
import numpy as np

from trajectory import (
    FunctionTrajectory,
    check_trajectory,
    output_shape,
    as_piecewise
)
from controller import ControllerSchedule
from state_frames import STATE_DIM, FrameTag, transform_between

logger = logging.getLogger(__name__)


class TrajectoryBundle:
    """
    A reference trajectory together with its LQR controller.

    state      : state trajectory, 12 states in `frame`
    control    : control trajectory, shape (m,)
    controller : ControllerSchedule designed around `state`
    frame      : FrameTag of the state (and of the controller input)

    control_names : optional names for the m control channels, used as
                    column headers on export (defaults to u1..um)

    Bundles are not modified after construction. Frame conversion returns a
    new bundle.
    """

    def __init__(self, state, control, controller, frame=FrameTag.WORLD,
                 control_names=None):
        check_trajectory(state, "state trajectory")
        check_trajectory(control, "control trajectory")

        if not isinstance(controller, ControllerSchedule):
            raise TypeError(
                f"controller must be a ControllerSchedule, got {type(controller).__name__}"
            )
        if not isinstance(frame, FrameTag):
            raise TypeError(f"frame must be a FrameTag, got {frame!r}")

        breaks = np.asarray(state.breakpoints(), dtype=float)
        if not np.all(np.isfinite(breaks[[0, -1]])):
            raise ValueError("state trajectory must have a finite time span")

        state_shape = output_shape(state)
        if state_shape != (STATE_DIM,):
            raise ValueError(
                f"state trajectory must have shape ({STATE_DIM},), got {state_shape}"
            )

        # constant controls get the state's time span
        control = as_piecewise(control, [breaks[0], breaks[-1]])

        control_shape = output_shape(control)
        if control_shape != (controller.control_dim,):
            raise ValueError(
                f"control shape {control_shape} does not match controller "
                f"({controller.control_dim},)"
            )

        control_end = float(np.asarray(control.breakpoints(), dtype=float)[-1])
        if not np.isclose(control_end, breaks[-1]):
            raise ValueError(
                f"control trajectory ends at {control_end}, "
                f"state trajectory ends at {breaks[-1]}"
            )

        if control_names is None:
            control_names = [f"u{i + 1}" for i in range(controller.control_dim)]
        control_names = tuple(str(n) for n in control_names)
        if len(control_names) != controller.control_dim:
            raise ValueError(
                f"got {len(control_names)} control names for "
                f"{controller.control_dim} controls"
            )

        self._state = state
        self._control = control
        self._controller = controller
        self._frame = frame
        self._control_names = control_names

    # ---------------------------------------------------------
    # Read-only access
    # ---------------------------------------------------------
    @property
    def state(self):
        return self._state

    @property
    def control(self):
        return self._control

    @property
    def controller(self) -> ControllerSchedule:
        return self._controller

    @property
    def frame(self) -> FrameTag:
        return self._frame

    @property
    def control_names(self) -> tuple:
        return self._control_names

    @property
    def control_dim(self) -> int:
        return self._controller.control_dim

    @property
    def end_time(self) -> float:
        return float(np.asarray(self._state.breakpoints(), dtype=float)[-1])

    # ---------------------------------------------------------
    # Frame conversion
    # ---------------------------------------------------------
    def convert_to_body_aligned(self) -> "TrajectoryBundle":
        """
        Converts the state and controller into the frame used by the
        onboard state estimator.
        """
        return self._converted(FrameTag.BODY)

    def convert_to_world_aligned(self) -> "TrajectoryBundle":
        """
        Converts the state and controller into the world frame.
        """
        return self._converted(FrameTag.WORLD)

    def _converted(self, target: FrameTag) -> "TrajectoryBundle":
        if self._frame == target:
            return TrajectoryBundle(self._state, self._control, self._controller,
                                    target, self._control_names)

        transform = transform_between(self._frame, target)
        logger.debug("Converting bundle %s -> %s", self._frame.value, target.value)

        state = FunctionTrajectory(self._state, transform, shape=(STATE_DIM,))
        controller = self._controller.in_input_frame(transform, self._state)

        # controls are actuator commands, independent of the state frame
        return TrajectoryBundle(state, self._control, controller, target,
                                self._control_names)

    def __repr__(self):
        return (f"TrajectoryBundle(frame={self._frame.value}, "
                f"control_dim={self.control_dim}, end_time={self.end_time})")
