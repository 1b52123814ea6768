# -*- coding: utf-8 -*-
"""
Created on Mon Jan 19 14:31:09 2026

@author: bboyg
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExportParams:
    """
    Trajectory export parameter container.

    dt              : sampling time step [s], > 0
    overwrite       : replace existing files instead of refusing to write
    extension       : file extension appended to <prefix>-x etc.
    float_format    : printf-style float format for pandas (None = full precision)
    line_terminator : row terminator
    """

    dt: float = 0.01
    overwrite: bool = False
    extension: str = ".csv"
    float_format: Optional[str] = None
    line_terminator: str = "\n"

    def __post_init__(self):
        self.dt = float(self.dt)
        if not self.dt > 0:
            raise ValueError(f"dt must be > 0, got {self.dt}")
