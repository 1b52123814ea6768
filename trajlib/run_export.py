# -*- coding: utf-8 -*-
"""
Created on Tue Jan 20 15:02:51 2026

@author: bboyg
"""

import logging

from scenarios import climbing_turn_bundle
from trajectory_library import TrajectoryLibrary
from export_params import ExportParams


def main(directory="trajectories", overwrite=False):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    params = ExportParams(dt=0.01, overwrite=overwrite)

    world = climbing_turn_bundle(duration_s=4.0)
    body = world.convert_to_body_aligned()

    lib = TrajectoryLibrary([world, body])
    written = lib.write_all(directory, params=params)

    for i, paths in enumerate(written):
        print(f"Saved trajectory {i} ({lib[i].frame.value} frame):")
        for path in paths.values():
            print("  ", path)

    print("End time:", world.end_time, "s, dt:", params.dt, "s")


if __name__ == "__main__":
    main()
