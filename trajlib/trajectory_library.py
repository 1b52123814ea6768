# -*- coding: utf-8 -*-
"""
Created on Tue Jan 20 08:57:21 2026

@author: bboyg
"""

import logging
from pathlib import Path
from typing import List

from trajectory_bundle import TrajectoryBundle
from tabular_export import export_paths, check_targets, write_bundle, TABLES
from export_params import ExportParams

logger = logging.getLogger(__name__)


class TrajectoryLibrary:
    """
    Ordered collection of TrajectoryBundles. Index i is exported with the
    prefix <directory>/<basename><i>.
    """

    def __init__(self, bundles=None):
        self._bundles: List[TrajectoryBundle] = []
        for bundle in bundles or []:
            self.add(bundle)

    def add(self, bundle: TrajectoryBundle) -> int:
        if not isinstance(bundle, TrajectoryBundle):
            raise TypeError(
                f"expected TrajectoryBundle, got {type(bundle).__name__}"
            )
        self._bundles.append(bundle)
        return len(self._bundles) - 1

    def __len__(self):
        return len(self._bundles)

    def __getitem__(self, i) -> TrajectoryBundle:
        return self._bundles[i]

    def __iter__(self):
        return iter(self._bundles)

    def converted_to_body_aligned(self) -> "TrajectoryLibrary":
        return TrajectoryLibrary(b.convert_to_body_aligned() for b in self._bundles)

    def converted_to_world_aligned(self) -> "TrajectoryLibrary":
        return TrajectoryLibrary(b.convert_to_world_aligned() for b in self._bundles)

    def prefix(self, directory, i: int, basename: str = "trajlib") -> Path:
        return Path(directory) / f"{basename}{i}"

    def write_all(self, directory, dt=None, overwrite=None, basename: str = "trajlib",
                  params: ExportParams = None) -> list:
        """
        Writes every bundle. With overwrite off, all targets of all bundles
        are checked before the first file is written.

        Returns:
            list of path dicts (see tabular_export.write_bundle)
        """
        if params is None:
            params = ExportParams() if dt is None else ExportParams(dt=dt)
        if overwrite is None:
            overwrite = params.overwrite

        if not overwrite:
            for i in range(len(self._bundles)):
                paths = export_paths(self.prefix(directory, i, basename), params.extension)
                check_targets(paths[name] for name in TABLES)

        written = []
        for i, bundle in enumerate(self._bundles):
            prefix = self.prefix(directory, i, basename)
            logger.info("Exporting trajectory %d of %d", i + 1, len(self._bundles))
            written.append(write_bundle(bundle, prefix, dt=dt, overwrite=True,
                                        params=params))
        return written
