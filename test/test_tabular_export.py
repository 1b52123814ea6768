# -*- coding: utf-8 -*-
"""
Created on Tue Jan 20 09:31:46 2026

@author: bboyg
"""

import logging

import numpy as np
import pandas as pd
import pytest

from trajectory import ConstantTrajectory, PPTrajectory
from controller import ControllerSchedule
from trajectory_bundle import TrajectoryBundle
from export_params import ExportParams
from state_frames import FrameTag, state_headers
from tabular_export import (
    TABLES,
    export_paths,
    gain_headers,
    sample_times,
    sample_tables,
    write_bundle,
    read_bundle
)


def make_bundle(end_t=1.0, frame=FrameTag.WORLD):
    t = np.linspace(0.0, end_t, 6)
    x = np.zeros((len(t), 12))
    x[:, 0] = 2.0 * t
    x[:, 3] = 0.1
    x[:, 5] = 0.4 * t
    x[:, 6] = 2.0
    x[:, 11] = 0.4
    state = PPTrajectory.from_samples(t, x)

    control = ConstantTrajectory([0.05, 0.05, 0.6])

    K = np.stack([np.arange(36, dtype=float).reshape(3, 12) * (1.0 + tk) for tk in t])
    gain = PPTrajectory.from_samples(t, K)
    offset = PPTrajectory.from_samples(t, np.column_stack([t, -t, 0.6 + 0 * t]))

    return TrajectoryBundle(state, control, ControllerSchedule(gain, offset),
                            frame, control_names=["elevL", "elevR", "throttle"])

# ------------------------------------------------------------
# Sampling grid
# ------------------------------------------------------------

def test_sampling_boundary_not_on_grid():
    t = sample_times(1.0, 0.3)
    assert len(t) == 4
    assert np.allclose(t, [0.0, 0.3, 0.6, 0.9])

def test_sampling_includes_end_on_grid():
    t = sample_times(1.0, 0.25)
    assert np.allclose(t, [0.0, 0.25, 0.5, 0.75, 1.0])

    t = sample_times(0.3, 0.1)
    assert len(t) == 4
    assert t[-1] == 0.3

def test_sampling_rejects_bad_dt():
    with pytest.raises(ValueError):
        sample_times(1.0, 0.0)
    with pytest.raises(ValueError):
        sample_times(1.0, -0.1)

def test_tables_are_aligned():
    tables = sample_tables(make_bundle(), 0.3)
    assert set(tables) == set(TABLES)

    t_ref = tables["x"]["t"].to_numpy()
    assert len(t_ref) == 4
    for name in TABLES:
        assert len(tables[name]) == 4
        assert np.array_equal(tables[name]["t"].to_numpy(), t_ref)

def test_gain_flattened_row_major():
    bundle = make_bundle()
    tables = sample_tables(bundle, 0.5)
    df_k = tables["controller"]

    assert list(df_k.columns) == gain_headers(3)
    assert df_k.columns[1] == "k1_1"
    assert df_k.columns[13] == "k2_1"
    assert df_k.columns[-1] == "k3_12"

    K = bundle.controller.gain.evaluate(0.5)
    row = df_k.iloc[1]
    assert row["t"] == 0.5
    assert np.isclose(row["k2_3"], K[1, 2])
    assert np.isclose(row["k3_12"], K[2, 11])

def test_headers_follow_frame():
    world = sample_tables(make_bundle(), 0.5)
    body = sample_tables(make_bundle(frame=FrameTag.BODY), 0.5)
    assert list(world["x"].columns) == state_headers(FrameTag.WORLD)
    assert list(body["x"].columns) == state_headers(FrameTag.BODY)

    assert list(world["u"].columns) == ["t", "elevL", "elevR", "throttle"]
    assert list(world["affine"].columns) == \
        ["t", "affine_elevL", "affine_elevR", "affine_throttle"]

# ------------------------------------------------------------
# Writing
# ------------------------------------------------------------

def test_export_paths():
    paths = export_paths("out/turn")
    assert [str(paths[n]).replace("\\", "/") for n in TABLES] == [
        "out/turn-x.csv", "out/turn-u.csv",
        "out/turn-controller.csv", "out/turn-affine.csv"
    ]

def test_write_creates_four_aligned_files(tmp_path):
    bundle = make_bundle()
    paths = write_bundle(bundle, tmp_path / "traj", dt=0.3)

    dfs = {name: pd.read_csv(paths[name]) for name in TABLES}
    for name in TABLES:
        assert paths[name].exists()
        assert len(dfs[name]) == 4
        assert np.allclose(dfs[name]["t"], [0.0, 0.3, 0.6, 0.9])

    assert list(dfs["x"].columns) == state_headers(FrameTag.WORLD)
    assert dfs["controller"].shape == (4, 1 + 3 * 12)

    for k, tk in enumerate(dfs["x"]["t"]):
        assert np.allclose(dfs["x"].iloc[k, 1:].to_numpy(), bundle.state.evaluate(tk))
        assert np.allclose(dfs["u"].iloc[k, 1:].to_numpy(), [0.05, 0.05, 0.6])
        assert np.allclose(dfs["affine"].iloc[k, 1:].to_numpy(),
                           bundle.controller.offset.evaluate(tk))

def test_file_layout(tmp_path):
    paths = write_bundle(make_bundle(), tmp_path / "traj", dt=0.5)
    raw = paths["u"].read_bytes().decode()

    assert "\r" not in raw
    lines = raw.split("\n")
    assert lines[0] == "t,elevL,elevR,throttle"
    assert lines[-1] == ""          # every row newline terminated
    assert len(lines) == 1 + 3 + 1  # header, t = 0, 0.5, 1.0

def test_existing_file_blocks_export_and_nothing_written(tmp_path):
    paths = export_paths(tmp_path / "traj")
    paths["controller"].write_text("keep me")

    with pytest.raises(FileExistsError) as err:
        write_bundle(make_bundle(), tmp_path / "traj", dt=0.1)

    assert err.value.filename == str(paths["controller"])
    assert not paths["x"].exists()
    assert not paths["u"].exists()
    assert not paths["affine"].exists()
    assert paths["controller"].read_text() == "keep me"

def test_first_colliding_file_is_named(tmp_path):
    paths = export_paths(tmp_path / "traj")
    paths["affine"].write_text("a")
    paths["u"].write_text("u")

    with pytest.raises(FileExistsError) as err:
        write_bundle(make_bundle(), tmp_path / "traj", dt=0.1)
    assert err.value.filename == str(paths["u"])
    assert not paths["x"].exists()

def test_overwrite_replaces_files(tmp_path):
    paths = export_paths(tmp_path / "traj")
    for name in TABLES:
        paths[name].write_text("stale")

    write_bundle(make_bundle(), tmp_path / "traj", dt=0.5, overwrite=True)
    for name in TABLES:
        assert paths[name].read_text().startswith("t,")

def test_params_used_and_overridden(tmp_path):
    params = ExportParams(dt=0.5, overwrite=False, extension=".txt")
    paths = write_bundle(make_bundle(), tmp_path / "p", params=params)
    assert paths["x"].suffix == ".txt"
    assert len(pd.read_csv(paths["x"])) == 3

    # explicit arguments win over params
    paths = write_bundle(make_bundle(), tmp_path / "p", dt=0.25, overwrite=True, params=params)
    assert len(pd.read_csv(paths["x"])) == 5

def test_bad_dt_rejected_before_writing(tmp_path):
    with pytest.raises(ValueError):
        write_bundle(make_bundle(), tmp_path / "traj", dt=0.0)
    with pytest.raises(ValueError):
        ExportParams(dt=-1.0)
    assert list(tmp_path.iterdir()) == []

def test_creates_parent_directory(tmp_path):
    paths = write_bundle(make_bundle(), tmp_path / "a" / "b" / "traj", dt=0.5)
    assert paths["affine"].exists()

def test_logs_each_file(tmp_path, caplog):
    with caplog.at_level(logging.INFO, logger="tabular_export"):
        paths = write_bundle(make_bundle(), tmp_path / "traj", dt=0.5)

    msgs = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Writing:")]
    assert len(msgs) == 4
    assert msgs[0] == f"Writing: {paths['x']}"
    assert msgs[-1] == f"Writing: {paths['affine']}"

# ------------------------------------------------------------
# Reading back
# ------------------------------------------------------------

def test_read_back_matches_samples(tmp_path):
    world = make_bundle()
    body = world.convert_to_body_aligned()
    write_bundle(body, tmp_path / "body", dt=0.2)

    loaded = read_bundle(tmp_path / "body")
    assert loaded.frame == FrameTag.BODY
    assert loaded.control_names == ("elevL", "elevR", "throttle")

    for tk in sample_times(body.end_time, 0.2):
        assert np.allclose(loaded.state.evaluate(tk), body.state.evaluate(tk), atol=1e-12)
        assert np.allclose(loaded.controller.gain.evaluate(tk),
                           body.controller.gain.evaluate(tk), atol=1e-12)
        assert np.allclose(loaded.controller.offset.evaluate(tk),
                           body.controller.offset.evaluate(tk), atol=1e-12)

def test_read_back_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_bundle(tmp_path / "nothing")
