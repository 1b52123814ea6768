# -*- coding: utf-8 -*-
"""
Created on Tue Jan 20 13:40:27 2026

@author: bboyg
"""

import sys

import numpy as np
import matplotlib.pyplot as plt

from tabular_export import load_tables
from utils_frames import rad2deg


def load_output(prefix="trajlib0"):
    return load_tables(prefix)


def plot_state(df):
    """Position, attitude (deg), velocity and rates against time."""
    t = df["t"].to_numpy()
    cols = list(df.columns[1:])

    fig, axes = plt.subplots(4, 1, figsize=(10, 9), sharex=True)
    titles = ["Position (m)", "Attitude (deg)", "Velocity (m/s)", "Rates (deg/s)"]

    for g, ax in enumerate(axes):
        for name in cols[3 * g: 3 * g + 3]:
            y = df[name].to_numpy()
            if g in (1, 3):
                y = rad2deg(y)
            ax.plot(t, y, label=name)
        ax.set_ylabel(titles[g])
        ax.grid(True)
        ax.legend(loc="upper right")

    axes[-1].set_xlabel("Time (s)")
    fig.suptitle("Reference state")
    return fig


def plot_controls(df_u, df_affine=None):
    """Control trajectory, with the controller offset dashed if given."""
    fig, ax = plt.subplots(figsize=(10, 4))

    t = df_u["t"].to_numpy()
    for name in df_u.columns[1:]:
        ax.plot(t, df_u[name].to_numpy(), label=name)

    if df_affine is not None:
        ta = df_affine["t"].to_numpy()
        for name in df_affine.columns[1:]:
            ax.plot(ta, df_affine[name].to_numpy(), "--", label=name)

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Command")
    ax.set_title("Control inputs")
    ax.grid(True)
    ax.legend()
    return fig


def plot_gains(df_k):
    """Gain schedule as an image: one row per k<i>_<j>, time along x."""
    t = df_k["t"].to_numpy()
    K = df_k.iloc[:, 1:].to_numpy().T

    fig, ax = plt.subplots(figsize=(10, 6))
    vmax = max(float(np.nanmax(np.abs(K))), 1e-12) if K.size else 1.0
    im = ax.imshow(
        K, aspect="auto", cmap="RdBu_r", vmin=-vmax, vmax=vmax,
        extent=[t[0], t[-1], K.shape[0] - 0.5, -0.5] if len(t) else None
    )
    ax.set_yticks(range(0, K.shape[0], 12))
    ax.set_yticklabels(list(df_k.columns[1::12]))
    ax.set_xlabel("Time (s)")
    ax.set_title("Gain schedule")
    fig.colorbar(im, ax=ax)
    return fig


def main(prefix="trajlib0"):
    tables = load_output(prefix)

    plot_state(tables["x"])
    plot_controls(tables["u"], tables["affine"])
    plot_gains(tables["controller"])

    plt.show()


if __name__ == "__main__":
    main(*sys.argv[1:])
