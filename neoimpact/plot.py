"""Render asteroid orbit paths in 3D with matplotlib."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401 - required for 3D projection

from neoimpact.asteroids import Asteroid
from neoimpact.astrodynamics import generate_orbit_path
from neoimpact.constants import DEFAULT_ORBIT_SCALE, DEFAULT_PATH_POINTS
from neoimpact.orbital_elements import OrbitalElements


EARTH_ELEMENTS = OrbitalElements(a=1.0, e=0.0167, i=0.0, Omega=0.0, omega=np.deg2rad(102.9), M0=0.0,
                                 name="Earth")


def _set_equal_aspect(ax, points: np.ndarray, padding: float = 0.25) -> None:
    if points.size == 0:
        return
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    centers = 0.5 * (mins + maxs)
    span = (maxs - mins).max()
    radius = 0.5 * span if span > 0 else 1.0
    radius *= 1.0 + max(0.0, padding)
    ax.set_xlim(centers[0] - radius, centers[0] + radius)
    ax.set_ylim(centers[1] - radius, centers[1] + radius)
    ax.set_zlim(centers[2] - radius, centers[2] + radius)


def _to_ecliptic(points) -> np.ndarray:
    # Scene axes are (x, up, y); matplotlib gets (x, y, up).
    points = np.asarray(points)
    return points[..., [0, 2, 1]]


def plot_orbits(
    asteroids: Sequence[Asteroid],
    *,
    num_points: int = DEFAULT_PATH_POINTS,
    scale: float = DEFAULT_ORBIT_SCALE,
    show_earth: bool = True,
    ax=None,
    output: Optional[Path] = None,
):
    """
    Plot the orbit of each asteroid, its perihelion marker and the Sun.

    Returns the figure and 3D axes. When output is given the figure is saved
    there and closed.
    """
    if ax is None:
        fig = plt.figure(figsize=(9, 8))
        ax = fig.add_subplot(111, projection="3d")
    else:
        fig = ax.figure

    all_points = [np.zeros((1, 3))]
    ax.scatter([0.0], [0.0], [0.0], color="gold", s=80, label="Sun")

    if show_earth:
        earth = _to_ecliptic(generate_orbit_path(EARTH_ELEMENTS, num_points, scale))
        ax.plot(earth[:, 0], earth[:, 1], earth[:, 2], color="royalblue", linewidth=1.0, label="Earth")
        all_points.append(earth)

    for asteroid in asteroids:
        path = _to_ecliptic(asteroid.orbit_path(num_points, scale))
        colour = asteroid.color()
        ax.plot(path[:, 0], path[:, 1], path[:, 2], color=colour, linewidth=1.5, alpha=0.8,
                label=asteroid.name)
        peri = _to_ecliptic(asteroid.perihelion_position(scale))
        ax.scatter([peri[0]], [peri[1]], [peri[2]], color=colour, marker="o", s=20)
        all_points.append(path)

    _set_equal_aspect(ax, np.vstack(all_points))
    ax.set_xlabel("x (scene units)")
    ax.set_ylabel("y (scene units)")
    ax.set_zlabel("z (scene units)")
    ax.legend(loc="upper left", fontsize="small")

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=150, bbox_inches="tight")
        plt.close(fig)

    return fig, ax
