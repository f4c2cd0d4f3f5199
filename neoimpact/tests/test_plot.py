import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from neoimpact import Asteroid, OrbitalElements
from neoimpact.plot import plot_orbits


def _asteroids():
    return [
        Asteroid(name="inner", elements=OrbitalElements(a=0.9, e=0.2, i=0.1, Omega=0.0, omega=0.5, M0=0.0)),
        Asteroid(name="outer", elements=OrbitalElements(a=3.0, e=0.1, i=0.3, Omega=1.0, omega=0.0, M0=0.0)),
    ]


class TestPlotOrbits(unittest.TestCase):

    def tearDown(self):
        plt.close('all')

    def test_one_line_per_orbit(self):
        """Earth plus each asteroid gets a path, coloured by orbit class."""
        fig, ax = plot_orbits(_asteroids(), num_points=40)
        labels = [line.get_label() for line in ax.get_lines()]
        self.assertEqual(labels, ["Earth", "inner", "outer"])
        self.assertEqual(matplotlib.colors.to_hex(ax.get_lines()[1].get_color()), "#ff6b6b")
        self.assertEqual(len(ax.get_lines()[2].get_data_3d()[0]), 41)

    def test_without_earth(self):
        fig, ax = plot_orbits(_asteroids(), num_points=20, show_earth=False)
        self.assertEqual([line.get_label() for line in ax.get_lines()], ["inner", "outer"])

    def test_limits_cover_largest_orbit(self):
        fig, ax = plot_orbits(_asteroids(), num_points=40, scale=1.0)
        limits = (ax.get_xlim(), ax.get_ylim(), ax.get_zlim())
        for line in ax.get_lines():
            for data, (lo, hi) in zip(line.get_data_3d(), limits):
                self.assertGreaterEqual(np.min(data), lo)
                self.assertLessEqual(np.max(data), hi)
        spans = [hi - lo for lo, hi in limits]
        self.assertTrue(np.allclose(spans, spans[0]))

    def test_saves_figure(self):
        import tempfile
        from pathlib import Path
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "plots" / "orbits.png"
            plot_orbits(_asteroids(), num_points=20, output=out)
            self.assertTrue(out.is_file())


if __name__ == '__main__':
    unittest.main()
