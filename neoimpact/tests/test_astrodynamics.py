"""Tests for orbital state computation and orbit path sampling."""
import unittest

import numpy as np
from numpy.testing import assert_allclose

from neoimpact import (
    OrbitalElements,
    compute_state,
    generate_orbit_path,
    mean_anomaly_at,
    state_at,
)


def _eros_like():
    return OrbitalElements(
        a=1.458,
        e=0.2229,
        i=np.deg2rad(10.83),
        Omega=np.deg2rad(304.3),
        omega=np.deg2rad(178.9),
        M0=np.deg2rad(310.5),
    )


class TestComputeState(unittest.TestCase):

    def test_circular_radius_constant(self):
        """For e = 0 the radius equals a at every mean anomaly."""
        elements = OrbitalElements(a=2.3, e=0.0, i=0.4, Omega=1.1, omega=0.3, M0=0.0)
        for M in np.linspace(0.0, 2.0 * np.pi, 37):
            state = compute_state(elements, M)
            assert_allclose(state.radius, 2.3, rtol=1e-12)

    def test_scene_axis_convention(self):
        """The orbital-plane y axis maps onto the scene z axis for an equatorial orbit."""
        elements = OrbitalElements(a=2.0, e=0.0, i=0.0, Omega=0.0, omega=0.0, M0=0.0)
        state = compute_state(elements, np.pi / 2, scale=1.0)
        assert_allclose(np.asarray(state.position), [0.0, 0.0, 2.0], atol=1e-12)
        assert_allclose(state.true_anomaly, np.pi / 2, atol=1e-12)

    def test_out_of_plane_is_scene_up(self):
        """A polar orbit a quarter turn past the node is straight up in scene coordinates."""
        elements = OrbitalElements(a=1.0, e=0.0, i=np.pi / 2, Omega=0.0, omega=0.0, M0=0.0)
        state = compute_state(elements, np.pi / 2, scale=1.0)
        assert_allclose(np.asarray(state.position), [0.0, 1.0, 0.0], atol=1e-12)

    def test_scale_factor(self):
        elements = _eros_like()
        unscaled = np.asarray(compute_state(elements, 0.7, scale=1.0).position)
        scaled = np.asarray(compute_state(elements, 0.7, scale=5.0).position)
        assert_allclose(scaled, 5.0 * unscaled, rtol=1e-12)

    def test_perihelion_and_aphelion(self):
        elements = _eros_like()
        peri = compute_state(elements, 0.0)
        apo = compute_state(elements, np.pi)
        assert_allclose(peri.radius, elements.a * (1.0 - elements.e), rtol=1e-12)
        assert_allclose(apo.radius, elements.a * (1.0 + elements.e), rtol=1e-12)
        assert_allclose(peri.true_anomaly, 0.0, atol=1e-12)
        assert_allclose(abs(apo.true_anomaly), np.pi, atol=1e-9)

    def test_position_norm_matches_radius(self):
        elements = _eros_like()
        for M in (0.2, 1.7, 3.9, 5.5):
            state = compute_state(elements, M, scale=3.0)
            assert_allclose(np.linalg.norm(np.asarray(state.position)), 3.0 * state.radius, rtol=1e-12)

    def test_repeated_calls_identical(self):
        elements = _eros_like()
        first = compute_state(elements, 2.1)
        second = compute_state(elements, 2.1)
        np.testing.assert_array_equal(np.asarray(first.position), np.asarray(second.position))
        self.assertEqual(first.eccentric_anomaly, second.eccentric_anomaly)


class TestStateAt(unittest.TestCase):

    def test_mean_anomaly_advances_with_mean_motion(self):
        elements = _eros_like()
        assert_allclose(mean_anomaly_at(elements, 10.0), elements.M0 + 10.0 * elements.n)

    def test_full_period_returns_to_start(self):
        elements = _eros_like()
        start = state_at(elements, 0.0)
        after = state_at(elements, elements.period)
        assert_allclose(np.asarray(after.position), np.asarray(start.position), atol=1e-9)

    def test_epoch_state_uses_m0(self):
        elements = _eros_like()
        assert_allclose(np.asarray(state_at(elements, 0.0).position),
                        np.asarray(compute_state(elements, elements.M0).position), atol=1e-14)


class TestGenerateOrbitPath(unittest.TestCase):

    def test_closed_loop(self):
        """200 segments give 201 points whose ends coincide."""
        path = np.asarray(generate_orbit_path(_eros_like(), 200))
        self.assertEqual(path.shape, (201, 3))
        assert_allclose(path[0], path[200], atol=1e-12)

    def test_matches_compute_state(self):
        elements = _eros_like()
        path = np.asarray(generate_orbit_path(elements, 8, scale=2.0))
        for k in range(9):
            M = (k / 8) * 2.0 * np.pi
            assert_allclose(path[k], np.asarray(compute_state(elements, M, scale=2.0).position),
                            atol=1e-12)

    def test_circular_path_radius(self):
        elements = OrbitalElements(a=1.5, e=0.0, i=0.2, Omega=0.5, omega=1.0, M0=0.0)
        path = np.asarray(generate_orbit_path(elements, 64, scale=5.0))
        assert_allclose(np.linalg.norm(path, axis=1), 7.5, rtol=1e-12)

    def test_deterministic(self):
        elements = _eros_like()
        np.testing.assert_array_equal(np.asarray(generate_orbit_path(elements)),
                                      np.asarray(generate_orbit_path(elements)))

    def test_invalid_num_points(self):
        with self.assertRaises(ValueError):
            generate_orbit_path(_eros_like(), 0)


if __name__ == '__main__':
    unittest.main()
