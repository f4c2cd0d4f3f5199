import jax
import jax.numpy as jnp
from jax import jit
import numpy as np

from .orbital_elements import OrbitalElements
from .orbital_state import OrbitalState
from .constants import (
    KEPLER_TOL, KEPLER_MAX_ITER,
    DEFAULT_ORBIT_SCALE, DEFAULT_PATH_POINTS,
)


def _kepler_newton(M, e, tol, max_iter):
    """
    Traceable Newton-Raphson solve of E - e*sin(E) = M.

    M is wrapped into [0, 2π) and the iteration starts from E0 = M + e*sin(M).
    Since E - M = e*sin(E), the root lies in [M - e, M + e]. That bracket is
    tightened with the sign of each residual, and a Newton step that would
    leave it is replaced by bisection, so every iterate stays within e of M.
    Iteration stops after max_iter corrections or once the magnitude of the
    last correction is below tol. jax.lax.while_loop keeps the early exit
    JIT compatible; for array inputs the loop runs until every element has
    converged.
    """
    M = jnp.mod(jnp.asarray(M, dtype=jnp.float64), 2.0 * jnp.pi)
    e = jnp.asarray(e, dtype=jnp.float64)
    E0 = M + e * jnp.sin(M)
    lo0, hi0 = jnp.broadcast_arrays(M - e, M + e)

    def cond_fn(carry):
        k, _, _, _, dE = carry
        return (k < max_iter) & jnp.any(jnp.abs(dE) >= tol)

    def body_fn(carry):
        k, E, lo, hi, _ = carry
        f = E - e * jnp.sin(E) - M
        lo = jnp.where(f < 0.0, E, lo)
        hi = jnp.where(f > 0.0, E, hi)
        E_newton = E - f / (1.0 - e * jnp.cos(E))
        outside = (E_newton < lo) | (E_newton > hi)
        E_next = jnp.where(outside, 0.5 * (lo + hi), E_newton)
        return k + 1, E_next, lo, hi, E_next - E

    E0 = jnp.broadcast_to(E0, lo0.shape)
    init = (jnp.asarray(0, dtype=jnp.int32), E0, lo0, hi0, jnp.full_like(E0, jnp.inf))
    _, E_final, _, _, _ = jax.lax.while_loop(cond_fn, body_fn, init)
    return E_final


_solve_kepler_jit = jit(_kepler_newton)


def solve_kepler_equation(M, e, tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER):
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E.

    Parameters
    ----------
    M : float or array_like
        Mean anomaly (rad). Any real value; it is wrapped into [0, 2π).
    e : float or array_like
        Eccentricity. Must satisfy 0 ≤ e < 1.
    tol : float, optional
        Correction magnitude below which Newton iteration stops.
    max_iter : int, optional
        Maximum number of Newton corrections.

    Returns
    -------
    E : jnp.ndarray
        Eccentric anomaly (rad). If the iteration cap is reached before the
        tolerance is met, the last iterate is returned.

    Raises
    ------
    ValueError
        If any eccentricity lies outside [0, 1).
    """
    e_check = np.asarray(e, dtype=float)
    if np.any(~np.isfinite(e_check)) or np.any(e_check < 0.0) or np.any(e_check >= 1.0):
        raise ValueError(f"Eccentricity must satisfy 0 <= e < 1 for elliptical orbits, got {e}")
    return _solve_kepler_jit(M, e, tol, max_iter)


def _state_kernel(M, a, e, inc, Omega, omega, scale):
    E = _kepler_newton(M, e, KEPLER_TOL, KEPLER_MAX_ITER)

    # True anomaly
    nu = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0),
        jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0)
    )

    # Heliocentric distance
    r = a * (1.0 - e * jnp.cos(E))

    # Position in orbital plane
    x_orb = r * jnp.cos(nu)
    y_orb = r * jnp.sin(nu)

    cos_w = jnp.cos(omega)
    sin_w = jnp.sin(omega)
    cos_O = jnp.cos(Omega)
    sin_O = jnp.sin(Omega)
    cos_i = jnp.cos(inc)
    sin_i = jnp.sin(inc)

    # 3-1-3 rotation: argument of perihelion, inclination, node
    x = (cos_w * cos_O - sin_w * sin_O * cos_i) * x_orb + (-sin_w * cos_O - cos_w * sin_O * cos_i) * y_orb
    y = (cos_w * sin_O + sin_w * cos_O * cos_i) * x_orb + (-sin_w * sin_O + cos_w * cos_O * cos_i) * y_orb
    z = sin_w * sin_i * x_orb + cos_w * sin_i * y_orb

    # Scene convention: ecliptic z is up (scene y), ecliptic y is scene z
    position = scale * jnp.stack([x, z, y])

    return position, nu, r, E


_state_jit = jit(_state_kernel)
_path_jit = jit(jax.vmap(_state_kernel, in_axes=(0, None, None, None, None, None, None)))


def _element_args(elements: OrbitalElements):
    return elements.a, elements.e, elements.i, elements.Omega, elements.omega


def compute_state(elements: OrbitalElements, mean_anomaly: float,
                  scale: float = DEFAULT_ORBIT_SCALE) -> OrbitalState:
    """
    Compute the scene-space position of an asteroid at a given mean anomaly.

    Args:
        elements: Orbital elements of the asteroid
        mean_anomaly: Mean anomaly (rad)
        scale: Scene units per AU

    Returns:
        OrbitalState with the scaled position, true anomaly, radius (AU) and
        eccentric anomaly.
    """
    position, nu, r, E = _state_jit(mean_anomaly, *_element_args(elements), scale)
    return OrbitalState(
        position=position,
        true_anomaly=float(nu),
        radius=float(r),
        eccentric_anomaly=float(E),
    )


def mean_anomaly_at(elements: OrbitalElements, elapsed_days: float) -> float:
    """Mean anomaly (rad, unwrapped) after elapsed_days: M = M0 + n*t."""
    return elements.M0 + elements.n * elapsed_days


def state_at(elements: OrbitalElements, elapsed_days: float,
             scale: float = DEFAULT_ORBIT_SCALE) -> OrbitalState:
    """Compute the orbital state elapsed_days after the epoch of the elements."""
    return compute_state(elements, mean_anomaly_at(elements, elapsed_days), scale)


def generate_orbit_path(elements: OrbitalElements, num_points: int = DEFAULT_PATH_POINTS,
                        scale: float = DEFAULT_ORBIT_SCALE) -> jnp.ndarray:
    """
    Sample the closed orbit at num_points + 1 evenly spaced mean anomalies.

    The first and last samples are both at perihelion (M = 0 and M = 2π), so
    the returned polyline closes on itself.

    Parameters
    ----------
    elements : OrbitalElements
        Orbital elements of the asteroid.
    num_points : int
        Number of segments in the path.
    scale : float
        Scene units per AU.

    Returns
    -------
    positions : jnp.ndarray
        Array of shape (num_points + 1, 3) of scene-space positions.
    """
    if num_points < 1:
        raise ValueError(f"num_points must be at least 1, got {num_points}")
    mean_anomalies = (jnp.arange(num_points + 1) / num_points) * 2.0 * jnp.pi
    positions, _, _, _ = _path_jit(mean_anomalies, *_element_args(elements), scale)
    return positions
