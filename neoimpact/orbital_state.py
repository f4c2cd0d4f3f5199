"""
Propagated state of an asteroid on its Keplerian orbit.
"""
from typing import NamedTuple
import jax.numpy as jnp


class OrbitalState(NamedTuple):
    """
    Position of an asteroid at a given mean anomaly, with the auxiliary
    anomalies used to compute it.

    Attributes:
        position: Scene-space position [x, y, z]. The ecliptic coordinates are
            multiplied by the orbit scale factor and re-ordered so that the
            ecliptic z axis (out of plane) is the scene's y (up) axis and the
            ecliptic y axis is the scene's z axis.
        true_anomaly: True anomaly (rad)
        radius: Heliocentric distance (AU, unscaled)
        eccentric_anomaly: Eccentric anomaly (rad)

    Note:
        - position is a JAX array (jnp.ndarray); the scalars are Python floats.
    """
    position: jnp.ndarray  # scene-space [x, y, z]
    true_anomaly: float  # rad
    radius: float  # AU
    eccentric_anomaly: float  # rad
