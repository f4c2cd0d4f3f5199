from typing import Any, Dict, Optional

import pydantic
from pydantic import ConfigDict

from neoimpact.orbital_elements import OrbitalElements, derive_from_raw_elements
from neoimpact.constants import DAYS_PER_YEAR, DEFAULT_ORBIT_SCALE, DEFAULT_PATH_POINTS


# Orbit colour classes by semi-major axis (AU): upper bound, class, hex colour
ORBIT_CLASSES = (
    (1.0, 'inner', '#ff6b6b'),
    (1.5, 'near', '#ffa500'),
    (2.5, 'main-belt', '#ffeb3b'),
    (float('inf'), 'outer', '#4ecdc4'),
)


class Asteroid(pydantic.BaseModel):
    """
    A near-Earth asteroid with its heliocentric orbit.

    Attributes:
        name: Display name (e.g., "433 Eros (A898 PA)")
        spkid: JPL SPK-ID, when known
        neo_reference_id: NeoWs reference id, when known
        elements: Orbital elements of the asteroid
    """
    model_config = ConfigDict(frozen=True)

    name: str
    spkid: Optional[str] = None
    neo_reference_id: Optional[str] = None
    elements: OrbitalElements

    @classmethod
    def from_sbdb(cls, payload: Dict[str, Any]) -> 'Asteroid':
        """
        Build an Asteroid from a JPL small-body database (SBDB) API response.

        Only ``object`` and ``orbit`` are read. The display name is the object's
        full name, falling back to its designation.

        Raises:
            ValueError: if the payload has no orbit elements or no name.
        """
        obj = payload.get('object') or {}
        orbit = payload.get('orbit') or {}
        raw_elements = orbit.get('elements')
        if not raw_elements:
            raise ValueError("SBDB payload has no orbit elements")
        name = obj.get('fullname') or obj.get('des')
        if not name:
            raise ValueError("SBDB payload has no object name or designation")

        epoch = orbit.get('epoch')
        elements = derive_from_raw_elements(
            raw_elements,
            name=name,
            epoch=float(epoch) if epoch is not None else None,
        )
        return cls(
            name=name,
            spkid=obj.get('spkid'),
            neo_reference_id=payload.get('neo_reference_id'),
            elements=elements,
        )

    def get_state(self, epoch: float, time_units: str = 'day', scale: float = DEFAULT_ORBIT_SCALE):
        """
        Get the scene-space state of the asteroid at a time past its epoch.

        Args:
            epoch: Time past the element epoch in the units given by time_units
            time_units: 'day'/'days' (default) or 'year'/'years'
            scale: Scene units per AU

        Returns:
            OrbitalState

        Examples:
            >>> state = asteroid.get_state(30.0)  # 30 days after epoch
            >>> state = asteroid.get_state(1.0, time_units='year')
        """
        from neoimpact.astrodynamics import state_at

        if time_units in ('day', 'days'):
            elapsed_days = epoch
        elif time_units in ('year', 'years'):
            elapsed_days = epoch * DAYS_PER_YEAR
        else:
            raise ValueError(f"Invalid time_units '{time_units}'. Must be one of: 'day', 'year'")
        return state_at(self.elements, elapsed_days, scale)

    def get_period(self, units: str = 'day') -> float:
        """Orbital period in 'day' (default) or 'year' units."""
        units_lower = units.lower()
        if units_lower in ('day', 'days'):
            return self.elements.period
        elif units_lower in ('year', 'years'):
            return self.elements.period / DAYS_PER_YEAR
        else:
            raise ValueError(f"Invalid units '{units}'. Must be one of: 'day', 'year'")

    def orbit_path(self, num_points: int = DEFAULT_PATH_POINTS, scale: float = DEFAULT_ORBIT_SCALE):
        """Closed polyline of the orbit, shape (num_points + 1, 3)."""
        from neoimpact.astrodynamics import generate_orbit_path
        return generate_orbit_path(self.elements, num_points, scale)

    def perihelion_position(self, scale: float = DEFAULT_ORBIT_SCALE):
        """Scene-space position at perihelion (mean anomaly 0)."""
        from neoimpact.astrodynamics import compute_state
        return compute_state(self.elements, 0.0, scale).position

    def orbit_class(self) -> str:
        """Coarse class of the orbit by semi-major axis."""
        return _classify_orbit(self.elements.a)[0]

    def color(self) -> str:
        """Hex colour used when drawing the orbit."""
        return _classify_orbit(self.elements.a)[1]

    def __str__(self) -> str:
        return self.name


def _classify_orbit(a: float):
    for upper, orbit_class, colour in ORBIT_CLASSES:
        if a < upper:
            return orbit_class, colour
    return ORBIT_CLASSES[-1][1:]
