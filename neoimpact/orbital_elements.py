"""
Orbital elements representation for near-Earth asteroids.
"""
from typing import Any, Dict, Iterable, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from neoimpact.constants import DAYS_PER_YEAR, TWO_PI


def _as_float(value: Any) -> Optional[float]:
    # Field validation reports values that cannot be coerced
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class OrbitalElements(BaseModel):
    """
    Keplerian orbital elements of an asteroid about the Sun.

    All angular quantities are in radians and are normalized to [0, 2π)
    on construction.

    Attributes:
        a: Semi-major axis (AU)
        e: Eccentricity (dimensionless, 0 ≤ e < 1)
        i: Inclination to the ecliptic (radians)
        Omega: Longitude of the ascending node (radians)
        omega: Argument of perihelion (radians)
        M0: Mean anomaly at epoch (radians)
        n: Mean motion (radians/day). Derived from the period when absent.
        period: Orbital period (days). Derived from a via Kepler's third
            law (365.25 * a^1.5) when absent.
        name: Optional display name
        epoch: Optional epoch of the elements (Julian date)

    Note:
        Parabolic and hyperbolic orbits (e ≥ 1) are rejected.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    a: float = Field(..., gt=0.0, description="Semi-major axis (AU)")
    e: float = Field(..., ge=0.0, lt=1.0, description="Eccentricity")
    i: float = Field(..., description="Inclination (rad)")
    Omega: float = Field(..., description="Longitude of ascending node (rad)")
    omega: float = Field(..., description="Argument of perihelion (rad)")
    M0: float = Field(..., description="Mean anomaly at epoch (rad)")
    n: Optional[float] = Field(default=None, gt=0.0, description="Mean motion (rad/day)")
    period: Optional[float] = Field(default=None, gt=0.0, description="Orbital period (days)")
    name: Optional[str] = Field(default=None, description="Display name")
    epoch: Optional[float] = Field(default=None, description="Epoch of the elements (JD)")

    @model_validator(mode='before')
    @classmethod
    def derive_period_and_mean_motion(cls, data: Any) -> Any:
        """Fill in period from a, then mean motion from period, when absent."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        a = _as_float(data.get('a'))
        if data.get('period') is None and a is not None and a > 0.0:
            data['period'] = DAYS_PER_YEAR * a ** 1.5
        period = _as_float(data.get('period'))
        if data.get('n') is None and period is not None and period > 0.0:
            data['n'] = TWO_PI / period
        return data

    @field_validator('i', 'Omega', 'omega', 'M0')
    @classmethod
    def normalize_angle(cls, v: float) -> float:
        return float(np.mod(v, TWO_PI))


class SbdbElement(BaseModel):
    """
    A single named orbital element as listed by the JPL small-body database
    (``orbit.elements`` of an SBDB API response). Values arrive as strings.
    """
    name: str
    value: Optional[Union[str, float]] = None
    label: Optional[str] = None
    title: Optional[str] = None
    units: Optional[str] = None
    sigma: Optional[str] = None


# SBDB element name -> (OrbitalElements field, conversion factor)
_SBDB_ELEMENT_MAP = {
    'a': ('a', 1.0),
    'e': ('e', 1.0),
    'i': ('i', np.pi / 180.0),
    'om': ('Omega', np.pi / 180.0),
    'w': ('omega', np.pi / 180.0),
    'ma': ('M0', np.pi / 180.0),
    'n': ('n', np.pi / 180.0),  # deg/day -> rad/day
    'per': ('period', 1.0),  # days
}

_REQUIRED_FIELDS = ('e', 'i', 'Omega', 'omega', 'M0')


def derive_from_raw_elements(
    raw_elements: Iterable[Union[SbdbElement, Dict[str, Any]]],
    name: Optional[str] = None,
    epoch: Optional[float] = None,
) -> OrbitalElements:
    """
    Map a named-element list from an ephemeris source onto OrbitalElements.

    Angles are converted from degrees to radians and mean motion from
    deg/day to rad/day. Elements the propagator does not use (q, ad, tp, ...)
    are ignored. When the semi-major axis is missing it is recovered from
    the period (or from the mean motion) through Kepler's third law.

    Args:
        raw_elements: Iterable of SbdbElement or dicts with 'name' and 'value'
        name: Optional display name for the resulting record
        epoch: Optional epoch (JD) for the resulting record

    Returns:
        Validated OrbitalElements

    Raises:
        ValueError: if an element value is not numeric, a required element is
            missing, or none of a, period and mean motion is present.
    """
    values = {}
    for raw in raw_elements:
        elem = raw if isinstance(raw, SbdbElement) else SbdbElement.model_validate(raw)
        if elem.name not in _SBDB_ELEMENT_MAP or elem.value is None:
            continue
        field, factor = _SBDB_ELEMENT_MAP[elem.name]
        try:
            values[field] = float(elem.value) * factor
        except ValueError:
            raise ValueError(f"Element '{elem.name}' has non-numeric value {elem.value!r}")

    missing = [f for f in _REQUIRED_FIELDS if f not in values]
    if missing:
        raise ValueError(f"Missing required orbital elements: {', '.join(missing)}")

    if 'a' not in values:
        if 'period' not in values and 'n' in values:
            values['period'] = TWO_PI / values['n']
        if 'period' not in values:
            raise ValueError(
                "Cannot derive mean motion: semi-major axis, period and mean motion are all missing"
            )
        values['a'] = (values['period'] / DAYS_PER_YEAR) ** (2.0 / 3.0)

    return OrbitalElements(name=name, epoch=epoch, **values)
