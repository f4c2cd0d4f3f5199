# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElements, SbdbElement, derive_from_raw_elements
from .orbital_state import OrbitalState

from .constants import (
    # Constants
    DAYS_PER_YEAR,
    DEFAULT_ORBIT_SCALE,
    DEFAULT_PATH_POINTS,
    DEFAULT_DENSITY,
    DEFAULT_IMPACT_ANGLE,
    DEFAULT_DISTANCE_KM,
    JOULES_PER_MEGATON,
)

from .astrodynamics import (
    # Orbit propagator
    solve_kepler_equation,
    compute_state,
    mean_anomaly_at,
    state_at,
    generate_orbit_path,
)

from .asteroids import Asteroid

from .scenario import (
    DensityPreset,
    DENSITY_PRESETS,
    density_preset,
    ScenarioParameters,
    ImpactScenarioInput,
)

from .effects import (
    # Result records
    AtmosphericEntry,
    CraterGeometry,
    ThermalEffects,
    IgnitionThresholds,
    SeismicEffects,
    EjectaEffects,
    AirBlast,
    ImpactAnalysis,
)

from .impact import (
    # Impact effects simulator
    simulate_impact,
    simulate_neo_impact,
)

__all__ = [
    # Constants
    "DAYS_PER_YEAR",
    "DEFAULT_ORBIT_SCALE",
    "DEFAULT_PATH_POINTS",
    "DEFAULT_DENSITY",
    "DEFAULT_IMPACT_ANGLE",
    "DEFAULT_DISTANCE_KM",
    "JOULES_PER_MEGATON",

    # Records
    "OrbitalElements",
    "SbdbElement",
    "OrbitalState",
    "Asteroid",
    "DensityPreset",
    "DENSITY_PRESETS",
    "ScenarioParameters",
    "ImpactScenarioInput",
    "AtmosphericEntry",
    "CraterGeometry",
    "ThermalEffects",
    "IgnitionThresholds",
    "SeismicEffects",
    "EjectaEffects",
    "AirBlast",
    "ImpactAnalysis",

    # Functions
    "derive_from_raw_elements",
    "solve_kepler_equation",
    "compute_state",
    "mean_anomaly_at",
    "state_at",
    "generate_orbit_path",
    "density_preset",
    "simulate_impact",
    "simulate_neo_impact",
]
