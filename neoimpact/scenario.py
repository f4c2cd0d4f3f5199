"""
Impact scenario inputs: asteroid size and speed plus the user-chosen
density, impact angle and observer distance.
"""
from typing import Any, Dict, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from neoimpact.constants import DEFAULT_DENSITY, DEFAULT_IMPACT_ANGLE, DEFAULT_DISTANCE_KM, MAX_DISTANCE_KM


class DensityPreset(NamedTuple):
    label: str
    value: float  # g/cm^3
    description: str


DENSITY_PRESETS = (
    DensityPreset("Ice (Comet)", 0.92, "Frozen water/comet material"),
    DensityPreset("Porous Rock (Pumice)", 1.5, "Low density volcanic"),
    DensityPreset("Carbon (Graphite)", 2.1, "Carbonaceous asteroid"),
    DensityPreset("Stony (Silicate)", 2.5, "Most common asteroids"),
    DensityPreset("Dense Rock (Basalt)", 2.9, "Volcanic rock"),
    DensityPreset("Iron", 7.8, "Metallic asteroid"),
    DensityPreset("Nickel-Iron", 8.0, "Dense metallic core"),
)


def density_preset(label: str) -> DensityPreset:
    """Look up a density preset by label (case-insensitive)."""
    for preset in DENSITY_PRESETS:
        if preset.label.lower() == label.lower():
            return preset
    valid = ', '.join(p.label for p in DENSITY_PRESETS)
    raise ValueError(f"Unknown density preset '{label}'. Must be one of: {valid}")


class ScenarioParameters(BaseModel):
    """
    User-chosen scenario scalars shared by every impactor of a run.

    Attributes
    ----------
    density : float
        Impactor density (g/cm^3)
    angle : float
        Impact angle from the horizontal (deg), in (0, 90]
    distance : float
        Great-circle distance of the observer from the impact point (km),
        at most the antipodal distance
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    density: float = Field(default=DEFAULT_DENSITY, gt=0.0, description="Impactor density (g/cm^3)")
    angle: float = Field(default=DEFAULT_IMPACT_ANGLE, gt=0.0, le=90.0,
                         description="Impact angle from horizontal (deg)")
    distance: float = Field(default=DEFAULT_DISTANCE_KM, gt=0.0, le=MAX_DISTANCE_KM,
                            description="Observer distance (km)")


class ImpactScenarioInput(ScenarioParameters):
    """
    Inputs of one impact simulation: the impactor's size and speed on top of
    the ScenarioParameters.

    Attributes
    ----------
    diameter_min : float
        Lower estimate of the impactor diameter (m)
    diameter_max : float
        Upper estimate of the impactor diameter (m)
    velocity : float
        Entry velocity (km/s)
    name : str, optional
        Name of the impactor, carried through to the analysis
    """
    diameter_min: float = Field(..., gt=0.0, description="Minimum estimated diameter (m)")
    diameter_max: float = Field(..., gt=0.0, description="Maximum estimated diameter (m)")
    velocity: float = Field(..., gt=0.0, description="Entry velocity (km/s)")
    name: str = Field(default="", description="Impactor name")

    @model_validator(mode='after')
    def validate_diameter_range(self):
        if self.diameter_min > self.diameter_max:
            raise ValueError(
                f"diameter_min ({self.diameter_min}) must not exceed diameter_max ({self.diameter_max})"
            )
        return self

    @property
    def mean_diameter(self) -> float:
        """L0, the mean of the diameter estimates (m)."""
        return 0.5 * (self.diameter_min + self.diameter_max)

    @classmethod
    def from_neo(cls, neo: Dict[str, Any], density: float = DEFAULT_DENSITY,
                 angle: float = DEFAULT_IMPACT_ANGLE,
                 distance: float = DEFAULT_DISTANCE_KM) -> 'ImpactScenarioInput':
        """
        Build a scenario from a NASA NeoWs near-Earth-object record.

        The diameter range is read from ``estimated_diameter.kilometers`` and the
        velocity from the first entry of ``close_approach_data``.

        Raises:
            ValueError: if the record has no diameter estimate or no close approach.
        """
        try:
            diameter_km = neo['estimated_diameter']['kilometers']
            d_min = float(diameter_km['estimated_diameter_min']) * 1000.0
            d_max = float(diameter_km['estimated_diameter_max']) * 1000.0
        except (KeyError, TypeError) as err:
            raise ValueError(f"NEO record has no estimated diameter in kilometers: {err}") from err

        approaches = neo.get('close_approach_data') or []
        if not approaches:
            raise ValueError(f"NEO record '{neo.get('name', '')}' has no close approach data")
        try:
            velocity = float(approaches[0]['relative_velocity']['kilometers_per_second'])
        except (KeyError, TypeError) as err:
            raise ValueError(f"Close approach has no relative velocity in km/s: {err}") from err

        return cls(
            diameter_min=d_min,
            diameter_max=d_max,
            velocity=velocity,
            density=density,
            angle=angle,
            distance=distance,
            name=neo.get('name', ''),
        )
