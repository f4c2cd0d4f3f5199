"""
Result records of the impact effects simulation.

Optional sections (crater, thermal, seismic, ejecta, air blast) are None when
the corresponding regime does not apply; see neoimpact.impact.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Severity = Literal["Airburst", "Minimal", "Local", "Regional", "Continental", "Global"]
CraterType = Literal["Simple", "Complex"]
BurnClass = Literal["None", "First degree", "Second degree", "Third degree", "Ignition"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class DiameterEstimate(_Record):
    min: float = Field(..., description="Minimum diameter (m)")
    max: float = Field(..., description="Maximum diameter (m)")
    average: float = Field(..., description="Mean diameter L0 (m)")


class EntryVelocity(_Record):
    km_per_sec: float
    m_per_sec: float


class Energy(_Record):
    joules: float
    megatons_tnt: float


class AtmosphericEntry(_Record):
    """Outcome of atmospheric entry. Altitudes in meters."""
    breakup_occurs: bool
    forms_crater: bool
    breakup_altitude: Optional[float] = Field(default=None, description="z*, altitude of breakup (m)")
    airburst_altitude: Optional[float] = Field(default=None, description="z_b, positive airburst altitude (m)")
    breakup_parameter: float = Field(..., description="I_f, breakup occurs when < 1")
    impactor_strength: float = Field(..., description="Y_i (Pa)")
    description: str = ""


class CraterGeometry(_Record):
    """Crater dimensions in meters, melt volume in m^3."""
    transient_diameter: float
    transient_depth: float
    final_diameter: float
    depth: float
    type: CraterType
    rim_height: Optional[float] = None  # simple craters only
    breccia_volume: Optional[float] = None  # simple craters only
    breccia_thickness: Optional[float] = None  # simple craters only
    melt_volume: float
    melt_thickness: float


class IgnitionThresholds(_Record):
    """Thermal exposure thresholds (MJ/m^2) scaled by E_Mt^(1/6)."""
    first_degree_burns: float
    second_degree_burns: float
    third_degree_burns: float
    clothing: float
    deciduous_trees: float
    grass: float


class ThermalEffects(_Record):
    fireball_radius: float = Field(..., description="R_f (m)")
    time_of_max_radiation: float = Field(..., description="T_t (s)")
    visible_fraction: float = Field(..., description="Fraction of fireball above the horizon")
    exposure: float = Field(..., description="Thermal exposure at the observer (MJ/m^2)")
    duration: float = Field(..., description="Irradiation duration (s)")
    ignition_thresholds: IgnitionThresholds
    burns: BurnClass
    ignition: bool


class SeismicEffects(_Record):
    magnitude: float = Field(..., description="Richter magnitude at the impact site")
    effective_magnitude: float = Field(..., description="Magnitude attenuated to the observer distance")
    mercalli_intensity: str
    arrival_time: float = Field(..., description="Seismic arrival time (s)")


class EjectaEffects(_Record):
    thickness: float = Field(..., description="Ejecta blanket thickness at the observer (m)")
    ejection_velocity: float = Field(..., description="Ballistic ejection velocity to reach the observer (m/s)")


class AirBlast(_Record):
    overpressure: float = Field(..., description="Peak overpressure (Pa)")
    overpressure_bars: float
    wind_speed: float = Field(..., description="Peak wind speed (m/s)")
    arrival_time: float = Field(..., description="Blast arrival time (s)")


class ImpactAnalysis(_Record):
    """
    Full result of an impact simulation.

    For an airburst (breakup with a positive burst altitude) only the energy,
    recurrence interval, atmospheric entry and severity are populated.
    Thermal effects are only present for entry velocities above 15 km/s.
    """
    name: str = ""
    diameter: DiameterEstimate
    velocity: EntryVelocity
    angle: float
    density: float
    distance_km: float
    energy: Energy
    recurrence_interval: float = Field(..., description="Mean interval between such impacts (years)")
    atmospheric_entry: AtmosphericEntry
    crater: Optional[CraterGeometry] = None
    thermal_effects: Optional[ThermalEffects] = None
    seismic: Optional[SeismicEffects] = None
    ejecta: Optional[EjectaEffects] = None
    air_blast: Optional[AirBlast] = None
    severity: Severity
    description: str

    @property
    def is_airburst(self) -> bool:
        return self.severity == "Airburst"
