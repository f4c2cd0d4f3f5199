"""
Impact effects of an asteroid striking the Earth.

The pipeline follows the Earth Impact Effects Program equations of
Collins, Melosh & Marcus (2005): impact energy, atmospheric entry,
cratering, thermal radiation, seismic shaking, ejecta and air blast.
Each stage is a plain function of SI quantities so it can be evaluated on
its own; simulate_impact() chains them for one ImpactScenarioInput.

References:
    Collins, G. S., Melosh, H. J., & Marcus, R. A. (2005). Earth Impact
    Effects Program: A Web-based computer program for calculating the
    regional environmental consequences of a meteoroid impact on Earth.
    Meteoritics & Planetary Science, 40(6), 817-840.
"""
import logging
from typing import Any, Dict, Tuple

import numpy as np

from neoimpact.constants import (
    G_EARTH, R_EARTH, R_EARTH_KM,
    H_SCALE, RHO_0, C_D, PANCAKE_FACTOR, RHO_TARGET,
    SIMPLE_COMPLEX_TRANSIENT_KM, COMPLEX_TRANSITION_KM,
    THERMAL_VELOCITY_KMPS, LUMINOUS_EFFICIENCY, STEFAN_BOLTZMANN, FIREBALL_TEMPERATURE,
    SEISMIC_WAVE_SPEED_KMPS,
    P_X, R_X, P_AMBIENT, SOUND_SPEED,
    JOULES_PER_MEGATON,
    DEFAULT_DENSITY, DEFAULT_IMPACT_ANGLE, DEFAULT_DISTANCE_KM,
)
from neoimpact.effects import (
    AirBlast,
    AtmosphericEntry,
    CraterGeometry,
    DiameterEstimate,
    EjectaEffects,
    Energy,
    EntryVelocity,
    IgnitionThresholds,
    ImpactAnalysis,
    SeismicEffects,
    ThermalEffects,
)
from neoimpact.scenario import ImpactScenarioInput

logger = logging.getLogger(__name__)

# Upper bounds of effective magnitude for each Modified Mercalli bucket
MERCALLI_THRESHOLDS = (
    (2.0, "I"),
    (3.0, "I-II"),
    (4.0, "III-IV"),
    (5.0, "IV-V"),
    (6.0, "VI-VII"),
    (7.0, "VII-VIII"),
    (8.0, "IX-X"),
    (9.0, "X-XI"),
)
MERCALLI_MAX = "XII"

# Upper bounds of energy (Mt) for each severity class
SEVERITY_CLASSES = (
    (0.01, "Minimal", "Airburst or surface impact with minimal effects"),
    (1.0, "Local", "Significant local destruction"),
    (100.0, "Regional", "Major regional catastrophe"),
    (10000.0, "Continental", "Continental-scale devastation"),
)
SEVERITY_MAX = ("Global", "Mass extinction event")

AIRBURST_DESCRIPTION = "Asteroid breaks up in atmosphere, no crater formed"


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------

def impact_energy(L0: float, v0: float, rho_i: float) -> float:
    """
    Kinetic energy of a spherical impactor before atmospheric entry.

    Args:
        L0: Impactor diameter (m)
        v0: Entry velocity (m/s)
        rho_i: Impactor density (kg/m^3)

    Returns:
        Energy (J)
    """
    return (np.pi / 12.0) * rho_i * L0**3 * v0**2


def recurrence_interval(E_megatons: float) -> float:
    """Mean interval (years) between impacts of at least this energy."""
    return 109.0 * E_megatons**0.78


# ---------------------------------------------------------------------------
# Atmospheric entry
# ---------------------------------------------------------------------------

def impactor_strength(density_gcc: float) -> float:
    """Empirical impactor yield strength Y_i (Pa) from density in g/cm^3."""
    return 10.0 ** (2.107 + 0.0624 * density_gcc)


def breakup_parameter(Y_i: float, rho_i: float, L0: float, v0: float, theta: float) -> float:
    """Breakup parameter I_f; the impactor fragments in the atmosphere when I_f < 1."""
    return (4.07 * C_D * H_SCALE * Y_i) / (rho_i * L0 * v0**2 * np.sin(theta))


def breakup_altitude(Y_i: float, v0: float, I_f: float) -> float:
    """Altitude z* (m) at which fragmentation begins. Valid for I_f < 1."""
    # Collins et al. (2005) eq. 11
    return -H_SCALE * (
        np.log(Y_i / (RHO_0 * v0**2)) + 1.308 - 0.314 * I_f - 1.303 * np.sqrt(1.0 - I_f)
    )


def airburst_altitude(z_star: float, rho_i: float, L0: float, theta: float) -> float:
    """
    Altitude z_b (m) at which the pancaking fragment cloud has spread to
    PANCAKE_FACTOR times its initial diameter. Non-positive values mean the
    cloud reaches the ground first.
    """
    rho_z_star = RHO_0 * np.exp(-z_star / H_SCALE)
    l = L0 * np.sin(theta) * np.sqrt(rho_i / (C_D * rho_z_star))
    return z_star - 2.0 * H_SCALE * np.log(1.0 + (l / (2.0 * H_SCALE)) * (PANCAKE_FACTOR**2 - 1.0))


def atmospheric_entry(L0: float, v0: float, density_gcc: float, theta: float) -> AtmosphericEntry:
    """
    Decide whether the impactor fragments and, if so, whether it airbursts.

    Breakup is only considered for impactors smaller than 1 km.
    """
    rho_i = density_gcc * 1000.0
    Y_i = impactor_strength(density_gcc)
    I_f = breakup_parameter(Y_i, rho_i, L0, v0, theta)

    if I_f < 1.0 and L0 < 1000.0:
        z_star = breakup_altitude(Y_i, v0, I_f)
        z_b = airburst_altitude(z_star, rho_i, L0, theta)
        forms_crater = bool(z_b <= 0.0)
        logger.debug("Breakup at %.1f m, burst altitude %.1f m (I_f=%.3e)", z_star, z_b, I_f)
        return AtmosphericEntry(
            breakup_occurs=True,
            forms_crater=forms_crater,
            breakup_altitude=float(z_star),
            airburst_altitude=None if forms_crater else float(z_b),
            breakup_parameter=float(I_f),
            impactor_strength=float(Y_i),
            description=("Fragments reach the surface" if forms_crater else AIRBURST_DESCRIPTION),
        )

    logger.debug("No breakup (I_f=%.3e, L0=%.1f m)", I_f, L0)
    return AtmosphericEntry(
        breakup_occurs=False,
        forms_crater=True,
        breakup_parameter=float(I_f),
        impactor_strength=float(Y_i),
        description="Object reaches surface intact",
    )


# ---------------------------------------------------------------------------
# Cratering
# ---------------------------------------------------------------------------

def transient_crater_diameter(rho_i: float, L0: float, v0: float, theta: float) -> float:
    """Transient crater diameter D_tc (m) in crystalline rock."""
    return (
        1.161
        * (rho_i / RHO_TARGET) ** (1.0 / 3.0)
        * L0**0.78
        * v0**0.44
        * G_EARTH**-0.22
        * np.sin(theta) ** (1.0 / 3.0)
    )


def crater_geometry(D_tc: float, E_joules: float, theta: float) -> CraterGeometry:
    """
    Final crater geometry and impact melt from the transient crater diameter.

    Craters whose transient diameter exceeds 2.56 km collapse into complex
    craters; smaller ones are simple bowl-shaped craters with a breccia lens.

    Args:
        D_tc: Transient crater diameter (m)
        E_joules: Impact energy (J)
        theta: Impact angle (rad)
    """
    d_tc = D_tc / (2.0 * np.sqrt(2.0))
    D_tc_km = D_tc / 1000.0
    is_complex = D_tc_km > SIMPLE_COMPLEX_TRANSIENT_KM

    h_fr = V_br = t_br = None
    if is_complex:
        D_fr = 1000.0 * 1.17 * D_tc_km**1.13 / COMPLEX_TRANSITION_KM**0.13
        d_fr = 1000.0 * 0.4 * (D_fr / 1000.0) ** 0.3
    else:
        D_fr = 1.25 * D_tc
        V_br = 0.032 * D_fr**3
        h_fr = 0.07 * D_tc**4 / D_fr**3
        # Collins et al. (2005) eq. 24, breccia lens thickness
        t_br = 2.8 * V_br * (d_tc + h_fr) / (d_tc * D_fr**2)
        d_fr = d_tc + h_fr - t_br

    V_m = 8.9e-12 * E_joules * np.sin(theta)
    t_m = 4.0 * V_m / (np.pi * D_tc**2)

    logger.debug("%s crater: D_tc=%.1f m, D_fr=%.1f m", "Complex" if is_complex else "Simple", D_tc, D_fr)

    return CraterGeometry(
        transient_diameter=float(D_tc),
        transient_depth=float(d_tc),
        final_diameter=float(D_fr),
        depth=float(d_fr),
        type="Complex" if is_complex else "Simple",
        rim_height=None if h_fr is None else float(h_fr),
        breccia_volume=None if V_br is None else float(V_br),
        breccia_thickness=None if t_br is None else float(t_br),
        melt_volume=float(V_m),
        melt_thickness=float(t_m),
    )


# ---------------------------------------------------------------------------
# Thermal radiation
# ---------------------------------------------------------------------------

def visible_fraction(distance_m: float, R_f: float) -> float:
    """
    Fraction of the fireball above the observer's horizon.

    The horizon drops by h = (1 - cos Δ) R_E at epicentral angle Δ. A fireball
    entirely above that height is fully visible, one entirely below is
    hidden, and in between the visible cap is computed from γ = arccos(h/R_f).
    """
    delta = distance_m / R_EARTH
    h = (1.0 - np.cos(delta)) * R_EARTH
    if h <= 0.0:
        return 1.0
    if h >= R_f:
        return 0.0
    gamma = np.arccos(h / R_f)
    return float((2.0 / np.pi) * (gamma - (h / R_f) * np.sin(gamma)))


def ignition_thresholds(E_megatons: float) -> IgnitionThresholds:
    """Exposure thresholds (MJ/m^2) for burns and ignition at this yield."""
    scale = E_megatons ** (1.0 / 6.0)
    return IgnitionThresholds(
        first_degree_burns=0.13 * scale,
        second_degree_burns=0.25 * scale,
        third_degree_burns=0.42 * scale,
        clothing=1.0 * scale,
        deciduous_trees=0.25 * scale,
        grass=0.38 * scale,
    )


def classify_burns(exposure_mj: float, thresholds: IgnitionThresholds) -> str:
    """Highest of first/second/third-degree/ignition thresholds exceeded, else "None"."""
    levels = (
        (thresholds.clothing, "Ignition"),
        (thresholds.third_degree_burns, "Third degree"),
        (thresholds.second_degree_burns, "Second degree"),
        (thresholds.first_degree_burns, "First degree"),
    )
    for threshold, label in levels:
        if exposure_mj > threshold:
            return label
    return "None"


def thermal_effects(E_joules: float, v0: float, distance_km: float) -> ThermalEffects:
    """
    Fireball radiation reaching an observer at distance_km.

    Args:
        E_joules: Impact energy (J)
        v0: Impact velocity (m/s)
        distance_km: Observer distance (km)
    """
    E_megatons = E_joules / JOULES_PER_MEGATON
    r = distance_km * 1000.0

    R_f = 0.002 * E_joules ** (1.0 / 3.0)
    T_t = R_f / v0
    f = visible_fraction(r, R_f)

    exposure = f * LUMINOUS_EFFICIENCY * E_joules / (2.0 * np.pi * r**2)
    tau_t = LUMINOUS_EFFICIENCY * E_joules / (
        2.0 * np.pi * R_f**2 * STEFAN_BOLTZMANN * FIREBALL_TEMPERATURE**4
    )

    exposure_mj = exposure / 1.0e6
    thresholds = ignition_thresholds(E_megatons)

    return ThermalEffects(
        fireball_radius=float(R_f),
        time_of_max_radiation=float(T_t),
        visible_fraction=float(f),
        exposure=float(exposure_mj),
        duration=float(tau_t),
        ignition_thresholds=thresholds,
        burns=classify_burns(exposure_mj, thresholds),
        ignition=bool(exposure_mj > thresholds.deciduous_trees),
    )


# ---------------------------------------------------------------------------
# Seismic effects
# ---------------------------------------------------------------------------

def seismic_magnitude(E_joules: float) -> float:
    """Richter magnitude of the impact-induced earthquake."""
    return 0.67 * np.log10(E_joules) - 5.87


def effective_magnitude(M: float, r_km: float) -> float:
    """Magnitude of an earthquake that would shake the observer equally at the epicenter."""
    if r_km < 60.0:
        return M - 0.0238 * r_km
    elif r_km < 700.0:
        return M - 0.0048 * r_km - 1.1644
    else:
        delta = r_km / R_EARTH_KM
        return M - 1.66 * np.log10(delta) - 6.399


def mercalli_intensity(M_eff: float) -> str:
    """Modified Mercalli intensity bucket for an effective magnitude."""
    for upper, label in MERCALLI_THRESHOLDS:
        if M_eff < upper:
            return label
    return MERCALLI_MAX


def seismic_effects(E_joules: float, distance_km: float) -> SeismicEffects:
    M = seismic_magnitude(E_joules)
    M_eff = effective_magnitude(M, distance_km)
    return SeismicEffects(
        magnitude=float(M),
        effective_magnitude=float(M_eff),
        mercalli_intensity=mercalli_intensity(M_eff),
        arrival_time=float(distance_km / SEISMIC_WAVE_SPEED_KMPS),
    )


# ---------------------------------------------------------------------------
# Ejecta
# ---------------------------------------------------------------------------

def ejecta_effects(D_tc: float, distance_km: float) -> EjectaEffects:
    """Ejecta blanket thickness and ballistic ejection velocity at distance_km."""
    r = distance_km * 1000.0
    t_e = D_tc**4 / (112.0 * r**3)

    tan_half = np.tan((r / R_EARTH) / 2.0)
    v_e = np.sqrt(2.0 * G_EARTH * R_EARTH * tan_half / (1.0 + tan_half))

    return EjectaEffects(thickness=float(t_e), ejection_velocity=float(v_e))


# ---------------------------------------------------------------------------
# Air blast
# ---------------------------------------------------------------------------

def peak_overpressure(distance_m: float, E_megatons: float) -> float:
    """Peak overpressure (Pa) of a surface burst, from the 1 kt scaled distance."""
    E_kt = E_megatons * 1000.0
    r_1 = distance_m / E_kt ** (1.0 / 3.0)
    return P_X * (R_X / (4.0 * r_1)) * (1.0 + 3.0 * (R_X / r_1) ** 1.3)


def peak_wind_speed(p: float) -> float:
    """Peak wind speed (m/s) behind a shock of overpressure p (Pa)."""
    return (5.0 * p / (7.0 * P_AMBIENT)) * SOUND_SPEED / np.sqrt(1.0 + 6.0 * p / (7.0 * P_AMBIENT))


def air_blast(E_megatons: float, distance_km: float) -> AirBlast:
    r = distance_km * 1000.0
    p = peak_overpressure(r, E_megatons)
    return AirBlast(
        overpressure=float(p),
        overpressure_bars=float(p / 1.0e5),
        wind_speed=float(peak_wind_speed(p)),
        arrival_time=float(r / SOUND_SPEED),
    )


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

def classify_severity(E_megatons: float) -> Tuple[str, str]:
    """Severity class and description for a surface impact of this energy."""
    for upper, severity, description in SEVERITY_CLASSES:
        if E_megatons < upper:
            return severity, description
    return SEVERITY_MAX


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def simulate_impact(scenario: ImpactScenarioInput) -> ImpactAnalysis:
    """
    Run the full impact effects pipeline for one scenario.

    If the impactor fragments and bursts above the ground, the analysis stops
    after atmospheric entry: no crater, thermal, seismic, ejecta or air blast
    sections are produced and the severity is "Airburst".

    Args:
        scenario: Validated scenario inputs

    Returns:
        ImpactAnalysis
    """
    L0 = scenario.mean_diameter
    v0_kmps = scenario.velocity
    v0 = v0_kmps * 1000.0
    theta = np.deg2rad(scenario.angle)
    rho_i = scenario.density * 1000.0
    distance_km = scenario.distance

    E_joules = impact_energy(L0, v0, rho_i)
    E_megatons = E_joules / JOULES_PER_MEGATON

    common = dict(
        name=scenario.name,
        diameter=DiameterEstimate(min=scenario.diameter_min, max=scenario.diameter_max, average=L0),
        velocity=EntryVelocity(km_per_sec=v0_kmps, m_per_sec=v0),
        angle=scenario.angle,
        density=scenario.density,
        distance_km=distance_km,
        energy=Energy(joules=float(E_joules), megatons_tnt=float(E_megatons)),
        recurrence_interval=float(recurrence_interval(E_megatons)),
    )

    entry = atmospheric_entry(L0, v0, scenario.density, theta)
    if not entry.forms_crater:
        logger.debug("%s: airburst at %.1f m, skipping surface effects", scenario.name, entry.airburst_altitude)
        return ImpactAnalysis(
            **common,
            atmospheric_entry=entry,
            severity="Airburst",
            description=AIRBURST_DESCRIPTION,
        )

    D_tc = transient_crater_diameter(rho_i, L0, v0, theta)
    crater = crater_geometry(D_tc, E_joules, theta)

    thermal = None
    if v0_kmps > THERMAL_VELOCITY_KMPS:
        thermal = thermal_effects(E_joules, v0, distance_km)
    else:
        logger.debug("%s: entry velocity %.2f km/s, no thermal effects", scenario.name, v0_kmps)

    severity, description = classify_severity(E_megatons)

    return ImpactAnalysis(
        **common,
        atmospheric_entry=entry,
        crater=crater,
        thermal_effects=thermal,
        seismic=seismic_effects(E_joules, distance_km),
        ejecta=ejecta_effects(D_tc, distance_km),
        air_blast=air_blast(E_megatons, distance_km),
        severity=severity,
        description=description,
    )


def simulate_neo_impact(neo: Dict[str, Any], density: float = DEFAULT_DENSITY,
                        angle: float = DEFAULT_IMPACT_ANGLE,
                        distance: float = DEFAULT_DISTANCE_KM) -> ImpactAnalysis:
    """Simulate an impact of a NeoWs near-Earth-object record."""
    scenario = ImpactScenarioInput.from_neo(neo, density=density, angle=angle, distance=distance)
    return simulate_impact(scenario)
