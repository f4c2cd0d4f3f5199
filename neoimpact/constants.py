"""
Physical constants and scenario defaults for neoimpact.

This module contains all constants used by the orbit propagator and the
impact effects simulator. SI units unless the name says otherwise.
"""

import numpy as np

# Time and orbit constants
DAYS_PER_YEAR = 365.25  # days per Julian year
TWO_PI = 2.0 * np.pi

# Kepler solver
KEPLER_TOL = 1.0e-8  # rad, Newton correction magnitude at which iteration stops
KEPLER_MAX_ITER = 10

# Scene
DEFAULT_ORBIT_SCALE = 5.0  # scene units per AU
DEFAULT_PATH_POINTS = 200

# Earth
G_EARTH = 9.81  # m/s^2
R_EARTH = 6371000.0  # m
R_EARTH_KM = R_EARTH / 1000.0

# Atmosphere (single-layer exponential model)
H_SCALE = 8000.0  # m, atmospheric scale height
RHO_0 = 1.0  # kg/m^3, surface atmospheric density
C_D = 2.0  # drag coefficient
PANCAKE_FACTOR = 7.0

# Target (crystalline rock)
RHO_TARGET = 2750.0  # kg/m^3

# Cratering
SIMPLE_COMPLEX_TRANSIENT_KM = 2.56  # transient diameter above which craters are complex
COMPLEX_TRANSITION_KM = 3.2  # D_c, simple-to-complex final diameter

# Thermal radiation
THERMAL_VELOCITY_KMPS = 15.0  # thermal effects only computed above this entry velocity
LUMINOUS_EFFICIENCY = 3.0e-3
STEFAN_BOLTZMANN = 5.67e-8  # W/m^2/K^4
FIREBALL_TEMPERATURE = 3000.0  # K

# Seismic
SEISMIC_WAVE_SPEED_KMPS = 5.0

# Air blast
P_X = 75000.0  # Pa
R_X = 290.0  # m, scaled crossover distance for a 1 kt burst
P_AMBIENT = 1.0e5  # Pa
SOUND_SPEED = 330.0  # m/s

# Energy conversion
JOULES_PER_MEGATON = 4.184e15

# Scenario defaults
DEFAULT_DENSITY = 2.5  # g/cm^3
DEFAULT_IMPACT_ANGLE = 45.0  # deg
DEFAULT_DISTANCE_KM = 200.0

# Great-circle distance to the antipode of the impact point
MAX_DISTANCE_KM = np.pi * R_EARTH_KM
