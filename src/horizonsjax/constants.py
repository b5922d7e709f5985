"""
The `constants` module defines the angular conversion constants and the
JPL Horizons parameters shared across horizonsjax.
"""

from jax.numpy import pi as PI

# Angular Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Degrees of right ascension per hour of right ascension. Equal to 360/24. Units: *deg/h*
"""
HOURS2DEG = 15.0

"""
Minutes per hour (or arcminutes per degree).
"""
MINUTES_PER_UNIT = 60.0

"""
Seconds per hour (or arcseconds per degree).
"""
SECONDS_PER_UNIT = 3600.0

# Horizons Constants

"""
Horizons API endpoint.
"""
HORIZONS_API_URL = "https://ssd.jpl.nasa.gov/api/horizons.api"

"""
Observer center code for a geocentric observer (Earth body center).
"""
GEOCENTER = "500@399"

"""
Marker line preceding the first ephemeris row in a Horizons result.
"""
START_OF_EPHEMERIS = "$$SOE"

"""
Marker line following the last ephemeris row in a Horizons result.
"""
END_OF_EPHEMERIS = "$$EOE"
