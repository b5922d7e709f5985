"""Coordinate transformations for horizonsjax.

Provides conversions from equatorial angular positions (right ascension
and declination) to Cartesian unit vectors.
"""

from .equatorial import (
    dms_to_degrees,
    hms_to_degrees,
    radec_to_cartesian,
    sexagesimal_to_cartesian,
)

__all__ = [
    "dms_to_degrees",
    "hms_to_degrees",
    "radec_to_cartesian",
    "sexagesimal_to_cartesian",
]
