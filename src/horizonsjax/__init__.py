"""
horizonsjax fetches small-body ephemerides from JPL Horizons and turns them into
Cartesian trajectories with JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    HOURS2DEG,
    GEOCENTER,
    HORIZONS_API_URL,
)

from .config import set_dtype, get_dtype

from .coordinates import (
    dms_to_degrees,
    hms_to_degrees,
    radec_to_cartesian,
    sexagesimal_to_cartesian,
)

from .horizons import (
    DecodeMode,
    EphemerisLayout,
    HorizonsClient,
    QueryWindow,
    RateLimitConfig,
    parse_ephemeris_result,
)

from .trajectory import (
    CartesianPoint,
    Trajectory,
    TrajectoryAssembler,
    load_designators,
    trajectories_to_dataframe,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "HOURS2DEG",
    "GEOCENTER",
    "HORIZONS_API_URL",
    # Config
    "set_dtype",
    "get_dtype",
    # Coordinates
    "dms_to_degrees",
    "hms_to_degrees",
    "radec_to_cartesian",
    "sexagesimal_to_cartesian",
    # Horizons
    "DecodeMode",
    "EphemerisLayout",
    "HorizonsClient",
    "QueryWindow",
    "RateLimitConfig",
    "parse_ephemeris_result",
    # Trajectory
    "CartesianPoint",
    "Trajectory",
    "TrajectoryAssembler",
    "load_designators",
    "trajectories_to_dataframe",
]
