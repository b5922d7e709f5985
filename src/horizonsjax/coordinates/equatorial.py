"""Equatorial (right ascension / declination) coordinate transformations.

Converts angular sky positions into Cartesian unit vectors in a
right-handed equatorial frame: the x-axis points to the reference
direction (RA = 0, Dec = 0) and the z-axis to the celestial pole.

Angles may be supplied in sexagesimal form (RA in hours, minutes and
seconds; Dec in degrees, arcminutes and arcseconds) or in decimal
degrees.  All functions broadcast over array inputs so a whole
ephemeris table converts in one call.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from horizonsjax.config import get_dtype
from horizonsjax.constants import (
    DEG2RAD,
    HOURS2DEG,
    MINUTES_PER_UNIT,
    SECONDS_PER_UNIT,
)


def hms_to_degrees(
    hours: ArrayLike,
    minutes: ArrayLike,
    seconds: ArrayLike,
) -> Array:
    """Convert right ascension in hours, minutes, seconds to decimal degrees.

    Args:
        hours: RA hours component.
        minutes: RA minutes component.
        seconds: RA seconds component.

    Returns:
        jax.Array: Right ascension in *deg*.

    Example:
        >>> from horizonsjax.coordinates import hms_to_degrees
        >>> float(hms_to_degrees(6.0, 0.0, 0.0))
        90.0
    """
    dtype = get_dtype()
    hours = jnp.asarray(hours, dtype=dtype)
    minutes = jnp.asarray(minutes, dtype=dtype)
    seconds = jnp.asarray(seconds, dtype=dtype)

    return (hours + minutes / MINUTES_PER_UNIT + seconds / SECONDS_PER_UNIT) * HOURS2DEG


def dms_to_degrees(
    degrees: ArrayLike,
    arcminutes: ArrayLike,
    arcseconds: ArrayLike,
) -> Array:
    """Convert declination in degrees, arcminutes, arcseconds to decimal degrees.

    The sign is taken from the degrees component only.  A degrees value of
    zero counts as positive, while a negative zero (as parsed from ``-00``)
    counts as negative, so declinations just south of the equator keep
    their sign.

    Args:
        degrees: Signed whole-degree component.
        arcminutes: Arcminute component (non-negative).
        arcseconds: Arcsecond component (non-negative).

    Returns:
        jax.Array: Declination in *deg*.

    Example:
        >>> from horizonsjax.coordinates import dms_to_degrees
        >>> float(dms_to_degrees(-0.0, 30.0, 0.0))
        -0.5
    """
    dtype = get_dtype()
    degrees = jnp.asarray(degrees, dtype=dtype)
    arcminutes = jnp.asarray(arcminutes, dtype=dtype)
    arcseconds = jnp.asarray(arcseconds, dtype=dtype)

    sign = jnp.where(jnp.signbit(degrees), -1.0, 1.0)
    magnitude = (
        jnp.abs(degrees)
        + arcminutes / MINUTES_PER_UNIT
        + arcseconds / SECONDS_PER_UNIT
    )
    return (sign * magnitude).astype(dtype)


def radec_to_cartesian(
    ra: ArrayLike,
    dec: ArrayLike,
    use_degrees: bool = True,
) -> Array:
    """Convert right ascension and declination to Cartesian unit vectors.

    Computes ``[cos(dec) cos(ra), cos(dec) sin(ra), sin(dec)]``.  The result
    lies on the unit sphere; no further normalization is applied anywhere
    downstream.

    Args:
        ra: Right ascension in *deg* (or *rad* if ``use_degrees=False``).
        dec: Declination in *deg* (or *rad* if ``use_degrees=False``).
        use_degrees: If ``True``, interpret the inputs as degrees.

    Returns:
        jax.Array: Cartesian position with a trailing axis of length 3.
            A scalar pair gives shape ``(3,)``, arrays of length ``N`` give
            shape ``(N, 3)``.

    Example:
        >>> from horizonsjax.coordinates import radec_to_cartesian
        >>> v = radec_to_cartesian(0.0, 0.0)
        >>> [float(c) for c in v]
        [1.0, 0.0, 0.0]
    """
    dtype = get_dtype()
    ra = jnp.asarray(ra, dtype=dtype)
    dec = jnp.asarray(dec, dtype=dtype)

    if use_degrees:
        ra = ra * DEG2RAD
        dec = dec * DEG2RAD

    cos_dec = jnp.cos(dec)
    x = cos_dec * jnp.cos(ra)
    y = cos_dec * jnp.sin(ra)
    z = jnp.sin(dec)

    return jnp.stack([x, y, z], axis=-1).astype(dtype)


def sexagesimal_to_cartesian(
    ra_hms: ArrayLike,
    dec_dms: ArrayLike,
) -> Array:
    """Convert sexagesimal RA/Dec triplets to Cartesian unit vectors.

    Args:
        ra_hms: Right ascension ``[h, m, s]``, or an ``(N, 3)`` array of them.
        dec_dms: Declination ``[d, m, s]``, or an ``(N, 3)`` array of them.

    Returns:
        jax.Array: Cartesian unit vector(s), shape ``(3,)`` or ``(N, 3)``.
    """
    ra_hms = jnp.asarray(ra_hms, dtype=get_dtype())
    dec_dms = jnp.asarray(dec_dms, dtype=get_dtype())

    ra = hms_to_degrees(ra_hms[..., 0], ra_hms[..., 1], ra_hms[..., 2])
    dec = dms_to_degrees(dec_dms[..., 0], dec_dms[..., 1], dec_dms[..., 2])

    return radec_to_cartesian(ra, dec, use_degrees=True)
