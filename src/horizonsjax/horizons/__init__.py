"""Horizons module.

Provides a client for requesting observer ephemerides from the JPL
Horizons API and parsers for the ephemeris tables it returns.
"""

from horizonsjax.horizons._client import HorizonsClient, HorizonsRequestError
from horizonsjax.horizons._parsers import (
    EphemerisRecord,
    EphemerisTable,
    MalformedRecordError,
    extract_ephemeris_block,
    parse_ephemeris_line,
    parse_ephemeris_payload,
    parse_ephemeris_result,
)
from horizonsjax.horizons._query import QueryWindow, parse_calendar_date
from horizonsjax.horizons._rate_limiter import RateLimitConfig, RateLimiter
from horizonsjax.horizons._types import DecodeMode, EphemerisLayout, FailureKind

__all__ = [
    # Enums
    "DecodeMode",
    "FailureKind",
    # Query
    "QueryWindow",
    "parse_calendar_date",
    # Client
    "HorizonsClient",
    "HorizonsRequestError",
    "RateLimitConfig",
    "RateLimiter",
    # Parsing
    "EphemerisLayout",
    "EphemerisRecord",
    "EphemerisTable",
    "MalformedRecordError",
    "extract_ephemeris_block",
    "parse_ephemeris_line",
    "parse_ephemeris_payload",
    "parse_ephemeris_result",
]
