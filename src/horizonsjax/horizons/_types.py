"""Horizons type enums and table layouts.

Provides enums for ephemeris decode modes and request failure kinds, and
the dataclass describing which whitespace-separated fields of an
ephemeris row hold the position values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_DECODE_MODE_DISPLAY: dict[str, str] = {
    "sexagesimal": "Sexagesimal",
    "decimal": "Decimal",
    "cartesian": "Cartesian",
}

_FAILURE_KIND_DISPLAY: dict[str, str] = {
    "network": "Network",
    "upstream_status": "UpstreamStatus",
    "decode": "Decode",
    "malformed_table": "MalformedTable",
}


class DecodeMode(Enum):
    """Layout of the position values in each ephemeris row."""

    SEXAGESIMAL = "sexagesimal"
    DECIMAL = "decimal"
    CARTESIAN = "cartesian"

    def is_angular(self) -> bool:
        """Return True if rows hold RA/Dec angles that need conversion."""
        return self in (DecodeMode.SEXAGESIMAL, DecodeMode.DECIMAL)

    @classmethod
    def from_str(cls, name: str | DecodeMode) -> DecodeMode:
        """Look up a mode by name, case-insensitively.

        Args:
            name: Mode name (``"sexagesimal"``, ``"decimal"`` or
                ``"cartesian"``) or an existing DecodeMode.

        Returns:
            The matching DecodeMode.

        Raises:
            ValueError: If *name* is not a known mode.
        """
        if isinstance(name, DecodeMode):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown decode mode {name!r}. "
                f"Expected one of {[m.value for m in cls]}."
            ) from None

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DecodeMode.{_DECODE_MODE_DISPLAY[self.value]}"


class FailureKind(Enum):
    """Kind of failure encountered while retrieving or reading an ephemeris."""

    NETWORK = "network"
    UPSTREAM_STATUS = "upstream_status"
    DECODE = "decode"
    MALFORMED_TABLE = "malformed_table"

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"FailureKind.{_FAILURE_KIND_DISPLAY[self.value]}"


@dataclass(frozen=True)
class EphemerisLayout:
    """Field indices of the position values within an ephemeris row.

    Rows are split on runs of whitespace. The defaults match a Horizons
    observer table with ``QUANTITIES=1``, where field 0 is the calendar date
    and field 1 the time of day.

    Args:
        ra_hms: Indices of the RA hours, minutes and seconds (sexagesimal mode).
        dec_dms: Indices of the Dec degrees, arcminutes and arcseconds
            (sexagesimal mode).
        ra_deg: Index of RA in decimal degrees (decimal mode).
        dec_deg: Index of Dec in decimal degrees (decimal mode).
        xyz: Indices of the x, y and z values (Cartesian mode).
        time_fields: Indices of the fields joined with a single space to form
            the timestamp. The default keeps the calendar date only; use
            ``(0, 1)`` for tables stepped in hours or minutes.
    """

    ra_hms: tuple[int, int, int] = (2, 3, 4)
    dec_dms: tuple[int, int, int] = (5, 6, 7)
    ra_deg: int = 3
    dec_deg: int = 5
    xyz: tuple[int, int, int] = (2, 3, 4)
    time_fields: tuple[int, ...] = (0,)

    def __post_init__(self) -> None:
        if not self.time_fields:
            raise ValueError("time_fields must name at least one field")

    def indices(self, mode: DecodeMode) -> tuple[int, ...]:
        """Return the value field indices used by *mode*, in output order."""
        if mode == DecodeMode.SEXAGESIMAL:
            return self.ra_hms + self.dec_dms
        if mode == DecodeMode.DECIMAL:
            return (self.ra_deg, self.dec_deg)
        return self.xyz

    def min_fields(self, mode: DecodeMode) -> int:
        """Return the number of fields a row needs to decode under *mode*."""
        return max(self.indices(mode) + self.time_fields) + 1
