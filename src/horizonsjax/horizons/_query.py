"""Horizons query window.

Provides the dataclass describing one ephemeris request (target body and
time span) and its translation into Horizons API parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from horizonsjax.constants import GEOCENTER

_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%b-%d",
    "%Y-%b-%d %H:%M",
    "%Y-%b-%d %H:%M:%S",
)


def parse_calendar_date(value: str) -> datetime:
    """Parse a Horizons-style calendar date string.

    Accepts ISO dates (``2023-01-01``, ``2023-01-01 12:00``) and the
    month-name form Horizons prints in its own tables (``2023-Jan-01``).

    Args:
        value: Calendar date string.

    Returns:
        The parsed :class:`~datetime.datetime`.

    Raises:
        ValueError: If *value* matches none of the accepted formats.

    Examples:
        >>> parse_calendar_date("2023-Jan-01 06:00")
        datetime.datetime(2023, 1, 1, 6, 0)
    """
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized calendar date {value!r}")


@dataclass(frozen=True)
class QueryWindow:
    """Target designator and time span of one ephemeris request.

    Args:
        designator: Small-body designator (e.g. ``"2000001"`` or ``"1P"``).
        start_time: First epoch of the table as a calendar date string.
        stop_time: Last epoch of the table as a calendar date string.
        step_size: Table step size as a Horizons duration string.

    Raises:
        ValueError: If the designator is blank, a date cannot be parsed,
            or ``start_time`` is after ``stop_time``.
    """

    designator: str
    start_time: str
    stop_time: str
    step_size: str = "1 day"

    def __post_init__(self) -> None:
        if not self.designator or not self.designator.strip():
            raise ValueError("Designator must be a non-empty string")
        if not self.step_size or not self.step_size.strip():
            raise ValueError("Step size must be a non-empty string")
        start = parse_calendar_date(self.start_time)
        stop = parse_calendar_date(self.stop_time)
        if start > stop:
            raise ValueError(
                f"start_time {self.start_time!r} is after stop_time {self.stop_time!r}"
            )

    def command(self) -> str:
        """Return the Horizons ``COMMAND`` value selecting this small body."""
        return f"'DES={self.designator.strip()};'"

    def to_params(self, center: str = GEOCENTER) -> dict[str, str]:
        """Build the Horizons API query parameters for this window.

        The observation parameters are fixed: an observer table with only
        astrometric RA/Dec (``QUANTITIES=1``) seen from *center*.

        Args:
            center: Horizons observer center code.

        Returns:
            Parameter mapping ready to be URL-encoded.
        """
        return {
            "format": "json",
            "COMMAND": self.command(),
            "OBJ_DATA": "YES",
            "MAKE_EPHEM": "YES",
            "EPHEM_TYPE": "OBSERVER",
            "CENTER": center,
            "START_TIME": self.start_time,
            "STOP_TIME": self.stop_time,
            "STEP_SIZE": self.step_size,
            "QUANTITIES": "1",
        }

    def __str__(self) -> str:
        return (
            f"QueryWindow(designator={self.designator!r}, "
            f"{self.start_time} -> {self.stop_time}, step={self.step_size!r})"
        )
