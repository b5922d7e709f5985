"""Parsing utilities for Horizons ephemeris tables.

A Horizons ``result`` is free text: a header describing the target and
observer, then the table rows between a ``$$SOE`` line and a ``$$EOE``
line, then a footer. These helpers cut out the table and decode each row
into a timestamp plus the position values of the selected
:class:`DecodeMode`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from horizonsjax.constants import END_OF_EPHEMERIS, START_OF_EPHEMERIS
from horizonsjax.horizons._types import DecodeMode, EphemerisLayout, FailureKind

logger = logging.getLogger(__name__)

_DEFAULT_LAYOUT = EphemerisLayout()


class MalformedRecordError(ValueError):
    """An ephemeris row that cannot be decoded under the selected mode."""

    kind = FailureKind.MALFORMED_TABLE


@dataclass(frozen=True)
class EphemerisRecord:
    """One decoded ephemeris row.

    ``values`` holds, in order: ``(ra_h, ra_m, ra_s, dec_d, dec_m, dec_s)``
    in sexagesimal mode, ``(ra_deg, dec_deg)`` in decimal mode and
    ``(x, y, z)`` in Cartesian mode.
    """

    timestamp: str
    values: tuple[float, ...]


@dataclass
class EphemerisTable:
    """Decoded ephemeris rows as parallel, identically indexed sequences.

    For the angular modes ``first`` and ``second`` hold right ascension and
    declination (decimal degrees, or ``(d, m, s)`` triplets in sexagesimal
    mode) and ``third`` stays empty. In Cartesian mode they hold x, y, z.
    """

    mode: DecodeMode
    dates: list[str] = field(default_factory=list)
    first: list[Any] = field(default_factory=list)
    second: list[Any] = field(default_factory=list)
    third: list[float] = field(default_factory=list)

    def append(self, record: EphemerisRecord) -> None:
        """Append a decoded record, keeping all sequences aligned."""
        v = record.values
        self.dates.append(record.timestamp)
        if self.mode == DecodeMode.SEXAGESIMAL:
            self.first.append(v[0:3])
            self.second.append(v[3:6])
        elif self.mode == DecodeMode.DECIMAL:
            self.first.append(v[0])
            self.second.append(v[1])
        else:
            self.first.append(v[0])
            self.second.append(v[1])
            self.third.append(v[2])

    def __len__(self) -> int:
        return len(self.dates)

    def __str__(self) -> str:
        return f"EphemerisTable(mode={self.mode}, records={len(self)})"

    def __repr__(self) -> str:
        return self.__str__()


def extract_ephemeris_block(result: str) -> list[str]:
    """Return the lines strictly between the ``$$SOE`` and ``$$EOE`` markers.

    A missing start marker yields no lines. A missing end marker lets the
    block run to the end of the text, so a truncated response still gives
    the rows that did arrive.

    Args:
        result: The ``result`` text of a Horizons response.

    Returns:
        The raw table lines, in source order.
    """
    lines = result.splitlines()

    start = next((i for i, line in enumerate(lines) if START_OF_EPHEMERIS in line), None)
    if start is None:
        logger.warning("No %s marker found; ephemeris table is empty", START_OF_EPHEMERIS)
        return []

    end = next(
        (i for i in range(start + 1, len(lines)) if END_OF_EPHEMERIS in lines[i]),
        None,
    )
    if end is None:
        logger.warning(
            "No %s marker found; reading ephemeris rows to end of payload",
            END_OF_EPHEMERIS,
        )
        end = len(lines)

    return lines[start + 1 : end]


def _parse_number(token: str, line: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise MalformedRecordError(f"Non-numeric field {token!r} in row {line!r}") from None
    if not math.isfinite(value):
        raise MalformedRecordError(f"Non-finite field {token!r} in row {line!r}")
    return value


def parse_ephemeris_line(
    line: str,
    mode: DecodeMode,
    layout: EphemerisLayout = _DEFAULT_LAYOUT,
) -> EphemerisRecord:
    """Decode a single ephemeris row.

    Args:
        line: One table row.
        mode: Decode mode selecting which fields are read.
        layout: Field indices for each mode.

    Returns:
        The decoded record.

    Raises:
        MalformedRecordError: If the row has too few fields or a value
            field is not a finite number.

    Examples:
        >>> rec = parse_ephemeris_line(
        ...     "2023-01-01 00:00 10 20.5 30 21.3 0.5 10 0", DecodeMode.DECIMAL
        ... )
        >>> rec.values
        (20.5, 21.3)
    """
    parts = line.split()
    needed = layout.min_fields(mode)
    if len(parts) < needed:
        raise MalformedRecordError(
            f"Expected at least {needed} fields for {mode} mode, got {len(parts)} in row {line!r}"
        )

    values = tuple(_parse_number(parts[i], line) for i in layout.indices(mode))
    timestamp = " ".join(parts[i] for i in layout.time_fields)
    return EphemerisRecord(timestamp=timestamp, values=values)


def parse_ephemeris_result(
    result: str,
    mode: DecodeMode | str = DecodeMode.SEXAGESIMAL,
    layout: EphemerisLayout = _DEFAULT_LAYOUT,
) -> EphemerisTable:
    """Decode every row of the ephemeris table in a Horizons ``result`` text.

    Blank lines are ignored. Rows that fail to decode are logged with
    their line number and skipped, so one bad row never discards the rest
    of the table.

    Args:
        result: The ``result`` text of a Horizons response.
        mode: Decode mode, as a :class:`DecodeMode` or its name.
        layout: Field indices for each mode.

    Returns:
        The decoded table.
    """
    mode = DecodeMode.from_str(mode)
    table = EphemerisTable(mode=mode)

    for lineno, line in enumerate(extract_ephemeris_block(result), start=1):
        if not line.strip():
            continue
        try:
            table.append(parse_ephemeris_line(line, mode, layout))
        except MalformedRecordError as err:
            logger.warning("Skipping ephemeris row %d: %s", lineno, err)

    logger.debug("Decoded %d ephemeris rows in %s mode", len(table), mode)
    return table


def parse_ephemeris_payload(
    payload: dict[str, Any],
    mode: DecodeMode | str = DecodeMode.SEXAGESIMAL,
    layout: EphemerisLayout = _DEFAULT_LAYOUT,
) -> EphemerisTable:
    """Decode the ephemeris table of a decoded Horizons JSON response.

    Args:
        payload: Decoded response body with a ``result`` text field.
        mode: Decode mode, as a :class:`DecodeMode` or its name.
        layout: Field indices for each mode.

    Returns:
        The decoded table.

    Raises:
        KeyError: If *payload* has no ``result`` field.
    """
    return parse_ephemeris_result(payload["result"], mode, layout)
