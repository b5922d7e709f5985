"""Trajectory assembly.

Runs the fetch → parse → convert pipeline for one or many designators
over a shared time window. A designator that cannot be fetched or whose
table holds no usable rows is logged and left out; the batch carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

import jax.numpy as jnp

from horizonsjax.config import get_dtype
from horizonsjax.coordinates import radec_to_cartesian, sexagesimal_to_cartesian
from horizonsjax.horizons import (
    DecodeMode,
    EphemerisLayout,
    EphemerisTable,
    HorizonsClient,
    QueryWindow,
    parse_ephemeris_payload,
)
from horizonsjax.trajectory._types import Trajectory

logger = logging.getLogger(__name__)


def table_to_trajectory(designator: str, table: EphemerisTable) -> Trajectory:
    """Convert a decoded ephemeris table into a trajectory.

    Angular tables are converted to unit vectors; Cartesian tables are
    passed through unchanged.

    Args:
        designator: Designator the table belongs to.
        table: Decoded ephemeris table.

    Returns:
        The trajectory, with one position per table row.
    """
    if not table.mode.is_angular():
        return Trajectory.from_components(
            designator, table.dates, table.first, table.second, table.third
        )

    if len(table) == 0:
        positions = jnp.zeros((0, 3), dtype=get_dtype())
    elif table.mode == DecodeMode.SEXAGESIMAL:
        positions = sexagesimal_to_cartesian(table.first, table.second)
    else:
        positions = radec_to_cartesian(table.first, table.second, use_degrees=True)
    return Trajectory(designator=designator, dates=tuple(table.dates), positions=positions)


class TrajectoryAssembler:
    """Builds trajectories for designators through a Horizons client.

    Designators are processed sequentially by default. With
    ``max_workers > 1`` they are fetched by a thread pool of that size;
    every request still passes through the client's rate limiter and the
    output keeps the input order.

    Args:
        client: Client used for every request.
        mode: Decode mode of the ephemeris tables.
        layout: Field indices for the decode mode.
        max_workers: Maximum number of concurrent requests. Default: 1.

    Raises:
        ValueError: If ``max_workers`` is less than 1 or the mode is unknown.
    """

    def __init__(
        self,
        client: HorizonsClient,
        *,
        mode: DecodeMode | str = DecodeMode.SEXAGESIMAL,
        layout: EphemerisLayout | None = None,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._client = client
        self._mode = DecodeMode.from_str(mode)
        self._layout = layout if layout is not None else EphemerisLayout()
        self._max_workers = max_workers

    @property
    def mode(self) -> DecodeMode:
        """Decode mode applied to every table."""
        return self._mode

    @property
    def max_workers(self) -> int:
        """Maximum number of concurrent requests."""
        return self._max_workers

    def fetch_trajectory(self, window: QueryWindow) -> Trajectory | None:
        """Fetch, decode and convert the ephemeris of one designator.

        Args:
            window: Designator and time span to request.

        Returns:
            The trajectory, or ``None`` if the fetch failed or the table had
            no usable rows.
        """
        payload = self._client.fetch_ephemeris(window)
        if payload is None:
            logger.error("Failed to fetch trajectory data for %s", window.designator)
            return None

        table = parse_ephemeris_payload(payload, self._mode, self._layout)
        if len(table) == 0:
            logger.error("No ephemeris rows decoded for %s", window.designator)
            return None

        trajectory = table_to_trajectory(window.designator, table)
        logger.info("Assembled %s", trajectory)
        return trajectory

    def assemble(
        self,
        designators: Iterable[str],
        start_time: str,
        stop_time: str,
        step_size: str = "1 day",
    ) -> list[Trajectory]:
        """Build one trajectory per designator over a shared time window.

        Args:
            designators: Designators to request. Blank entries are ignored.
            start_time: First epoch as a calendar date string.
            stop_time: Last epoch as a calendar date string.
            step_size: Table step size as a Horizons duration string.

        Returns:
            Trajectories of the designators that succeeded, in input order.
            Empty if every designator failed.

        Raises:
            ValueError: If the time window is invalid.
        """
        windows = [
            QueryWindow(d.strip(), start_time, stop_time, step_size)
            for d in designators
            if d and d.strip()
        ]
        if not windows:
            logger.warning("No designators to assemble")
            return []

        if self._max_workers == 1 or len(windows) == 1:
            results = [self.fetch_trajectory(w) for w in windows]
        else:
            workers = min(self._max_workers, len(windows))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(self.fetch_trajectory, windows))

        trajectories = [t for t in results if t is not None]
        if not trajectories:
            logger.error("No trajectories assembled for %d designators", len(windows))
        else:
            logger.info(
                "Assembled %d of %d trajectories", len(trajectories), len(windows)
            )
        return trajectories
