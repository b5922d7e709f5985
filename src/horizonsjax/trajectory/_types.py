"""Trajectory containers.

A :class:`Trajectory` holds the chronologically ordered positions of one
small body as an ``(N, 3)`` JAX array alongside the matching timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import jax.numpy as jnp
import polars as pl
from jax import Array
from jax.typing import ArrayLike

from horizonsjax.config import get_dtype


class CartesianPoint(NamedTuple):
    """A single Cartesian position."""

    x: float
    y: float
    z: float


@dataclass(frozen=True, eq=False)
class Trajectory:
    """Ordered positions of one designator over a query window.

    Args:
        designator: Small-body designator the positions belong to.
        dates: Timestamps, one per position, in table order.
        positions: Positions as an ``(N, 3)`` array.

    Raises:
        ValueError: If ``positions`` is not ``(N, 3)`` with ``N == len(dates)``.
    """

    designator: str
    dates: tuple[str, ...]
    positions: Array

    def __post_init__(self) -> None:
        positions = jnp.asarray(self.positions, dtype=get_dtype()).reshape(-1, 3)
        object.__setattr__(self, "dates", tuple(self.dates))
        object.__setattr__(self, "positions", positions)
        if positions.shape[0] != len(self.dates):
            raise ValueError(
                f"Trajectory {self.designator!r} has {len(self.dates)} dates "
                f"but {positions.shape[0]} positions"
            )

    @classmethod
    def from_components(
        cls,
        designator: str,
        dates: list[str] | tuple[str, ...],
        x: ArrayLike,
        y: ArrayLike,
        z: ArrayLike,
    ) -> Trajectory:
        """Build a trajectory from separate x, y, z sequences."""
        dtype = get_dtype()
        positions = jnp.stack(
            [
                jnp.asarray(x, dtype=dtype),
                jnp.asarray(y, dtype=dtype),
                jnp.asarray(z, dtype=dtype),
            ],
            axis=-1,
        )
        return cls(designator=designator, dates=tuple(dates), positions=positions)

    @property
    def x(self) -> Array:
        """x components, shape ``(N,)``."""
        return self.positions[:, 0]

    @property
    def y(self) -> Array:
        """y components, shape ``(N,)``."""
        return self.positions[:, 1]

    @property
    def z(self) -> Array:
        """z components, shape ``(N,)``."""
        return self.positions[:, 2]

    @property
    def points(self) -> list[CartesianPoint]:
        """Positions as a list of :class:`CartesianPoint`."""
        return [CartesianPoint(*(float(c) for c in row)) for row in self.positions.tolist()]

    def scaled(self, factor: float) -> Trajectory:
        """Return a copy with every position multiplied by *factor*.

        Args:
            factor: Scale factor, e.g. the scene units per unit-sphere radius.

        Returns:
            A new Trajectory with the same dates.
        """
        return Trajectory(
            designator=self.designator,
            dates=self.dates,
            positions=self.positions * factor,
        )

    def to_dataframe(self) -> pl.DataFrame:
        """Return the trajectory as a Polars DataFrame.

        Returns:
            DataFrame with columns ``designator``, ``date``, ``x``, ``y``, ``z``.
        """
        n = len(self)
        return pl.DataFrame(
            {
                "designator": pl.Series([self.designator] * n, dtype=pl.Utf8),
                "date": pl.Series(list(self.dates), dtype=pl.Utf8),
                "x": pl.Series(self.x.tolist(), dtype=pl.Float64),
                "y": pl.Series(self.y.tolist(), dtype=pl.Float64),
                "z": pl.Series(self.z.tolist(), dtype=pl.Float64),
            }
        )

    def __len__(self) -> int:
        return len(self.dates)

    def __str__(self) -> str:
        return f"Trajectory(designator={self.designator!r}, points={len(self)})"

    def __repr__(self) -> str:
        return self.__str__()


def trajectories_to_dataframe(trajectories: list[Trajectory]) -> pl.DataFrame:
    """Stack several trajectories into one Polars DataFrame.

    Args:
        trajectories: Trajectories to combine, kept in the given order.

    Returns:
        DataFrame with columns ``designator``, ``date``, ``x``, ``y``, ``z``.
        Empty (with those columns) when *trajectories* is empty.
    """
    if not trajectories:
        return pl.DataFrame(
            schema={
                "designator": pl.Utf8,
                "date": pl.Utf8,
                "x": pl.Float64,
                "y": pl.Float64,
                "z": pl.Float64,
            }
        )
    return pl.concat([t.to_dataframe() for t in trajectories], how="vertical")
