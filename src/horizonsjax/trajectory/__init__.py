"""Trajectory module.

Assembles per-designator trajectories from Horizons ephemerides and
exports them for plotting.

Typical usage::

    from horizonsjax.horizons import HorizonsClient
    from horizonsjax.trajectory import TrajectoryAssembler, load_designators

    designators = load_designators("sbdb.csv")
    with HorizonsClient() as client:
        assembler = TrajectoryAssembler(client, mode="sexagesimal")
        trajectories = assembler.assemble(designators, "2023-01-01", "2023-06-01")
"""

from horizonsjax.trajectory._assembler import TrajectoryAssembler, table_to_trajectory
from horizonsjax.trajectory._catalog import load_designators
from horizonsjax.trajectory._types import (
    CartesianPoint,
    Trajectory,
    trajectories_to_dataframe,
)

__all__ = [
    "CartesianPoint",
    "Trajectory",
    "TrajectoryAssembler",
    "load_designators",
    "table_to_trajectory",
    "trajectories_to_dataframe",
]
