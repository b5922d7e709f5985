# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "horizonsjax"]
#
# [tool.uv.sources]
# horizonsjax = { path = ".." }
# ///
"""Fetch trajectories for a catalog of small bodies from JPL Horizons.

Reads designators from a CSV catalog (first column, or ``--column``),
requests an observer ephemeris for each one over the given window,
converts the positions to Cartesian coordinates and writes them to a CSV
ready for a 3D plotting front end.

Requires horizonsjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/fetch_trajectories.py CATALOG [OPTIONS]

Examples:
    # Sequential fetch of an SBDB export, Jan-Jun 2023
    uv run examples/fetch_trajectories.py sbdb.csv --start 2023-01-01 --stop 2023-06-01

    # Through a local proxy, four concurrent requests, scaled for the scene
    uv run examples/fetch_trajectories.py sbdb.csv \\
        --base-url http://localhost:3000/api/horizons --workers 4 --scale 100
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from horizonsjax.horizons import DecodeMode, EphemerisLayout, HorizonsClient
from horizonsjax.trajectory import (
    TrajectoryAssembler,
    load_designators,
    trajectories_to_dataframe,
)


def main(
    catalog: Annotated[Path, typer.Argument(help="CSV catalog of designators")],
    start: Annotated[str, typer.Option(help="Start date of the window")] = "2023-01-01",
    stop: Annotated[str, typer.Option(help="Stop date of the window")] = "2023-06-01",
    step: Annotated[str, typer.Option(help="Horizons step size")] = "1 day",
    column: Annotated[
        str | None, typer.Option(help="Catalog column holding designators (default: first)")
    ] = None,
    mode: Annotated[DecodeMode, typer.Option(help="Ephemeris row layout")] = DecodeMode.SEXAGESIMAL,
    workers: Annotated[int, typer.Option(help="Maximum concurrent requests")] = 1,
    time_of_day: Annotated[
        bool, typer.Option(help="Include the time of day in row timestamps")
    ] = False,
    base_url: Annotated[
        str | None, typer.Option(help="Horizons endpoint or local proxy URL")
    ] = None,
    scale: Annotated[float, typer.Option(help="Scale factor applied to positions")] = 1.0,
    output: Annotated[Path, typer.Option(help="Output CSV path")] = Path("trajectories.csv"),
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    designators = load_designators(catalog, column=column)
    print(f"Loaded {len(designators)} designators from {catalog}")

    with HorizonsClient(base_url=base_url) as client:
        layout = EphemerisLayout(time_fields=(0, 1) if time_of_day else (0,))
        assembler = TrajectoryAssembler(
            client, mode=mode, layout=layout, max_workers=workers
        )
        trajectories = assembler.assemble(designators, start, stop, step)

    if not trajectories:
        print("No trajectories could be assembled", file=sys.stderr)
        raise typer.Exit(code=1)

    if scale != 1.0:
        trajectories = [t.scaled(scale) for t in trajectories]

    df = trajectories_to_dataframe(trajectories)
    output.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(output)
    print(
        f"Wrote {df.height} positions for {len(trajectories)} of "
        f"{len(designators)} designators to {output}"
    )


if __name__ == "__main__":
    typer.run(main)
