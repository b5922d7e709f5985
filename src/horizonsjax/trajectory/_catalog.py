"""Designator catalog loading.

Reads a CSV catalog of small bodies (for example an SBDB query export
whose first column is ``spkid``) and returns the designators to request.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import polars as pl

logger = logging.getLogger(__name__)


def load_designators(
    source: str | Path | io.IOBase,
    column: str | None = None,
) -> list[str]:
    """Load designators from a CSV catalog with a header row.

    Values are read as strings, stripped, and empty or missing entries are
    dropped. File order is preserved.

    Args:
        source: Path to the CSV file, or a file-like object holding CSV text.
        column: Column holding the designators. Defaults to the first column.

    Returns:
        Designators in catalog order.

    Raises:
        FileNotFoundError: If *source* is a path that does not exist.
        KeyError: If *column* is not in the catalog.

    Examples:
        ```python
        from horizonsjax.trajectory import load_designators
        designators = load_designators("sbdb.csv")
        ```
    """
    if isinstance(source, (str, Path)):
        source = Path(source)
        if not source.exists():
            raise FileNotFoundError(f"Catalog file not found: {source}")
        logger.info("Loading designator catalog from %s", source)

    df = pl.read_csv(source, infer_schema=False, raise_if_empty=False)
    if df.width == 0:
        logger.warning("Designator catalog is empty")
        return []

    name = column if column is not None else df.columns[0]
    if name not in df.columns:
        raise KeyError(f"Column {name!r} not found in catalog; columns are {df.columns}")

    values = df.get_column(name).drop_nulls().str.strip_chars()
    designators = values.filter(values != "").to_list()
    logger.info("Loaded %d designators", len(designators))
    return designators
