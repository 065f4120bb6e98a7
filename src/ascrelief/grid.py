"""
Grid parsing for ESRI ASCII elevation rasters.

This module turns the text of an ``.asc`` grid file into an immutable
:class:`ElevationGrid`. The file starts with ``<key> <value>`` header lines
followed by whitespace-separated cell values in row-major order.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from ascrelief.errors import ParseError, ShapeMismatchError

logger = logging.getLogger(__name__)

# Header keys consulted by the parser. Matching is case-sensitive.
HEADER_KEYS = ("ncols", "nrows", "cellsize", "nodata_value")


@dataclass(frozen=True)
class ElevationGrid:
    """
    Elevation values on a regular grid.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Flat float64 array of length ``width * height`` in row-major
            order (index = row * width + col). Missing cells are NaN.
        cell_size: Ground size of one cell, used to scale finite differences
    """

    width: int
    height: int
    cells: np.ndarray
    cell_size: float = 1.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ParseError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not np.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ParseError(f"cellsize must be a positive finite number, got {self.cell_size}")

        cells = np.array(self.cells, dtype=np.float64).ravel()
        if cells.size != self.width * self.height:
            raise ShapeMismatchError(self.width * self.height, cells.size)
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    @property
    def shape(self):
        """(height, width) of the grid."""
        return (self.height, self.width)

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width) view of the cells."""
        return self.cells.reshape(self.height, self.width)

    def value_at(self, row: int, col: int) -> float:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) outside {self.height}x{self.width} grid")
        return float(self.cells[row * self.width + col])


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _parse_header_value(key: str, value: str, line_no: int):
    try:
        if key in ("ncols", "nrows"):
            return int(value)
        return float(value)
    except ValueError:
        raise ParseError(f"Line {line_no}: invalid value for '{key}': {value!r}") from None


def _to_cells(tokens: List[str], first_data_line: int) -> np.ndarray:
    try:
        return np.array(tokens, dtype=np.float64)
    except ValueError:
        bad = next(t for t in tokens if not _is_number(t))
        raise ParseError(
            f"Non-numeric cell value {bad!r} in data section (starting at line {first_data_line})"
        ) from None


def parse_asc(text: str) -> ElevationGrid:
    """
    Parse ESRI ASCII grid text into an ElevationGrid.

    Header lines are the leading lines whose first token is not a number.
    Only ``ncols``, ``nrows``, ``cellsize`` and ``nodata_value`` are used;
    other keys (``xllcorner`` and friends) are ignored. Cells equal to the
    declared ``nodata_value`` are stored as NaN.

    Args:
        text: Full content of the grid file

    Returns:
        ElevationGrid with ``cells.size == ncols * nrows``

    Raises:
        ParseError: If a header value is not a number, ncols/nrows are
            missing or not positive, or a data token is not numeric
        ShapeMismatchError: If the cell count differs from ncols * nrows

    Examples:
        >>> grid = parse_asc("ncols 2\\nnrows 1\\n1.5 2.5\\n")
        >>> grid.width, grid.height, grid.cells.tolist()
        (2, 1, [1.5, 2.5])
    """
    header: Dict[str, float] = {}
    lines = text.splitlines()
    line_idx = 0

    while line_idx < len(lines):
        parts = lines[line_idx].split()
        if not parts:
            line_idx += 1
            continue
        if _is_number(parts[0]):
            break

        key = parts[0]
        if key in HEADER_KEYS:
            if len(parts) < 2:
                raise ParseError(f"Line {line_idx + 1}: header key '{key}' has no value")
            header[key] = _parse_header_value(key, parts[1], line_idx + 1)
        else:
            logger.debug(f"Ignoring header line {line_idx + 1}: {lines[line_idx].strip()}")
        line_idx += 1

    for key in ("ncols", "nrows"):
        if key not in header:
            raise ParseError(f"Missing required header field '{key}'")

    width = int(header["ncols"])
    height = int(header["nrows"])
    cell_size = float(header.get("cellsize", 1.0))
    nodata_value: Optional[float] = header.get("nodata_value")

    if width <= 0 or height <= 0:
        raise ParseError(f"ncols and nrows must be positive, got {width}x{height}")

    tokens = " ".join(lines[line_idx:]).split()
    cells = _to_cells(tokens, line_idx + 1)
    if cells.size != width * height:
        raise ShapeMismatchError(width * height, cells.size)

    if nodata_value is not None:
        cells[cells == nodata_value] = np.nan

    logger.info(f"Parsed grid: {width}x{height}, cellsize={cell_size}")
    logger.info(f"No-data cells: {int(np.sum(np.isnan(cells)))}")

    return ElevationGrid(width=width, height=height, cells=cells, cell_size=cell_size)


def load_asc_file(file_path) -> ElevationGrid:
    """
    Read an ``.asc`` file fully into memory and parse it.

    Args:
        file_path: Path to the grid file

    Returns:
        ElevationGrid parsed from the file

    Raises:
        OSError: If the file cannot be read
        ParseError: If the content is malformed (message includes the path)
    """
    path = Path(file_path)
    logger.info(f"Reading grid file: {path}")
    text = path.read_text(encoding="utf-8")

    try:
        return parse_asc(text)
    except ShapeMismatchError:
        logger.error(f"Cell count mismatch in {path}")
        raise
    except ParseError as e:
        raise ParseError(f"{path}: {e}") from e
