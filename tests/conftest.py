"""Pytest configuration and fixtures for ascrelief tests."""
import sys
from pathlib import Path

# Add src/ to Python path so tests run without installing the package
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

import pytest
import numpy as np


SAMPLE_ASC = """ncols 5
nrows 2
xllcorner 0.0
yllcorner 0.0
cellsize 1
nodata_value -9999
1 2 3 4 5
6 7 8 9 10
"""


@pytest.fixture
def sample_asc_text():
    """Small well-formed grid text."""
    return SAMPLE_ASC


@pytest.fixture
def sample_asc_file(tmp_path):
    """Path to a temporary .asc file with a gaussian hill."""
    x = np.linspace(-10, 10, 64)
    y = np.linspace(-10, 10, 48)
    X, Y = np.meshgrid(x, y)
    Z = 1000 + 100 * np.exp(-(X**2 + Y**2) / 50)
    Z[0, 0] = -9999

    lines = [
        "ncols 64",
        "nrows 48",
        "xllcorner 500000.0",
        "yllcorner 4000000.0",
        "cellsize 30",
        "nodata_value -9999",
    ]
    lines += [" ".join(f"{v:.3f}" for v in row) for row in Z]

    path = tmp_path / "hill.asc"
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def make_grid():
    """Factory building an ElevationGrid from a 2D array."""
    from ascrelief.grid import ElevationGrid

    def _make(values, cell_size=1.0):
        data = np.asarray(values, dtype=np.float64)
        return ElevationGrid(
            width=data.shape[1], height=data.shape[0], cells=data.ravel(), cell_size=cell_size
        )

    return _make


@pytest.fixture
def hill_grid(make_grid):
    """60x80 grid with a single smooth peak."""
    x = np.linspace(-10, 10, 80)
    y = np.linspace(-10, 10, 60)
    X, Y = np.meshgrid(x, y)
    return make_grid(1000 + 100 * np.exp(-(X**2 + Y**2) / 50))
