"""
Color mapping functions for elevation rasters.

This module contains the range normalizer and the two elevation renderers:
grayscale intensity and color-graded RGBA using matplotlib colormaps.

Missing cells (NaN) normalize to 0, so they render as the lowest intensity or
the first color of the gradient.
"""

import logging
from typing import Callable, Optional, Tuple, Union

import matplotlib
import numpy as np

from ascrelief.config import DEFAULT_CMAP
from ascrelief.errors import EmptyRangeError
from ascrelief.grid import ElevationGrid

logger = logging.getLogger(__name__)

# Any callable mapping t values in [0, 1] to RGB(A) floats in [0, 1].
# Matplotlib Colormap instances satisfy this.
ColorGradient = Callable[[np.ndarray], np.ndarray]


def get_colormap(cmap: Union[str, ColorGradient] = DEFAULT_CMAP) -> ColorGradient:
    """
    Resolve a color gradient.

    Args:
        cmap: Name of a registered matplotlib colormap, or a callable
            gradient that is returned unchanged

    Returns:
        Callable gradient

    Raises:
        ValueError: If the name is not a registered colormap
    """
    if callable(cmap):
        return cmap
    try:
        return matplotlib.colormaps[cmap]
    except KeyError:
        raise ValueError(f"Unknown colormap: {cmap}") from None


def compute_range(grid: ElevationGrid) -> Tuple[float, float]:
    """
    Compute (min, max) over all non-NaN cells.

    Raises:
        EmptyRangeError: If every cell is NaN
    """
    valid = grid.cells[~np.isnan(grid.cells)]
    if valid.size == 0:
        raise EmptyRangeError("Every cell is no-data; cannot compute a value range")

    min_val, max_val = float(valid.min()), float(valid.max())
    logger.info(f"Elevation range: {min_val:.2f} to {max_val:.2f}")
    return min_val, max_val


def normalize(
    grid: ElevationGrid, value_range: Optional[Tuple[float, float]] = None
) -> np.ndarray:
    """
    Map cells linearly to [0, 1].

    A degenerate range (min == max) maps every cell to 0. NaN cells map to 0.

    Args:
        grid: Source grid
        value_range: (min, max) to normalize against (default: computed
            from the grid)

    Returns:
        float64 array of shape (height, width)
    """
    if value_range is None:
        value_range = compute_range(grid)
    min_val, max_val = value_range

    data = grid.as_array()
    normalized = np.zeros(grid.shape, dtype=np.float64)
    if max_val > min_val:
        valid_mask = ~np.isnan(data)
        normalized[valid_mask] = np.clip(
            (data[valid_mask] - min_val) / (max_val - min_val), 0.0, 1.0
        )

    return normalized


def render_grayscale(
    grid: ElevationGrid, value_range: Optional[Tuple[float, float]] = None
) -> np.ndarray:
    """
    Render elevation as single-channel intensity.

    Pixel values are ``trunc(t * 255)``, so ``[0, 1, 2]`` renders as
    ``[0, 127, 255]``.

    Returns:
        uint8 array of shape (height, width)
    """
    logger.info("Rendering grayscale elevation")
    normalized = normalize(grid, value_range)
    return (normalized * 255.0).astype(np.uint8)


def render_color(
    grid: ElevationGrid,
    cmap: Union[str, ColorGradient] = DEFAULT_CMAP,
    value_range: Optional[Tuple[float, float]] = None,
) -> np.ndarray:
    """
    Render elevation through a color gradient.

    Args:
        grid: Source grid
        cmap: Colormap name or gradient callable (default: 'turbo')
        value_range: (min, max) to normalize against (default: computed)

    Returns:
        uint8 RGBA array of shape (height, width, 4); alpha is always 255
    """
    gradient = get_colormap(cmap)
    logger.info(f"Rendering color elevation using {getattr(gradient, 'name', gradient)}")

    normalized = normalize(grid, value_range)
    colors = np.asarray(gradient(normalized), dtype=np.float64)

    rgba = np.empty((grid.height, grid.width, 4), dtype=np.uint8)
    rgba[:, :, :3] = (np.clip(colors[:, :, :3], 0.0, 1.0) * 255.0).astype(np.uint8)
    rgba[:, :, 3] = 255

    logger.info(f"Created color raster with shape {rgba.shape}")
    return rgba
