"""
Gradient vector field estimation and arrow overlay.

The local gradient at a cell is estimated from the ``half`` cells on either
side of it along its row (dx) and column (dy), where ``half = window_size // 2``.
Cells closer than ``half`` to any border get the zero vector. Sampled vectors
are drawn as arrows onto an RGBA raster.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
from scipy import ndimage
from skimage.draw import line as draw_line

from ascrelief.config import DEFAULT_WINDOW_SIZE, GradientFieldConfig, is_integer
from ascrelief.grid import ElevationGrid

logger = logging.getLogger(__name__)


def _window_kernel(half: int) -> np.ndarray:
    # +1 for offsets -half..-1, 0 for the center, -1 for offsets +1..+half
    return np.concatenate([np.ones(half), [0.0], -np.ones(half)]) / half


def gradient_field(grid: ElevationGrid, window_size: int = DEFAULT_WINDOW_SIZE) -> np.ndarray:
    """
    Estimate the windowed gradient at every cell.

    For an eligible cell at (y, x)::

        dx = (sum z[y, x-k] - sum z[y, x+k]) / half    for k = 1..half
        dy = (sum z[y-k, x] - sum z[y+k, x]) / half

    Args:
        grid: Source grid
        window_size: Odd window length >= 3

    Returns:
        float64 array of shape (height, width, 2) holding (dx, dy). Cells within
        ``half`` of a border, and cells whose window contains NaN, are (0, 0).

    Raises:
        ValueError: If window_size is not an odd integer >= 3
    """
    if not is_integer(window_size) or window_size < 3 or window_size % 2 == 0:
        raise ValueError(f"window_size must be an odd integer >= 3, got {window_size!r}")

    half = window_size // 2
    field = np.zeros((grid.height, grid.width, 2), dtype=np.float64)

    if grid.height <= 2 * half or grid.width <= 2 * half:
        logger.warning(
            f"Grid {grid.width}x{grid.height} is too small for window size {window_size}"
        )
        return field

    dem = grid.as_array()
    kernel = _window_kernel(half)
    dx = ndimage.correlate1d(dem, kernel, axis=1, mode="nearest")
    dy = ndimage.correlate1d(dem, kernel, axis=0, mode="nearest")

    inner = (slice(half, grid.height - half), slice(half, grid.width - half))
    field[inner + (0,)] = dx[inner]
    field[inner + (1,)] = dy[inner]

    # Any NaN in the row or column window, center included, zeroes the vector
    nan_cells = np.isnan(dem).astype(np.uint8)
    in_window = (ndimage.maximum_filter1d(nan_cells, window_size, axis=1) > 0) | (
        ndimage.maximum_filter1d(nan_cells, window_size, axis=0) > 0
    )
    non_finite = ~np.isfinite(field).all(axis=2) | in_window
    if np.any(non_finite):
        logger.debug(f"Zeroing {int(np.sum(non_finite))} vectors with no-data in their window")
        field[non_finite] = 0.0

    return field


def sample_points(field: np.ndarray, stride: int) -> List[Tuple[int, int, float, float]]:
    """
    Pick vectors on a regular lattice anchored at the origin.

    Rows and columns that are multiples of ``stride`` are visited; zero vectors
    (including every border cell) are skipped.

    Returns:
        List of (row, col, dx, dy)
    """
    if not is_integer(stride) or stride < 1:
        raise ValueError(f"stride must be an integer >= 1, got {stride!r}")

    sub = field[::stride, ::stride]
    rows, cols = np.nonzero(np.hypot(sub[:, :, 0], sub[:, :, 1]) > 0)
    return [
        (int(r) * stride, int(c) * stride, float(sub[r, c, 0]), float(sub[r, c, 1]))
        for r, c in zip(rows, cols)
    ]


def _draw_segment(raster: np.ndarray, x0, y0, x1, y1, color) -> None:
    """Draw a 1-pixel line, clipped to the raster bounds."""
    height, width = raster.shape[:2]
    rr, cc = draw_line(int(round(y0)), int(round(x0)), int(round(y1)), int(round(x1)))
    inside = (rr >= 0) & (rr < height) & (cc >= 0) & (cc < width)
    raster[rr[inside], cc[inside]] = color


def arrow_segments(
    x: float, y: float, dx: float, dy: float, config: GradientFieldConfig
) -> List[Tuple[float, float, float, float]]:
    """
    Line segments (x0, y0, x1, y1) forming one arrow glyph.

    The shaft starts at (x, y) and runs ``arrow_length`` pixels along the unit
    vector; two head segments leave the tip at +/- ``head_angle`` from the
    reversed direction. Rows grow downward, so +dy points down the image.
    """
    magnitude = np.hypot(dx, dy)
    if magnitude == 0 or not np.isfinite(magnitude):
        return []

    theta = np.arctan2(dy, dx)
    tip_x = x + config.arrow_length * np.cos(theta)
    tip_y = y + config.arrow_length * np.sin(theta)

    segments = [(x, y, tip_x, tip_y)]
    head_angle = np.radians(config.head_angle)
    for side in (-1.0, 1.0):
        back = theta + np.pi + side * head_angle
        segments.append(
            (
                tip_x,
                tip_y,
                tip_x + config.head_length * np.cos(back),
                tip_y + config.head_length * np.sin(back),
            )
        )
    return segments


def draw_gradient_arrows(
    raster: np.ndarray,
    field: np.ndarray,
    config: Optional[GradientFieldConfig] = None,
) -> np.ndarray:
    """
    Overlay sampled gradient vectors as arrows.

    Args:
        raster: RGBA uint8 raster (height, width, 4), not modified
        field: Vector field from :func:`gradient_field` with matching shape
        config: Sampling and glyph settings

    Returns:
        New RGBA uint8 raster with arrows drawn in ``config.color``

    Raises:
        ValueError: If the field and raster shapes differ
    """
    if config is None:
        config = GradientFieldConfig()
    if field.shape[:2] != raster.shape[:2]:
        raise ValueError(f"Field shape {field.shape[:2]} does not match raster {raster.shape[:2]}")

    overlay = raster.copy()
    color = np.array(config.color, dtype=np.uint8)

    points = sample_points(field, config.stride)
    for row, col, dx, dy in points:
        for x0, y0, x1, y1 in arrow_segments(col, row, dx, dy, config):
            _draw_segment(overlay, x0, y0, x1, y1, color)

    logger.info(f"Drew {len(points)} gradient arrows (stride={config.stride})")
    return overlay


def render_gradient_overlay(
    grid: ElevationGrid,
    base_raster: np.ndarray,
    config: Optional[GradientFieldConfig] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Estimate the gradient field and draw it over a base raster.

    Returns:
        tuple: (overlay, field)
    """
    if config is None:
        config = GradientFieldConfig()
    logger.info(f"Estimating gradient field (window_size={config.window_size})")
    field = gradient_field(grid, config.window_size)
    return draw_gradient_arrows(base_raster, field, config), field
