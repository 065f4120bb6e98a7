"""
Hillshade relief using Horn's method.

Slope and aspect come from a 3x3 finite-difference kernel scaled by the grid
cell size. Only interior cells are shaded; the outermost rows and columns have
no full neighborhood and stay 0 in both outputs (transparent in RGBA).
"""

import logging
from typing import Optional, Tuple

import numpy as np
from scipy import ndimage

from ascrelief.color_mapping import render_color
from ascrelief.config import IlluminationConfig
from ascrelief.grid import ElevationGrid

logger = logging.getLogger(__name__)

# Horn kernels, laid out like the z1..z9 neighborhood (z1 top-left, z9 bottom-right)
HORN_DX_KERNEL = np.array([[-1.0, 0.0, 1.0], [-2.0, 0.0, 2.0], [-1.0, 0.0, 1.0]])
HORN_DY_KERNEL = np.array([[-1.0, -2.0, -1.0], [0.0, 0.0, 0.0], [1.0, 2.0, 1.0]])


def horn_gradients(grid: ElevationGrid) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute Horn's dz/dx and dz/dy for interior cells.

    Args:
        grid: Source grid with at least 3 rows and 3 columns

    Returns:
        (dz_dx, dz_dy) arrays of shape (height - 2, width - 2). A NaN anywhere
        in a cell's 3x3 neighborhood yields NaN for that cell.
    """
    dem = grid.as_array()
    scale = 8.0 * grid.cell_size

    # Border outputs of correlate are discarded, so the mode never matters
    dz_dx = ndimage.correlate(dem, HORN_DX_KERNEL, mode="nearest")[1:-1, 1:-1] / scale
    dz_dy = ndimage.correlate(dem, HORN_DY_KERNEL, mode="nearest")[1:-1, 1:-1] / scale

    # Any NaN in the 3x3 neighborhood, center included, marks the cell missing
    missing = ndimage.maximum_filter(np.isnan(dem).astype(np.uint8), size=3)[1:-1, 1:-1] > 0
    dz_dx[missing] = np.nan
    dz_dy[missing] = np.nan
    return dz_dx, dz_dy


def shade_intensity(
    dz_dx: np.ndarray, dz_dy: np.ndarray, illumination: IlluminationConfig
) -> np.ndarray:
    """
    Illumination intensity in [0, 255] from surface derivatives.

    NaN intensities (from missing cells) are pinned to 0.

    Returns:
        uint8 array with the same shape as the inputs
    """
    azimuth_rad = np.radians(illumination.azimuth)
    altitude_rad = np.radians(illumination.altitude)

    slope = np.arctan(np.hypot(dz_dx, dz_dy))
    aspect = np.arctan2(dz_dy, dz_dx)

    intensity = 255.0 * (
        np.cos(altitude_rad) * np.cos(slope)
        + np.sin(altitude_rad) * np.sin(slope) * np.cos(azimuth_rad - aspect)
    )
    intensity = np.nan_to_num(np.clip(intensity, 0.0, 255.0), nan=0.0)
    return intensity.astype(np.uint8)


def hillshade(
    grid: ElevationGrid,
    color_raster: Optional[np.ndarray] = None,
    illumination: Optional[IlluminationConfig] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate grayscale and color hillshade rasters.

    Args:
        grid: Source grid
        color_raster: RGBA uint8 raster (height, width, 4) to modulate by the
            shade (default: the color renderer output with the default colormap)
        illumination: Light source (default: azimuth 315, altitude 45)

    Returns:
        tuple: (shade_gray, shade_rgb) where:
            - shade_gray: uint8 array (height, width)
            - shade_rgb: uint8 RGBA array (height, width, 4), interior color
              scaled by shade / 255 with alpha 255

    Raises:
        ValueError: If color_raster does not match the grid shape
    """
    if illumination is None:
        illumination = IlluminationConfig()
    if color_raster is None:
        color_raster = render_color(grid)

    expected_shape = (grid.height, grid.width, 4)
    if color_raster.shape != expected_shape:
        raise ValueError(
            f"Color raster shape {color_raster.shape} does not match grid {expected_shape}"
        )

    logger.info(
        f"Computing hillshade (azimuth={illumination.azimuth}, "
        f"altitude={illumination.altitude}, cellsize={grid.cell_size})"
    )

    shade_gray = np.zeros(grid.shape, dtype=np.uint8)
    shade_rgb = np.zeros(expected_shape, dtype=np.uint8)

    if grid.height < 3 or grid.width < 3:
        logger.warning(f"Grid {grid.width}x{grid.height} has no interior cells to shade")
        return shade_gray, shade_rgb

    dz_dx, dz_dy = horn_gradients(grid)
    shade = shade_intensity(dz_dx, dz_dy, illumination)
    shade_gray[1:-1, 1:-1] = shade

    interior_color = color_raster[1:-1, 1:-1, :3].astype(np.float64)
    shade_rgb[1:-1, 1:-1, :3] = (
        interior_color * shade[:, :, np.newaxis].astype(np.float64) / 255.0
    ).astype(np.uint8)
    shade_rgb[1:-1, 1:-1, 3] = 255

    logger.info(f"Shade range: {shade.min()} to {shade.max()}")
    return shade_gray, shade_rgb
