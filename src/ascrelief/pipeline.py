"""
End-to-end elevation rendering pipeline.

Runs parse -> normalize -> render -> shade -> overlay and only then writes
images, so a failure never leaves partial output behind.

Example:
    from ascrelief.pipeline import run_pipeline

    written = run_pipeline("data/tile.asc", output_dir="output_img")
    print(written["hillshade_rgb"])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

from ascrelief.color_mapping import ColorGradient, compute_range, render_color, render_grayscale
from ascrelief.config import DEFAULT_CMAP, DEFAULT_OUTPUT_DIR, GradientFieldConfig, IlluminationConfig
from ascrelief.gradient_field import render_gradient_overlay
from ascrelief.grid import ElevationGrid, load_asc_file
from ascrelief.hillshade import hillshade
from ascrelief.image_io import build_output_paths, make_timestamp, save_raster

logger = logging.getLogger(__name__)


@dataclass
class ReliefProducts:
    """All rasters rendered from one grid."""

    grayscale: np.ndarray
    color: np.ndarray
    hillshade_gray: np.ndarray
    hillshade_rgb: np.ndarray
    gradient_overlay: Optional[np.ndarray] = None
    gradient_field: Optional[np.ndarray] = None

    def rasters(self) -> Dict[str, np.ndarray]:
        """Rasters keyed by product name, skipping products that were not rendered."""
        named = {
            "grayscale": self.grayscale,
            "color": self.color,
            "hillshade_gray": self.hillshade_gray,
            "hillshade_rgb": self.hillshade_rgb,
            "gradient_overlay": self.gradient_overlay,
        }
        return {name: raster for name, raster in named.items() if raster is not None}


def render_products(
    grid: ElevationGrid,
    illumination: Optional[IlluminationConfig] = None,
    gradient: Optional[GradientFieldConfig] = None,
    cmap: Union[str, ColorGradient] = DEFAULT_CMAP,
    with_gradient: bool = True,
) -> ReliefProducts:
    """
    Render every product for a grid in memory.

    Args:
        grid: Parsed elevation grid
        illumination: Hillshade light source (default: 315 / 45 degrees)
        gradient: Gradient overlay settings (default: GradientFieldConfig())
        cmap: Colormap name or gradient callable
        with_gradient: Whether to render the gradient overlay

    Returns:
        ReliefProducts

    Raises:
        EmptyRangeError: If every cell is no-data
    """
    value_range = compute_range(grid)

    grayscale = render_grayscale(grid, value_range)
    color = render_color(grid, cmap, value_range)
    shade_gray, shade_rgb = hillshade(grid, color, illumination)

    products = ReliefProducts(
        grayscale=grayscale,
        color=color,
        hillshade_gray=shade_gray,
        hillshade_rgb=shade_rgb,
    )
    if with_gradient:
        products.gradient_overlay, products.gradient_field = render_gradient_overlay(
            grid, shade_rgb, gradient
        )
    return products


def run_pipeline(
    input_path: Union[str, Path],
    output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
    *,
    illumination: Optional[IlluminationConfig] = None,
    gradient: Optional[GradientFieldConfig] = None,
    cmap: str = DEFAULT_CMAP,
    with_gradient: bool = True,
    timestamp: Optional[str] = None,
) -> Dict[str, Path]:
    """
    Read a grid file, render all products and save them as PNG.

    Args:
        input_path: Path to the ``.asc`` grid
        output_dir: Directory for output images
        illumination: Hillshade light source
        gradient: Gradient overlay settings
        cmap: Registered matplotlib colormap name
        with_gradient: Whether to render the gradient overlay
        timestamp: File name timestamp (default: current local time)

    Returns:
        dict mapping product name to written file path
    """
    grid = load_asc_file(input_path)
    logger.info(f"Width: {grid.width}")
    logger.info(f"Height: {grid.height}")

    products = render_products(
        grid,
        illumination=illumination,
        gradient=gradient,
        cmap=cmap,
        with_gradient=with_gradient,
    )

    paths = build_output_paths(output_dir, timestamp or make_timestamp(), cmap)
    written = {}
    try:
        for name, raster in products.rasters().items():
            written[name] = save_raster(raster, paths[name])
    except OSError:
        logger.error(f"Saving failed; removing {len(written)} images already written")
        for path in written.values():
            path.unlink(missing_ok=True)
        raise

    logger.info(f"Wrote {len(written)} images to {output_dir}")
    return written
