"""
Image output for rendered rasters.

Rasters are written as PNG via Pillow: (height, width) uint8 arrays as 8-bit
grayscale and (height, width, 4) uint8 arrays as RGBA.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from PIL import Image

from ascrelief.config import DEFAULT_CMAP, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def raster_to_image(raster: np.ndarray) -> Image.Image:
    """
    Wrap a rendered raster in a Pillow image.

    Raises:
        ValueError: If the raster is not uint8 grayscale or RGBA
    """
    if raster.dtype != np.uint8:
        raise ValueError(f"Raster must be uint8, got {raster.dtype}")
    if raster.ndim == 2 or (raster.ndim == 3 and raster.shape[2] == 4):
        # Pillow infers L for 2D and RGBA for 4-channel uint8
        return Image.fromarray(raster)
    raise ValueError(f"Unsupported raster shape {raster.shape}; expected (h, w) or (h, w, 4)")


def save_raster(raster: np.ndarray, output_path) -> Path:
    """
    Save a raster as PNG, creating parent directories as needed.

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    img = raster_to_image(raster)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, format="PNG")
    logger.info(f"Saved {output_path} ({raster.shape[1]}x{raster.shape[0]})")
    return output_path


def make_timestamp(now: Optional[datetime] = None) -> str:
    """Local-time timestamp used in output file names."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def build_output_paths(output_dir, timestamp: str, cmap_name: str = DEFAULT_CMAP) -> Dict[str, Path]:
    """
    File names for each rendered product.

    Returns:
        dict keyed by product name: grayscale, color, hillshade_gray,
        hillshade_rgb, gradient_overlay
    """
    output_dir = Path(output_dir)
    return {
        "grayscale": output_dir / f"output_{timestamp}.png",
        "color": output_dir / f"output_rgb_{timestamp}_{cmap_name}.png",
        "hillshade_gray": output_dir / f"hillshade_gray_{timestamp}.png",
        "hillshade_rgb": output_dir / f"hillshade_rgb_{timestamp}.png",
        "gradient_overlay": output_dir / f"hillshade_gradient_{timestamp}.png",
    }
