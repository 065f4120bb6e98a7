"""
Elevation raster rendering from ESRI ASCII grids.

Core functionality:
- ElevationGrid parsing with no-data handling
- Grayscale and colormap elevation rendering
- Hillshade relief using Horn's method
- Gradient vector-field arrow overlay
"""

from .errors import ReliefError, ParseError, ShapeMismatchError, EmptyRangeError
from .config import IlluminationConfig, GradientFieldConfig
from .grid import ElevationGrid, parse_asc, load_asc_file
from .color_mapping import compute_range, normalize, render_grayscale, render_color
from .hillshade import hillshade
from .gradient_field import gradient_field, draw_gradient_arrows
from .pipeline import ReliefProducts, render_products, run_pipeline

__all__ = [
    "ReliefError",
    "ParseError",
    "ShapeMismatchError",
    "EmptyRangeError",
    "IlluminationConfig",
    "GradientFieldConfig",
    "ElevationGrid",
    "parse_asc",
    "load_asc_file",
    "compute_range",
    "normalize",
    "render_grayscale",
    "render_color",
    "hillshade",
    "gradient_field",
    "draw_gradient_arrows",
    "ReliefProducts",
    "render_products",
    "run_pipeline",
]
