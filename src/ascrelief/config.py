"""Configuration module for ascrelief.

Centralizes default rendering settings and the small config objects passed to
the hillshade and gradient overlay stages.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Tuple

# Illumination defaults (degrees)
DEFAULT_AZIMUTH = 315.0
DEFAULT_ALTITUDE = 45.0

# Color gradient
DEFAULT_CMAP = "turbo"

# Gradient overlay defaults
DEFAULT_WINDOW_SIZE = 5
DEFAULT_STRIDE = 30
DEFAULT_ARROW_LENGTH = 20.0
DEFAULT_HEAD_LENGTH = 6.0
DEFAULT_HEAD_ANGLE = 30.0
DEFAULT_ARROW_COLOR = (255, 0, 0, 255)

# Output
DEFAULT_OUTPUT_DIR = "output_img"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def is_integer(value) -> bool:
    """True for ints (including numpy integers) but not bools."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class IlluminationConfig:
    """Synthetic light source used by the hillshade stage."""

    azimuth: float = DEFAULT_AZIMUTH
    """Compass direction of the light source in degrees."""

    altitude: float = DEFAULT_ALTITUDE
    """Elevation angle of the light source above the horizon in degrees."""

    def __post_init__(self):
        if not 0.0 <= self.altitude <= 90.0:
            raise ValueError(f"altitude must be between 0 and 90 degrees, got {self.altitude}")


@dataclass(frozen=True)
class GradientFieldConfig:
    """Sampling and glyph settings for the gradient vector-field overlay."""

    window_size: int = DEFAULT_WINDOW_SIZE
    """Odd window length (cells) used to estimate the local gradient."""

    stride: int = DEFAULT_STRIDE
    """Spacing in cells between sampled arrows."""

    arrow_length: float = DEFAULT_ARROW_LENGTH
    """Length of the arrow shaft in pixels."""

    head_length: float = DEFAULT_HEAD_LENGTH
    """Length of each arrowhead segment in pixels."""

    head_angle: float = DEFAULT_HEAD_ANGLE
    """Angle in degrees between the arrowhead segments and the shaft."""

    color: Tuple[int, int, int, int] = DEFAULT_ARROW_COLOR
    """RGBA overlay color."""

    def __post_init__(self):
        if not is_integer(self.window_size) or self.window_size < 3 or self.window_size % 2 == 0:
            raise ValueError(f"window_size must be an odd integer >= 3, got {self.window_size!r}")
        if not is_integer(self.stride) or self.stride < 1:
            raise ValueError(f"stride must be an integer >= 1, got {self.stride!r}")
        if self.arrow_length <= 0 or self.head_length < 0:
            raise ValueError("arrow_length must be positive and head_length non-negative")
        if len(self.color) != 4 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(f"color must be an RGBA tuple of 0-255 values, got {self.color}")


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Set up root logging for command-line use."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
