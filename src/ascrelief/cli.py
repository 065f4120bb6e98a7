#!/usr/bin/env python3
"""
Command-line entry point: render an ASCII elevation grid to PNG images.

Usage:
    ascrelief tile.asc
    ascrelief tile.asc --output-dir out --azimuth 270 --altitude 30 --cmap viridis
    ascrelief tile.asc --no-gradient -v
"""

import argparse
import logging
import sys

from ascrelief.config import (
    DEFAULT_ALTITUDE,
    DEFAULT_ARROW_LENGTH,
    DEFAULT_AZIMUTH,
    DEFAULT_CMAP,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_STRIDE,
    DEFAULT_WINDOW_SIZE,
    GradientFieldConfig,
    IlluminationConfig,
    configure_logging,
)
from ascrelief.errors import ReliefError
from ascrelief.pipeline import run_pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render grayscale, color, hillshade and gradient images from an ASCII grid"
    )
    parser.add_argument("input", help="Path to the .asc elevation grid")
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for output images (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--azimuth",
        type=float,
        default=DEFAULT_AZIMUTH,
        help=f"Light source azimuth in degrees (default: {DEFAULT_AZIMUTH})",
    )
    parser.add_argument(
        "--altitude",
        type=float,
        default=DEFAULT_ALTITUDE,
        help=f"Light source altitude in degrees (default: {DEFAULT_ALTITUDE})",
    )
    parser.add_argument(
        "--cmap",
        default=DEFAULT_CMAP,
        help=f"Matplotlib colormap for the color image (default: {DEFAULT_CMAP})",
    )
    parser.add_argument(
        "--window-size",
        type=int,
        default=DEFAULT_WINDOW_SIZE,
        help=f"Odd window length for gradient estimation (default: {DEFAULT_WINDOW_SIZE})",
    )
    parser.add_argument(
        "--stride",
        type=int,
        default=DEFAULT_STRIDE,
        help=f"Cells between gradient arrows (default: {DEFAULT_STRIDE})",
    )
    parser.add_argument(
        "--arrow-length",
        type=float,
        default=DEFAULT_ARROW_LENGTH,
        help=f"Arrow shaft length in pixels (default: {DEFAULT_ARROW_LENGTH})",
    )
    parser.add_argument(
        "--no-gradient",
        action="store_true",
        help="Skip the gradient arrow overlay",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)

    try:
        illumination = IlluminationConfig(azimuth=args.azimuth, altitude=args.altitude)
        gradient = GradientFieldConfig(
            window_size=args.window_size,
            stride=args.stride,
            arrow_length=args.arrow_length,
        )
    except ValueError as e:
        parser.error(str(e))

    logger.info(f"Reading file path: {args.input}")
    try:
        written = run_pipeline(
            args.input,
            args.output_dir,
            illumination=illumination,
            gradient=gradient,
            cmap=args.cmap,
            with_gradient=not args.no_gradient,
        )
    except (ReliefError, OSError, ValueError) as e:
        logger.error(f"Failed to render {args.input}: {e}")
        return 1

    for name, path in written.items():
        logger.info(f"  {name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
