"""
Tests for image output.

Tests PNG writing via Pillow and output file naming.
"""

from datetime import datetime

import pytest
import numpy as np
from PIL import Image


class TestSaveRaster:
    """Tests for save_raster function."""

    def test_save_grayscale_roundtrip(self, tmp_path):
        """Test that a 2D raster is written as 8-bit grayscale."""
        from ascrelief.image_io import save_raster

        raster = np.arange(12, dtype=np.uint8).reshape(3, 4)
        path = save_raster(raster, tmp_path / "gray.png")

        with Image.open(path) as img:
            assert img.mode == "L"
            assert img.size == (4, 3)
            np.testing.assert_array_equal(np.asarray(img), raster)

    def test_save_rgba_preserves_transparent_border(self, tmp_path):
        """Test that an RGBA raster keeps zero alpha pixels."""
        from ascrelief.image_io import save_raster

        raster = np.zeros((4, 5, 4), dtype=np.uint8)
        raster[1:-1, 1:-1] = [10, 20, 30, 255]
        path = save_raster(raster, tmp_path / "rgba.png")

        with Image.open(path) as img:
            assert img.mode == "RGBA"
            data = np.asarray(img)
        assert np.all(data[0, :, 3] == 0)
        np.testing.assert_array_equal(data[2, 2], [10, 20, 30, 255])

    def test_save_creates_parent_directories(self, tmp_path):
        """Test that missing output directories are created."""
        from ascrelief.image_io import save_raster

        path = save_raster(np.zeros((2, 2), dtype=np.uint8), tmp_path / "a" / "b" / "x.png")

        assert path.exists()

    def test_save_rejects_float_raster(self, tmp_path):
        """Test that non-uint8 rasters raise ValueError."""
        from ascrelief.image_io import save_raster

        with pytest.raises(ValueError, match="uint8"):
            save_raster(np.zeros((2, 2)), tmp_path / "x.png")

    def test_save_rejects_rgb_without_alpha(self, tmp_path):
        """Test that only grayscale and RGBA layouts are accepted."""
        from ascrelief.image_io import save_raster

        with pytest.raises(ValueError, match="Unsupported raster shape"):
            save_raster(np.zeros((2, 2, 3), dtype=np.uint8), tmp_path / "x.png")


class TestOutputNaming:
    """Tests for timestamped output file names."""

    def test_make_timestamp_format(self):
        """Test the %Y%m%d_%H%M%S timestamp format."""
        from ascrelief.image_io import make_timestamp

        assert make_timestamp(datetime(2024, 3, 9, 7, 5, 1)) == "20240309_070501"

    def test_build_output_paths(self, tmp_path):
        """Test file names for every product."""
        from ascrelief.image_io import build_output_paths

        paths = build_output_paths(tmp_path, "20240309_070501", "turbo")

        assert paths["grayscale"].name == "output_20240309_070501.png"
        assert paths["color"].name == "output_rgb_20240309_070501_turbo.png"
        assert paths["hillshade_gray"].name == "hillshade_gray_20240309_070501.png"
        assert paths["hillshade_rgb"].name == "hillshade_rgb_20240309_070501.png"
        assert paths["gradient_overlay"].name == "hillshade_gradient_20240309_070501.png"
        assert all(p.parent == tmp_path for p in paths.values())
