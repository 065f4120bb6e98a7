"""
Tests for grid parsing.

Tests ESRI ASCII header handling, no-data conversion and shape validation.
"""

import pytest
import numpy as np


class TestParseAsc:
    """Tests for parse_asc function."""

    def test_parse_asc_basic(self, sample_asc_text):
        """Test the documented 5x2 example."""
        from ascrelief.grid import parse_asc

        grid = parse_asc(sample_asc_text)

        assert grid.width == 5
        assert grid.height == 2
        assert grid.cell_size == 1.0
        assert grid.cells.tolist() == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]

    def test_parse_asc_nodata_becomes_nan(self):
        """Test that nodata_value cells are stored as NaN."""
        from ascrelief.grid import parse_asc

        text = "ncols 3\nnrows 2\nnodata_value -9999\n1 2 -9999\n-9999 5 6\n"
        grid = parse_asc(text)

        expected = np.array([1, 2, np.nan, np.nan, 5, 6])
        np.testing.assert_array_equal(grid.cells, expected)

    def test_parse_asc_cellsize_defaults_to_one(self):
        """Test that a missing cellsize defaults to 1.0."""
        from ascrelief.grid import parse_asc

        grid = parse_asc("ncols 2\nnrows 1\n3 4\n")

        assert grid.cell_size == 1.0

    def test_parse_asc_reads_cellsize(self):
        """Test that cellsize is parsed as a float."""
        from ascrelief.grid import parse_asc

        grid = parse_asc("ncols 2\nnrows 1\ncellsize 0.5\n3 4\n")

        assert grid.cell_size == 0.5

    @pytest.mark.parametrize("cellsize", ["nan", "inf", "-inf", "0", "-2"])
    def test_parse_asc_invalid_cellsize_raises(self, cellsize):
        """Test that cellsize must be a positive finite number."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import parse_asc

        with pytest.raises(ParseError, match="cellsize"):
            parse_asc(f"ncols 1\nnrows 1\ncellsize {cellsize}\n1\n")

    def test_parse_asc_header_order_independent(self):
        """Test that header keys may appear in any order."""
        from ascrelief.grid import parse_asc

        text = "nodata_value 0\ncellsize 2\nnrows 1\nncols 3\n1 0 3\n"
        grid = parse_asc(text)

        assert grid.width == 3
        assert grid.height == 1
        assert np.isnan(grid.cells[1])

    def test_parse_asc_values_span_lines(self):
        """Test that cell tokens are read across arbitrary line breaks."""
        from ascrelief.grid import parse_asc

        grid = parse_asc("ncols 3\nnrows 2\n1 2\n3 4 5\n6\n")

        assert grid.cells.tolist() == [1, 2, 3, 4, 5, 6]

    def test_parse_asc_keys_are_case_sensitive(self):
        """Test that NODATA_value is not treated as nodata_value."""
        from ascrelief.grid import parse_asc

        grid = parse_asc("ncols 2\nnrows 1\nNODATA_value -1\n-1 2\n")

        assert grid.cells[0] == -1.0

    def test_parse_asc_invalid_header_number_raises(self):
        """Test that a non-numeric header value raises ParseError."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import parse_asc

        with pytest.raises(ParseError, match="ncols"):
            parse_asc("ncols abc\nnrows 1\n1\n")

    def test_parse_asc_missing_dimension_raises(self):
        """Test that missing nrows raises ParseError."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import parse_asc

        with pytest.raises(ParseError, match="nrows"):
            parse_asc("ncols 2\n1 2\n")

    def test_parse_asc_nonpositive_dimension_raises(self):
        """Test that zero columns raise ParseError."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import parse_asc

        with pytest.raises(ParseError, match="positive"):
            parse_asc("ncols 0\nnrows 1\n")

    def test_parse_asc_too_few_values_raises(self):
        """Test that missing cells raise ShapeMismatchError."""
        from ascrelief.errors import ParseError, ShapeMismatchError
        from ascrelief.grid import parse_asc

        with pytest.raises(ShapeMismatchError) as exc_info:
            parse_asc("ncols 3\nnrows 2\n1 2 3\n4 5\n")

        assert exc_info.value.expected == 6
        assert exc_info.value.actual == 5
        assert isinstance(exc_info.value, ParseError)

    def test_parse_asc_too_many_values_raises(self):
        """Test that extra cells raise ShapeMismatchError."""
        from ascrelief.errors import ShapeMismatchError
        from ascrelief.grid import parse_asc

        with pytest.raises(ShapeMismatchError):
            parse_asc("ncols 2\nnrows 1\n1 2 3\n")

    def test_parse_asc_non_numeric_cell_raises(self):
        """Test that a bad data token raises ParseError."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import parse_asc

        with pytest.raises(ParseError, match="x7"):
            parse_asc("ncols 2\nnrows 1\n1 x7\n")


class TestElevationGrid:
    """Tests for the ElevationGrid data model."""

    def test_cells_are_read_only(self, sample_asc_text):
        """Test that parsed cells cannot be mutated."""
        from ascrelief.grid import parse_asc

        grid = parse_asc(sample_asc_text)

        with pytest.raises(ValueError):
            grid.cells[0] = 42.0

    def test_as_array_is_row_major(self, sample_asc_text):
        """Test that as_array reshapes to (height, width) row-major."""
        from ascrelief.grid import parse_asc

        grid = parse_asc(sample_asc_text)
        data = grid.as_array()

        assert data.shape == (2, 5)
        assert data[1, 0] == 6.0
        assert grid.value_at(1, 4) == 10.0

    def test_value_at_out_of_bounds_raises(self, sample_asc_text):
        """Test that indexing outside the grid raises IndexError."""
        from ascrelief.grid import parse_asc

        grid = parse_asc(sample_asc_text)

        with pytest.raises(IndexError):
            grid.value_at(2, 0)

    def test_construction_checks_cell_count(self):
        """Test that the constructor enforces width * height cells."""
        from ascrelief.errors import ShapeMismatchError
        from ascrelief.grid import ElevationGrid

        with pytest.raises(ShapeMismatchError):
            ElevationGrid(width=2, height=2, cells=np.zeros(3))

    def test_construction_rejects_nonpositive_cellsize(self):
        """Test that cell_size must be positive."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import ElevationGrid

        with pytest.raises(ParseError, match="cellsize"):
            ElevationGrid(width=1, height=1, cells=np.zeros(1), cell_size=0.0)


class TestLoadAscFile:
    """Tests for load_asc_file function."""

    def test_load_asc_file_reads_grid(self, sample_asc_file):
        """Test loading a grid from disk."""
        from ascrelief.grid import load_asc_file

        grid = load_asc_file(sample_asc_file)

        assert grid.shape == (48, 64)
        assert grid.cell_size == 30.0
        assert np.isnan(grid.cells[0])
        assert np.sum(np.isnan(grid.cells)) == 1

    def test_load_asc_file_missing_raises(self, tmp_path):
        """Test that a missing file raises OSError."""
        from ascrelief.grid import load_asc_file

        with pytest.raises(OSError):
            load_asc_file(tmp_path / "missing.asc")

    def test_load_asc_file_error_includes_path(self, tmp_path):
        """Test that parse errors name the offending file."""
        from ascrelief.errors import ParseError
        from ascrelief.grid import load_asc_file

        path = tmp_path / "bad.asc"
        path.write_text("ncols abc\nnrows 1\n1\n")

        with pytest.raises(ParseError, match="bad.asc"):
            load_asc_file(path)
