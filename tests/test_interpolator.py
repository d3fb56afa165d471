"""
Tests for gap interpolation.
"""

import random

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from labgrid.interpolator import (
    fill_gaps,
    format_like,
    interpolate_cell,
    decimal_places,
    ANCHOR_PAIR,
    NEIGHBOR_PAIR,
    SINGLE_ANCHOR,
    SINGLE_NEIGHBOR,
    DEFAULT,
)
from labgrid.grid import NumericValue, TextValue, EMPTY


def column(*values):
    """Build a one-column classified grid; None = gap, str = number."""
    return [[EMPTY if v is None else NumericValue(v, raw=v)] for v in values]


class TestFormatLike:
    """Tests for pattern-preserving number formatting."""

    def test_decimal_places(self):
        assert decimal_places("1.50") == 2
        assert decimal_places("12") == 0
        assert decimal_places("3.") == 0

    def test_zero_padded_integers(self):
        assert format_like(12.0, "05", "19") == "12"
        assert format_like(7.0, "05", "19") == "07"

    def test_plain_integers(self):
        assert format_like(15.0, "10", "20") == "15"

    def test_integers_of_different_length_are_padded(self):
        """Differing digit counts count as a padded pattern."""
        assert format_like(8.0, "5", "19") == "08"

    def test_integer_rounding_half_up(self):
        assert format_like(12.5, "10", "20") == "13"

    def test_decimal_precision_from_either_source(self):
        assert format_like(2.5, "1.5", "3.5") == "2.5"
        assert format_like(2.25, "1.5", "3") == "2.3"
        assert format_like(2.0, "1.50", "3.5") == "2.00"

    def test_negative_values(self):
        assert format_like(-1.25, "-2.5", "0.0") == "-1.3"
        assert format_like(-3.0, "-05", "01") == "-03"

    def test_no_negative_zero(self):
        assert format_like(-0.01, "-0.5", "0.5") == "0.0"

    def test_integers_wider_than_default_precision(self):
        """30-digit sources round without overflowing the decimal context."""
        result = format_like(2.2222222222222222e29, "1" * 30, "3" * 30)
        assert len(result) == 30
        assert result.isdigit()
        assert result.startswith("22222222222222")

    def test_many_decimal_places(self):
        result = format_like(2.0555, "1." + "1" * 30, "3.0")
        assert decimal_places(result) == 30
        assert result.startswith("2.0555")

    def test_padded_wide_integer(self):
        result = format_like(5e29, "0", "9" * 30)
        assert result == "5" + "0" * 29


class TestInterpolateCell:
    """Tests for the priority order of a single estimate."""

    def test_anchor_pair(self):
        value, method = interpolate_cell([], 2, 5, first="05", last="19")
        assert (value, method) == ("12", ANCHOR_PAIR)

    def test_anchor_pair_beats_neighbors(self):
        sources = [(1, "100"), (3, "300")]
        value, method = interpolate_cell(sources, 2, 5, first="0", last="4")
        assert (value, method) == ("2", ANCHOR_PAIR)

    def test_neighbor_pair(self):
        sources = [(1, "10"), (4, "40")]
        value, method = interpolate_cell(sources, 2, 6)
        assert (value, method) == ("20", NEIGHBOR_PAIR)

    def test_neighbor_pair_beats_single_anchor(self):
        sources = [(0, "1.0"), (2, "3.0")]
        value, method = interpolate_cell(sources, 1, 4, first="1.0")
        assert (value, method) == ("2.0", NEIGHBOR_PAIR)

    def test_single_anchor(self):
        value, method = interpolate_cell([(4, "9")], 5, 6, first="2.50")
        assert (value, method) == ("2.50", SINGLE_ANCHOR)

    def test_single_neighbor(self):
        assert interpolate_cell([(1, "7.5")], 3, 5) == ("7.5", SINGLE_NEIGHBOR)
        assert interpolate_cell([(4, "8")], 2, 5) == ("8", SINGLE_NEIGHBOR)

    def test_default(self):
        assert interpolate_cell([], 1, 3) == ("0", DEFAULT)

    def test_single_row_grid_skips_anchor_pair(self):
        value, method = interpolate_cell([], 0, 1, first="3", last="5")
        assert method == SINGLE_ANCHOR


class TestFillGaps:
    """Tests for fill_gaps over whole grids."""

    def test_source_cells_untouched(self):
        cells = fill_gaps(column("1", None, "3"))
        assert cells[0][0].value == "1"
        assert not cells[0][0].interpolated
        assert cells[1][0].value == "2"
        assert cells[1][0].interpolated

    def test_text_cells_kept_and_skipped_as_sources(self):
        """A text header is neither interpolated nor used as a source."""
        values = [[TextValue("Temp")], [EMPTY], [NumericValue("20")]]
        cells = fill_gaps(values)
        assert cells[0][0].value == "Temp"
        assert cells[1][0].value == "20"

    def test_chained_gaps_use_only_source_cells(self):
        """Consecutive gaps each interpolate between the same two sources."""
        cells = fill_gaps(column("0", None, None, None, "8"))
        assert [row[0].value for row in cells] == ["0", "2", "4", "6", "8"]

    def test_anchor_only_column_is_straight_line(self):
        """Gaps between anchors lie on the anchor line."""
        values = column("10", *([None] * 7), "90")
        cells = fill_gaps(values, first_row=["10"], last_row=["90"])
        assert [row[0].value for row in cells] == [str(v) for v in range(10, 91, 10)]
        assert all(row[0].interpolated for row in cells[1:-1])

    def test_non_numeric_anchor_ignored(self):
        values = [[TextValue("n/a")], [EMPTY], [NumericValue("4")]]
        cells = fill_gaps(values, first_row=["n/a"], last_row=None)
        assert cells[1][0].value == "4"

    def test_empty_column_defaults_to_zero(self):
        cells = fill_gaps([[TextValue("H")], [EMPTY], [EMPTY]])
        assert [row[0].value for row in cells[1:]] == ["0", "0"]

    def test_no_gaps(self):
        values = [[NumericValue("1"), TextValue("x")]]
        cells = fill_gaps(values)
        assert not any(c.interpolated for c in cells[0])

    def test_order_independent(self):
        """Filling gaps one by one in any order gives the row-major result."""
        pattern = ["1.0", None, None, "4.0", None, None, None, "8.0", None]
        expected = [c[0].value for c in fill_gaps(column(*pattern))]

        sources = [(r, v) for r, v in enumerate(pattern) if v is not None]
        gaps = [r for r, v in enumerate(pattern) if v is None]
        rng = random.Random(7)
        for _ in range(5):
            rng.shuffle(gaps)
            shuffled = list(pattern)
            for r in gaps:
                shuffled[r], _ = interpolate_cell(sources, r, len(pattern))
            assert shuffled == expected
