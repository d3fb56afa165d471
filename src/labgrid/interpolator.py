"""
Gap interpolation.

Fills every EMPTY cell of a classified grid with a numeric estimate taken
from its column, in decreasing order of confidence:

1. Linear interpolation between numeric first/last row anchors
2. Linear interpolation between the nearest numeric cells above and below
3. A single numeric anchor, copied
4. A single numeric neighbour, copied
5. "0"

Only cells read from the source (never interpolated ones) are used as
sources, so the result does not depend on the order gaps are visited in.
Interpolated values copy the number pattern of their sources: decimal
places, and zero padding for integers.
"""

import logging
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .anchors import anchor_at
from .classifier import clean_numeric, is_numeric
from .grid import Cell, CellValue, NumericValue, TextValue, EMPTY

logger = logging.getLogger(__name__)

DEFAULT_VALUE = "0"

ANCHOR_PAIR = "anchor_pair"
NEIGHBOR_PAIR = "neighbor_pair"
SINGLE_ANCHOR = "single_anchor"
SINGLE_NEIGHBOR = "single_neighbor"
DEFAULT = "default"


# ============================================================================
# Number Formatting
# ============================================================================

def decimal_places(number: str) -> int:
    """Digits after the decimal point of a numeric string."""
    if "." not in number:
        return 0
    return len(number.split(".", 1)[1])


def _integer_digits(number: str) -> str:
    return number.lstrip("+-").split(".", 1)[0]


def format_like(value: float, pattern_a: str, pattern_b: str) -> str:
    """
    Format ``value`` after the pattern of two cleaned numeric strings.

    If either pattern has a decimal point the value is rounded to the larger
    number of decimal places. Otherwise it is rounded to an integer and,
    when the patterns look zero padded (either starts with ``0`` or their
    digit counts differ), padded to the longer digit count.

    >>> format_like(12.0, "05", "19")
    '12'
    >>> format_like(2.5, "1.5", "3.5")
    '2.5'
    """
    rounded = Decimal(repr(float(value)))
    has_point = "." in pattern_a or "." in pattern_b
    places = max(decimal_places(pattern_a), decimal_places(pattern_b)) if has_point else 0

    # quantize needs room for every integer digit plus the kept places
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, max(rounded.adjusted(), 0) + places + 2)
        rounded = rounded.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

    if has_point:
        if rounded == 0:
            rounded = abs(rounded)
        return format(rounded, "f")

    integer = int(rounded)
    digits_a = _integer_digits(pattern_a)
    digits_b = _integer_digits(pattern_b)
    width = max(len(digits_a), len(digits_b))
    padded = (
        digits_a.startswith("0")
        or digits_b.startswith("0")
        or len(digits_a) != len(digits_b)
    )
    if not padded:
        return str(integer)

    sign = "-" if integer < 0 else ""
    return sign + str(abs(integer)).zfill(width)


# ============================================================================
# Interpolation
# ============================================================================

def _numeric_anchor(anchor: Optional[Sequence[str]], col: int) -> Optional[str]:
    value = anchor_at(anchor, col)
    if value is not None and is_numeric(value):
        return clean_numeric(value)
    return None


def _nearest_sources(
    sources: List[Tuple[int, str]],
    row: int
) -> Tuple[Optional[Tuple[int, str]], Optional[Tuple[int, str]]]:
    """Closest source strictly above and strictly below ``row``."""
    above = None
    below = None
    for index, value in sources:
        if index < row:
            above = (index, value)
        elif index > row:
            below = (index, value)
            break
    return above, below


def interpolate_cell(
    sources: List[Tuple[int, str]],
    row: int,
    total_rows: int,
    first: Optional[str] = None,
    last: Optional[str] = None
) -> Tuple[str, str]:
    """
    Estimate one gap.

    Args:
        sources: (row, cleaned value) of the column's non-interpolated
            numeric cells, sorted by row
        row: Row of the gap
        total_rows: Number of rows in the grid
        first: Cleaned numeric first-row anchor, if any
        last: Cleaned numeric last-row anchor, if any

    Returns:
        (value, method)
    """
    if first is not None and last is not None and total_rows > 1:
        value = np.interp(row, [0, total_rows - 1], [float(first), float(last)])
        return format_like(value, first, last), ANCHOR_PAIR

    above, below = _nearest_sources(sources, row)

    if above and below:
        (above_index, above_value), (below_index, below_value) = above, below
        value = np.interp(
            row,
            [above_index, below_index],
            [float(above_value), float(below_value)]
        )
        return format_like(value, above_value, below_value), NEIGHBOR_PAIR

    if first is not None or last is not None:
        return (first if first is not None else last), SINGLE_ANCHOR

    if above or below:
        return (above or below)[1], SINGLE_NEIGHBOR

    return DEFAULT_VALUE, DEFAULT


def fill_gaps(
    values: List[List[CellValue]],
    first_row: Optional[Sequence[str]] = None,
    last_row: Optional[Sequence[str]] = None
) -> List[List[Cell]]:
    """
    Resolve every EMPTY cell of a classified grid.

    Args:
        values: R x C grid of NumericValue / TextValue / EMPTY
        first_row: First-row anchor values (raw strings)
        last_row: Last-row anchor values (raw strings)

    Returns:
        R x C grid of Cells; cells filled here have ``interpolated=True``
    """
    total_rows = len(values)
    num_cols = len(values[0]) if values else 0

    cells = [
        [
            Cell(value.value, interpolated=False)
            if isinstance(value, (NumericValue, TextValue)) else None
            for value in row
        ]
        for row in values
    ]

    methods = Counter()
    for col in range(num_cols):
        sources = [
            (r, values[r][col].value)
            for r in range(total_rows)
            if isinstance(values[r][col], NumericValue)
        ]
        first = _numeric_anchor(first_row, col)
        last = _numeric_anchor(last_row, col) if total_rows > 1 else None

        for r in range(total_rows):
            if values[r][col] is not EMPTY:
                continue
            value, method = interpolate_cell(sources, r, total_rows, first, last)
            cells[r][col] = Cell(value, interpolated=True)
            methods[method] += 1

    if methods:
        logger.debug(f"Filled {sum(methods.values())} gaps: {dict(methods)}")

    return cells
