"""
Grid normalization.

Forces tokenized rows into exactly ``expected_rows`` x ``expected_columns``
and applies the first/last row anchors. Rows beyond ``expected_rows`` are
dropped, tokens beyond ``expected_columns`` are dropped, and short rows or
missing rows leave gaps (None) for the interpolator.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from .anchors import anchor_at
from .grid import Cell

logger = logging.getLogger(__name__)


@dataclass
class NormalizedGrid:
    """Token grid of the target shape.

    ``tokens[r][c]`` is None where nothing was read; ``anchored`` holds the
    (row, col) positions whose token came from an anchor row.
    """
    tokens: List[List[Optional[str]]]
    anchored: Set[Tuple[int, int]] = field(default_factory=set)

    @property
    def num_rows(self) -> int:
        return len(self.tokens)

    @property
    def num_cols(self) -> int:
        return len(self.tokens[0]) if self.tokens else 0


def placeholder_cells(expected_columns: int, expected_rows: int) -> List[List[Cell]]:
    """
    Grid used when OCR produced no text at all.

    Header cells read "Column 1".."Column N", every other cell is empty;
    all are flagged interpolated.
    """
    header = [Cell(f"Column {c + 1}", interpolated=True) for c in range(expected_columns)]
    body = [
        [Cell("", interpolated=True) for _ in range(expected_columns)]
        for _ in range(expected_rows - 1)
    ]
    return [header] + body


def normalize_rows(
    raw_rows: Sequence[Sequence[str]],
    expected_columns: int,
    expected_rows: int,
    first_row: Optional[Sequence[str]] = None,
    last_row: Optional[Sequence[str]] = None
) -> NormalizedGrid:
    """
    Clip/pad raw rows to the target shape and apply anchors.

    Args:
        raw_rows: Token rows from the tokenizer
        expected_columns: Target column count
        expected_rows: Target row count
        first_row: Anchor values for row 0
        last_row: Anchor values for row ``expected_rows - 1``

    Returns:
        NormalizedGrid
    """
    if len(raw_rows) > expected_rows:
        logger.debug(f"Truncating {len(raw_rows)} rows to {expected_rows}")

    tokens: List[List[Optional[str]]] = []
    for r in range(expected_rows):
        source = raw_rows[r] if r < len(raw_rows) else []
        if len(source) > expected_columns:
            logger.debug(f"Row {r}: dropping {len(source) - expected_columns} extra tokens")
        tokens.append([
            source[c] if c < len(source) else None
            for c in range(expected_columns)
        ])

    anchored = set()
    anchor_rows = [(0, first_row)]
    # A single-row grid only takes the first-row anchor
    if expected_rows > 1:
        anchor_rows.append((expected_rows - 1, last_row))

    for r, anchor in anchor_rows:
        if not anchor:
            continue
        if len(anchor) > expected_columns:
            logger.warning(
                f"Anchor for row {r} has {len(anchor)} values, "
                f"ignoring the last {len(anchor) - expected_columns}"
            )
        for c in range(expected_columns):
            value = anchor_at(anchor, c)
            if value is not None:
                tokens[r][c] = value
                anchored.add((r, c))

    return NormalizedGrid(tokens=tokens, anchored=anchored)
