"""
Table reconstruction pipeline.

Turns one block of OCR text into a well-formed R x C TableGrid:

    tokenize -> normalize (shape + anchors) -> classify -> fill gaps

The pipeline is a pure function of its inputs; a TableReconstructor only
holds configuration, so one instance can serve any number of calls.
"""

import logging
from typing import Optional

from .anchors import AnchorInput, parse_anchor_values
from .classifier import classify_token
from .config import (
    PipelineConfig, get_config, clamp_dimensions, DEFAULT_COLUMNS, DEFAULT_ROWS
)
from .grid import TableGrid
from .interpolator import fill_gaps
from .normalizer import normalize_rows, placeholder_cells
from .tokenizer import tokenize, NO_STRATEGY

logger = logging.getLogger(__name__)


class TableReconstructor:
    """
    Main reconstruction interface.

    Example:
        >>> reconstructor = TableReconstructor(expected_columns=3, expected_rows=4)
        >>> grid = reconstructor.reconstruct("A  B  C\\n1  2  3")
        >>> grid.headers
        ['A', 'B', 'C']
    """

    def __init__(
        self,
        expected_columns: int = DEFAULT_COLUMNS,
        expected_rows: int = DEFAULT_ROWS,
        strategy_threshold: float = 0.7,
        preserve_text: bool = False
    ):
        self.expected_columns, self.expected_rows = clamp_dimensions(
            expected_columns, expected_rows
        )
        self.strategy_threshold = strategy_threshold
        self.preserve_text = preserve_text

    @classmethod
    def from_config(cls, config: Optional[PipelineConfig] = None) -> "TableReconstructor":
        """Build a reconstructor from a PipelineConfig (default: get_config())."""
        config = config or get_config()
        return cls(
            expected_columns=config.grid.expected_columns,
            expected_rows=config.grid.expected_rows,
            strategy_threshold=config.tokenizer.strategy_threshold,
            preserve_text=config.classifier.preserve_text,
        )

    def reconstruct(
        self,
        text: Optional[str],
        first_row_values: AnchorInput = None,
        last_row_values: AnchorInput = None
    ) -> TableGrid:
        """
        Reconstruct a grid from OCR text.

        Args:
            text: OCR text, newline separated
            first_row_values: Anchor values for the first row
                (comma/whitespace separated string or a sequence)
            last_row_values: Anchor values for the last row

        Returns:
            TableGrid with exactly expected_rows x expected_columns cells
        """
        columns, rows = self.expected_columns, self.expected_rows
        first_row = parse_anchor_values(first_row_values)
        last_row = parse_anchor_values(last_row_values)

        tokenized = tokenize(text, columns, self.strategy_threshold)

        if not tokenized.rows:
            if first_row or last_row:
                logger.warning("No text to reconstruct, anchors ignored")
            else:
                logger.warning("No text to reconstruct, returning placeholder grid")
            return TableGrid(
                cells=placeholder_cells(columns, rows),
                num_rows=rows,
                num_cols=columns,
                strategy=NO_STRATEGY,
                status="placeholder",
            )

        normalized = normalize_rows(tokenized.rows, columns, rows, first_row, last_row)

        values = [
            [
                classify_token(
                    token,
                    r,
                    anchored=(r, c) in normalized.anchored,
                    preserve_text=self.preserve_text,
                )
                for c, token in enumerate(row)
            ]
            for r, row in enumerate(normalized.tokens)
        ]

        cells = fill_gaps(values, first_row, last_row)

        grid = TableGrid(
            cells=cells,
            num_rows=rows,
            num_cols=columns,
            strategy=tokenized.strategy,
            source_rows=len(tokenized.rows),
        )
        grid.status = "partial" if grid.interpolated_count else "success"

        logger.info(
            f"Reconstructed {rows}x{columns} grid from {len(tokenized.rows)} lines "
            f"({tokenized.strategy}, {grid.interpolated_count} interpolated)"
        )
        return grid


def reconstruct_table(
    text: Optional[str],
    expected_columns: int = DEFAULT_COLUMNS,
    expected_rows: int = DEFAULT_ROWS,
    first_row_values: AnchorInput = None,
    last_row_values: AnchorInput = None,
    preserve_text: bool = False,
    strategy_threshold: float = 0.7
) -> TableGrid:
    """Convenience wrapper around TableReconstructor.reconstruct()."""
    reconstructor = TableReconstructor(
        expected_columns=expected_columns,
        expected_rows=expected_rows,
        strategy_threshold=strategy_threshold,
        preserve_text=preserve_text,
    )
    return reconstructor.reconstruct(text, first_row_values, last_row_values)
