"""
Tokenizer for OCR text.

Splits a block of OCR text into raw rows of cell tokens. Two whitespace
strategies are available; the multiple-spaces split is preferred and the
single-spaces split is used when the first one finds too few columns
(the OCR engine collapsed the column gutters).
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

MULTIPLE_SPACES = "multiple-spaces"
SINGLE_SPACES = "single-spaces"
NO_STRATEGY = "none"

_GUTTER_RE = re.compile(r"\s{2,}|\t")
_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_STRATEGY_THRESHOLD = 0.7


@dataclass
class TokenizedText:
    """Raw rows plus the strategy that produced them."""
    rows: List[List[str]] = field(default_factory=list)
    strategy: str = NO_STRATEGY
    max_cols_found: int = 0

    def __len__(self) -> int:
        return len(self.rows)


def text_lines(text: Optional[str]) -> List[str]:
    """Split text into lines, dropping blank ones."""
    if not text:
        return []
    return [line for line in text.splitlines() if line.strip()]


def _split(line: str, pattern: re.Pattern) -> List[str]:
    return [token.strip() for token in pattern.split(line) if token.strip()]


def split_multiple_spaces(line: str) -> List[str]:
    """Split on runs of two or more whitespace characters or a tab."""
    return _split(line, _GUTTER_RE)


def split_single_spaces(line: str) -> List[str]:
    """Split on any whitespace run."""
    return _split(line, _WHITESPACE_RE)


def tokenize(
    text: Optional[str],
    expected_columns: int,
    threshold: float = DEFAULT_STRATEGY_THRESHOLD
) -> TokenizedText:
    """
    Tokenize OCR text into raw rows.

    Args:
        text: OCR text, newline separated
        expected_columns: Number of columns the caller expects
        threshold: Fraction of expected columns the multiple-spaces split
            must reach to be kept

    Returns:
        TokenizedText (empty when no non-blank line exists)
    """
    lines = text_lines(text)
    if not lines:
        return TokenizedText()

    rows = [split_multiple_spaces(line) for line in lines]
    max_cols = max(len(row) for row in rows)

    # 0.7 * 10 must compare equal to 7
    if max_cols >= round(threshold * expected_columns, 9):
        logger.debug(f"Multiple-spaces split kept: {max_cols} columns (expected {expected_columns})")
        return TokenizedText(rows=rows, strategy=MULTIPLE_SPACES, max_cols_found=max_cols)

    rows = [split_single_spaces(line) for line in lines]
    single_max = max(len(row) for row in rows)
    logger.debug(
        f"Multiple-spaces split found {max_cols} of {expected_columns} columns, "
        f"re-split on single spaces: {single_max} columns"
    )
    return TokenizedText(rows=rows, strategy=SINGLE_SPACES, max_cols_found=single_max)
