"""
Lab Grid Reconstruction
=======================

Turns photographed tabular data (lab notebooks, sensor grids) into a clean,
editable grid. An OCR engine supplies raw text; this package rebuilds a
well-formed R x C table from it and fills the gaps.

Main components:
- Tokenizer (adaptive whitespace splitting)
- Grid normalizer (fixed shape, first/last row anchors)
- Value classifier (numeric vs. text, numeric cleanup)
- Gap interpolator (anchor and neighbour interpolation, format preserving)
- Export (JSON, CSV, Markdown, HTML)
"""

__version__ = "1.0.0"

from .grid import Cell, TableGrid, NumericValue, TextValue, EMPTY
from .tokenizer import tokenize, split_multiple_spaces, split_single_spaces
from .anchors import parse_anchor_values
from .classifier import classify_token, clean_numeric, is_numeric
from .normalizer import normalize_rows, placeholder_cells
from .interpolator import fill_gaps, format_like
from .reconstructor import TableReconstructor, reconstruct_table

__all__ = [
    # Model
    "Cell", "TableGrid", "NumericValue", "TextValue", "EMPTY",
    # Pipeline stages
    "tokenize", "split_multiple_spaces", "split_single_spaces",
    "parse_anchor_values",
    "classify_token", "clean_numeric", "is_numeric",
    "normalize_rows", "placeholder_cells",
    "fill_gaps", "format_like",
    # Entry points
    "TableReconstructor", "reconstruct_table",
]
