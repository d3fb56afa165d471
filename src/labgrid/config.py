"""
Configuration and constants for the lab grid reconstruction pipeline.

This module provides:
- Grid dimension defaults and bounds
- Tokenizer / classifier tuning
- OCR collaborator settings (Tesseract)
- Export settings
"""

import os
from dataclasses import dataclass, field
from typing import List, Tuple
import logging

logger = logging.getLogger("labgrid")


# ============================================================================
# Grid Dimensions
# ============================================================================

DEFAULT_COLUMNS = 13
DEFAULT_ROWS = 24

MIN_COLUMNS = 1
MAX_COLUMNS = 50
MIN_ROWS = 1
MAX_ROWS = 100


# ============================================================================
# Processing Configuration
# ============================================================================

@dataclass
class GridConfig:
    """Target grid shape."""
    expected_columns: int = DEFAULT_COLUMNS
    expected_rows: int = DEFAULT_ROWS


@dataclass
class TokenizerConfig:
    """Tokenizer configuration."""
    # Below this fraction of expected columns the single-space split is used
    strategy_threshold: float = 0.7


@dataclass
class ClassifierConfig:
    """Value classifier configuration."""
    # Keep unsalvageable data-row text instead of deferring it to interpolation
    preserve_text: bool = False


@dataclass
class OCRConfig:
    """OCR collaborator configuration."""
    tesseract_lang: str = "eng"
    # Keep gutter widths so the multiple-spaces strategy has something to split on
    tesseract_config: str = "--oem 3 --psm 6 -c preserve_interword_spaces=1"
    dpi: int = 300
    max_file_size: int = 10 * 1024 * 1024


@dataclass
class ExportConfig:
    """Export configuration."""
    formats: List[str] = field(default_factory=lambda: ["json", "markdown"])


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    grid: GridConfig = field(default_factory=GridConfig)
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    ocr: OCRConfig = field(default_factory=OCRConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    debug_mode: bool = False


# ============================================================================
# Default Configuration Instance
# ============================================================================

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}")
        return default


def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    config = PipelineConfig()

    columns = _env_int("LABGRID_COLUMNS", config.grid.expected_columns)
    rows = _env_int("LABGRID_ROWS", config.grid.expected_rows)
    config.grid.expected_columns, config.grid.expected_rows = clamp_dimensions(columns, rows)

    if os.environ.get("LABGRID_PRESERVE_TEXT", "").lower() == "true":
        config.classifier.preserve_text = True

    if os.environ.get("LABGRID_DEBUG", "").lower() == "true":
        config.debug_mode = True

    lang = os.environ.get("LABGRID_TESSERACT_LANG")
    if lang:
        config.ocr.tesseract_lang = lang

    return config


# ============================================================================
# Utility Functions
# ============================================================================

def _clamp(value, low: int, high: int, default: int, label: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {label} {value!r}, using {default}")
        return default
    if number < low or number > high:
        clamped = min(max(number, low), high)
        logger.warning(f"{label} {number} outside [{low}, {high}], using {clamped}")
        return clamped
    return number


def clamp_dimensions(columns, rows) -> Tuple[int, int]:
    """
    Coerce requested dimensions into the supported range.

    Non-integer values fall back to the defaults; out-of-range values are
    clamped to the nearest bound.
    """
    return (
        _clamp(columns, MIN_COLUMNS, MAX_COLUMNS, DEFAULT_COLUMNS, "expectedColumns"),
        _clamp(rows, MIN_ROWS, MAX_ROWS, DEFAULT_ROWS, "expectedRows"),
    )
