"""
Tests for configuration.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from labgrid.config import get_config, clamp_dimensions, DEFAULT_COLUMNS, DEFAULT_ROWS


class TestGetConfig:
    """Tests for defaults and environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("LABGRID_COLUMNS", "LABGRID_ROWS", "LABGRID_PRESERVE_TEXT",
                     "LABGRID_DEBUG", "LABGRID_TESSERACT_LANG"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = get_config()
        assert config.grid.expected_columns == 13
        assert config.grid.expected_rows == 24
        assert config.tokenizer.strategy_threshold == 0.7
        assert config.classifier.preserve_text is False
        assert "preserve_interword_spaces=1" in config.ocr.tesseract_config

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LABGRID_COLUMNS", "6")
        monkeypatch.setenv("LABGRID_ROWS", "10")
        monkeypatch.setenv("LABGRID_PRESERVE_TEXT", "true")
        monkeypatch.setenv("LABGRID_DEBUG", "TRUE")
        monkeypatch.setenv("LABGRID_TESSERACT_LANG", "deu")
        config = get_config()
        assert config.grid.expected_columns == 6
        assert config.grid.expected_rows == 10
        assert config.classifier.preserve_text is True
        assert config.debug_mode is True
        assert config.ocr.tesseract_lang == "deu"

    def test_bad_env_ignored(self, monkeypatch):
        monkeypatch.setenv("LABGRID_COLUMNS", "many")
        monkeypatch.setenv("LABGRID_ROWS", "1000")
        config = get_config()
        assert config.grid.expected_columns == DEFAULT_COLUMNS
        assert config.grid.expected_rows == 100


class TestClampDimensions:
    """Tests for clamp_dimensions."""

    def test_in_range(self):
        assert clamp_dimensions(5, 7) == (5, 7)
        assert clamp_dimensions("5", "7") == (5, 7)

    def test_clamped(self):
        assert clamp_dimensions(0, 0) == (1, 1)
        assert clamp_dimensions(51, 101) == (50, 100)

    def test_invalid_uses_defaults(self):
        assert clamp_dimensions(None, "abc") == (DEFAULT_COLUMNS, DEFAULT_ROWS)
