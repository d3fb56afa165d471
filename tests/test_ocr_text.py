"""
Tests for the text OCR adapter.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestOCRResult:
    """Test OCRResult class."""

    def test_empty_detection(self):
        from labgrid.ocr_text import OCRResult

        assert OCRResult(text="  \n ").is_empty
        assert not OCRResult(text="1  2").is_empty

    def test_to_dict(self):
        from labgrid.ocr_text import OCRResult

        result = OCRResult(text="A  B", engine_used="tesseract", metadata={"lines": 1})
        data = result.to_dict()

        assert data["text"] == "A  B"
        assert data["engine"] == "tesseract"
        assert data["metadata"] == {"lines": 1}


class TestTesseractEngine:
    """Test TesseractEngine."""

    @pytest.fixture
    def table_image(self):
        """White page with two rows of numbers."""
        import cv2

        img = np.ones((200, 600), dtype=np.uint8) * 255
        cv2.putText(img, "Time    Temp", (20, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.2, 0, 2)
        cv2.putText(img, "0       21.5", (20, 140),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.2, 0, 2)
        return img

    def test_preprocess_upscales_and_binarizes(self, table_image):
        from labgrid.ocr_text import TesseractEngine

        engine = TesseractEngine.__new__(TesseractEngine)
        processed = engine._preprocess_for_ocr(table_image)

        assert processed.shape[1] == 1000
        assert set(np.unique(processed)) <= {0, 255}

    def test_preprocess_color_input(self, table_image):
        import cv2
        from labgrid.ocr_text import TesseractEngine

        engine = TesseractEngine.__new__(TesseractEngine)
        color = cv2.cvtColor(table_image, cv2.COLOR_GRAY2BGR)
        processed = engine._preprocess_for_ocr(color)

        assert processed.ndim == 2

    def test_recognize_pages_joins_text(self):
        from labgrid.ocr_text import TesseractEngine, OCRResult

        engine = TesseractEngine.__new__(TesseractEngine)
        pages = iter(["A  B\n1  2\n", "   ", "3  4\n"])
        engine.recognize = lambda image: OCRResult(text=next(pages), engine_used="tesseract")

        result = engine.recognize_pages([None, None, None])

        assert result.text == "A  B\n1  2\n3  4"
        assert result.metadata["pages"] == 3

    def test_tesseract_recognize(self, table_image):
        from labgrid.ocr_text import TesseractEngine

        try:
            engine = TesseractEngine()
        except ImportError:
            pytest.skip("Tesseract not available")

        result = engine.recognize(table_image)
        assert result.engine_used == "tesseract"
        assert isinstance(result.text, str)
