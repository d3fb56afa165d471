"""
Text OCR adapter.

Provides the text the reconstructor works on when the input is a photo or
scan rather than already-extracted text. Tesseract is run with
``preserve_interword_spaces`` so column gutters survive as runs of spaces.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any

import numpy as np

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class OCRResult:
    """OCR result for one page."""
    text: str
    engine_used: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "engine": self.engine_used,
            "metadata": self.metadata
        }


# ============================================================================
# Tesseract Engine
# ============================================================================

class TesseractEngine:
    """OCR using Tesseract."""

    def __init__(
        self,
        language: str = "eng",
        config: str = "--oem 3 --psm 6 -c preserve_interword_spaces=1"
    ):
        try:
            import pytesseract
            self.pytesseract = pytesseract

            # Test that tesseract is installed
            pytesseract.get_tesseract_version()

        except Exception as e:
            raise ImportError(
                f"Tesseract not available: {e}\n"
                "Install with: pip install pytesseract\n"
                "Also install Tesseract: https://github.com/tesseract-ocr/tesseract"
            )

        self.language = language
        self.config = config

    def _preprocess_for_ocr(self, image: np.ndarray) -> np.ndarray:
        """Grayscale, upscale small images, and binarize."""
        import cv2

        if len(image.shape) == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image.copy()

        # Phone photos of notebooks are often small after cropping
        h, w = gray.shape
        if w < 1000:
            scale = 1000.0 / w
            gray = cv2.resize(gray, None, fx=scale, fy=scale, interpolation=cv2.INTER_CUBIC)

        gray = cv2.adaptiveThreshold(
            gray, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY, 31, 10
        )

        return gray

    def recognize(self, image: np.ndarray) -> OCRResult:
        """Extract the text of a page image."""
        processed = self._preprocess_for_ocr(image)

        try:
            text = self.pytesseract.image_to_string(
                processed,
                lang=self.language,
                config=self.config
            )
        except Exception as e:
            logger.error(f"Tesseract error: {e}")
            return OCRResult(text="", engine_used="tesseract", metadata={"error": str(e)})

        return OCRResult(
            text=text,
            engine_used="tesseract",
            metadata={"lines": len([ln for ln in text.splitlines() if ln.strip()])}
        )

    def recognize_pages(self, images: List[np.ndarray]) -> OCRResult:
        """Run OCR on several pages and join their text in page order."""
        results = [self.recognize(image) for image in images]
        text = "\n".join(r.text.rstrip("\n") for r in results if not r.is_empty)
        return OCRResult(
            text=text,
            engine_used="tesseract",
            metadata={"pages": len(images)}
        )
