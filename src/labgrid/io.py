"""
I/O utilities for the reconstruction pipeline.

Handles:
- OCR text loading
- Image and PDF loading for the OCR adapter
- JSON serialization
- Input type detection and directory management
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Union

import numpy as np

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.tiff', '.tif', '.bmp')
TEXT_EXTENSIONS = ('.txt', '.text', '.tsv')


# ============================================================================
# Text Loading
# ============================================================================

def load_text(text_path: Union[str, Path], encoding: str = 'utf-8') -> str:
    """
    Load OCR text from a file.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    text_path = Path(text_path)
    if not text_path.exists():
        raise FileNotFoundError(f"Text file not found: {text_path}")

    with open(text_path, 'r', encoding=encoding, errors='replace') as f:
        text = f.read()

    logger.debug(f"Loaded {len(text)} characters from {text_path}")
    return text


# ============================================================================
# Image / PDF Loading
# ============================================================================

def check_file_size(path: Union[str, Path], max_bytes: int) -> None:
    """Raise ValueError if a file is larger than ``max_bytes``."""
    size = Path(path).stat().st_size
    if size > max_bytes:
        raise ValueError(
            f"File size exceeds {max_bytes // (1024 * 1024)}MB limit: {path} ({size} bytes)"
        )


def load_image(
    image_path: Union[str, Path],
    grayscale: bool = False
) -> np.ndarray:
    """
    Load an image from file.

    Args:
        image_path: Path to the image file
        grayscale: If True, load as grayscale

    Returns:
        Numpy array representing the image (BGR format if color)

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If image cannot be decoded
    """
    import cv2

    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    flag = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    img = cv2.imread(str(image_path), flag)

    if img is None:
        raise ValueError(f"Could not decode image: {image_path}")

    logger.debug(f"Loaded image: {image_path}, shape: {img.shape}")
    return img


def load_pdf(pdf_path: Union[str, Path], dpi: int = 300) -> List[np.ndarray]:
    """
    Convert PDF pages to images using pdf2image (poppler backend).

    Returns:
        List of numpy arrays (BGR format), one per page

    Raises:
        FileNotFoundError: If PDF file doesn't exist
        ImportError: If pdf2image is not installed
        RuntimeError: If the PDF cannot be parsed or poppler is missing
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")

    try:
        from pdf2image import convert_from_path
        from pdf2image.exceptions import PDFPageCountError, PDFSyntaxError
    except ImportError:
        raise ImportError(
            "pdf2image is required. Install with: pip install pdf2image\n"
            "Also ensure poppler is installed on your system."
        )

    try:
        logger.info(f"Converting PDF to images: {pdf_path} at {dpi} DPI")
        pil_images = convert_from_path(pdf_path, dpi=dpi, fmt='png')
    except (PDFPageCountError, PDFSyntaxError) as e:
        raise RuntimeError(f"Failed to parse PDF: {e}")
    except Exception as e:
        if "poppler" in str(e).lower():
            raise RuntimeError(
                "Poppler is not installed. Install with:\n"
                "  macOS: brew install poppler\n"
                "  Linux: sudo apt-get install poppler-utils"
            )
        raise

    images = []
    for pil_img in pil_images:
        img_array = np.array(pil_img.convert("RGB"))
        # RGB -> BGR for OpenCV
        images.append(img_array[:, :, ::-1].copy())

    logger.info(f"Converted {len(images)} pages from PDF")
    return images


# ============================================================================
# JSON Serialization
# ============================================================================

class EnhancedJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars, dataclasses and paths."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if hasattr(obj, '__dataclass_fields__'):
            return asdict(obj)
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def save_json(
    data: Any,
    output_path: Union[str, Path],
    indent: int = 2,
    ensure_ascii: bool = False
) -> Path:
    """
    Save data to a JSON file.

    Returns:
        Path to the saved file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii, cls=EnhancedJSONEncoder)

    logger.debug(f"Saved JSON: {output_path}")
    return output_path


def load_json(json_path: Union[str, Path]) -> Any:
    """Load data from a JSON file."""
    json_path = Path(json_path)
    if not json_path.exists():
        raise FileNotFoundError(f"JSON file not found: {json_path}")

    with open(json_path, 'r', encoding='utf-8') as f:
        return json.load(f)


# ============================================================================
# Directory Management / File Type Detection
# ============================================================================

def ensure_dir(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def detect_input_type(input_path: Union[str, Path]) -> str:
    """
    Detect the type of an input file.

    Returns:
        One of: 'text', 'pdf', 'image', 'unknown'
    """
    input_path = Path(input_path)

    if not input_path.is_file():
        return 'unknown'

    suffix = input_path.suffix.lower()
    if suffix in TEXT_EXTENSIONS:
        return 'text'
    if suffix == '.pdf':
        return 'pdf'
    if suffix in IMAGE_EXTENSIONS:
        return 'image'

    return 'unknown'
