#!/usr/bin/env python
"""
Command-line interface for the lab grid reconstruction pipeline.

Usage:
    labgrid --input <text_image_or_pdf> --output <output_dir> [options]

Examples:
    # Reconstruct a 13x24 grid from OCR text
    labgrid --input readings.txt --output ./output

    # Photo of a notebook page, 6 columns x 10 rows, anchored boundary rows
    labgrid --input page.jpg --columns 6 --rows 10 \\
        --first-row "0, 0.5, 1.0, 1.5, 2.0, 2.5" --last-row "9,9.5,10,10.5,11,11.5"
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List

from . import __version__
from .config import (
    get_config, MIN_COLUMNS, MAX_COLUMNS, MIN_ROWS, MAX_ROWS
)

logger = logging.getLogger("labgrid")


def _bounded_int(low: int, high: int):
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"must be between {low} and {high}")
        return number
    return parse


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    config = get_config()

    parser = argparse.ArgumentParser(
        prog="labgrid",
        description="Reconstruct an editable table from photographed or OCR'd tabular data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Reconstruct a grid from OCR text and export all formats:
    labgrid --input readings.txt --output ./output --format all

  Anchor the boundary rows so gaps are interpolated along a straight line:
    labgrid --input page.png --columns 3 --rows 5 --first-row "05 1.5 10" --last-row "19 3.5 50"

  Check that the OCR stack is installed:
    labgrid --check
        """
    )

    parser.add_argument(
        "--input", "-i",
        help="OCR text file (.txt), image (PNG, JPG, TIFF, BMP) or PDF"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory for exported files (default: no files written)"
    )

    parser.add_argument(
        "--columns", "-c",
        type=_bounded_int(MIN_COLUMNS, MAX_COLUMNS),
        default=config.grid.expected_columns,
        help=f"Expected number of columns, {MIN_COLUMNS}-{MAX_COLUMNS} "
             f"(default: {config.grid.expected_columns})"
    )

    parser.add_argument(
        "--rows", "-r",
        type=_bounded_int(MIN_ROWS, MAX_ROWS),
        default=config.grid.expected_rows,
        help=f"Expected number of rows including the header, {MIN_ROWS}-{MAX_ROWS} "
             f"(default: {config.grid.expected_rows})"
    )

    parser.add_argument(
        "--first-row",
        default=None,
        help="Anchor values for the first row, comma and/or space separated"
    )

    parser.add_argument(
        "--last-row",
        default=None,
        help="Anchor values for the last row, comma and/or space separated"
    )

    parser.add_argument(
        "--format", "-f",
        nargs="+",
        default=config.export.formats,
        choices=["json", "markdown", "csv", "html", "tsv", "all"],
        help="Output format(s) (default: json markdown)"
    )

    parser.add_argument(
        "--preserve-text",
        action="store_true",
        default=config.classifier.preserve_text,
        help="Keep non-numeric data cells as text instead of interpolating them"
    )

    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_table",
        help="Print the reconstructed table as Markdown"
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Check OCR dependencies and exit"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=config.debug_mode,
        help="Re-raise errors with a traceback"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def check_dependencies() -> bool:
    """Check if the OCR stack (needed for image and PDF input) is available."""
    missing = []
    optional_missing = []

    try:
        import cv2  # noqa: F401
    except ImportError:
        missing.append("opencv-python")

    try:
        import pytesseract
        try:
            pytesseract.get_tesseract_version()
        except Exception:
            missing.append("tesseract-ocr (system package)")
    except ImportError:
        missing.append("pytesseract")

    try:
        import pdf2image  # noqa: F401
    except ImportError:
        optional_missing.append("pdf2image (for PDF support)")

    if missing:
        logger.error("Missing OCR dependencies:")
        for dep in missing:
            logger.error(f"  - {dep}")
        logger.error("Install with: pip install opencv-python pytesseract pdf2image")
        return False

    if optional_missing:
        logger.warning("Missing optional dependencies (some features may be limited):")
        for dep in optional_missing:
            logger.warning(f"  - {dep}")

    return True


def read_input_text(input_path: Path) -> str:
    """Get OCR text for an input file, running OCR for images and PDFs."""
    from .io import load_text, load_image, load_pdf, detect_input_type, check_file_size
    from .ocr_text import TesseractEngine

    config = get_config()
    input_type = detect_input_type(input_path)
    logger.info(f"Input type detected: {input_type}")

    if input_type == "text":
        return load_text(input_path)

    if input_type not in ("image", "pdf"):
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")
        raise ValueError(
            f"Unsupported input type: {input_path.suffix or input_path.name}. "
            "Use a text file, JPG, PNG or PDF."
        )

    check_file_size(input_path, config.ocr.max_file_size)
    engine = TesseractEngine(
        language=config.ocr.tesseract_lang,
        config=config.ocr.tesseract_config
    )

    if input_type == "pdf":
        images = load_pdf(input_path, dpi=config.ocr.dpi)
    else:
        images = [load_image(input_path)]

    result = engine.recognize_pages(images)
    if result.is_empty:
        logger.warning("No text detected in the input")
    return result.text


def run_pipeline(args) -> int:
    """Run the reconstruction pipeline."""
    from .reconstructor import TableReconstructor
    from .export import GridExporter

    start_time = time.time()
    input_path = Path(args.input)

    text = read_input_text(input_path)

    config = get_config()
    config.grid.expected_columns = args.columns
    config.grid.expected_rows = args.rows
    config.classifier.preserve_text = args.preserve_text
    reconstructor = TableReconstructor.from_config(config)
    grid = reconstructor.reconstruct(
        text,
        first_row_values=args.first_row,
        last_row_values=args.last_row
    )

    if args.output:
        exporter = GridExporter(args.output, input_path.stem)
        exporter.export(grid, args.format)

    if args.print_table:
        print(grid.table_markdown)

    elapsed = time.time() - start_time

    if not args.quiet:
        print("\n" + "=" * 60)
        print("TABLE RECONSTRUCTION COMPLETE")
        print("=" * 60)
        print(f"Source: {input_path}")
        if args.output:
            print(f"Output: {args.output}")
        print(f"Grid: {grid.num_rows} rows x {grid.num_cols} columns")
        print(f"Source lines: {grid.source_rows}")
        print(f"Tokenizer strategy: {grid.strategy}")
        print(f"Interpolated cells: {grid.interpolated_count}")
        print(f"Status: {grid.status}")
        print(f"Processing time: {elapsed:.2f}s")
        print("=" * 60)

    return 0


def main(argv: List[str] = None) -> int:
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    if args.check:
        return 0 if check_dependencies() else 1

    if not args.input:
        parser.error("--input is required unless --check is given")

    try:
        return run_pipeline(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Reconstruction failed: {e}")
        if args.debug:
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
