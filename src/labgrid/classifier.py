"""
Value classification for grid cells.

Decides whether a token is a number, literal text, or a gap that the
interpolator has to fill, and cleans numeric formatting (thousands
separators, stray hyphens and spaces) without losing leading zeros or
decimal places.
"""

import logging
import math
import re
from typing import Optional

from .grid import CellValue, NumericValue, TextValue, EMPTY

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
# A single minus glued to the number is a sign, anything else is noise
_SIGN_RE = re.compile(r"^-(?=\.?\d)")
_LEADING_NOISE_RE = re.compile(r"^-+")
_TRAILING_NOISE_RE = re.compile(r"[-\s]+$")
# Minus only counts when it opens a word ("-3.2C" yes, "S-001" no)
_SALVAGE_RE = re.compile(r"(?:(?<!\S)-)?\d+(?:[.,]\d+)*")


def clean_numeric(token: str) -> str:
    """
    Strip thousands separators, whitespace and stray hyphens.

    ``"1,234"`` -> ``"1234"``, ``"--12-"`` -> ``"12"``, ``"-3.5"`` -> ``"-3.5"``.
    """
    token = token.strip()
    negative = bool(_SIGN_RE.match(token))
    cleaned = re.sub(r"[,\s]", "", token)
    cleaned = _LEADING_NOISE_RE.sub("", cleaned)
    cleaned = _TRAILING_NOISE_RE.sub("", cleaned)
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    if negative and cleaned:
        cleaned = "-" + cleaned
    return cleaned


def is_numeric(token: Optional[str]) -> bool:
    """True if the cleaned token is a finite decimal number."""
    if not token:
        return False
    cleaned = clean_numeric(token)
    if not _DECIMAL_RE.match(cleaned):
        return False
    return math.isfinite(float(cleaned))


def salvage_numeric(token: str) -> Optional[str]:
    """
    Pull the first number out of a noisy token.

    ``"0.5 mg/L"`` -> ``"0.5"``; returns None when nothing numeric is found.
    """
    match = _SALVAGE_RE.search(token)
    if match and is_numeric(match.group(0)):
        return clean_numeric(match.group(0))
    return None


def classify_token(
    token: Optional[str],
    row: int,
    anchored: bool = False,
    preserve_text: bool = False
) -> CellValue:
    """
    Classify one token.

    Args:
        token: Raw token, or None for a missing cell
        row: Row index (row 0 is the header row)
        anchored: Token was supplied as an anchor value
        preserve_text: Keep unsalvageable data-row text instead of
            deferring the cell to interpolation

    Returns:
        NumericValue, TextValue or EMPTY
    """
    if token is None or not token.strip():
        return EMPTY

    text = token.strip()

    if anchored:
        if is_numeric(text):
            return NumericValue(clean_numeric(text), raw=text)
        return TextValue(text)

    if row == 0:
        return TextValue(text)

    if is_numeric(text):
        return NumericValue(clean_numeric(text), raw=text)

    salvaged = salvage_numeric(text)
    if salvaged is not None:
        logger.debug(f"Salvaged {salvaged!r} from row {row} token")
        return NumericValue(salvaged, raw=text)

    if preserve_text:
        return TextValue(text)

    return EMPTY
