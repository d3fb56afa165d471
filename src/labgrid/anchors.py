"""
Anchor row parsing.

Anchor rows are user-supplied values for the first and last grid rows,
given as a comma and/or whitespace separated string.
"""

import logging
import re
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

AnchorInput = Union[str, Sequence[str], None]


def parse_anchor_values(raw: AnchorInput) -> Optional[List[str]]:
    """
    Parse an anchor row into positional values.

    Values are separated by commas and/or whitespace. An empty comma field
    leaves that column unanchored (``"1,,3"``). A sequence is taken as
    already split.

    Returns:
        List of stripped values (``""`` = no anchor for that column), or
        None when nothing usable was supplied
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        values = []
        for field in raw.split(","):
            field = field.strip()
            values.extend(_WHITESPACE_RE.split(field) if field else [""])
    else:
        values = ["" if v is None else str(v).strip() for v in raw]

    # Trailing empty fields carry no information
    while values and not values[-1]:
        values.pop()

    if not values:
        return None

    logger.debug(f"Parsed {len(values)} anchor values")
    return values


def anchor_at(anchor: Optional[Sequence[str]], col: int) -> Optional[str]:
    """Anchor value for a column, or None when the column is unanchored."""
    if not anchor or col >= len(anchor):
        return None
    value = anchor[col]
    return value if value else None
