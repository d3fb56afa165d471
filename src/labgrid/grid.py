"""
Grid data model for table reconstruction.

Provides:
- Cell: the final {value, interpolated} pair handed to consumers
- Cell variants used while classifying (NumericValue, TextValue, EMPTY)
- TableGrid: the reconstructed R x C grid with Markdown, HTML, CSV and
  JSON representations
"""

import csv
import io
from dataclasses import dataclass
from typing import List, Dict, Any, Union


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class Cell:
    """A single grid cell."""
    value: str
    interpolated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "interpolated": self.interpolated}


@dataclass(frozen=True)
class NumericValue:
    """A cell classified as a number.

    ``value`` is the cleaned numeric string (leading zeros and decimal places
    kept as written), ``raw`` the token it came from.
    """
    value: str
    raw: str = ""


@dataclass(frozen=True)
class TextValue:
    """A cell kept as literal text."""
    value: str


class EmptyValue:
    """Marker for a cell the interpolator still has to fill."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = EmptyValue()

CellValue = Union[NumericValue, TextValue, EmptyValue]


# ============================================================================
# Reconstructed Grid
# ============================================================================

@dataclass
class TableGrid:
    """Result of table reconstruction."""
    cells: List[List[Cell]]
    num_rows: int
    num_cols: int
    strategy: str = "none"
    status: str = "success"  # success, partial, placeholder
    source_rows: int = 0

    # Pre-generated output formats
    table_markdown: str = ""
    table_html: str = ""
    table_csv: str = ""

    def __post_init__(self):
        if not self.table_markdown:
            self.table_markdown = self._build_markdown()
        if not self.table_html:
            self.table_html = self._build_html()
        if not self.table_csv:
            self.table_csv = self._build_csv()

    @property
    def headers(self) -> List[str]:
        return [cell.value for cell in self.cells[0]] if self.cells else []

    @property
    def rows(self) -> List[List[Cell]]:
        return self.cells[1:]

    @property
    def interpolated_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.interpolated)

    def values(self) -> List[List[str]]:
        """Plain 2D list of cell values."""
        return [[cell.value for cell in row] for row in self.cells]

    def _build_markdown(self) -> str:
        """Build Markdown table representation."""
        if self.num_rows == 0 or self.num_cols == 0:
            return ""

        grid = self.values()
        lines = []

        lines.append("| " + " | ".join(self._escape_markdown(c) for c in grid[0]) + " |")
        lines.append("| " + " | ".join("---" for _ in range(self.num_cols)) + " |")

        for row in grid[1:]:
            lines.append("| " + " | ".join(self._escape_markdown(c) for c in row) + " |")

        return "\n".join(lines)

    def _build_html(self) -> str:
        """Build HTML table representation.

        Interpolated cells carry ``class="interpolated"`` so a stylesheet can
        highlight them.
        """
        if self.num_rows == 0 or self.num_cols == 0:
            return ""

        lines = ['<table>']

        lines.append('  <thead>')
        lines.append('    <tr>')
        for cell in self.cells[0]:
            lines.append(f'      <th{self._html_class(cell)}>{self._escape_html(cell.value)}</th>')
        lines.append('    </tr>')
        lines.append('  </thead>')

        lines.append('  <tbody>')
        for row in self.cells[1:]:
            lines.append('    <tr>')
            for cell in row:
                lines.append(f'      <td{self._html_class(cell)}>{self._escape_html(cell.value)}</td>')
            lines.append('    </tr>')
        lines.append('  </tbody>')

        lines.append('</table>')

        return "\n".join(lines)

    def _build_csv(self) -> str:
        """Build CSV representation."""
        if self.num_rows == 0 or self.num_cols == 0:
            return ""

        output = io.StringIO()
        writer = csv.writer(output)

        for row in self.values():
            writer.writerow(row)

        return output.getvalue()

    def to_text(self) -> str:
        """Tab-separated text, one line per row.

        Feeding this back into the reconstructor yields the same grid.
        """
        return "\n".join("\t".join(row) for row in self.values())

    @staticmethod
    def _html_class(cell: Cell) -> str:
        return ' class="interpolated"' if cell.interpolated else ""

    @staticmethod
    def _escape_markdown(text: str) -> str:
        return text.replace("|", "\\|")

    @staticmethod
    def _escape_html(text: str) -> str:
        """Escape HTML special characters."""
        return (text
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
        )

    def to_payload(self) -> Dict[str, Any]:
        """The ``{headers, rows}`` shape consumed by export and UI code."""
        return {
            "headers": self.headers,
            "rows": [[cell.to_dict() for cell in row] for row in self.rows],
        }

    def to_dict(self) -> Dict[str, Any]:
        payload = self.to_payload()
        payload.update({
            "num_rows": self.num_rows,
            "num_cols": self.num_cols,
            "strategy": self.strategy,
            "status": self.status,
            "interpolated_count": self.interpolated_count,
        })
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableGrid":
        """
        Rebuild a grid from ``to_dict()`` or ``to_payload()`` output.

        The header row comes back as non-interpolated cells since the payload
        only carries header values.

        Raises:
            ValueError: If the payload is not a headers/rows mapping or a
                cell is not a {value, interpolated} object
        """
        if not isinstance(data, dict) or "rows" not in data:
            raise ValueError("Invalid table payload. Expected an object with headers and rows.")

        headers = data.get("headers") or []
        raw_rows = data["rows"]
        if not isinstance(raw_rows, list):
            raise ValueError("Invalid table payload. Expected an array of table rows.")

        cells = [[Cell(value=str(h), interpolated=False) for h in headers]]
        for row_index, row in enumerate(raw_rows, start=1):
            if not isinstance(row, list):
                raise ValueError(
                    f"Invalid row structure at index {row_index}. Expected array of cell objects."
                )
            parsed = []
            for col_index, item in enumerate(row):
                if (not isinstance(item, dict) or "value" not in item
                        or not isinstance(item.get("interpolated"), bool)):
                    raise ValueError(
                        f"Invalid cell structure at row {row_index}, column {col_index}. "
                        "Expected {value: string, interpolated: boolean}."
                    )
                parsed.append(Cell(value=str(item["value"]), interpolated=item["interpolated"]))
            cells.append(parsed)

        num_cols = max(len(row) for row in cells)
        interpolated = any(cell.interpolated for row in cells for cell in row)
        return cls(
            cells=cells,
            num_rows=len(cells),
            num_cols=num_cols,
            strategy=data.get("strategy", "none"),
            status=data.get("status", "partial" if interpolated else "success"),
        )
