"""
Export module for reconstructed grids.

Writes a TableGrid as JSON ({headers, rows} plus metadata), CSV, Markdown,
HTML or tab-separated text. Interpolated cells stay identifiable in the
JSON (flag) and HTML (class) outputs.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from .grid import TableGrid
from .io import save_json, ensure_dir

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "csv", "markdown", "html", "tsv")

_EXTENSIONS = {
    "json": ".json",
    "csv": ".csv",
    "markdown": ".md",
    "html": ".html",
    "tsv": ".tsv",
}

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
table {{ border-collapse: collapse; font-family: Arial, sans-serif; font-size: 10pt; }}
th, td {{ border: 1px solid #000; padding: 2px 8px; text-align: center; }}
.interpolated {{ background-color: #CCCCFF; }}
</style>
</head>
<body>
{table}
</body>
</html>
"""


class GridExporter:
    """Export a TableGrid to one or more file formats."""

    def __init__(self, output_dir: Union[str, Path], base_name: str = "table"):
        self.output_dir = ensure_dir(output_dir)
        self.base_name = base_name

    def path_for(self, fmt: str) -> Path:
        return self.output_dir / f"{self.base_name}{_EXTENSIONS[fmt]}"

    def export(self, grid: TableGrid, formats: List[str]) -> Dict[str, Path]:
        """
        Export to the requested formats.

        Args:
            grid: Reconstructed grid
            formats: Any of SUPPORTED_FORMATS, or "all"

        Returns:
            Mapping of format -> written path

        Raises:
            ValueError: For an unknown format
        """
        if "all" in formats:
            formats = list(SUPPORTED_FORMATS)

        unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported export format(s): {', '.join(unknown)}")

        results = {}
        for fmt in formats:
            path = self.path_for(fmt)
            if fmt == "json":
                save_json(grid.to_dict(), path)
            elif fmt == "html":
                title = TableGrid._escape_html(self.base_name)
                self._write(path, _HTML_TEMPLATE.format(title=title, table=grid.table_html))
            elif fmt == "csv":
                # csv module already terminates rows
                self._write(path, grid.table_csv, newline="")
            elif fmt == "markdown":
                self._write(path, grid.table_markdown + "\n")
            elif fmt == "tsv":
                self._write(path, grid.to_text() + "\n")
            results[fmt] = path
            logger.info(f"Exported {fmt}: {path}")

        return results

    @staticmethod
    def _write(path: Path, content: str, newline=None) -> None:
        with open(path, 'w', encoding='utf-8', newline=newline) as f:
            f.write(content)
