"""
Report Generator Module for sigmatch

Renders identification results as plain text or JSON, and the catalog
as per-category tables.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .selector import MatchResult
from .signatures import SignatureDB, SignatureRecord
from .utils import format_size

logger = logging.getLogger(__name__)

EMPTY_EXTENSION = "variable or empty extension"


def format_extensions(extensions: Sequence[str]) -> str:
    """
    Join extensions into a readable list.

    >>> format_extensions(["jpg", "jpeg", "jpe"])
    'jpg, jpeg, or jpe'
    """
    if not extensions or extensions[0] == "":
        return EMPTY_EXTENSION
    if len(extensions) == 1:
        return extensions[0]
    if len(extensions) == 2:
        return f"{extensions[0]} or {extensions[1]}"
    return ", ".join(extensions[:-1]) + f", or {extensions[-1]}"


def format_match(record: SignatureRecord) -> str:
    return (
        f"{record.description} ({record.category}, "
        f"usually ends with {format_extensions(record.extensions())})"
    )


def render_text(result: MatchResult) -> List[str]:
    """Text lines describing a match result."""
    lines = [f"Most likely match: {format_match(result.primary)}"]
    if result.ambiguous:
        lines.append("Other possible matches:")
        lines.extend(f"  {format_match(sig)}" for sig in result.secondary)
    return lines


def build_report(path: str, size: int, result: MatchResult) -> Dict[str, Any]:
    """Build the JSON-ready report for one inspected file."""
    return {
        'metadata': {
            'tool': 'sigmatch',
            'version': __version__,
            'generated_at': datetime.now().isoformat(),
        },
        'source': {
            'path': path,
            'size': size,
            'size_human': format_size(size),
        },
        'results': {
            'best_match': result.primary.to_dict(),
            'other_matches': [sig.to_dict() for sig in result.secondary],
            'total_matches': len(result.matches),
        },
    }


class ReportGenerator:
    """
    Writes identification results to a console.

    Supports:
    - text (the human-readable summary)
    - JSON (machine-readable)
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _line(self, text: str):
        # Catalog text is printed verbatim, never parsed as markup
        self.console.print(
            text, markup=False, highlight=False, emoji=False, soft_wrap=True
        )

    def print_text(self, result: MatchResult):
        for line in render_text(result):
            self._line(line)

    def print_json(self, report: Dict[str, Any]):
        self._line(json.dumps(report, indent=2))

    def write_json(self, report: Dict[str, Any], filepath: str) -> str:
        """Save a JSON report to disk and return its path."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2)

        logger.info("Report written to %s", path)
        return str(path)

    def print_catalog(self, db: SignatureDB):
        """List catalog records grouped by category."""
        for category in db.categories():
            table = Table(
                title=category,
                box=box.ROUNDED,
                header_style="bold cyan"
            )
            table.add_column("Description", style="green")
            table.add_column("Extensions")
            table.add_column("Header")
            table.add_column("Trailer")

            for sig in db.get_by_category(category):
                table.add_row(
                    Text(sig.description),
                    format_extensions(sig.extensions()),
                    sig.header or "-",
                    sig.trailer or "-",
                )

            self.console.print(table)
            self.console.print()
