from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

# Lightweight, reusable formatting utilities for tables and JSON output.

def print_json_data(data: Any, output: Optional[str] = None) -> None:
    """
    Print JSON data to stdout (if output is None, '-' or empty) or write to a file path.
    """
    text = json.dumps(data, indent=2, sort_keys=False, default=str)
    if output is None or output in ("-", ""):
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text + "\n")


def print_table(title: str, columns: Sequence[str], rows: List[Dict[str, Any]],
                styles: Optional[Dict[str, str]] = None, console: Optional[Console] = None) -> None:
    """
    Render rows (dicts keyed by column name) as a Rich table.
    `styles` maps a column to a Rich style applied to every cell in it.
    """
    console = console or Console()
    table = Table(title=title, show_lines=False)
    styles = styles or {}
    for col in columns:
        table.add_column(col, style=styles.get(col))
    for row in rows:
        table.add_row(*[str(row.get(col, "")) for col in columns])
    console.print(table)
