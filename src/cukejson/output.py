"""Output formatting for cukejson."""

import json
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .constants import DEFAULT_INDENT
from .models import JsonFeature


def render_report(features: list[JsonFeature], indent: int = DEFAULT_INDENT) -> str:
    """Serialize report features as a JSON document.

    Unset optional fields are left out of the document entirely.
    """
    data = [feature.model_dump(exclude_none=True) for feature in features]
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


@dataclass
class OutputContext:
    """Context for output formatting.

    Status messages go to the console (stderr by default); the report goes to
    stdout or to a file so that it can be piped.
    """

    console: Console

    def print(self, message: str, style: str | None = None) -> None:
        """Print a status message."""
        self.console.print(message, style=style)

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]Error: {escape(message)}[/red]")

    def success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]{message}[/green]")

    def write_report(self, report: str, path: Path | None = None) -> None:
        """Write the report to a file, or to stdout if no path is given."""
        if path is None:
            sys.stdout.write(report)
            sys.stdout.flush()
        else:
            path.write_text(report, encoding="utf-8")
