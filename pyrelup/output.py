"""Output formatting for CLI commands."""

import json
import uuid
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Formats command output as rich text or JSON."""

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Whether machine-readable JSON is printed instead of
                tables and summaries
            quiet: Whether informational messages are suppressed
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console()
        self.err_console = Console(stderr=True)

    def print(self, message: str = "") -> None:
        if not self.quiet and not self.json_output:
            self.console.print(message)

    def info(self, message: str) -> None:
        if not self.quiet and not self.json_output:
            self.console.print(message, style="cyan")

    def success(self, message: str) -> None:
        if not self.quiet and not self.json_output:
            self.console.print(message, style="green")

    def warning(self, message: str) -> None:
        self.err_console.print(f"Warning: {message}", style="yellow")

    def error(self, message: str) -> None:
        self.err_console.print(f"Error: {message}", style="bold red")

    def output_json(self, data: Any) -> None:
        """Print data as JSON on stdout, regardless of quiet mode."""
        self.console.print_json(json.dumps(data))

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: (label, value) rows
        """
        if self.quiet or self.json_output:
            return
        table = Table(title=title, show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for key, value in items:
            table.add_row(key, value)
        self.console.print(table)

    def print_table(
        self,
        columns: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        if self.json_output:
            return
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)


def write_action_output(output_file: Path, name: str, value: str) -> None:
    """Append a step output to the GitHub Actions output file.

    Multi-line values use the heredoc form with a random delimiter.

    Args:
        output_file: Path from the GITHUB_OUTPUT environment variable
        name: Output name
        value: Output value
    """
    with open(output_file, "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")
