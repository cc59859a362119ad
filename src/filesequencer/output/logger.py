"""
Console and file logging for filesequencer.

Messages are rendered through a Rich console (errors go to stderr) and, when a
log file is configured, appended there as plain timestamped lines.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text


class SimpleLogger:
    """Logger that writes to the console and, optionally, a file."""

    def __init__(
        self,
        log_file: Optional[Path] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.log_file = log_file
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"Session started: {datetime.now().isoformat()}\n")
                f.write(f"{'='*60}\n")

    def log(self, message: str, prefix: str = "", style: Optional[str] = None, error: bool = False) -> None:
        """Log a message to console and file.

        Args:
            message: The message to log
            prefix: Optional prefix like [INFO], [ERROR], etc.
            style: Rich style applied to the prefix
            error: Whether to write to stderr instead of stdout
        """
        line = Text()
        if prefix:
            line.append(prefix, style=style)
            line.append(" ")
        line.append(message)

        output = self.err_console if error else self.console
        output.print(line)

        self._write_file(line.plain)

    def _write_file(self, plain: str) -> None:
        if not self.log_file:
            return
        timestamp = datetime.now().strftime("%H:%M:%S")
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{timestamp}] {plain}\n")
        except OSError:
            pass  # Don't fail on logging errors

    def table(self, headers: List[str], rows: List[List[str]], title: Optional[str] = None) -> None:
        """Print a table.

        Args:
            headers: Column headers
            rows: Table rows
            title: Optional table title
        """
        if not headers or not rows:
            return

        table = Table(title=title, show_lines=False)
        for h in headers:
            table.add_column(h)
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self.console.print(table)

        if self.log_file:
            for row in rows:
                self._write_file("  ".join(f"{h}: {cell}" for h, cell in zip(headers, row)))

    def section(self, title: str) -> None:
        """Print a section header."""
        self.console.rule(title)
        self._write_file(f"--- {title} ---")

    def success(self, message: str) -> None:
        """Log a success message."""
        self.log(message, prefix="[SUCCESS]", style="green")

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]", style="bold red", error=True)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log(message, prefix="[WARNING]", style="yellow")

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]", style="cyan")
