"""
Rich-based user-facing output
"""
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...core.logging import get_stdout_console, get_stderr_console


class RichReporter:
    """Rich-based progress reporter"""
    
    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or get_stdout_console()
        self.err_console = err_console or get_stderr_console()
    
    def info(self, message: str) -> None:
        """Display info message"""
        self.console.print(f"[cyan]ℹ[/cyan] {escape(message)}")
    
    def success(self, message: str) -> None:
        """Display success message"""
        self.console.print(f"[green]✓[/green] {escape(message)}")
    
    def warning(self, message: str) -> None:
        """Display warning message"""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
    
    def error(self, message: str, label: str = "Error") -> None:
        """Display a single-line error on stderr"""
        self.err_console.print(f"[red]{label}:[/red] {escape(message)}")
    
    def panel(self, lines: Iterable[str], title: str = "", border_style: str = "blue") -> None:
        """Display lines in a panel"""
        content = "\n".join(escape(line) for line in lines)
        self.console.print(Panel(content, title=title, border_style=border_style))
    
    def key_table(self, rows: Iterable[tuple], title: str = "") -> None:
        """Display provisioned keys"""
        table = Table(title=title or None)
        table.add_column("Type", style="cyan")
        table.add_column("Comment")
        table.add_column("Fingerprint", style="green")
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        self.console.print(table)
