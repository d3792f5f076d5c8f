"""
Rich console helpers shared by the CLI commands.
"""

from typing import Any, List, Mapping

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


def success(message: str):
    console.print(f"✔ {escape(message)}", style="bold green")


def error(message: str):
    console.print(f"✖ {escape(message)}", style="bold red")


def warning(message: str):
    console.print(f"⚠  {escape(message)}", style="bold yellow")


def info(message: str):
    console.print(escape(message), style="cyan")


def create_table(title: str, columns: List[str]) -> Table:
    """Create a two-tone table with the given column headers"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table


def format_value(value: Any) -> str:
    """Render a setting or capability value; unset values show as a dash"""
    if value is None:
        return "-"
    return str(value)


def display_mapping(mapping: Mapping[str, Any], title: str, style: str = "blue"):
    """Display key/value pairs in a panel, one pair per line"""
    width = max((len(str(key)) for key in mapping), default=0)
    content = "\n".join(
        f"{str(key).ljust(width)} : {format_value(value)}"
        for key, value in mapping.items()
    )
    console.print(Panel(escape(content), title=title, border_style=style))
