"""
Utility functions for CLI operations.
"""

import asyncio
from typing import Awaitable, List, TypeVar

from rich.console import Console
from rich.table import Table

console = Console()

T = TypeVar("T")


def run_async(coro: Awaitable[T]) -> T:
    """Run a coroutine to completion from synchronous CLI code."""
    return asyncio.run(coro)


def display_list(title: str, column: str, items: List[str]) -> None:
    """
    Display a list of strings as a one-column table.

    Args:
        title: Table title
        column: Column header
        items: Rows to display
    """
    table = Table(title=title)
    table.add_column(column, style="cyan")
    for item in items:
        table.add_row(item)
    console.print(table)
    if not items:
        console.print("[dim](empty)[/dim]")
