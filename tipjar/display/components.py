"""Reusable output helpers for tipjar commands."""

from rich.console import Console

from tipjar.display.colors import COLORS, TIPJAR_THEME

console = Console(theme=TIPJAR_THEME)

LOGO_MINIMAL = "◆ tipjar"


def print_header(title: str):
    """Print a styled header."""
    console.print()
    console.print(f"  [{COLORS['primary']}]{LOGO_MINIMAL}[/] {title}")
    console.print(f"  [dim]{'─' * 45}[/dim]")
    console.print()


def print_key_value(key: str, value: str, indent: int = 2):
    """Print a key-value pair."""
    spaces = " " * indent
    console.print(f"{spaces}[dim]{key}[/dim]  {value}")


def print_success(message: str):
    """Print a success message."""
    console.print(f"  [{COLORS['success']}]✓[/] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"  [{COLORS['error']}]✗[/] {message}")


def format_number(n: int) -> str:
    """Format a number with commas."""
    return f"{n:,}"
