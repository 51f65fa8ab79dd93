"""
Standin CLI — output helpers built on Click styling.
"""

from __future__ import annotations

import click


def success(message: str) -> None:
    """Print success message in green."""
    click.echo(click.style(message, fg="green"))


def error(message: str) -> None:
    """Print error message in red to stderr."""
    click.echo(click.style(message, fg="red"), err=True)


def kv(key: str, value: str, *, key_width: int = 20, indent: int = 2) -> None:
    """
    Print an aligned key-value pair.

        users               3
        addresses           12
    """
    pad = " " * indent
    click.echo(f"{pad}{click.style(key.ljust(key_width), fg='white')}{click.style(str(value), fg='cyan')}")
