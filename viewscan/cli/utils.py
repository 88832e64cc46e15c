# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Console output for CLI commands."""

from rich.console import Console

console = Console()


def print_markup(markup: str) -> None:
    """Print rendered view output verbatim.

    Rich markup, highlighting and wrapping are all disabled so the text is
    byte-for-byte what the view produced.
    """
    console.print(markup, markup=False, highlight=False, soft_wrap=True)


def warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {message}")
