"""Console output formatting utilities for cargomake."""

from __future__ import annotations

import sys
from typing import Optional

import click


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_banner(self, text: str) -> None:
        """Print a target's status line."""
        click.echo(text)

    def print_usage(self, text: str) -> None:
        click.echo(text)

    def print_command(self, cmd: str) -> None:
        """Print a command that a dry run would execute."""
        click.echo(cmd)

    def clear(self) -> None:
        """Clear the terminal."""
        sys.stdout.flush()
        click.clear()

    def print_failure(
        self,
        name: str,
        cmd: str,
        exit_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message.

        Args:
            name: Target name
            cmd: Command that failed
            exit_code: Optional exit code
            hint: Optional hint for user
        """
        click.echo(f"TARGET FAILED: {name}", err=True)
        click.echo(f"Command: {cmd}", err=True)
        if exit_code is not None:
            click.echo(f"Exit code: {exit_code}", err=True)
        if hint:
            click.echo(f"Hint: {hint}", err=True)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        click.echo(f"\nERROR: {title}", err=True)
        click.echo(message, err=True)
        if details:
            for detail in details:
                click.echo(f"  {detail}", err=True)
        if suggestion:
            click.echo(f"\n{suggestion}", err=True)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            click.echo(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        click.echo(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            click.echo(f"[DEBUG] {message}", err=True)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
