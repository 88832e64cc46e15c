# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI-specific exception hierarchy.

Commands translate library errors into these so the entry point can print
them consistently and exit with a meaningful status.
"""

from rich.markup import escape

from .constants import ExitCode


class CLIError(Exception):
    """Base exception for all CLI-related errors.

    Attributes:
        message: Main error message
        details: Additional lines shown under the message
        exit_code: Process exit status for this error type (class attribute)
    """

    exit_code: int = ExitCode.USAGE

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    @classmethod
    def from_exception(cls, message: str, error: BaseException) -> "CLIError":
        """Wrap a library error; its message and causes become the details.

        Lines repeating ``message`` are dropped.
        """
        details = []
        current: BaseException | None = error
        while current is not None:
            text = str(current)
            if text and text != message:
                details.append(text)
            current = current.__cause__
        return cls(message, details=details)

    def format_for_console(self) -> str:
        # Only the prefix is markup; library text is printed literally
        lines = [f"[red]Error:[/red] {escape(self.message)}"]
        if self.details:
            lines.append("")
            lines.extend(f"  • {escape(detail)}" for detail in self.details)
        return "\n".join(lines)


class ConfigurationError(CLIError):
    """viewscan.yaml, environment or options hold invalid settings."""

    exit_code = ExitCode.CONFIG


class ValidationError(CLIError):
    """A model reference or field value given on the command line is unusable."""

    exit_code = ExitCode.DATAERR


class CommandError(CLIError):
    """Scanning or rendering failed."""

    exit_code = ExitCode.SOFTWARE
