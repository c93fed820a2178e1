# topmark:header:start
#
#   project      : CSSBlocks
#   file         : errors.py
#   file_relpath : src/cssblocks/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the CSSBlocks CLI.

Raise these in commands to stop with a standardized message and exit code.
They print through the project console when one is present in the Click
context, and fall back to Click's default display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from cssblocks.cli.exit_codes import ExitCode


class CssBlocksCliError(click.ClickException):
    """Base class for all CSSBlocks CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text; color is applied in `show()`."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class CssBlocksUsageError(CssBlocksCliError):
    """Invalid combination of command-line options."""

    exit_code = ExitCode.USAGE_ERROR


class CssBlocksParseError(CssBlocksCliError):
    """A stylesheet could not be parsed or decoded."""

    exit_code = ExitCode.PARSE_ERROR


class CssBlocksFileNotFoundError(CssBlocksCliError):
    """An input stylesheet does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class CssBlocksIOError(CssBlocksCliError):
    """Reading or writing a file failed."""

    exit_code = ExitCode.IO_ERROR


class CssBlocksPermissionDeniedError(CssBlocksCliError):
    """Insufficient permissions to read or write a file."""

    exit_code = ExitCode.PERMISSION_DENIED


class CssBlocksConfigError(CssBlocksCliError):
    """A config file is missing or unreadable."""

    exit_code = ExitCode.CONFIG_ERROR
