# topmark:header:start
#
#   project      : CSSBlocks
#   file         : options.py
#   file_relpath : src/cssblocks/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for CSSBlocks.

Reusable options (verbosity, color, config) and their resolution logic, so
commands and the group stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from cssblocks.cli.errors import CssBlocksUsageError
from cssblocks.config.logging import get_logger

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


class OutputFormat(str, Enum):
    """Output format of command reports."""

    DEFAULT = "default"
    JSON = "json"


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, otherwise the number of ``-v``.

    Raises:
        CssBlocksUsageError: If both ``-v`` and ``-q`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CssBlocksUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report problems.",
    )(f)
    return f


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: OutputFormat | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    JSON output is never colored. Explicit ``--color`` wins, then the
    ``FORCE_COLOR`` and ``NO_COLOR`` environment variables, then whether
    stdout is a TTY.
    """
    if output_format is OutputFormat.JSON:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and repeatable ``--config`` options to a command."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore project config files (cssblocks.toml, [tool.cssblocks]).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(dir_okay=False),
        help="Additional config file(s) to load and merge, in order.",
    )(f)
    return f


def split_override_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add options that override the ``[split]`` and ``[output]`` config keys."""
    f = click.option(
        "--no-map",
        "no_map",
        is_flag=True,
        help="Do not read sibling .map files nor generate source maps.",
    )(f)
    f = click.option(
        "--reopen",
        "reopen",
        type=click.Choice(["append", "separate"], case_sensitive=False),
        default=None,
        help="Re-opened block names: append to the block (default) or start NAME-2.css.",
    )(f)
    f = click.option(
        "--jobs",
        "-j",
        "jobs",
        type=click.IntRange(min=1),
        default=None,
        help="Number of stylesheets split concurrently.",
    )(f)
    f = click.option(
        "--filename",
        "filename",
        metavar="TEMPLATE",
        default=None,
        help="Output filename template for split-out blocks ([name], [contenthash]).",
    )(f)
    return f
