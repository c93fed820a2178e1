# topmark:header:start
#
#   project      : CSSBlocks
#   file         : main.py
#   file_relpath : src/cssblocks/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the ``cssblocks`` command.

Group-level options (verbosity, color) are resolved once and placed into
``ctx.obj`` together with the console; subcommands read them from there.
Internal logging is configured from ``CSSBLOCKS_LOG_LEVEL`` only.
"""

from __future__ import annotations

import click

from cssblocks.cli.commands.dump_config import dump_config_command
from cssblocks.cli.commands.split import split_command
from cssblocks.cli.commands.version import version_command
from cssblocks.cli.console import ClickConsole, ConsoleLike
from cssblocks.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from cssblocks.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit color mode from ``--color``.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    mode = ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Split bundled stylesheets into blocks marked with /*! start:NAME.css */ comments.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the CSSBlocks CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'cssblocks split STYLESHEET...' to split stylesheets.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(split_command)

cli.add_command(version_command)

cli.add_command(dump_config_command)

if __name__ == "__main__":
    cli()
