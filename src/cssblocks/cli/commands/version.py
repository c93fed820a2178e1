# topmark:header:start
#
#   project      : CSSBlocks
#   file         : version.py
#   file_relpath : src/cssblocks/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CSSBlocks `version` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from cssblocks.cli.cli_types import EnumChoiceParam
from cssblocks.cli.options import OutputFormat
from cssblocks.constants import CSSBLOCKS_VERSION

if TYPE_CHECKING:
    from cssblocks.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of CSSBlocks.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Print the CSSBlocks version installed in the active environment."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format is OutputFormat.JSON:
        console.print(json.dumps({"version": CSSBLOCKS_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("CSSBlocks version:", bold=True, underline=True))
        console.print(f"    {console.styled(CSSBLOCKS_VERSION, bold=True)}")
    else:
        console.print(console.styled(CSSBLOCKS_VERSION, bold=True))
