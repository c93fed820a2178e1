# topmark:header:start
#
#   project      : CSSBlocks
#   file         : dump_config.py
#   file_relpath : src/cssblocks/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CSSBlocks `dump-config` command.

Emits the effective configuration as TOML after applying defaults,
discovered and explicit config files, and CLI overrides. The output is
wrapped between ``# === BEGIN ===`` and ``# === END ===`` markers.
"""

from __future__ import annotations

from pathlib import Path

import click

from cssblocks.cli.cmd_common import build_config_common
from cssblocks.cli.options import CONTEXT_SETTINGS, common_config_options, split_override_options
from cssblocks.config.io import to_toml


@click.command(
    name="dump-config",
    help="Dump the final merged CSSBlocks configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@split_override_options
def dump_config_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    no_map: bool,
    reopen: str | None,
    jobs: int | None,
    filename: str | None,
) -> None:
    """Print the merged configuration as TOML between BEGIN/END markers."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)

    config = build_config_common(
        ctx,
        anchor=Path.cwd(),
        config_paths=config_paths,
        no_config=no_config,
        overrides={
            "source_maps": False if no_map else None,
            "reopen": reopen.lower() if reopen else None,
            "jobs": jobs,
            "filename": filename,
        },
    )

    console = ctx.obj["console"]
    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()).rstrip("\n"))
    console.print("# === END ===")
