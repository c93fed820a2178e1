# topmark:header:start
#
#   project      : CSSBlocks
#   file         : cmd_common.py
#   file_relpath : src/cssblocks/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from cssblocks.cli.errors import CssBlocksConfigError
from cssblocks.config import MutableConfig
from cssblocks.config.logging import get_logger
from cssblocks.diagnostic import DiagnosticLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cssblocks.cli.console import ConsoleLike
    from cssblocks.config import Config

logger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 if unset)."""
    obj: dict[str, Any] = ctx.obj or {}
    return int(obj.get("verbosity_level", 0))


def build_config_common(
    ctx: click.Context,
    *,
    anchor: Path | None,
    config_paths: Iterable[str],
    no_config: bool,
    overrides: Mapping[str, Any],
) -> Config:
    """Layer defaults, config files and CLI overrides into a frozen `Config`.

    Config warnings are shown on the console; config errors (a missing or
    unreadable ``--config`` file) abort the command.

    Raises:
        CssBlocksConfigError: If loading recorded an error diagnostic.
    """
    draft = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    draft.apply_args(overrides)
    config = draft.freeze()
    logger.debug("Effective config from: %s", [str(p) for p in config.config_files])

    console: ConsoleLike = ctx.obj["console"]
    errors = [d for d in config.diagnostics if d.level == DiagnosticLevel.ERROR]
    for d in config.diagnostics:
        if d.level == DiagnosticLevel.WARNING:
            console.warn(f"config: {d.message}")
    if errors:
        raise CssBlocksConfigError("; ".join(d.message for d in errors))
    return config
