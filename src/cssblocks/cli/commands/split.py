# topmark:header:start
#
#   project      : CSSBlocks
#   file         : split.py
#   file_relpath : src/cssblocks/cli/commands/split.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CSSBlocks `split` command.

Reads each stylesheet together with its sibling ``<file>.map``, splits it
into blocks and writes every block (and its map) next to the input or into
``--out-dir``. With ``--dry-run`` nothing is written.

Exit status:
    * 0 when every stylesheet was split cleanly;
    * 1 when mismatched or unclosed blocks were reported;
    * 65 when a stylesheet could not be parsed (its files are left alone);
    * 66, 74, 77 and 78 for missing inputs, I/O, permission and config errors.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from cssblocks.batch import run_parallel
from cssblocks.cli.cli_types import EnumChoiceParam
from cssblocks.cli.cmd_common import build_config_common, get_effective_verbosity
from cssblocks.cli.errors import (
    CssBlocksFileNotFoundError,
    CssBlocksIOError,
    CssBlocksParseError,
    CssBlocksPermissionDeniedError,
)
from cssblocks.cli.exit_codes import ExitCode
from cssblocks.cli.options import (
    CONTEXT_SETTINGS,
    OutputFormat,
    common_config_options,
    split_override_options,
)
from cssblocks.config.logging import get_logger
from cssblocks.diagnostic import compute_diagnostic_stats, diagnostics_counts_to_dict
from cssblocks.files import read_stylesheet, write_artifacts
from cssblocks.split import split_document

if TYPE_CHECKING:
    from cssblocks.cli.console import ConsoleLike
    from cssblocks.config import Config
    from cssblocks.diagnostic import Diagnostic
    from cssblocks.files import StylesheetSource, WriteReport
    from cssblocks.split import SplitResult

logger = get_logger(__name__)


@dataclass
class FileOutcome:
    """What happened to one stylesheet."""

    source: StylesheetSource
    result: SplitResult
    report: WriteReport | None = None


def _read_all(paths: list[Path], config: Config) -> list[StylesheetSource]:
    sources: list[StylesheetSource] = []
    for path in paths:
        try:
            sources.append(read_stylesheet(path, use_map=config.source_maps))
        except UnicodeDecodeError as exc:
            raise CssBlocksParseError(f"Cannot decode {path} as UTF-8: {exc}") from exc
        except PermissionError as exc:
            raise CssBlocksPermissionDeniedError(f"Cannot read {path}: {exc}") from exc
        except OSError as exc:
            raise CssBlocksIOError(f"Cannot read {path}: {exc}") from exc
    return sources


def _write(outcome: FileOutcome, out_dir: Path | None) -> None:
    directory = out_dir if out_dir is not None else outcome.source.path.parent
    try:
        outcome.report = write_artifacts(outcome.result, directory)
    except PermissionError as exc:
        raise CssBlocksPermissionDeniedError(f"Cannot write to {directory}: {exc}") from exc
    except OSError as exc:
        raise CssBlocksIOError(f"Cannot write to {directory}: {exc}") from exc


def _format_diagnostic(console: ConsoleLike, path: Path, d: Diagnostic) -> str:
    where = f"{path}:{d.line}" if d.line is not None else f"{path}"
    label = d.level.value
    if getattr(console, "enable_color", False):
        label = d.level.color(label)
    return f"{where}: {label}: {d.message} [{d.code.value}]"


def _emit_default(
    console: ConsoleLike,
    outcomes: list[FileOutcome],
    *,
    vlevel: int,
    dry_run: bool,
) -> None:
    for outcome in outcomes:
        path = outcome.source.path
        result = outcome.result
        if vlevel >= 0:
            if result.parse_error is not None:
                console.print(f"{path}: not split")
            else:
                verb = "would split" if dry_run else "split"
                console.print(f"{path}: {verb} into {len(result.blocks)} block(s)")
            if vlevel >= 1:
                for block in result.blocks:
                    extra = f" (+ {block.map_name})" if block.source_map is not None else ""
                    console.print(f"    {block.output_name}{extra}")
            if vlevel >= 2 and outcome.report is not None:
                console.print(
                    f"    wrote {len(outcome.report.written)} file(s), "
                    f"{outcome.report.bytes_written} bytes"
                )
        for d in result.diagnostics:
            console.print(_format_diagnostic(console, path, d))

    if vlevel >= 0:
        stats = compute_diagnostic_stats(d for o in outcomes for d in o.result.diagnostics)
        console.print(
            console.styled(
                f"{len(outcomes)} stylesheet(s): "
                f"{stats.n_error} error(s), {stats.n_warning} warning(s)",
                bold=True,
            )
        )


def _emit_json(console: ConsoleLike, outcomes: list[FileOutcome], *, dry_run: bool) -> None:
    payload = {
        "dry_run": dry_run,
        "files": [
            {
                "path": str(o.source.path),
                "ok": o.result.ok,
                "parsed": o.result.parse_error is None,
                "blocks": [
                    {
                        "name": b.name,
                        "output": b.output_name,
                        "map": b.map_name if b.source_map is not None else None,
                    }
                    for b in o.result.blocks
                ],
                "written": [str(p) for p in o.report.written] if o.report else [],
                "diagnostics": [d.to_dict() for d in o.result.diagnostics],
            }
            for o in outcomes
        ],
        "counts": diagnostics_counts_to_dict(d for o in outcomes for d in o.result.diagnostics),
    }
    console.print(json.dumps(payload, indent=2))


@click.command(
    name="split",
    help=(
        "Split STYLESHEET files into the blocks marked with /*! start:NAME.css */ and "
        "/*! end:NAME.css */ comments. The stylesheet itself is rewritten with what "
        "remains outside any block unless --out-dir is given."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument(
    "stylesheets",
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@common_config_options
@split_override_options
@click.option(
    "--out-dir",
    "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the split files (default: next to each input).",
)
@click.option("--dry-run", "dry_run", is_flag=True, help="Report only; write nothing.")
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def split_command(
    *,
    stylesheets: tuple[Path, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    no_map: bool,
    reopen: str | None,
    jobs: int | None,
    filename: str | None,
    out_dir: Path | None,
    dry_run: bool,
    output_format: OutputFormat | None,
) -> None:
    """Split stylesheets and write their blocks."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel = get_effective_verbosity(ctx)

    paths = list(stylesheets)
    missing = [p for p in paths if not p.is_file()]
    if missing:
        raise CssBlocksFileNotFoundError(
            "Stylesheet not found: " + ", ".join(str(p) for p in missing)
        )

    config = build_config_common(
        ctx,
        anchor=paths[0],
        config_paths=config_paths,
        no_config=no_config,
        overrides={
            "source_maps": False if no_map else None,
            "reopen": reopen.lower() if reopen else None,
            "jobs": jobs,
            "filename": filename,
        },
    )

    sources = _read_all(paths, config)

    def _split(source: StylesheetSource) -> FileOutcome:
        result = split_document(source.path.name, source.text, source.source_map, config=config)
        return FileOutcome(source=source, result=result)

    outcomes = run_parallel(_split, sources, config.jobs)

    if not dry_run:
        for outcome in outcomes:
            if outcome.result.parse_error is None:
                _write(outcome, out_dir)

    if output_format is OutputFormat.JSON:
        _emit_json(console, outcomes, dry_run=dry_run)
    else:
        _emit_default(console, outcomes, vlevel=vlevel, dry_run=dry_run)

    if any(o.result.parse_error is not None for o in outcomes):
        ctx.exit(ExitCode.PARSE_ERROR)
    if not all(o.result.ok for o in outcomes):
        ctx.exit(ExitCode.FAILURE)
