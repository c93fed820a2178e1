# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public CSSBlocks API (stable surface).

Functions here are thin wrappers around the splitter for integrations that
do not go through the CLI.

Configuration contract
----------------------
- Public functions accept either a plain **mapping** (mirroring the TOML
  shape) or a frozen [`cssblocks.config.Config`][].
- A mapping is layered over the runtime defaults only; no project config is
  discovered. With ``config=None`` the same discovery as the CLI is performed
  (defaults, then ``pyproject.toml``/``cssblocks.toml`` found upward from the
  current directory).

```python
from cssblocks import api

result = api.split_stylesheet(
    "main.css",
    text,
    source_map=map_json,
    config={"output": {"filename": "[name].[contenthash].css"}},
)
```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cssblocks import batch
from cssblocks.config import Config, MutableConfig
from cssblocks.config.logging import get_logger
from cssblocks.constants import CSSBLOCKS_VERSION
from cssblocks.files import WriteReport, read_stylesheet, write_artifacts
from cssblocks.split import SplitResult, split_document

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cssblocks.batch import BatchResult
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.sourcemap import SourceMapConsumer

logger: CssBlocksLogger = get_logger(__name__)

__all__ = [
    "FileSplit",
    "resolve_config",
    "split_assets",
    "split_files",
    "split_stylesheet",
    "version",
]


@dataclass
class FileSplit:
    """Result of splitting one stylesheet file.

    Attributes:
        path (Path): The input stylesheet.
        result (SplitResult): Blocks and diagnostics.
        report (WriteReport | None): What was written; None for a dry run or a
            document that failed to parse.
    """

    path: Path
    result: SplitResult
    report: WriteReport | None = None


def resolve_config(
    config: Mapping[str, Any] | Config | None,
    *,
    anchor: Path | None = None,
) -> Config:
    """Normalize the ``config`` argument of the public functions to a `Config`."""
    if isinstance(config, Config):
        return config
    if config is None:
        return MutableConfig.load_merged(anchor=anchor).freeze()
    return MutableConfig.from_defaults().apply_toml_dict(dict(config), source="<api>").freeze()


def split_stylesheet(
    name: str,
    text: str,
    source_map: str | bytes | SourceMapConsumer | None = None,
    *,
    config: Mapping[str, Any] | Config | None = None,
) -> SplitResult:
    """Split one stylesheet given as text.

    Args:
        name (str): Document name; its directory prefixes split-out block names.
        text (str): Stylesheet text.
        source_map (str | bytes | SourceMapConsumer | None): Its source map, if any.
        config (Mapping[str, Any] | Config | None): TOML-shaped mapping or frozen `Config`.

    Returns:
        SplitResult: Rendered blocks (text and maps) plus diagnostics.
    """
    return split_document(name, text, source_map, config=resolve_config(config))


def split_assets(
    assets: Mapping[str, str],
    *,
    config: Mapping[str, Any] | Config | None = None,
) -> BatchResult:
    """Split every ``.css`` asset of a build and return the rewritten assets.

    See `cssblocks.batch.split_assets`.
    """
    return batch.split_assets(assets, resolve_config(config))


def split_files(
    paths: Iterable[Path | str],
    *,
    config: Mapping[str, Any] | Config | None = None,
    out_dir: Path | str | None = None,
    write: bool = True,
) -> list[FileSplit]:
    """Split stylesheet files, reading each one's sibling ``.map``.

    Args:
        paths (Iterable[Path | str]): Stylesheets to split.
        config (Mapping[str, Any] | Config | None): TOML-shaped mapping or frozen `Config`.
        out_dir (Path | str | None): Where artifacts go; defaults to each input's directory.
        write (bool): When False nothing is written (dry run).

    Returns:
        list[FileSplit]: One entry per input path, in order.

    Raises:
        OSError: If an input cannot be read or an artifact cannot be written.
    """
    path_list = [Path(p) for p in paths]
    cfg: Config = resolve_config(config, anchor=path_list[0] if path_list else None)

    def _split_one(path: Path) -> FileSplit:
        source = read_stylesheet(path, use_map=cfg.source_maps)
        result = split_document(path.name, source.text, source.source_map, config=cfg)
        entry = FileSplit(path=path, result=result)
        if write and result.parse_error is None:
            directory = Path(out_dir) if out_dir is not None else path.parent
            entry.report = write_artifacts(result, directory)
        return entry

    return batch.run_parallel(_split_one, path_list, cfg.jobs)


def version() -> str:
    """Return the installed CSSBlocks version."""
    return CSSBLOCKS_VERSION
