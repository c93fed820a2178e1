# topmark:header:start
#
#   project      : CSSBlocks
#   file         : files.py
#   file_relpath : src/cssblocks/files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem helpers shared by the CLI and the API.

A stylesheet on disk is read together with its sibling ``<file>.map``;
artifacts are written as UTF-8 with ``\\n`` line endings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cssblocks.config.logging import get_logger
from cssblocks.constants import MAP_SUFFIX

if TYPE_CHECKING:
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.split import SplitResult

logger: CssBlocksLogger = get_logger(__name__)


@dataclass
class StylesheetSource:
    """A stylesheet read from disk.

    Attributes:
        path (Path): The stylesheet file.
        text (str): Its contents.
        source_map (str | None): Contents of ``<path>.map``, when read.
    """

    path: Path
    text: str
    source_map: str | None = None

    @property
    def map_path(self) -> Path:
        """Path of the sibling source map."""
        return self.path.with_name(self.path.name + MAP_SUFFIX)


@dataclass
class WriteReport:
    """Files written for one document."""

    written: list[Path] = field(default_factory=lambda: [])
    bytes_written: int = 0


def read_stylesheet(path: Path, *, use_map: bool = True) -> StylesheetSource:
    """Read a stylesheet and, if present and wanted, its sibling map.

    Raises:
        OSError: If the stylesheet (or an existing map) cannot be read.
    """
    # Line endings are kept as they are on disk
    with path.open("r", encoding="utf-8", newline="") as f:
        text = f.read()
    source = StylesheetSource(path=path, text=text)
    if use_map and source.map_path.is_file():
        source.source_map = source.map_path.read_text(encoding="utf-8")
        logger.debug("Read source map %s", source.map_path)
    return source


def write_artifacts(result: SplitResult, directory: Path) -> WriteReport:
    """Write every artifact of ``result`` below ``directory``.

    Raises:
        OSError: If a file cannot be written.
    """
    report = WriteReport()
    for name, text in result.artifacts().items():
        target = directory / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        n = len(text.encode("utf-8"))
        logger.debug("Wrote %d bytes to %s", n, target)
        report.written.append(target)
        report.bytes_written += n
    return report
