# topmark:header:start
#
#   project      : CSSBlocks
#   file         : batch.py
#   file_relpath : src/cssblocks/batch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Split every stylesheet in a set of build assets.

Assets are a mapping of names to text, as a bundler emits them. Every name
ending in ``.css`` is a document; ``<name>.map`` next to it is its original
source map. Each document is split on its own (fresh registry, stack and
blocks), optionally on a thread pool, and its artifacts replace it in the
output mapping. Everything else passes through untouched.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from cssblocks.config import MutableConfig
from cssblocks.config.logging import get_logger
from cssblocks.constants import CSS_SUFFIX, MAP_SUFFIX
from cssblocks.diagnostic import compute_diagnostic_stats, diagnostics_counts_to_dict
from cssblocks.split import SplitResult, split_document

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping, Sequence

    from cssblocks.config import Config
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.diagnostic import Diagnostic, DiagnosticStats

logger: CssBlocksLogger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class BatchResult:
    """Outcome of `split_assets`.

    Attributes:
        results (list[SplitResult]): One result per document, in input order.
        assets (dict[str, str]): The rewritten asset mapping.
    """

    results: list[SplitResult] = field(default_factory=lambda: [])
    assets: dict[str, str] = field(default_factory=lambda: {})

    @property
    def ok(self) -> bool:
        """True when no document reported an error."""
        return all(r.ok for r in self.results)

    def diagnostics(self) -> Iterator[tuple[str, Diagnostic]]:
        """Yield ``(document_name, diagnostic)`` pairs across all documents."""
        for r in self.results:
            for d in r.diagnostics:
                yield r.document_name, d

    def stats(self) -> DiagnosticStats:
        """Return per-level counts across all documents."""
        return compute_diagnostic_stats(d for _, d in self.diagnostics())

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly summary (no artifact contents)."""
        return {
            "documents": [
                {
                    "name": r.document_name,
                    "ok": r.ok,
                    "blocks": [b.output_name for b in r.blocks],
                    "diagnostics": [d.to_dict() for d in r.diagnostics],
                }
                for r in self.results
            ],
            "counts": diagnostics_counts_to_dict(d for _, d in self.diagnostics()),
        }


def run_parallel(func: Callable[[T], R], items: Sequence[T], jobs: int) -> list[R]:
    """Apply ``func`` to ``items`` and return the results in input order.

    With ``jobs > 1`` and more than one item the calls run on a thread pool.
    """
    if jobs > 1 and len(items) > 1:
        logger.debug("Running %d tasks with %d workers", len(items), jobs)
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            return list(executor.map(func, items))
    return [func(item) for item in items]


def is_document(name: str) -> bool:
    """Return True if the asset ``name`` is a stylesheet to split."""
    return name.endswith(CSS_SUFFIX)


def split_assets(assets: Mapping[str, str], config: Config | None = None) -> BatchResult:
    """Split every ``.css`` asset and return the rewritten asset mapping.

    A document that fails to parse keeps its original asset and map. When
    two documents produce the same output name the later one wins and a
    warning is logged.

    Args:
        assets (Mapping[str, str]): Asset names to text.
        config (Config | None): Settings; defaults when None. ``config.jobs``
            greater than 1 splits documents concurrently.

    Returns:
        BatchResult: Per-document results (input order) and the new assets.
    """
    if config is None:
        config = MutableConfig.from_defaults().freeze()

    documents: list[str] = [name for name in assets if is_document(name)]
    consumed_maps: set[str] = {
        name + MAP_SUFFIX for name in documents if name + MAP_SUFFIX in assets
    }

    def _split(name: str) -> SplitResult:
        return split_document(
            name, assets[name], assets.get(name + MAP_SUFFIX), config=config
        )

    results = run_parallel(_split, documents, config.jobs)
    by_name: dict[str, SplitResult] = dict(zip(documents, results))

    out: dict[str, str] = {}
    produced: set[str] = set()

    def _emit(name: str, text: str) -> None:
        if name in produced:
            logger.warning("Output %s is produced more than once; keeping the last one", name)
        produced.add(name)
        out[name] = text

    for name, text in assets.items():
        if name in consumed_maps:
            continue
        result = by_name.get(name)
        if result is None:
            out.setdefault(name, text)
            continue
        if result.parse_error is not None:
            logger.warning("%s: keeping original asset after parse failure", name)
            _emit(name, text)
            if name + MAP_SUFFIX in assets:
                _emit(name + MAP_SUFFIX, assets[name + MAP_SUFFIX])
            continue
        for artifact_name, artifact_text in result.artifacts().items():
            _emit(artifact_name, artifact_text)

    logger.info("Split %d document(s) out of %d asset(s)", len(documents), len(assets))
    return BatchResult(results=results, assets=out)
