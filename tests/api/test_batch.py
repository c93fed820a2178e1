# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_batch.py
#   file_relpath : tests/api/test_batch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for splitting a whole asset mapping (`cssblocks.batch`)."""

from __future__ import annotations

from cssblocks.batch import is_document, run_parallel, split_assets
from tests.conftest import load_map, make_config, make_source_map, parametrize

MAIN = "/*! start:a.css */.a{}/*! end:a.css */.m{}"
MAIN_MAP = make_source_map([(1, 0, "src/main.scss", 1, 0)])


def test_documents_are_replaced_by_their_artifacts() -> None:
    """A stylesheet and its map become the split outputs; other assets pass through."""
    assets = {"css/main.css": MAIN, "css/main.css.map": MAIN_MAP, "app.js": "run();"}
    batch = split_assets(assets)

    assert batch.ok
    assert set(batch.assets) == {
        "css/main.css",
        "css/main.css.map",
        "css/a.css",
        "css/a.css.map",
        "app.js",
    }
    assert batch.assets["app.js"] == "run();"
    assert batch.assets["css/main.css"] == ".m{}\n/*# sourceMappingURL=main.css.map*/\n"
    assert batch.assets["css/a.css"] == ".a{}\n/*# sourceMappingURL=a.css.map*/\n"
    # The original map is consumed and replaced by a per-block map
    assert load_map(batch.assets["css/main.css.map"])["file"] == "css/main.css"
    assert load_map(batch.assets["css/a.css.map"])["sources"] == ["src/main.scss"]


def test_parse_failure_keeps_original_asset_and_map() -> None:
    """A document that cannot be parsed is emitted unchanged with its map."""
    assets = {"bad.css": ".a{}\n.broken", "bad.css.map": MAIN_MAP, "good.css": MAIN}
    batch = split_assets(assets)

    assert not batch.ok
    assert batch.assets["bad.css"] == ".a{}\n.broken"
    assert batch.assets["bad.css.map"] == MAIN_MAP
    assert batch.assets["a.css"] == ".a{}\n"
    stats = batch.stats()
    assert (stats.n_error, stats.n_warning) == (1, 0)
    ((name, diag),) = list(batch.diagnostics())
    assert name == "bad.css"
    assert diag.line == 2


def test_later_document_wins_on_output_clash() -> None:
    """When two documents produce the same output name the later one is kept."""
    assets = {"a.css": ".first{}", "x.css": "/*! start:a.css */.x{}/*! end:a.css */"}
    batch = split_assets(assets)
    assert batch.assets["a.css"] == ".x{}\n"
    assert batch.assets["x.css"] == "\n"


def test_parallel_split_keeps_input_order() -> None:
    """With several jobs, results still follow the input order."""
    names = [f"sheet{i}.css" for i in range(6)]
    assets = {
        name: f"/*! start:{i}.css */.r{i}{{}}/*! end:{i}.css */" for i, name in enumerate(names)
    }
    batch = split_assets(assets, make_config(jobs=3))

    assert [r.document_name for r in batch.results] == names
    assert batch.assets["3.css"] == ".r3{}\n"
    assert batch.ok


def test_to_dict_summary() -> None:
    """The summary lists documents, their outputs and diagnostic counts."""
    batch = split_assets({"main.css": MAIN + "/*! start:open.css */"})
    data = batch.to_dict()
    (doc,) = data["documents"]  # type: ignore[misc]
    assert doc["name"] == "main.css"
    assert doc["ok"] is False
    assert doc["blocks"] == ["main.css", "a.css", "open.css"]
    assert doc["diagnostics"][0]["code"] == "unclosed-block"
    assert data["counts"] == {"info": 0, "warning": 0, "error": 1}


def test_run_parallel_preserves_order() -> None:
    """Results come back in input order whatever the worker count."""
    items = list(range(10))
    assert run_parallel(lambda x: x * x, items, 1) == [x * x for x in items]
    assert run_parallel(lambda x: x * x, items, 4) == [x * x for x in items]
    assert run_parallel(lambda x: x, [], 4) == []


@parametrize(
    "name, expected",
    [("main.css", True), ("css/main.css", True), ("main.css.map", False), ("app.js", False)],
)
def test_is_document(name: str, expected: bool) -> None:
    """Only ``.css`` assets are split."""
    assert is_document(name) is expected
