# topmark:header:start
#
#   project      : CSSBlocks
#   file         : test_api_files.py
#   file_relpath : tests/api/test_api_files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public API and the file helpers it uses."""

from __future__ import annotations

from pathlib import Path

from cssblocks import api
from cssblocks.config import MutableConfig, ReopenPolicy
from cssblocks.files import read_stylesheet, write_artifacts
from cssblocks.split import split_document
from tests.conftest import load_map, make_source_map, mark_integration

MAIN = "/*! start:a.css */.a{}/*! end:a.css */.m{}"


def _project(root: Path, *, with_map: bool = True) -> Path:
    sheet = root / "main.css"
    sheet.write_text(MAIN, encoding="utf-8")
    if with_map:
        (root / "main.css.map").write_text(
            make_source_map([(1, 0, "main.scss", 1, 0)]), encoding="utf-8"
        )
    return sheet


def test_read_stylesheet_reads_sibling_map(tmp_path: Path) -> None:
    """The sibling map is read unless disabled."""
    sheet = _project(tmp_path)
    source = read_stylesheet(sheet)
    assert source.text == MAIN
    assert source.map_path == tmp_path / "main.css.map"
    assert source.source_map is not None
    assert read_stylesheet(sheet, use_map=False).source_map is None


def test_write_artifacts_creates_directories(tmp_path: Path) -> None:
    """Artifacts named with a directory are written below the target directory."""
    result = split_document("css/main.css", MAIN)
    report = write_artifacts(result, tmp_path)
    assert report.written == [tmp_path / "css" / "main.css", tmp_path / "css" / "a.css"]
    assert (tmp_path / "css" / "a.css").read_text(encoding="utf-8") == ".a{}\n"
    assert report.bytes_written == len(".m{}\n") + len(".a{}\n")


@mark_integration
def test_split_files_writes_next_to_input(tmp_path: Path) -> None:
    """By default artifacts replace the input and its map in place."""
    sheet = _project(tmp_path)
    (entry,) = api.split_files([sheet], config={})

    assert entry.result.ok
    assert entry.report is not None
    assert {p.name for p in entry.report.written} == {
        "main.css",
        "main.css.map",
        "a.css",
        "a.css.map",
    }
    assert sheet.read_text(encoding="utf-8") == ".m{}\n/*# sourceMappingURL=main.css.map*/\n"
    assert load_map((tmp_path / "a.css.map").read_text(encoding="utf-8"))["sources"] == [
        "main.scss"
    ]


@mark_integration
def test_split_files_keeps_crlf_inside_rules(tmp_path: Path) -> None:
    """Line endings inside copied rules are written back byte for byte."""
    sheet = tmp_path / "main.css"
    sheet.write_bytes(b"/*! start:a.css */\r\n.a{\r\n  x:y\r\n}\r\n/*! end:a.css */\r\n.m{}\r\n")

    (entry,) = api.split_files([sheet], config={})

    assert entry.result.ok
    assert (tmp_path / "a.css").read_bytes() == b".a{\r\n  x:y\r\n}\n"
    assert sheet.read_bytes() == b".m{}\n"


@mark_integration
def test_split_files_out_dir_leaves_input_untouched(tmp_path: Path) -> None:
    """With an output directory the inputs are not modified."""
    sheet = _project(tmp_path, with_map=False)
    out = tmp_path / "dist"
    (entry,) = api.split_files([str(sheet)], config={}, out_dir=out)

    assert entry.report is not None
    assert sheet.read_text(encoding="utf-8") == MAIN
    assert (out / "main.css").read_text(encoding="utf-8") == ".m{}\n"
    assert (out / "a.css").read_text(encoding="utf-8") == ".a{}\n"


@mark_integration
def test_split_files_dry_run_and_parse_failure_write_nothing(tmp_path: Path) -> None:
    """Dry runs and documents that fail to parse leave the filesystem alone."""
    sheet = _project(tmp_path, with_map=False)
    broken = tmp_path / "broken.css"
    broken.write_text(".a{}\n.broken", encoding="utf-8")

    entries = api.split_files([sheet, broken], config={}, write=False)
    assert [e.report for e in entries] == [None, None]
    assert not (tmp_path / "a.css").exists()

    entries = api.split_files([broken], config={})
    assert entries[0].report is None
    assert entries[0].result.parse_error is not None
    assert broken.read_text(encoding="utf-8") == ".a{}\n.broken"


@mark_integration
def test_split_files_without_maps_ignores_sibling_map(tmp_path: Path) -> None:
    """``source_maps = false`` neither reads nor writes maps."""
    sheet = _project(tmp_path)
    (entry,) = api.split_files([sheet], config={"split": {"source_maps": False}})
    assert entry.report is not None
    assert {p.name for p in entry.report.written} == {"main.css", "a.css"}


def test_resolve_config_accepts_mapping_config_or_discovery(isolation: Path) -> None:
    """Mappings layer over defaults; None discovers project config from the cwd."""
    (isolation / "cssblocks.toml").write_text(
        'root = true\n[split]\nreopen = "separate"\n', encoding="utf-8"
    )
    frozen = MutableConfig.from_defaults().freeze()

    assert api.resolve_config(frozen) is frozen
    assert api.resolve_config({"split": {"jobs": 2}}).jobs == 2
    assert api.resolve_config({"split": {"jobs": 2}}).reopen is ReopenPolicy.APPEND
    assert api.resolve_config(None).reopen is ReopenPolicy.SEPARATE


def test_split_stylesheet_with_filename_template() -> None:
    """Output names follow the configured template."""
    result = api.split_stylesheet(
        "dist/main.css", MAIN, config={"output": {"filename": "[name].min.css"}}
    )
    assert set(result.artifacts()) == {"dist/main.css", "dist/a.min.css"}


def test_split_assets_and_version() -> None:
    """The asset wrapper and version accessor are exposed."""
    batch = api.split_assets({"main.css": MAIN}, config={})
    assert set(batch.assets) == {"main.css", "a.css"}
    assert isinstance(api.version(), str)
    assert api.version()
