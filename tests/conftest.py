# topmark:header:start
#
#   project      : CSSBlocks
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CSSBlocks test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `cssblocks.config.MutableConfig` (mutable), then
      `freeze()` into a `cssblocks.config.Config` for splitter and API calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from cssblocks.config import MutableConfig, logging
from cssblocks.sourcemap import SourceMapGenerator

if TYPE_CHECKING:
    from pathlib import Path

    from cssblocks.config import Config

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_cssblocks_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    CSSBLOCKS_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("CSSBLOCKS_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated temporary project directory.

    The directory holds a ``cssblocks.toml`` with ``root = true`` so config
    discovery never climbs into the repository running the tests.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "cssblocks.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and attribute overrides.

    Args:
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def make_source_map(
    mappings: list[tuple[int, int, str, int, int]],
    *,
    contents: dict[str, str] | None = None,
    file: str = "main.css",
) -> str:
    """Return a v3 source map (JSON) for hand-written test stylesheets.

    Args:
        mappings (list[tuple[int, int, str, int, int]]): ``(generated_line,
            generated_column, source, original_line, original_column)`` tuples.
        contents (dict[str, str] | None): Original contents to embed, by source.
        file (str): The map's ``file`` field.

    Returns:
        str: The encoded map.
    """
    gen = SourceMapGenerator(file=file)
    for g_line, g_col, source, o_line, o_col in mappings:
        gen.add_mapping(
            generated_line=g_line,
            generated_column=g_col,
            source=source,
            original_line=o_line,
            original_column=o_col,
        )
    for source, text in (contents or {}).items():
        gen.set_source_content(source, text)
    return gen.to_json()


def load_map(text: str | None) -> dict[str, Any]:
    """Decode a rendered map, failing the test when there is none."""
    assert text is not None, "expected a source map"
    return cast("dict[str, Any]", json.loads(text))
