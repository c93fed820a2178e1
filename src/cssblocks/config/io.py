# topmark:header:start
#
#   project      : CSSBlocks
#   file         : io.py
#   file_relpath : src/cssblocks/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for CSSBlocks configuration.

Pure helpers for reading and writing the TOML used by the configuration
layer. Functions here never mutate configuration objects; checked getters
report bad values on a `DiagnosticLog` and return None so the caller keeps
whatever value an earlier layer provided.

Typical flow:
    1. Start from the runtime defaults (``load_defaults_dict``).
    2. Load project files (``load_toml_dict``), extracting ``[tool.cssblocks]``
       from ``pyproject.toml`` (``extract_tool_section``).
    3. Read values with the ``get_*_checked`` helpers.
    4. Serialize back to TOML when needed (``to_toml``).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, TypeGuard, TypeVar, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from cssblocks.config.keys import Toml
from cssblocks.config.logging import get_logger
from cssblocks.constants import (
    DEFAULT_FILENAME_TEMPLATE,
    DEFAULT_HASH_DIGEST,
    DEFAULT_HASH_DIGEST_LENGTH,
    DEFAULT_HASH_FUNCTION,
    DEFAULT_NESTED_AT_RULES,
    PYPROJECT_SECTION,
)

if TYPE_CHECKING:
    from pathlib import Path

    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.diagnostic import DiagnosticLog

logger: CssBlocksLogger = get_logger(__name__)

TomlTable = dict[str, Any]

E = TypeVar("E", bound=Enum)

__all__: list[str] = [
    "TomlTable",
    "extract_tool_section",
    "get_bool_value_checked",
    "get_enum_value_checked",
    "get_int_value_checked",
    "get_string_list_value_checked",
    "get_string_value_checked",
    "get_table_value",
    "is_toml_table",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key``, or an empty dict if missing or not a table."""
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def extract_tool_section(data: TomlTable, dotted: str = PYPROJECT_SECTION) -> TomlTable | None:
    """Return the table at a dotted path such as ``tool.cssblocks``.

    Args:
        data (TomlTable): Parsed ``pyproject.toml`` document.
        dotted (str): Dotted section path.

    Returns:
        TomlTable | None: The section, or None if any level is missing.
    """
    current: Any = data
    for part in dotted.split("."):
        if not is_toml_table(current) or part not in current:
            return None
        current = current[part]
    return current if is_toml_table(current) else None


def load_toml_dict(path: Path, *, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``cssblocks.toml`` or ``pyproject.toml``).
        diagnostics (DiagnosticLog | None): When given, load failures are also
            recorded there as errors.

    Returns:
        TomlTable: The parsed content; an empty dict on failure.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Cannot read config file {path}: {e}")
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Cannot parse config file {path}: {e}")
        return {}


def load_defaults_dict() -> TomlTable:
    """Return the runtime defaults as a new TOML-compatible dict."""
    return {
        Toml.SECTION_SPLIT: {
            Toml.KEY_SOURCE_MAPS: True,
            Toml.KEY_REOPEN: "append",
            Toml.KEY_NESTED_AT_RULES: list(DEFAULT_NESTED_AT_RULES),
            Toml.KEY_JOBS: 1,
        },
        Toml.SECTION_OUTPUT: {
            Toml.KEY_FILENAME: DEFAULT_FILENAME_TEMPLATE,
            Toml.KEY_HASH_FUNCTION: DEFAULT_HASH_FUNCTION,
            Toml.KEY_HASH_DIGEST: DEFAULT_HASH_DIGEST,
            Toml.KEY_HASH_DIGEST_LENGTH: DEFAULT_HASH_DIGEST_LENGTH,
        },
    }


def _strip_none_for_toml(value: object) -> object:
    """Remove `None` from mappings and lists; TOML has no null."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none_for_toml(v) for k, v in m.items() if v is not None}
    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string using tomlkit."""
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


# --- Checked getters: missing -> None, wrong type or value -> warning + None ---


def _report(
    diagnostics: DiagnosticLog,
    message: str,
) -> None:
    logger.warning("%s", message)
    diagnostics.add_warning(message)


def get_bool_value_checked(
    table: TomlTable, key: str, *, where: str, diagnostics: DiagnosticLog
) -> bool | None:
    """Return a boolean value, or None if missing or not a bool."""
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    if not isinstance(raw, bool):
        _report(
            diagnostics, f"Expected boolean in {where}.{key}, got {type(raw).__name__}: {raw!r}"
        )
        return None
    return raw


def get_int_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    min_value: int | None = None,
) -> int | None:
    """Return an integer value, or None if missing, not an int, or below ``min_value``."""
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    # bool is an int subclass
    if isinstance(raw, bool) or not isinstance(raw, int):
        _report(diagnostics, f"Expected integer in {loc}, got {type(raw).__name__}: {raw!r}")
        return None
    if min_value is not None and raw < min_value:
        _report(diagnostics, f"Value for {loc} must be >= {min_value}, got {raw}")
        return None
    return raw


def get_string_value_checked(
    table: TomlTable, key: str, *, where: str, diagnostics: DiagnosticLog
) -> str | None:
    """Return a non-empty string value, or None if missing, empty or not a string."""
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str) or not raw:
        _report(
            diagnostics,
            f"Expected non-empty string in {where}.{key}, got {type(raw).__name__}: {raw!r}",
        )
        return None
    return raw


def get_string_list_value_checked(
    table: TomlTable, key: str, *, where: str, diagnostics: DiagnosticLog
) -> list[str] | None:
    """Return a list of strings; non-string items are dropped with a warning."""
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, list):
        _report(diagnostics, f"Expected list in {loc}, got {type(raw).__name__}: {raw!r}")
        return None
    out: list[str] = []
    for item in cast("list[Any]", raw):
        if isinstance(item, str):
            out.append(item)
        else:
            _report(diagnostics, f"Ignoring non-string item in {loc}: {item!r}")
    return out


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> E | None:
    """Parse an enum value given as one of the Enum's string values."""
    raw: Any | None = table.get(key)
    if raw is None:
        return None
    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        _report(
            diagnostics, f"Expected string enum value in {loc}, got {type(raw).__name__}: {raw!r}"
        )
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        allowed: str = ", ".join(str(e.value) for e in enum_cls)
        _report(diagnostics, f"Invalid value for {loc}: {raw!r} (allowed: {allowed})")
        return None
