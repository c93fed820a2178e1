# topmark:header:start
#
#   project      : CSSBlocks
#   file         : model.py
#   file_relpath : src/cssblocks/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and layering.

This module defines:
    - `Config`: an immutable runtime snapshot consumed by the splitter.
    - `MutableConfig`: a builder used while layering defaults, project files,
      explicit ``--config`` files and CLI/API overrides. It freezes into a
      `Config` and a `Config` thaws back into a builder.

Bad values never abort loading: they are reported on the builder's
`DiagnosticLog` (carried into `Config.diagnostics`) and the previous layer's
value is kept.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cssblocks.config.io import (
    extract_tool_section,
    get_bool_value_checked,
    get_enum_value_checked,
    get_int_value_checked,
    get_string_list_value_checked,
    get_string_value_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from cssblocks.config.keys import Toml
from cssblocks.config.logging import get_logger
from cssblocks.config.types import HashDigest, ReopenPolicy
from cssblocks.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_FILENAME_TEMPLATE,
    DEFAULT_HASH_DIGEST_LENGTH,
    DEFAULT_HASH_FUNCTION,
    DEFAULT_NESTED_AT_RULES,
    PYPROJECT_FILE_NAME,
)
from cssblocks.diagnostic import Diagnostic, DiagnosticLevel, DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cssblocks.config.io import TomlTable
    from cssblocks.config.logging import CssBlocksLogger
    from cssblocks.config.types import ArgsLike

logger: CssBlocksLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for CSSBlocks.

    Attributes:
        source_maps (bool): Generate maps when the input document has one.
        reopen (ReopenPolicy): Handling of a block name opened again after a close.
        nested_at_rules (frozenset[str]): Lowercased at-rule keywords whose
            child rules are mapped individually.
        jobs (int): Number of documents split concurrently by a batch.
        filename (str): Output filename template for split-out blocks.
        hash_function (str): `hashlib` algorithm used for ``[contenthash]``.
        hash_digest (HashDigest): Encoding of the ``[contenthash]`` digest.
        hash_digest_length (int): Number of digest characters kept.
        config_files (tuple[Path | str, ...]): Config sources applied, in order.
        diagnostics (tuple[Diagnostic, ...]): Problems found while loading.
    """

    source_maps: bool
    reopen: ReopenPolicy
    nested_at_rules: frozenset[str]
    jobs: int
    filename: str
    hash_function: str
    hash_digest: HashDigest
    hash_digest_length: int
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def has_errors(self) -> bool:
        """True when loading recorded an error (e.g. an unreadable config file)."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def to_toml_dict(self) -> TomlTable:
        """Return this config as a TOML-serializable dict (export only)."""
        return {
            Toml.SECTION_SPLIT: {
                Toml.KEY_SOURCE_MAPS: self.source_maps,
                Toml.KEY_REOPEN: self.reopen.value,
                Toml.KEY_NESTED_AT_RULES: sorted(self.nested_at_rules),
                Toml.KEY_JOBS: self.jobs,
            },
            Toml.SECTION_OUTPUT: {
                Toml.KEY_FILENAME: self.filename,
                Toml.KEY_HASH_FUNCTION: self.hash_function,
                Toml.KEY_HASH_DIGEST: self.hash_digest.value,
                Toml.KEY_HASH_DIGEST_LENGTH: self.hash_digest_length,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            source_maps=self.source_maps,
            reopen=self.reopen,
            nested_at_rules=set(self.nested_at_rules),
            jobs=self.jobs,
            filename=self.filename,
            hash_function=self.hash_function,
            hash_digest=self.hash_digest,
            hash_digest_length=self.hash_digest_length,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and layering.

    Each layer only overrides the keys it sets. See `Config` for the meaning
    of the fields.
    """

    source_maps: bool = True
    reopen: ReopenPolicy = ReopenPolicy.APPEND
    nested_at_rules: set[str] = field(default_factory=lambda: set(DEFAULT_NESTED_AT_RULES))
    jobs: int = 1
    filename: str = DEFAULT_FILENAME_TEMPLATE
    hash_function: str = DEFAULT_HASH_FUNCTION
    hash_digest: HashDigest = HashDigest.HEX
    hash_digest_length: int = DEFAULT_HASH_DIGEST_LENGTH
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Sanitize this builder and return an immutable `Config` snapshot."""
        self.sanitize()
        return Config(
            source_maps=self.source_maps,
            reopen=self.reopen,
            nested_at_rules=frozenset(self.nested_at_rules),
            jobs=self.jobs,
            filename=self.filename,
            hash_function=self.hash_function,
            hash_digest=self.hash_digest,
            hash_digest_length=self.hash_digest_length,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    def sanitize(self) -> None:
        """Reset values that cannot work at runtime, recording a warning for each."""
        try:
            hashlib.new(self.hash_function)
        except ValueError:
            msg = (
                f"Unknown hash function {self.hash_function!r}; "
                f"using {DEFAULT_HASH_FUNCTION!r}"
            )
            logger.warning("%s", msg)
            self.diagnostics.add_warning(msg)
            self.hash_function = DEFAULT_HASH_FUNCTION

        if self.hash_digest_length < 1:
            msg = f"hash_digest_length must be >= 1, got {self.hash_digest_length}"
            logger.warning("%s", msg)
            self.diagnostics.add_warning(msg)
            self.hash_digest_length = DEFAULT_HASH_DIGEST_LENGTH

        self.nested_at_rules = {n.strip().lower().lstrip("@") for n in self.nested_at_rules}

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the runtime defaults."""
        draft = cls()
        draft._apply_tables(load_defaults_dict())
        return draft

    def apply_toml_dict(self, data: TomlTable, *, source: Path | str) -> MutableConfig:
        """Override this draft with the keys present in a CSSBlocks TOML table.

        Args:
            data (TomlTable): Table holding ``[split]`` and ``[output]``.
            source (Path | str): Where the table came from (for provenance).

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        self._apply_tables(data)
        self.config_files.append(source)
        return self

    def _apply_tables(self, data: TomlTable) -> None:
        log = self.diagnostics
        split = get_table_value(data, Toml.SECTION_SPLIT)
        where = Toml.SECTION_SPLIT

        source_maps = get_bool_value_checked(
            split, Toml.KEY_SOURCE_MAPS, where=where, diagnostics=log
        )
        if source_maps is not None:
            self.source_maps = source_maps
        reopen = get_enum_value_checked(
            split, Toml.KEY_REOPEN, ReopenPolicy, where=where, diagnostics=log
        )
        if reopen is not None:
            self.reopen = reopen
        nested = get_string_list_value_checked(
            split, Toml.KEY_NESTED_AT_RULES, where=where, diagnostics=log
        )
        if nested is not None:
            self.nested_at_rules = set(nested)
        jobs = get_int_value_checked(
            split, Toml.KEY_JOBS, where=where, diagnostics=log, min_value=1
        )
        if jobs is not None:
            self.jobs = jobs

        output = get_table_value(data, Toml.SECTION_OUTPUT)
        where = Toml.SECTION_OUTPUT

        filename = get_string_value_checked(output, Toml.KEY_FILENAME, where=where, diagnostics=log)
        if filename is not None:
            self.filename = filename
        hash_function = get_string_value_checked(
            output, Toml.KEY_HASH_FUNCTION, where=where, diagnostics=log
        )
        if hash_function is not None:
            self.hash_function = hash_function
        hash_digest = get_enum_value_checked(
            output, Toml.KEY_HASH_DIGEST, HashDigest, where=where, diagnostics=log
        )
        if hash_digest is not None:
            self.hash_digest = hash_digest
        length = get_int_value_checked(
            output, Toml.KEY_HASH_DIGEST_LENGTH, where=where, diagnostics=log, min_value=1
        )
        if length is not None:
            self.hash_digest_length = length

    def apply_toml_file(self, path: Path) -> MutableConfig:
        """Override this draft with a ``cssblocks.toml`` or ``pyproject.toml`` file.

        An unreadable file is recorded as an error diagnostic; a ``pyproject.toml``
        without ``[tool.cssblocks]`` is skipped.
        """
        data: TomlTable = load_toml_dict(path, diagnostics=self.diagnostics)
        if path.name == PYPROJECT_FILE_NAME:
            section = extract_tool_section(data)
            if section is None:
                logger.debug("No [tool.cssblocks] section in %s", path)
                return self
            data = section
        logger.debug("Applying config file %s", path)
        return self.apply_toml_dict(data, source=path)

    def apply_args(self, args: ArgsLike) -> MutableConfig:
        """Override this draft with CLI options or API keyword arguments.

        Keys mirror the TOML keys (``source_maps``, ``reopen``, ``jobs``,
        ``filename``...). Missing keys and None values keep the current value.
        """
        table: TomlTable = {k: v for k, v in args.items() if v is not None}
        nested = table.get(Toml.KEY_NESTED_AT_RULES)
        if isinstance(nested, (tuple, set, frozenset)):
            table[Toml.KEY_NESTED_AT_RULES] = list(nested)
        split_keys = (
            Toml.KEY_SOURCE_MAPS,
            Toml.KEY_REOPEN,
            Toml.KEY_NESTED_AT_RULES,
            Toml.KEY_JOBS,
        )
        data: dict[str, Any] = {
            Toml.SECTION_SPLIT: {k: v for k, v in table.items() if k in split_keys},
            Toml.SECTION_OUTPUT: {k: v for k, v in table.items() if k not in split_keys},
        }
        self._apply_tables(data)
        return self

    # ------------------------------ Discovery ------------------------------
    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``.

        Within a directory ``pyproject.toml`` comes before ``cssblocks.toml``.
        Discovery stops after a directory whose config sets ``root = true``.

        Returns:
            list[Path]: Files ordered root-most first, nearest last.
        """
        per_dir: list[list[Path]] = []
        for directory in (start, *start.parents):
            found: list[Path] = []
            is_root = False
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                path = directory / name
                if not path.is_file():
                    continue
                data: TomlTable = load_toml_dict(path)
                if name == PYPROJECT_FILE_NAME:
                    section = extract_tool_section(data)
                    if section is None:
                        continue
                    data = section
                found.append(path)
                is_root = is_root or data.get(Toml.KEY_ROOT) is True
            if found:
                per_dir.append(found)
            if is_root:
                logger.debug("Stopping upward config discovery at %s due to root=true", directory)
                break

        ordered: list[Path] = []
        for found in reversed(per_dir):
            ordered.extend(found)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Layer defaults, discovered project files and explicit config files.

        Merge order (lowest to highest precedence):
            1) Runtime defaults
            2) Project configs discovered upward from ``anchor``, root-most first
            3) Explicit config files, in the given order

        Args:
            anchor (Path | None): Discovery start; a file means its directory.
                Defaults to the current working directory.
            extra_config_files (Iterable[Path] | None): Files applied after discovery;
                a missing one is recorded as an error diagnostic.
            no_config (bool): Skip discovery.

        Returns:
            MutableConfig: A draft ready for overrides and `freeze`.
        """
        draft = cls.from_defaults()

        start: Path = anchor if anchor is not None else Path.cwd()
        if start.is_file():
            start = start.parent

        if not no_config:
            for path in cls.discover_local_config_files(start.resolve()):
                draft.apply_toml_file(path)

        for extra in extra_config_files or ():
            extra_path = Path(extra)
            if not extra_path.is_file():
                msg = f"Config file not found: {extra_path}"
                logger.error("%s", msg)
                draft.diagnostics.add_error(msg)
                continue
            draft.apply_toml_file(extra_path)

        return draft
