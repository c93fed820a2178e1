# topmark:header:start
#
#   project      : CSSBlocks
#   file         : exit_codes.py
#   file_relpath : src/cssblocks/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the CSSBlocks CLI.

Values follow the BSD `sysexits` convention where practical, so other tooling
can interpret failures consistently. Click's own usage errors (unknown
options, bad parameter values) keep Click's exit code 2.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the CSSBlocks CLI.

    Attributes:
        SUCCESS: Every stylesheet was split without structural errors.
        FAILURE: Structural errors (mismatched or unclosed blocks) were reported.
        USAGE_ERROR: Invalid combination of options. Mirrors BSD ``EX_USAGE (64)``.
        PARSE_ERROR: A stylesheet could not be parsed or decoded. Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: An input stylesheet does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: Reading or writing a file failed. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Missing or unreadable config file. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    PARSE_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
