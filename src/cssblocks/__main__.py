# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __main__.py
#   file_relpath : src/cssblocks/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CSSBlocks via ``python -m cssblocks``.

Examples:
    Split a stylesheet next to its source map::

        python -m cssblocks split dist/main.css
"""

from __future__ import annotations

from cssblocks.cli.main import cli

if __name__ == "__main__":
    cli()
