# topmark:header:start
#
#   project      : CSSBlocks
#   file         : __init__.py
#   file_relpath : src/cssblocks/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``cssblocks`` CLI."""
