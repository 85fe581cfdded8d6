"""fenboard — chess rules and state core with FEN-like snapshots."""

__version__ = "0.1.0"
