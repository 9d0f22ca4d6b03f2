"""Persisted board format."""

from .board_text import BoardFormatError, format_board, parse_board

__all__ = ["BoardFormatError", "format_board", "parse_board"]
