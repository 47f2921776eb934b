"""Text protocol parsing for serial scales."""

from .weight_line_parser import parse_line_to_grams

__all__ = ["parse_line_to_grams"]
