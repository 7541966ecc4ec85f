"""Utility modules for input validation."""

from .validators import (
    ValidationError,
    check_length,
    parse_choice,
    parse_date,
    parse_int,
    parse_number,
    parse_yes_no,
)

__all__ = [
    "ValidationError",
    "check_length",
    "parse_choice",
    "parse_date",
    "parse_int",
    "parse_number",
    "parse_yes_no",
]
