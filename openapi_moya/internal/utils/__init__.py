"""Утилиты для генератора"""

from .naming import (
    escape_identifier,
    lowered_first_letter,
    capitalized_first_letter,
    strip_escape,
    swift_string_literal,
)

__all__ = [
    "escape_identifier",
    "lowered_first_letter",
    "capitalized_first_letter",
    "strip_escape",
    "swift_string_literal",
]
