"""
Form input parsing.

Turns raw hour and rate input into a success/failure result.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

# Optional sign followed by digits, after leading whitespace.
# Anything after the digits is ignored, so "12.5" reads as 12.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class ParsedInt:
    """Outcome of parsing a raw value as a non-negative integer."""
    value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when parsing produced a usable value."""
        return self.error is None


def parse_non_negative_int(raw: Union[str, int]) -> ParsedInt:
    """Parse raw form input as an integer >= 0.

    Strings are read like a form field: leading whitespace is skipped,
    then an optional sign and the longest run of digits. Trailing text
    is ignored. Input with no leading digits fails.

    Args:
        raw: Raw input string, or an int passed through unchanged

    Returns:
        ParsedInt holding either the value or an error message
    """
    if isinstance(raw, bool):
        return ParsedInt(error="not a number")

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match is None:
            return ParsedInt(error="not a number")
        value = int(match.group(1))
    else:
        return ParsedInt(error="not a number")

    if value < 0:
        return ParsedInt(error="must be 0 or more")

    return ParsedInt(value=value)
