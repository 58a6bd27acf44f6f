"""Utility functions for numeric parsing and table formatting."""

import math

# VCF missing-value marker
MISSING = "."


def parse_number(value: str | None) -> float | None:
    """Parse a VCF field value as a finite real number.

    Args:
        value: Raw field text (may be None, empty or the "." marker)

    Returns:
        The parsed float, or None if missing or not a finite number

    Example:
        >>> parse_number("0.1")
        0.1
        >>> parse_number(".") is None
        True
        >>> parse_number("1,2") is None
        True
    """
    if value is None or value == "" or value == MISSING:
        return None
    # Digit separators and padding are not valid VCF numbers
    if "_" in value or value != value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_position(value: str) -> int | None:
    """Parse a 1-based VCF position.

    Returns:
        The position, or None unless value is a positive integer written
        with ASCII digits only
    """
    if not (value.isascii() and value.isdigit()):
        return None
    pos = int(value)
    return pos if pos > 0 else None


def format_number(value: float) -> str:
    """Format a number for tabular output.

    Integral values are written without a decimal part; everything else uses
    the shortest representation that round-trips.

    Example:
        >>> format_number(35.0)
        '35'
        >>> format_number(0.05)
        '0.05'
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
