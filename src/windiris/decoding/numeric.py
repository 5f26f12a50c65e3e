"""Locale-independent numeric parsing for wind iris rows.

The numeric format is an explicit, immutable descriptor passed into every
parse call instead of shared parser state.

After the export's separators are mapped to plain ``.`` notation, a field
must be ASCII digits with an optional sign, fraction and exponent. Python's
extra literal forms (``1_000``, ``inf``, non-ASCII digits) are rejected.
The single non-numeric token accepted is ``NaN``, as written by the
instrument software for missing values.
"""

import math
import re
from dataclasses import dataclass

__all__ = ['NumberFormat', 'DEFAULT_FORMAT', 'parse_float', 'parse_truncated_int', 'parse_int']

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")

NAN_TOKEN = "NaN"


@dataclass(frozen=True)
class NumberFormat:
    """Decimal and grouping separators used by a file export."""
    decimal_separator: str = "."
    group_separator: str = ""


DEFAULT_FORMAT = NumberFormat()


def _canonical(text: str, fmt: NumberFormat) -> str:
    value = text.strip()
    if fmt.group_separator:
        value = value.replace(fmt.group_separator, "")
    if fmt.decimal_separator != ".":
        value = value.replace(fmt.decimal_separator, ".")
    return value


def parse_float(text: str, fmt: NumberFormat = DEFAULT_FORMAT) -> float:
    """Parse a field as float.

    Raises
    ------
    ValueError
        If the field is not a number in the given format.

    Examples
    --------
    >>> parse_float("12,45", NumberFormat(decimal_separator=","))
    12.45
    """
    value = _canonical(text, fmt)
    if value == NAN_TOKEN:
        return math.nan
    if not _DECIMAL.fullmatch(value):
        raise ValueError(f"Not a number in the export format: {text!r}")
    return float(value)


def parse_truncated_int(text: str, fmt: NumberFormat = DEFAULT_FORMAT) -> int:
    """Parse a numeric field and truncate it toward zero (``"220.0"`` -> 220)."""
    return int(parse_float(text, fmt))


def parse_int(text: str) -> int:
    """Parse a strictly integral field (the beam column)."""
    value = text.strip()
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"Not an integer: {text!r}")
    return int(value)
