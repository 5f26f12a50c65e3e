"""Header and block-shape parsing for wind iris files (decode pass 1).

Wind iris files carry no explicit schema beyond the header line. The shape
of one time block (the distance gates, and for real-time files the first
beam) is recovered by scanning data rows until the gate value stops
increasing.

Layouts
-------
- Average files: ``timestamp;distance;...``, one row per gate per sample.
- Real-time (raw) files: ``timestamp;beam;distance;...``, one row per
  beam per gate per sample, beams rotating through 4 positions.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from windiris.naming import InvalidIdentifier, normalize
from windiris.decoding.numeric import NumberFormat, DEFAULT_FORMAT, parse_int, parse_truncated_int
from windiris.contracts.base import require
from windiris.contracts.failure import StructuralParseError
from windiris.contracts.header import assert_header_parsed

__all__ = [
    'FileKind',
    'FileLayout',
    'parse_columns',
    'discover_gates',
    'parse_average_header',
    'parse_raw_header',
    'parse_header',
]

logger = logging.getLogger(__name__)

BEAM_COUNT = 4


class FileKind(str, Enum):
    """The two wind iris file families."""
    RAW = "real_time"
    AVERAGE = "average"

    @classmethod
    def from_mode(cls, mode: str) -> "FileKind":
        """Map a file-source mode token onto a file kind.

        ``real_time`` selects raw files, anything else average files.
        """
        return cls.RAW if mode == cls.RAW.value else cls.AVERAGE

    @property
    def distance_field(self) -> int:
        """Row field holding the distance gate."""
        return 2 if self is FileKind.RAW else 1

    @property
    def beams_per_block(self) -> int:
        return BEAM_COUNT if self is FileKind.RAW else 1


@dataclass(frozen=True)
class FileLayout:
    """Structural metadata recovered from one file.

    columns: normalized header names; position == field index in a row
    gates: distinct distance gates of one time block, in row order
    first_beam: beam of the first data row (raw files only)
    """
    kind: FileKind
    columns: tuple[str, ...]
    gates: tuple[int, ...]
    first_beam: Optional[int] = None

    @property
    def gate_count(self) -> int:
        return len(self.gates)

    @property
    def data_columns(self) -> tuple[str, ...]:
        """Columns exposed as resources (field 0 is the timestamp)."""
        return self.columns[1:]

    def column_index(self, name: str) -> int:
        """Field position of ``name``, or -1 if the header does not have it."""
        try:
            return self.columns.index(name)
        except ValueError:
            return -1

    def gate_index(self, distance: int) -> int:
        """Position of ``distance`` in the gate list, or -1 if absent."""
        try:
            return self.gates.index(distance)
        except ValueError:
            return -1


def parse_columns(header_line: str) -> tuple[str, ...]:
    """Split the header line on ``;`` and normalize every field.

    Raises
    ------
    StructuralParseError
        If any field fails normalization.
    """
    columns = []
    for position, field in enumerate(header_line.split(";")):
        try:
            columns.append(normalize(field))
        except InvalidIdentifier as e:
            raise StructuralParseError(f"Header field {position} is not a valid name: {e}") from e
    return tuple(columns)


def discover_gates(
    data_lines: Sequence[str],
    distance_field: int,
    fmt: NumberFormat = DEFAULT_FORMAT,
) -> tuple[int, ...]:
    """Infer the gate list of one time block from the leading run of rows.

    Gates are appended while each value is strictly greater than the FIRST
    gate; the first value that is not (the wrap to the next block) or a
    blank line ends the scan.

    Parameters
    ----------
    data_lines : sequence of str
        Data rows (header excluded).
    distance_field : int
        Row field holding the distance.
    fmt : NumberFormat
        Numeric format of the export.

    Returns
    -------
    tuple of int
        Gate distances in row order.

    Examples
    --------
    >>> rows = ["t;50;x", "t;80;x", "t;120;x", "t;50;x"]
    >>> discover_gates(rows, distance_field=1)
    (50, 80, 120)
    """
    gates: list[int] = []
    for line_no, line in enumerate(data_lines, start=1):
        if not line.strip():
            break
        parts = line.split(";", distance_field + 2)
        try:
            distance = parse_truncated_int(parts[distance_field], fmt)
        except (IndexError, ValueError) as e:
            raise StructuralParseError(f"Data line {line_no}: cannot read distance field {distance_field}: {line!r}") from e

        if not gates or distance > gates[0]:
            gates.append(distance)
        else:
            break
    return tuple(gates)


def _require_data(lines: Sequence[str]) -> None:
    require(len(lines) > 1 and bool(lines[1].strip()),
            "Header contract violated: file has no data lines", StructuralParseError)


def parse_average_header(lines: Sequence[str], fmt: NumberFormat = DEFAULT_FORMAT) -> FileLayout:
    """Parse columns and gates of an average file."""
    require(len(lines) > 0, "Header contract violated: file is empty", StructuralParseError)
    columns = parse_columns(lines[0])
    _require_data(lines)

    gates = discover_gates(lines[1:], FileKind.AVERAGE.distance_field, fmt)
    return FileLayout(kind=FileKind.AVERAGE, columns=columns, gates=gates)


def parse_raw_header(lines: Sequence[str], fmt: NumberFormat = DEFAULT_FORMAT) -> FileLayout:
    """Parse columns, gates and first beam of a real-time file."""
    require(len(lines) > 0, "Header contract violated: file is empty", StructuralParseError)
    columns = parse_columns(lines[0])
    _require_data(lines)

    first_row = lines[1].split(";", 2)
    try:
        first_beam = parse_int(first_row[1])
    except (IndexError, ValueError) as e:
        raise StructuralParseError(f"First data line has no integer beam field: {lines[1]!r}") from e

    gates = discover_gates(lines[1:], FileKind.RAW.distance_field, fmt)
    return FileLayout(kind=FileKind.RAW, columns=columns, gates=gates, first_beam=first_beam)


def parse_header(lines: Sequence[str], kind: FileKind, fmt: NumberFormat = DEFAULT_FORMAT) -> FileLayout:
    """Dispatch to the parser matching ``kind`` and enforce the header contract."""
    if kind is FileKind.RAW:
        layout = parse_raw_header(lines, fmt)
    else:
        layout = parse_average_header(lines, fmt)
    assert_header_parsed(layout)

    if any(a >= b for a, b in zip(layout.gates, layout.gates[1:])):
        logger.debug("Gates %s are not in ascending order", list(layout.gates))

    logger.debug("Parsed %s header: %d columns, gates=%s, first_beam=%s",
                 kind.value, len(layout.columns), list(layout.gates), layout.first_beam)
    return layout
