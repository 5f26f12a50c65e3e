"""Decode one column/gate/beam series of a wind iris file into sample buffers.

A read is self-contained: the file is read in full, its header parsed, the
series located and parsed into a local array, and only then copied into the
caller's buffer slice. A file that fails midway never leaves a partially
written buffer behind.

Partial coverage is not an error:
- a distance that is not among the file's gates leaves the slice invalid
- a file with fewer lines than a complete file leaves the slice invalid
Both cases are logged at DEBUG level.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Sequence, TYPE_CHECKING

import numpy as np

from windiris.decoding.numeric import NumberFormat, DEFAULT_FORMAT, parse_float, parse_truncated_int
from windiris.decoding.header import FileKind, parse_header
from windiris.decoding.addressing import locate
from windiris.contracts.failure import RepresentationNotFound, StructuralParseError
from windiris.contracts.window import assert_window_fits

if TYPE_CHECKING:
    from windiris.schemas import InternalConfig

__all__ = ['ReadWindow', 'WindIrisFileReader', 'as_sample_buffers']

logger = logging.getLogger(__name__)

StatusPolicy = Literal["window", "sample"]


@dataclass(frozen=True)
class ReadWindow:
    """Which samples of one file a read must produce.

    file_length: samples a complete file holds (file period / sample period)
    file_offset: first sample of the file to copy out
    file_block: number of samples to copy out
    """
    file_offset: int
    file_block: int
    file_length: int


def as_sample_buffers(data, status) -> tuple[np.ndarray, np.ndarray]:
    """View caller buffers as float64 samples and uint8 status bytes.

    Accepts numpy arrays or any writable buffer (``bytearray``,
    ``memoryview``); raw bytes are reinterpreted without copying.
    """
    if not isinstance(data, np.ndarray) or data.dtype != np.float64:
        data = np.frombuffer(data, dtype=np.float64)
    if not isinstance(status, np.ndarray) or status.dtype != np.uint8:
        status = np.frombuffer(status, dtype=np.uint8)
    return data, status


class WindIrisFileReader:
    """Extract time series from wind iris real-time and average files.

    The reader holds only immutable settings; every call parses the target
    file from scratch, so one instance can serve concurrent reads.

    Parameters
    ----------
    number_format : NumberFormat
        Decimal/grouping separators of the export (default ``.`` and none).
    encoding : str
        Text encoding of the files. Undecodable bytes are replaced.
    status_policy : {"window", "sample"}
        ``"window"`` marks the whole copied slice valid once the file passed
        the completeness check, even when single rows were rejected by the
        distance cross-check. ``"sample"`` marks only accepted rows.

    Examples
    --------
    >>> reader = WindIrisFileReader()
    >>> window = ReadWindow(file_offset=0, file_block=150, file_length=150)
    >>> data, status = np.zeros(150), np.zeros(150, dtype=np.uint8)
    >>> reader.read_into("WLS_real_time.csv", FileKind.RAW, "RWS",
    ...                  distance=220, beam=0, window=window,
    ...                  data=data, status=status)
    150
    """

    def __init__(self, number_format: NumberFormat = DEFAULT_FORMAT,
                 encoding: str = "utf-8", status_policy: StatusPolicy = "window"):
        self.number_format = number_format
        self.encoding = encoding
        self.status_policy = status_policy

    @classmethod
    def from_config(cls, config: "InternalConfig") -> "WindIrisFileReader":
        reader_cfg = config.reader
        return cls(
            number_format=NumberFormat(
                decimal_separator=reader_cfg.decimal_separator,
                group_separator=reader_cfg.group_separator,
            ),
            encoding=reader_cfg.encoding,
            status_policy=reader_cfg.status_policy,
        )

    def read_lines(self, filepath: Path | str) -> list[str]:
        """Read the whole file and split it into lines."""
        with open(filepath, "r", encoding=self.encoding, errors="replace") as f:
            return f.read().splitlines()

    def extract(
        self,
        lines: Sequence[str],
        kind: FileKind,
        column: str,
        distance: int,
        beam: Optional[int],
        file_length: int,
    ) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Decode ``file_length`` samples of one series from parsed lines.

        Parameters
        ----------
        lines : sequence of str
            All lines of the file, header included.
        kind : FileKind
            File family (selects header parser and addressing).
        column : str
            Normalized column name.
        distance : int
            Requested gate distance in meters.
        beam : int or None
            Requested beam (raw files only).
        file_length : int
            Samples a complete file holds.

        Returns
        -------
        (values, accepted) or None
            ``values`` float64 array of length ``file_length`` (0.0 where a
            row was rejected), ``accepted`` boolean mask of rows that passed
            the distance cross-check. None when the file does not cover the
            request (distance not measured, incomplete file).

        Raises
        ------
        RepresentationNotFound
            If ``column`` is not in the header.
        StructuralParseError
            If the header or an addressed row cannot be parsed.
        """
        fmt = self.number_format
        layout = parse_header(lines, kind, fmt)

        column_index = layout.column_index(column)
        if column_index < 0:
            raise RepresentationNotFound(f"The requested representation '{column}' does not exist.")

        address = locate(layout, distance, beam)
        if address is None:
            logger.debug("Distance %d does not exist (gates: %s).", distance, list(layout.gates))
            return None

        # Trailing blank lines differ between exports (two, or one for
        # files re-exported by the vendor software).
        required = file_length * address.stride
        if required <= 0 or len(lines) < required or not lines[required - 1].strip():
            logger.debug("The actual buffer size does not match the expected size, "
                         "which indicates an incomplete file (%d lines, %d required)",
                         len(lines), required)
            return None

        distance_field = kind.distance_field
        maxsplit = max(column_index + 2, distance_field + 1) - 1

        values = np.zeros(file_length, dtype=np.float64)
        accepted = np.zeros(file_length, dtype=bool)

        for i in range(file_length):
            row = address.row(i)
            if row >= len(lines):
                continue

            parts = lines[row].split(";", maxsplit)
            try:
                actual = parse_truncated_int(parts[distance_field], fmt)
            except (IndexError, ValueError) as e:
                raise StructuralParseError(f"Line {row}: cannot read distance: {lines[row]!r}") from e

            # Inconsistent gate sequences show up as a wrong distance here.
            if actual != distance:
                logger.debug("Line %d: distance %d found, %d expected; sample %d skipped",
                             row, actual, distance, i)
                continue

            try:
                values[i] = parse_float(parts[column_index], fmt)
            except (IndexError, ValueError) as e:
                raise StructuralParseError(f"Line {row}: cannot read column '{column}': {lines[row]!r}") from e
            accepted[i] = True

        return values, accepted

    def read_into(
        self,
        filepath: Path | str,
        kind: FileKind,
        column: str,
        distance: int,
        beam: Optional[int],
        window: ReadWindow,
        data,
        status,
        buffer_offset: int = 0,
    ) -> int:
        """Decode one file and copy its window into the caller's buffers.

        Samples ``[window.file_offset, window.file_offset + window.file_block)``
        of the file land at ``[buffer_offset, buffer_offset + window.file_block)``
        of ``data``; the matching ``status`` bytes are set to 1. Nothing is
        written when the file does not cover the request.

        Returns
        -------
        int
            Number of status bytes set to 1.
        """
        data, status = as_sample_buffers(data, status)
        assert_window_fits(window, len(data), len(status), buffer_offset)

        lines = self.read_lines(filepath)
        result = self.extract(lines, kind, column, distance, beam, window.file_length)
        if result is None:
            return 0

        values, accepted = result
        source = slice(window.file_offset, window.file_offset + window.file_block)
        target = slice(buffer_offset, buffer_offset + window.file_block)

        data[target] = values[source]
        if self.status_policy == "sample":
            status[target] = accepted[source].astype(np.uint8)
        else:
            status[target] = 1

        return int(np.count_nonzero(status[target]))
