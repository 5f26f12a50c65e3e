"""Map a UTC time range onto wind iris files and their read windows.

Files of one file source each cover ``FilePeriod``; file slots start at
multiples of that period counted from UTC midnight. A slot's path is built
from the source's ``strftime`` path segments and file template, evaluated
at the slot start shifted by ``UtcOffset`` (the local time used by the
instrument's file naming).
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

from windiris.decoding.extractor import ReadWindow
from windiris.schemas.catalog import FileSourceConfig

__all__ = ['FileReadPlan', 'FileSourceIndex', 'as_utc']

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class FileReadPlan:
    """One file to decode and where its samples go in the request buffer."""
    path: Path
    begin: datetime
    window: ReadWindow
    buffer_offset: int


class FileSourceIndex:
    """Resolve file paths and read windows for one file source.

    Parameters
    ----------
    root : Path
        Data root the path segments are relative to.
    file_source : FileSourceConfig
        Validated file source description.

    Examples
    --------
    >>> index = FileSourceIndex(Path("/data"), file_source)  # 10 min files, 4 s samples
    >>> plans = list(index.plans(datetime(2021, 1, 1, 0, 5), datetime(2021, 1, 1, 0, 15)))
    >>> [(p.window.file_offset, p.window.file_block, p.buffer_offset) for p in plans]
    [(75, 75, 0), (0, 75, 75)]
    """

    def __init__(self, root: Path, file_source: FileSourceConfig):
        self.root = Path(root)
        self.file_source = file_source

    @property
    def sample_period(self) -> timedelta:
        return self.file_source.sample_period

    @property
    def file_period(self) -> timedelta:
        return self.file_source.file_period

    def path_for(self, slot_begin: datetime) -> Path:
        """File path of the slot starting at ``slot_begin`` (UTC)."""
        local = slot_begin + self.file_source.utc_offset
        segments = [local.strftime(segment) for segment in self.file_source.path_segments]
        return self.root.joinpath(*segments, local.strftime(self.file_source.file_template))

    def _check_alignment(self, begin: datetime, end: datetime) -> None:
        midnight = begin.replace(hour=0, minute=0, second=0, microsecond=0)
        if (begin - midnight) % self.sample_period or (end - begin) % self.sample_period:
            raise ValueError(
                f"Time range {begin.isoformat()}..{end.isoformat()} is not aligned "
                f"to the sample period {self.sample_period}"
            )
        if self.file_period % self.sample_period:
            raise ValueError(f"File period {self.file_period} is not a multiple of "
                             f"the sample period {self.sample_period}")

    def plans(self, begin: datetime, end: datetime) -> Iterator[FileReadPlan]:
        """Yield one plan per file slot overlapping ``[begin, end)``.

        Raises
        ------
        ValueError
            If the range is reversed or not aligned to the sample period.
        """
        begin, end = as_utc(begin), as_utc(end)
        if end < begin:
            raise ValueError(f"End {end.isoformat()} is before begin {begin.isoformat()}")
        self._check_alignment(begin, end)

        sample_period = self.sample_period
        file_period = self.file_period
        file_length = file_period // sample_period

        midnight = begin.replace(hour=0, minute=0, second=0, microsecond=0)
        slot = midnight + ((begin - midnight) // file_period) * file_period

        while slot < end:
            slot_end = slot + file_period
            overlap_begin = max(begin, slot)
            overlap_end = min(end, slot_end)

            yield FileReadPlan(
                path=self.path_for(slot),
                begin=slot,
                window=ReadWindow(
                    file_offset=(overlap_begin - slot) // sample_period,
                    file_block=(overlap_end - overlap_begin) // sample_period,
                    file_length=file_length,
                ),
                buffer_offset=(overlap_begin - begin) // sample_period,
            )
            slot = slot_end
