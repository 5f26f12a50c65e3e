"""Tests for file slot discovery and read windows."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from windiris.pipeline.file_index import FileSourceIndex, as_utc
from windiris.schemas.catalog import FileSourceConfig

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]

UTC = timezone.utc


def make_index(**overrides):
    raw = {
        "Name": "WLS200;real_time",
        "PathSegments": ["DATA", "%Y-%m"],
        "FileTemplate": "WLS200_real_time_%Y-%m-%d_%H-%M-%S.csv",
        "FilePeriod": "00:10:00",
        "CustomParameters": {"SamplePeriod": "00:00:04"},
    }
    raw.update(overrides)
    return FileSourceIndex(Path("/data"), FileSourceConfig.model_validate(raw))


def test_path_for_slot():
    index = make_index()
    assert index.path_for(datetime(2021, 3, 5, 10, 20, tzinfo=UTC)) == \
        Path("/data/DATA/2021-03/WLS200_real_time_2021-03-05_10-20-00.csv")


def test_utc_offset_shifts_file_names():
    index = make_index(UtcOffset="01:00:00")
    assert index.path_for(datetime(2021, 3, 5, 23, 50, tzinfo=UTC)).name == \
        "WLS200_real_time_2021-03-06_00-50-00.csv"


def test_full_files():
    plans = list(make_index().plans(datetime(2021, 1, 1, 0, 0), datetime(2021, 1, 1, 0, 30)))

    assert len(plans) == 3
    assert [p.buffer_offset for p in plans] == [0, 150, 300]
    assert all((p.window.file_offset, p.window.file_block, p.window.file_length) == (0, 150, 150)
               for p in plans)
    assert plans[1].begin == datetime(2021, 1, 1, 0, 10, tzinfo=UTC)


def test_range_inside_files():
    plans = list(make_index().plans(datetime(2021, 1, 1, 0, 5), datetime(2021, 1, 1, 0, 15)))

    assert [(p.window.file_offset, p.window.file_block, p.buffer_offset) for p in plans] == \
        [(75, 75, 0), (0, 75, 75)]


def test_range_inside_one_file():
    plans = list(make_index().plans(datetime(2021, 1, 1, 0, 1), datetime(2021, 1, 1, 0, 2)))

    assert len(plans) == 1
    assert (plans[0].window.file_offset, plans[0].window.file_block) == (15, 15)


def test_daily_files():
    index = make_index(FilePeriod="1.00:00:00", CustomParameters={"SamplePeriod": "00:10:00"},
                       FileTemplate="WLS200_average_%Y-%m-%d.csv")
    plans = list(index.plans(datetime(2021, 1, 1), datetime(2021, 1, 3)))

    assert [p.path.name for p in plans] == ["WLS200_average_2021-01-01.csv", "WLS200_average_2021-01-02.csv"]
    assert [p.buffer_offset for p in plans] == [0, 144]
    assert plans[0].window.file_length == 144


def test_empty_range():
    assert list(make_index().plans(datetime(2021, 1, 1), datetime(2021, 1, 1))) == []


def test_misaligned_begin():
    with pytest.raises(ValueError, match="aligned"):
        list(make_index().plans(datetime(2021, 1, 1, 0, 0, 2), datetime(2021, 1, 1, 0, 10)))


def test_misaligned_length():
    with pytest.raises(ValueError, match="aligned"):
        list(make_index().plans(datetime(2021, 1, 1), datetime(2021, 1, 1, 0, 0, 6)))


def test_reversed_range():
    with pytest.raises(ValueError, match="before"):
        list(make_index().plans(datetime(2021, 1, 2), datetime(2021, 1, 1)))


def test_as_utc():
    naive = datetime(2021, 1, 1, 12)
    assert as_utc(naive) == datetime(2021, 1, 1, 12, tzinfo=UTC)
    cet = timezone(timedelta(hours=1))
    assert as_utc(datetime(2021, 1, 1, 13, tzinfo=cet)) == datetime(2021, 1, 1, 12, tzinfo=UTC)
