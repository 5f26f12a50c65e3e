import pytest

from windiris.contracts import ContractViolation
from windiris.decoding.addressing import RowAddress, beam_position, lines_per_block, locate
from windiris.decoding.header import FileKind, FileLayout
from tests.helpers.wind_iris import raw_row_index

pytestmark = pytest.mark.unit

AVERAGE = FileLayout(FileKind.AVERAGE, ("Timestamp", "Distance", "HWS_hub"), (50, 80, 120))
RAW = FileLayout(FileKind.RAW, ("Timestamp", "LOS_ID", "Distance", "RWS"), (100, 220, 340), first_beam=3)


@pytest.mark.parametrize("first_beam, beam, expected", [
    (3, 0, 1),
    (3, 3, 0),
    (3, 2, 3),
    (0, 2, 2),
    (1, 0, 3),
])
def test_beam_position(first_beam, beam, expected):
    assert beam_position(first_beam, beam) == expected


def test_lines_per_block():
    assert lines_per_block(AVERAGE) == 3
    assert lines_per_block(RAW) == 12


def test_average_address():
    address = locate(AVERAGE, 80)
    assert address == RowAddress(stride=3, offset=2)
    assert address.row(0) == 2
    assert address.row(2) == 8


def test_raw_address_rotates_beam():
    address = locate(RAW, 220, beam=0)
    # beam 0 sits in slot 1 when the file starts at beam 3
    assert address == RowAddress(stride=12, offset=3 * 1 + 1 + 1)
    for sample in range(3):
        assert address.row(sample) == raw_row_index(sample, 0, 220, first_beam=3)


@pytest.mark.parametrize("beam", [0, 1, 2, 3])
def test_raw_address_matches_file_order(beam):
    address = locate(RAW, 340, beam=beam)
    assert address.row(5) == raw_row_index(5, beam, 340, first_beam=3)


def test_missing_distance_has_no_address():
    assert locate(AVERAGE, 55) is None
    assert locate(RAW, 100000, beam=0) is None


def test_raw_address_needs_beam():
    with pytest.raises(ContractViolation, match="beam"):
        locate(RAW, 220)
