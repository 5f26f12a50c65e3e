"""Row addressing for wind iris files (decode pass 2).

Given a file layout and the requested (distance, beam), compute where the
row for sample ``i`` sits in the file's line array. Line 0 is the header.

Average files:  row(i) = i * gates + gate_index + 1
Raw files:      row(i) = i * gates * 4 + gates * beam_position + gate_index + 1
"""

from dataclasses import dataclass
from typing import Optional

from windiris.decoding.header import BEAM_COUNT, FileKind, FileLayout
from windiris.contracts.base import require

__all__ = ['RowAddress', 'beam_position', 'lines_per_block', 'locate']


def beam_position(first_beam: int, beam: int) -> int:
    """Slot of ``beam`` inside a block whose rotation starts at ``first_beam``.

    Examples
    --------
    >>> beam_position(3, 0)
    1
    >>> beam_position(3, 3)
    0
    """
    return (BEAM_COUNT - first_beam + beam) % BEAM_COUNT


def lines_per_block(layout: FileLayout) -> int:
    """Number of rows making up one sample tick."""
    return layout.gate_count * layout.kind.beams_per_block


@dataclass(frozen=True)
class RowAddress:
    """Row stride and offset of one (distance, beam) series in a file."""
    stride: int
    offset: int

    def row(self, sample: int) -> int:
        return sample * self.stride + self.offset


def locate(layout: FileLayout, distance: int, beam: Optional[int] = None) -> Optional[RowAddress]:
    """Compute the row address for ``distance`` (and ``beam`` for raw files).

    Returns
    -------
    RowAddress or None
        None if ``distance`` is not one of the file's gates.
    """
    gate_index = layout.gate_index(distance)
    if gate_index < 0:
        return None

    stride = lines_per_block(layout)

    if layout.kind is FileKind.RAW:
        require(beam is not None, "Addressing contract violated: raw files need a beam")
        require(layout.first_beam is not None, "Addressing contract violated: raw layout has no first beam")
        offset = layout.gate_count * beam_position(layout.first_beam, beam) + gate_index + 1
    else:
        offset = gate_index + 1

    return RowAddress(stride=stride, offset=offset)
