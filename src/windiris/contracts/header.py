"""Header stage contract.

Enforces the guarantee that a parsed file layout is usable for row
addressing.
"""

from windiris.contracts.base import require
from windiris.contracts.failure import StructuralParseError


def assert_header_parsed(layout) -> None:
    """Enforce header stage contract.

    Called immediately after header parsing.

    Parameters
    ----------
    layout : FileLayout
        Layout from ``parse_header()``

    Raises
    ------
    StructuralParseError
        If any invariant is violated
    """
    require(
        len(layout.columns) >= 2,
        f"Header contract violated: {len(layout.columns)} column(s), expected a timestamp and data columns",
        StructuralParseError,
    )
    require(
        len(layout.gates) > 0,
        "Header contract violated: no distance gates found",
        StructuralParseError,
    )
    if layout.kind.beams_per_block > 1:
        require(
            layout.first_beam is not None and 0 <= layout.first_beam < layout.kind.beams_per_block,
            f"Header contract violated: first beam {layout.first_beam} outside 0..{layout.kind.beams_per_block - 1}",
            StructuralParseError,
        )
