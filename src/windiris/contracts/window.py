"""Read window contract.

A read owns exactly the buffer slice it was given; the window must fit
inside both the decoded file and the caller's buffers.
"""

from windiris.contracts.base import require


def assert_window_fits(window, data_len: int, status_len: int, buffer_offset: int) -> None:
    """Enforce read window contract.

    Parameters
    ----------
    window : ReadWindow
        File-relative window of the read
    data_len, status_len : int
        Sample counts of the caller's data and status buffers
    buffer_offset : int
        Position of the window's first sample in the buffers

    Raises
    ------
    ContractViolation
        If the window does not fit
    """
    require(
        window.file_offset >= 0 and window.file_block >= 0 and window.file_length >= 0,
        f"Window contract violated: negative extent in {window}",
    )
    require(
        window.file_offset + window.file_block <= window.file_length,
        f"Window contract violated: samples {window.file_offset}..{window.file_offset + window.file_block} "
        f"exceed file length {window.file_length}",
    )
    require(
        buffer_offset >= 0 and buffer_offset + window.file_block <= min(data_len, status_len),
        f"Window contract violated: buffer slice {buffer_offset}..{buffer_offset + window.file_block} "
        f"exceeds buffers (data={data_len}, status={status_len})",
    )
