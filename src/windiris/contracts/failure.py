"""Centralized failure taxonomy for the wind iris decoder.

Hard failures raise one of the exceptions below. Partial coverage
(incomplete file, distance missing from a file's gate list) is not a
failure: it leaves the output buffer zeroed and invalid and is logged.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """Failure policy for per-file decode errors during a time-range read.

    FAIL_FAST (default): Raise immediately, the whole request fails
    SKIP_FILE: Log a warning, leave that file's slice invalid, continue
    """
    FAIL_FAST = "fail_fast"
    SKIP_FILE = "skip_file"


class ContractViolation(RuntimeError):
    """Raised when a decoding stage does not produce its promised invariants.

    Key distinction:
    - ValueError: User/config error (handled by Pydantic)
    - RequestError: Unresolvable read request (bad parameter or column)
    - ContractViolation: File structure or decoder invariant broken
    """
    pass


class StructuralParseError(ContractViolation):
    """A file cannot be decoded: bad header field, no data lines, bad row."""
    pass


class RequestError(ValueError):
    """A read request cannot be served regardless of file content."""
    pass


class MissingParameter(RequestError):
    """The required distance parameter ``d`` is absent or not an integer."""
    pass


class RepresentationNotFound(RequestError):
    """The requested column does not exist in the file header."""
    pass
