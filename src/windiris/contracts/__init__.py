"""Decoder contracts: failure taxonomy and fail-fast stage invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate file structure and read windows
- Partial coverage is not a failure (logged, buffer left invalid)
"""

from windiris.contracts.failure import (
    ContractViolation,
    FailurePolicy,
    MissingParameter,
    RepresentationNotFound,
    RequestError,
    StructuralParseError,
)
from windiris.contracts.base import require
from windiris.contracts.header import assert_header_parsed
from windiris.contracts.window import assert_window_fits

__all__ = [
    "ContractViolation",
    "FailurePolicy",
    "MissingParameter",
    "RepresentationNotFound",
    "RequestError",
    "StructuralParseError",
    "require",
    "assert_header_parsed",
    "assert_window_fits",
]
