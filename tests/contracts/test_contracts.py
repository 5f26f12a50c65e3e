"""Tests for decoding contracts.

These tests verify that contracts are enforced at stage boundaries.
They test contract violations directly, without defensive logic downstream.
"""

import pytest

from windiris.contracts import (
    ContractViolation,
    FailurePolicy,
    MissingParameter,
    RepresentationNotFound,
    RequestError,
    StructuralParseError,
    assert_header_parsed,
    assert_window_fits,
    require,
)
from windiris.decoding.extractor import ReadWindow
from windiris.decoding.header import FileKind, FileLayout

pytestmark = pytest.mark.unit


class TestTaxonomy:
    """Request errors and structural errors stay distinguishable."""

    def test_request_errors_are_value_errors(self):
        assert issubclass(MissingParameter, RequestError)
        assert issubclass(RepresentationNotFound, RequestError)
        assert issubclass(RequestError, ValueError)

    def test_structural_errors_are_contract_violations(self):
        assert issubclass(StructuralParseError, ContractViolation)
        assert not issubclass(StructuralParseError, ValueError)

    def test_failure_policy_values(self):
        assert FailurePolicy("fail_fast") is FailurePolicy.FAIL_FAST
        assert FailurePolicy("skip_file") is FailurePolicy.SKIP_FILE


class TestRequire:

    def test_passes(self):
        require(True, "never raised")

    def test_default_exception(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")

    def test_custom_exception(self):
        with pytest.raises(StructuralParseError):
            require(False, "broken", StructuralParseError)


class TestHeaderContract:
    """Test header stage contract."""

    def test_valid_average_layout(self):
        assert_header_parsed(FileLayout(FileKind.AVERAGE, ("t", "Distance"), (50, 80)))

    def test_valid_raw_layout(self):
        assert_header_parsed(FileLayout(FileKind.RAW, ("t", "LOS_ID", "Distance"), (50,), first_beam=0))

    def test_fails_without_gates(self):
        with pytest.raises(StructuralParseError, match="no distance gates"):
            assert_header_parsed(FileLayout(FileKind.AVERAGE, ("t", "Distance"), ()))

    def test_accepts_unordered_gates(self):
        assert_header_parsed(FileLayout(FileKind.AVERAGE, ("t", "Distance"), (50, 80, 70)))

    def test_fails_without_data_columns(self):
        with pytest.raises(StructuralParseError, match="column"):
            assert_header_parsed(FileLayout(FileKind.AVERAGE, ("t",), (50,)))

    def test_raw_needs_first_beam(self):
        with pytest.raises(StructuralParseError, match="first beam"):
            assert_header_parsed(FileLayout(FileKind.RAW, ("t", "Distance"), (50,)))


class TestWindowContract:
    """Test read window contract."""

    def test_window_inside_buffers(self):
        assert_window_fits(ReadWindow(10, 20, 150), data_len=30, status_len=30, buffer_offset=10)

    def test_empty_window(self):
        assert_window_fits(ReadWindow(0, 0, 150), data_len=0, status_len=0, buffer_offset=0)

    def test_negative_extent(self):
        with pytest.raises(ContractViolation, match="negative"):
            assert_window_fits(ReadWindow(-1, 10, 150), 100, 100, 0)

    def test_window_beyond_file(self):
        with pytest.raises(ContractViolation, match="exceed file length"):
            assert_window_fits(ReadWindow(140, 20, 150), 100, 100, 0)

    def test_status_buffer_too_short(self):
        with pytest.raises(ContractViolation, match="status=10"):
            assert_window_fits(ReadWindow(0, 20, 150), 20, 10, 0)
