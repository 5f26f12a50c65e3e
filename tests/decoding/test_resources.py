import logging
from datetime import timedelta

import pytest

from windiris.contracts import StructuralParseError
from windiris.decoding.header import FileKind
from windiris.decoding.resources import (
    DISTANCE_PARAMETER,
    ResourceCatalog,
    enumerate_resources,
)
from windiris.naming import is_valid_identifier
from tests.helpers.wind_iris import AVERAGE_HEADER, RAW_HEADER

pytestmark = pytest.mark.unit


def test_average_resources_exclude_timestamp():
    resources = enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE)
    assert [r.id for r in resources] == ["WLS200_Distance", "WLS200_HWS_hub", "WLS200_Vhm"]
    assert all(r.beam is None for r in resources)
    assert resources[1].groups == ("WLS200 (avg)",)


def test_raw_resources_use_fixed_beam_labels():
    resources = enumerate_resources(RAW_HEADER, "WLS200", FileKind.RAW)
    assert len(resources) == 4 * 4
    assert [r.id for r in resources[:4]] == [
        "WLS200_3_LOS_ID", "WLS200_0_LOS_ID", "WLS200_1_LOS_ID", "WLS200_2_LOS_ID",
    ]
    assert [r.beam for r in resources if r.column == "RWS"] == [3, 0, 1, 2]
    assert resources[0].groups == ("WLS200",)


def test_header_round_trip():
    header = "Time stamp;" + ";".join(f"Value {i} (m/s)" for i in range(9))
    resources = enumerate_resources(header, "Lidar", FileKind.AVERAGE)
    assert len(resources) == 9
    assert all(is_valid_identifier(r.id) for r in resources)


def test_instrument_name_is_normalized():
    resources = enumerate_resources(AVERAGE_HEADER, "WLS 200-1", FileKind.AVERAGE)
    assert resources[0].id == "WLS_200_1_Distance"


def test_trailing_newline_is_ignored():
    resources = enumerate_resources(AVERAGE_HEADER + "\r\n", "WLS200", FileKind.AVERAGE)
    assert resources[-1].column == "Vhm"


def test_bad_header_field():
    with pytest.raises(StructuralParseError):
        enumerate_resources("Timestamp;RWS;%%", "WLS200", FileKind.RAW)


def test_resources_carry_distance_parameter_and_source():
    resource = enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE,
                                   file_source="WLS200;average",
                                   sample_period=timedelta(minutes=10))[0]
    assert resource.parameters == {"d": DISTANCE_PARAMETER}
    assert resource.parameters["d"] == {
        "type": "input-integer",
        "label": "Distance / m",
        "default": 0,
        "minimum": 0,
        "maximum": 10000,
    }
    assert resource.file_source == "WLS200;average"
    assert resource.sample_period == timedelta(minutes=10)


def test_parameter_descriptors_are_not_shared():
    a, b = enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE)[:2]
    a.parameters["d"]["default"] = 50
    assert b.parameters["d"]["default"] == 0
    assert DISTANCE_PARAMETER["default"] == 0


class TestResourceCatalog:

    def test_merge_keeps_order(self):
        catalog = ResourceCatalog("/WIND")
        catalog.merge(enumerate_resources(RAW_HEADER, "WLS200", FileKind.RAW))
        catalog.merge(enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE))

        assert len(catalog) == 16 + 3
        assert catalog.resources[0].id == "WLS200_3_LOS_ID"
        assert catalog.resources[-1].id == "WLS200_Vhm"

    def test_duplicate_ids_new_wins(self, caplog):
        catalog = ResourceCatalog("/WIND", enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE,
                                                              file_source="old"))
        with caplog.at_level(logging.WARNING):
            catalog.merge(enumerate_resources(AVERAGE_HEADER, "WLS200", FileKind.AVERAGE,
                                              file_source="new"))

        assert len(catalog) == 3
        assert catalog.find("WLS200_HWS_hub").file_source == "new"
        assert "Duplicate resource id WLS200_HWS_hub" in caplog.text

    def test_find_unknown(self):
        catalog = ResourceCatalog("/WIND")
        with pytest.raises(KeyError, match="WLS200_RWS"):
            catalog.find("WLS200_RWS")
        assert "WLS200_RWS" not in catalog
