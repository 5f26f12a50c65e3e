"""Catalog description: which wind iris files make up which catalog.

The description lives as ``config.json`` in the data root and maps a catalog
id onto its file sources::

    {
      "/WIND/LIDAR/NACELLE": {
        "FileSources": [
          {
            "Name": "WLS200;real_time",
            "PathSegments": ["DATA", "%Y-%m"],
            "FileTemplate": "WLS200_real_time_%Y-%m-%d_%H-%M-%S.csv",
            "FilePeriod": "00:10:00",
            "UtcOffset": "00:00:00",
            "CustomParameters": {"SamplePeriod": "00:00:04"}
          }
        ]
      }
    }

Path segments and file templates are ``strftime`` patterns. Durations are
written ``hh:mm:ss`` (optionally ``d.hh:mm:ss``).
"""

import json
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from windiris.schemas.base import WindIrisBaseModel

__all__ = ['FileSourceConfig', 'CatalogDescription', 'parse_duration', 'load_catalog_config']

_DURATION = re.compile(r"^(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2}(?:\.\d+)?)$")


def parse_duration(value) -> timedelta:
    """Parse ``[d.]hh:mm:ss[.fff]`` into a timedelta.

    Examples
    --------
    >>> parse_duration("00:10:00")
    datetime.timedelta(seconds=600)
    >>> parse_duration("1.00:00:00")
    datetime.timedelta(days=1)
    """
    if isinstance(value, timedelta):
        return value
    match = _DURATION.match(str(value).strip())
    if match is None:
        raise ValueError(f"Invalid duration {value!r}, expected [d.]hh:mm:ss")
    return timedelta(
        days=int(match.group("days") or 0),
        hours=int(match.group("hours")),
        minutes=int(match.group("minutes")),
        seconds=float(match.group("seconds")),
    )


class FileSourceConfig(WindIrisBaseModel):
    """One group of equally shaped files of a single instrument and mode."""

    name: str = Field(alias="Name")
    path_segments: list[str] = Field(default_factory=list, alias="PathSegments")
    file_template: str = Field(alias="FileTemplate")
    file_period: timedelta = Field(alias="FilePeriod")
    utc_offset: timedelta = Field(timedelta(0), alias="UtcOffset")
    catalog_source_files: Optional[list[str]] = Field(None, alias="CatalogSourceFiles")
    custom_parameters: dict[str, Any] = Field(alias="CustomParameters")
    sample_period: timedelta

    model_config = WindIrisBaseModel.model_config.copy()
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @model_validator(mode="before")
    @classmethod
    def lift_sample_period(cls, data):
        """Expose ``CustomParameters.SamplePeriod`` as a typed field."""
        if isinstance(data, dict) and "sample_period" not in data:
            custom = data.get("CustomParameters", data.get("custom_parameters"))
            if not isinstance(custom, dict) or "SamplePeriod" not in custom:
                raise ValueError("CustomParameters.SamplePeriod is required")
            data = {**data, "sample_period": custom["SamplePeriod"]}
        return data

    @field_validator("file_period", "utc_offset", "sample_period", mode="before")
    @classmethod
    def coerce_duration(cls, v):
        return parse_duration(v)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if len(v.split(";")) != 2 or not all(v.split(";")):
            raise ValueError(f"File source name {v!r} must read '<instrument>;<mode>'")
        return v

    @model_validator(mode="after")
    def check_periods(self):
        if self.sample_period <= timedelta(0):
            raise ValueError("SamplePeriod must be positive")
        if self.file_period <= timedelta(0):
            raise ValueError("FilePeriod must be positive")
        if self.file_period % self.sample_period:
            raise ValueError("FilePeriod must be a multiple of SamplePeriod")
        return self

    @property
    def instrument(self) -> str:
        return self.name.split(";")[0]

    @property
    def mode(self) -> str:
        return self.name.split(";")[1]

    @property
    def file_length(self) -> int:
        """Samples held by one complete file."""
        return self.file_period // self.sample_period


class CatalogDescription(WindIrisBaseModel):
    """All file sources of one catalog."""

    file_sources: list[FileSourceConfig] = Field(alias="FileSources")

    model_config = WindIrisBaseModel.model_config.copy()
    model_config.update({"populate_by_name": True, "extra": "ignore"})


_CATALOGS = TypeAdapter(dict[str, CatalogDescription])


def load_catalog_config(path: Union[str, Path]) -> dict[str, CatalogDescription]:
    """Read and validate a catalog description file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ValidationError
        If the content does not describe valid catalogs.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog description not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    return _CATALOGS.validate_python(raw)
