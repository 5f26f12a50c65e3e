"""Validation of per-read request parameters."""

import re
from typing import Any, Mapping, Optional

from pydantic import Field, StrictInt, ValidationError, field_validator

from windiris.schemas.base import WindIrisBaseModel
from windiris.contracts.failure import MissingParameter

__all__ = ['ReadParameters', 'resolve_distance']

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

DISTANCE_MIN = 0
DISTANCE_MAX = 10000


class ReadParameters(WindIrisBaseModel):
    """Parameters accepted by a read: the distance gate ``d`` in meters.

    ``d`` is an integer or a string of ASCII digits; booleans and floats
    (``220.0`` included) are rejected.
    """
    d: StrictInt = Field(ge=DISTANCE_MIN, le=DISTANCE_MAX)

    model_config = WindIrisBaseModel.model_config.copy()
    model_config.update({"extra": "ignore"})

    @field_validator("d", mode="before")
    @classmethod
    def parse_digit_string(cls, v):
        if isinstance(v, str) and _INTEGER_TEXT.fullmatch(v.strip()):
            return int(v.strip())
        return v


def resolve_distance(parameters: Optional[Mapping[str, Any]]) -> int:
    """Return the requested distance.

    Raises
    ------
    MissingParameter
        If ``d`` is absent, not an integer, or outside 0..10000.

    Examples
    --------
    >>> resolve_distance({"d": "220"})
    220
    """
    try:
        return ReadParameters.model_validate(dict(parameters or {})).d
    except ValidationError as e:
        if all(err["type"] in ("greater_than_equal", "less_than_equal") for err in e.errors()):
            raise MissingParameter(
                f"The data resource parameter 'd' (distance) must lie within "
                f"{DISTANCE_MIN}..{DISTANCE_MAX}"
            ) from e
        raise MissingParameter("The data resource parameter 'd' (distance) is required") from e
