"""Resource enumeration from a wind iris header line.

A resource is one addressable time series:

- average files: ``<instrument>_<column>``
- raw files:     ``<instrument>_<beam>_<column>`` for beams 3, 0, 1, 2

The distance gate is not part of the identifier. It is supplied per read as
the integer parameter ``d``, so one resource spans all gates. Beam labels
here are fixed; the file's actual beam rotation is resolved at read time.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Optional

from windiris.naming import join_identifier, normalize
from windiris.decoding.header import BEAM_COUNT, FileKind, parse_columns

__all__ = [
    'DISTANCE_PARAMETER',
    'distance_parameters',
    'Resource',
    'ResourceCatalog',
    'enumerate_resources',
]

logger = logging.getLogger(__name__)

DISTANCE_PARAMETER = {
    "type": "input-integer",
    "label": "Distance / m",
    "default": 0,
    "minimum": 0,
    "maximum": 10000,
}


def distance_parameters() -> dict:
    """Parameter descriptor map attached to every resource."""
    return {"d": dict(DISTANCE_PARAMETER)}


@dataclass(frozen=True)
class Resource:
    """One addressable series of a wind iris file source."""
    id: str
    instrument: str
    kind: FileKind
    column: str
    beam: Optional[int] = None
    file_source: Optional[str] = None
    sample_period: Optional[timedelta] = None
    groups: tuple[str, ...] = ()
    parameters: dict = field(default_factory=distance_parameters, compare=False)


def enumerate_resources(
    header_line: str,
    instrument: str,
    kind: FileKind,
    file_source: Optional[str] = None,
    sample_period: Optional[timedelta] = None,
) -> list[Resource]:
    """Derive all resources exposed by a file from its header line.

    Parameters
    ----------
    header_line : str
        First line of a file of the file source.
    instrument : str
        Instrument name (normalized into the identifier).
    kind : FileKind
        File family; raw files expose one resource per beam.
    file_source : str, optional
        Name of the owning file source, kept as a resource property.
    sample_period : timedelta, optional
        Sample period of the file source.

    Returns
    -------
    list of Resource
        Column-major order; for raw files beams 3, 0, 1, 2 per column.

    Raises
    ------
    StructuralParseError
        If a header field cannot be normalized.

    Examples
    --------
    >>> [r.id for r in enumerate_resources("Timestamp;Distance;HWS hub", "Lidar", FileKind.AVERAGE)]
    ['Lidar_Distance', 'Lidar_HWS_hub']
    """
    instrument = normalize(instrument)
    columns = parse_columns(header_line.rstrip("\r\n"))[1:]

    resources = []
    for column in columns:
        if kind is FileKind.RAW:
            for i in range(BEAM_COUNT):
                beam = (i + 3) % BEAM_COUNT
                resources.append(Resource(
                    id=join_identifier(instrument, beam, column),
                    instrument=instrument,
                    kind=kind,
                    column=column,
                    beam=beam,
                    file_source=file_source,
                    sample_period=sample_period,
                    groups=(instrument,),
                ))
        else:
            resources.append(Resource(
                id=join_identifier(instrument, column),
                instrument=instrument,
                kind=kind,
                column=column,
                file_source=file_source,
                sample_period=sample_period,
                groups=(f"{instrument} (avg)",),
            ))

    return resources


class ResourceCatalog:
    """Ordered, id-unique collection of resources for one catalog id."""

    def __init__(self, catalog_id: str, resources: Iterable[Resource] = ()):
        self.id = catalog_id
        self._resources: dict[str, Resource] = {}
        self.merge(resources)

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources.values())

    def merge(self, resources: Iterable[Resource]) -> "ResourceCatalog":
        """Add resources; on duplicate ids the new resource wins."""
        for resource in resources:
            if resource.id in self._resources:
                logger.warning("Duplicate resource id %s in catalog %s, keeping the newer one",
                               resource.id, self.id)
            self._resources[resource.id] = resource
        return self

    def find(self, resource_id: str) -> Resource:
        """Return the resource with ``resource_id``.

        Raises
        ------
        KeyError
            If the catalog has no such resource.
        """
        try:
            return self._resources[resource_id]
        except KeyError:
            raise KeyError(f"Resource '{resource_id}' not found in catalog '{self.id}'") from None

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._resources
