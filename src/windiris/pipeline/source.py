"""Wind iris data source: catalogs from header files, reads across files.

The source combines the catalog description (which files exist and how they
are named) with the file decoder. A read request names one resource and its
distance parameter; the source walks every file slot of the requested time
range and lets the decoder fill the request's slice of the buffers.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from windiris.contracts import FailurePolicy, RequestError, StructuralParseError, require
from windiris.decoding.extractor import ReadWindow, WindIrisFileReader
from windiris.decoding.header import FileKind
from windiris.decoding.resources import Resource, ResourceCatalog, enumerate_resources
from windiris.pipeline.file_index import FileSourceIndex, as_utc
from windiris.schemas import InternalConfig, resolve_distance
from windiris.schemas.catalog import CatalogDescription, FileSourceConfig, load_catalog_config

__all__ = ['ReadRequest', 'WindIrisDataSource', 'create_buffers']

logger = logging.getLogger(__name__)


def create_buffers(sample_period: timedelta, begin: datetime, end: datetime) -> tuple[np.ndarray, np.ndarray]:
    """Allocate zeroed data (float64) and status (uint8) buffers for a range."""
    length = (as_utc(end) - as_utc(begin)) // sample_period
    if length < 0:
        raise ValueError("End is before begin")
    return np.zeros(length, dtype=np.float64), np.zeros(length, dtype=np.uint8)


@dataclass
class ReadRequest:
    """One resource to read, with its parameters and output buffers."""
    catalog_id: str
    resource: Resource
    data: np.ndarray
    status: np.ndarray
    parameters: dict = field(default_factory=dict)


class WindIrisDataSource:
    """Catalog and read access to a directory of wind iris files.

    Parameters
    ----------
    config : InternalConfig
        Resolved runtime configuration (data root, reader and pipeline settings).
    catalogs : dict, optional
        Pre-validated catalog descriptions. Read from
        ``config.catalog_config_path`` when omitted.

    Examples
    --------
    >>> source = WindIrisDataSource(config)
    >>> catalog = source.get_catalog("/WIND/LIDAR")
    >>> resource = catalog.find("WLS200_0_RWS")
    >>> data, status = create_buffers(resource.sample_period, begin, end)
    >>> source.read(begin, end, [ReadRequest("/WIND/LIDAR", resource, data, status, {"d": 220})])
    """

    def __init__(self, config: InternalConfig,
                 catalogs: Optional[dict[str, CatalogDescription]] = None):
        self.config = config
        self.root = config.root_path
        self.catalogs = catalogs if catalogs is not None else load_catalog_config(config.catalog_config_path)
        self.reader = WindIrisFileReader.from_config(config)
        self.failure_policy = FailurePolicy(config.pipeline.failure_policy)

        self._catalog_cache: dict[str, ResourceCatalog] = {}
        self._lock = threading.Lock()

        logger.info("Data source at %s: %d catalog(s)", self.root, len(self.catalogs))

    # ------------------------------------------------------------------
    # Catalogs
    # ------------------------------------------------------------------

    def get_catalog_ids(self) -> list[str]:
        return list(self.catalogs)

    def find_file_source(self, catalog_id: str, name: str) -> FileSourceConfig:
        """Return the file source ``name`` of catalog ``catalog_id``."""
        try:
            description = self.catalogs[catalog_id]
        except KeyError:
            raise KeyError(f"Unknown catalog '{catalog_id}'") from None

        for file_source in description.file_sources:
            if file_source.name == name:
                return file_source
        raise KeyError(f"Catalog '{catalog_id}' has no file source '{name}'")

    def header_files(self, file_source: FileSourceConfig) -> list[Path]:
        """Files whose header line defines the resources of ``file_source``."""
        if file_source.catalog_source_files is not None:
            return [self.root / entry for entry in file_source.catalog_source_files if entry.strip()]

        candidates = sorted(p for p in self.root.rglob(f"*{file_source.mode}*.csv") if p.is_file())
        return candidates[:1]

    def read_header_line(self, path: Path) -> str:
        with open(path, "r", encoding=self.reader.encoding, errors="replace") as f:
            return f.readline()

    def get_catalog(self, catalog_id: str, cancel_event: Optional[threading.Event] = None) -> ResourceCatalog:
        """Build (once) and return the resource catalog of ``catalog_id``.

        Raises
        ------
        KeyError
            If ``catalog_id`` is not configured.
        StructuralParseError
            If a header line cannot be parsed.
        """
        with self._lock:
            if catalog_id in self._catalog_cache:
                return self._catalog_cache[catalog_id]

        if catalog_id not in self.catalogs:
            raise KeyError(f"Unknown catalog '{catalog_id}'")

        catalog = ResourceCatalog(catalog_id)

        for file_source in self.catalogs[catalog_id].file_sources:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Catalog build of %s cancelled", catalog_id)
                return catalog

            kind = FileKind.from_mode(file_source.mode)
            paths = self.header_files(file_source)
            if not paths:
                logger.warning("No header file found for file source %s under %s",
                               file_source.name, self.root)
                continue

            for path in paths:
                resources = enumerate_resources(
                    self.read_header_line(path),
                    instrument=file_source.instrument,
                    kind=kind,
                    file_source=file_source.name,
                    sample_period=file_source.sample_period,
                )
                catalog.merge(resources)

        logger.info("Catalog %s: %d resources", catalog_id, len(catalog))

        with self._lock:
            self._catalog_cache[catalog_id] = catalog
        return catalog

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_single(self, path: Path, request: ReadRequest, window: ReadWindow, buffer_offset: int = 0) -> int:
        """Decode one file into the request's buffers.

        Returns
        -------
        int
            Number of samples marked valid.
        """
        resource = request.resource
        distance = resolve_distance(request.parameters)
        return self.reader.read_into(
            path,
            kind=resource.kind,
            column=resource.column,
            distance=distance,
            beam=resource.beam,
            window=window,
            data=request.data,
            status=request.status,
            buffer_offset=buffer_offset,
        )

    def read(self, begin: datetime, end: datetime, requests: Iterable[ReadRequest],
             cancel_event: Optional[threading.Event] = None) -> None:
        """Fill every request's buffers with samples of ``[begin, end)``.

        Files missing from disk leave their slice at zero/invalid. Decode
        errors of a single file follow the configured failure policy;
        request errors always propagate.

        Raises
        ------
        MissingParameter
            If a request lacks a valid distance parameter.
        RepresentationNotFound
            If a resource column is missing from a file header.
        StructuralParseError
            If a file cannot be decoded and the policy is ``fail_fast``.
        """
        for request in requests:
            resource = request.resource
            resolve_distance(request.parameters)
            require(resource.file_source is not None,
                    f"Resource {resource.id} is not bound to a file source", RequestError)

            file_source = self.find_file_source(request.catalog_id, resource.file_source)
            index = FileSourceIndex(self.root, file_source)

            for plan in index.plans(begin, end):
                if cancel_event is not None and cancel_event.is_set():
                    logger.info("Read of %s cancelled", resource.id)
                    return

                if not plan.path.exists():
                    logger.debug("File %s does not exist, skipping", plan.path)
                    continue

                try:
                    valid = self.read_single(plan.path, request, plan.window, plan.buffer_offset)
                except (StructuralParseError, OSError) as e:
                    if self.failure_policy is FailurePolicy.SKIP_FILE:
                        logger.warning("Skipping %s for %s: %s", plan.path.name, resource.id, e)
                        continue
                    raise

                logger.debug("%s: %d/%d samples from %s", resource.id, valid,
                             plan.window.file_block, plan.path.name)
