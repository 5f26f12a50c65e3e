"""Wind iris file decoding.

- numeric: Locale-independent number parsing
- header: Columns, distance gates and first beam (block shape)
- addressing: Row stride/offset of a (distance, beam) series
- extractor: Series decoding into caller buffers
- resources: Resource enumeration from a header line
"""

from windiris.decoding.numeric import NumberFormat
from windiris.decoding.header import FileKind, FileLayout, parse_header
from windiris.decoding.addressing import RowAddress, beam_position, locate
from windiris.decoding.extractor import ReadWindow, WindIrisFileReader
from windiris.decoding.resources import Resource, ResourceCatalog, enumerate_resources

__all__ = [
    "NumberFormat",
    "FileKind",
    "FileLayout",
    "parse_header",
    "RowAddress",
    "beam_position",
    "locate",
    "ReadWindow",
    "WindIrisFileReader",
    "Resource",
    "ResourceCatalog",
    "enumerate_resources",
]
