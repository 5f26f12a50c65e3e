"""Pipeline modules.

- file_index: File slots and read windows of a time range
- source: Data source (catalogs and reads)
- processor: Read worker thread
- orchestrator: Worker pool controller
"""

from windiris.pipeline.file_index import FileReadPlan, FileSourceIndex
from windiris.pipeline.source import ReadRequest, WindIrisDataSource, create_buffers
from windiris.pipeline.processor import ReadJob, ReadOutcome, ReadProcessor
from windiris.pipeline.orchestrator import ReadOrchestrator, configure_logging

__all__ = [
    "FileReadPlan",
    "FileSourceIndex",
    "ReadRequest",
    "WindIrisDataSource",
    "create_buffers",
    "ReadJob",
    "ReadOutcome",
    "ReadProcessor",
    "ReadOrchestrator",
    "configure_logging",
]
