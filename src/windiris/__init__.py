"""`windiris` - decoder for Leosphere wind iris lidar files.

Subpackages:
- decoding: Header parsing, row addressing, value extraction, resource enumeration
- pipeline: Data source, file discovery, worker pool
- schemas: Pydantic configuration
- contracts: Error taxonomy and stage contracts
"""

__version__ = "0.1.0"
