"""Pydantic configuration schemas for windiris.

This module provides strictly typed configuration models for the wind iris
reader. All configuration validation, coercion, and normalization happens at
schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
CatalogDescription, FileSourceConfig : class
    Catalog description read from ``config.json``
"""

from windiris.schemas.resolve import resolve_config, load_user_config_dict
from windiris.schemas.internal import InternalConfig
from windiris.schemas.param import ParamConfig
from windiris.schemas.user import UserConfig
from windiris.schemas.cli import CLIConfig
from windiris.schemas.catalog import CatalogDescription, FileSourceConfig, load_catalog_config
from windiris.schemas.request import ReadParameters, resolve_distance

__all__ = [
    'resolve_config',
    'load_user_config_dict',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
    'CatalogDescription',
    'FileSourceConfig',
    'load_catalog_config',
    'ReadParameters',
    'resolve_distance',
]
