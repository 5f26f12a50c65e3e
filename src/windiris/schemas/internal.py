"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that reading code depends on.
"""

from pathlib import Path
from typing import Literal
from pydantic import Field, ConfigDict, field_validator
from windiris.schemas.base import WindIrisBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalReaderConfig(WindIrisBaseModel):
    """Runtime reader configuration."""
    decimal_separator: str = Field(min_length=1, max_length=1)
    group_separator: str = Field(max_length=1)
    encoding: str
    status_policy: Literal["window", "sample"]


class InternalPipelineConfig(WindIrisBaseModel):
    """Runtime worker pool configuration."""
    max_workers: int = Field(ge=1, le=64)
    failure_policy: Literal["fail_fast", "skip_file"]
    queue_size: int = Field(ge=1)


class InternalLoggingConfig(WindIrisBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(WindIrisBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.max_workers = config.pipeline.max_workers  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code

    All of that happens during config resolution.
    """

    root_dir: str = Field(min_length=1)
    catalog_config: str
    reader: InternalReaderConfig
    pipeline: InternalPipelineConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    @field_validator("root_dir", mode="before")
    @classmethod
    def stringify_root(cls, v):
        if isinstance(v, Path):
            return str(v)
        return v

    @property
    def root_path(self) -> Path:
        return Path(self.root_dir)

    @property
    def catalog_config_path(self) -> Path:
        """Location of the catalog description inside the data root."""
        return self.root_path / self.catalog_config
