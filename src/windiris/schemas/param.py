"""ParamConfig: Expert defaults for the windiris reader.

This module defines the complete default configuration. ALL reader and
pipeline parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from windiris.schemas.base import WindIrisBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(WindIrisBaseModel):
    """Wind iris file reader configuration."""
    decimal_separator: str = Field(".", min_length=1, max_length=1)
    group_separator: str = Field("", max_length=1)
    encoding: str = "utf-8"
    status_policy: Literal["window", "sample"] = "window"

    @field_validator("encoding", mode="before")
    @classmethod
    def normalize_encoding(cls, v):
        """Normalize encoding names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class PipelineConfig(WindIrisBaseModel):
    """Worker pool configuration."""
    max_workers: int = Field(4, ge=1, le=64, description="Number of reader threads")
    failure_policy: Literal["fail_fast", "skip_file"] = "fail_fast"
    queue_size: int = Field(100, ge=1, description="Capacity of the request queue")


class LoggingConfig(WindIrisBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(WindIrisBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all reader parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    root_dir: Optional[str] = None
    catalog_config: str = "config.json"
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
