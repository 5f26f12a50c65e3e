"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., ROOT_DIR → root_dir, MAX_WORKERS → pipeline.max_workers).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Unknown keys are ignored so that a
config file can carry settings for other tools.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from windiris.schemas.base import WindIrisBaseModel


class UserReaderConfig(WindIrisBaseModel):
    """User-facing reader config."""
    decimal_separator: Optional[str] = None
    group_separator: Optional[str] = None
    encoding: Optional[str] = None
    status_policy: Optional[str] = None

    @field_validator("status_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserPipelineConfig(WindIrisBaseModel):
    """User-facing pipeline config."""
    max_workers: Optional[int] = None
    failure_policy: Optional[str] = None
    queue_size: Optional[int] = None

    @field_validator("failure_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserConfig(WindIrisBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            ROOT_DIR="/data/lidar",
            MAX_WORKERS=8,
            DECIMAL_SEPARATOR=",",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level settings
    root_dir: Optional[str] = Field(None, alias="ROOT_DIR")
    catalog_config: Optional[str] = Field(None, alias="CATALOG_CONFIG")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")

    # Reader settings (flat aliases)
    decimal_separator: Optional[str] = Field(None, alias="DECIMAL_SEPARATOR")
    group_separator: Optional[str] = Field(None, alias="GROUP_SEPARATOR")
    encoding: Optional[str] = Field(None, alias="ENCODING")
    status_policy: Optional[str] = Field(None, alias="STATUS_POLICY")

    # Pipeline settings (flat aliases)
    max_workers: Optional[int] = Field(None, alias="MAX_WORKERS")
    failure_policy: Optional[str] = Field(None, alias="FAILURE_POLICY")
    queue_size: Optional[int] = Field(None, alias="QUEUE_SIZE")

    # Nested overrides (advanced users)
    reader: Optional[UserReaderConfig] = None
    pipeline: Optional[UserPipelineConfig] = None

    model_config = WindIrisBaseModel.model_config.copy()
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("status_policy", "failure_policy", mode="before")
    @classmethod
    def normalize_policy_names(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.root_dir is not None:
            overrides["root_dir"] = str(self.root_dir)
        if self.catalog_config is not None:
            overrides["catalog_config"] = self.catalog_config
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        # Reader section
        reader = {}
        if self.decimal_separator is not None:
            reader["decimal_separator"] = self.decimal_separator
        if self.group_separator is not None:
            reader["group_separator"] = self.group_separator
        if self.encoding is not None:
            reader["encoding"] = self.encoding
        if self.status_policy is not None:
            reader["status_policy"] = self.status_policy

        # Merge with explicit reader config
        if self.reader is not None:
            reader.update(self.reader.model_dump(exclude_none=True))

        if reader:
            overrides["reader"] = reader

        # Pipeline section
        pipeline = {}
        if self.max_workers is not None:
            pipeline["max_workers"] = self.max_workers
        if self.failure_policy is not None:
            pipeline["failure_policy"] = self.failure_policy
        if self.queue_size is not None:
            pipeline["queue_size"] = self.queue_size

        if self.pipeline is not None:
            pipeline.update(self.pipeline.model_dump(exclude_none=True))

        if pipeline:
            overrides["pipeline"] = pipeline

        return overrides
