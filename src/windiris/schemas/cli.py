"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: data root, verbosity, worker count.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field
from windiris.schemas.base import WindIrisBaseModel


class CLIConfig(WindIrisBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(root_dir="/scratch/lidar", log_level="DEBUG")

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    root_dir: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    max_workers: Optional[int] = Field(None, ge=1)

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.root_dir is not None:
            overrides["root_dir"] = str(self.root_dir)

        if self.max_workers is not None:
            overrides["pipeline"] = {"max_workers": self.max_workers}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
