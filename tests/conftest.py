"""Root-level pytest fixtures for the windiris test suite.

Provides shared configuration fixtures following the Pydantic-based
configuration layers, and a temporary data root holding a catalog
description plus synthetic wind iris files.
"""

import json
from datetime import datetime

import pytest

from windiris.schemas import ParamConfig, UserConfig, resolve_config
from tests.helpers.wind_iris import CATALOG_DESCRIPTION, average_lines, raw_lines, write_lines

DAY = datetime(2021, 1, 1)


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config, tmp_path):
    """Fully validated runtime configuration rooted at ``tmp_path``."""
    return resolve_config(param_config, {"ROOT_DIR": str(tmp_path)}, None)


@pytest.fixture
def make_config(param_config, tmp_path):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs; the data
    root defaults to ``tmp_path``.

    Examples
    --------
    >>> def test_workers(make_config):
    ...     config = make_config(MAX_WORKERS=2)
    ...     assert config.pipeline.max_workers == 2
    """
    def _make(**user_overrides):
        user_overrides.setdefault("ROOT_DIR", str(tmp_path))
        return resolve_config(param_config, UserConfig(**user_overrides), None)

    return _make


# =============================================================================
# Data Root Fixtures
# =============================================================================

@pytest.fixture
def data_root(tmp_path):
    """Data root with config.json, one 10 minute raw file and one daily average file.

    The raw file starts at beam 3 and holds 150 samples at 4 s; the average
    file holds 144 samples at 10 min.
    """
    (tmp_path / "config.json").write_text(json.dumps(CATALOG_DESCRIPTION), encoding="utf-8")

    write_lines(tmp_path / "2021-01" / "WLS200_real_time_2021-01-01_00-00-00.csv",
                raw_lines(DAY, 150, first_beam=3))
    write_lines(tmp_path / "2021-01" / "WLS200_average_2021-01-01.csv",
                average_lines(DAY, 144), trailing_blank=1)
    return tmp_path
