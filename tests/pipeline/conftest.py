import pytest

from windiris.pipeline.source import WindIrisDataSource
from windiris.schemas import ParamConfig, InternalConfig
from windiris.schemas.resolve import resolve_config


@pytest.fixture
def pipeline_config(data_root) -> InternalConfig:
    """InternalConfig rooted at the synthetic data root."""
    return resolve_config(ParamConfig(), {"ROOT_DIR": str(data_root), "MAX_WORKERS": 2}, None)


@pytest.fixture
def source(pipeline_config) -> WindIrisDataSource:
    return WindIrisDataSource(pipeline_config)


@pytest.fixture
def make_source(data_root):
    """Factory for data sources with user overrides (e.g. FAILURE_POLICY)."""
    def _make(**user_overrides):
        user_overrides.setdefault("ROOT_DIR", str(data_root))
        return WindIrisDataSource(resolve_config(ParamConfig(), user_overrides, None))

    return _make
