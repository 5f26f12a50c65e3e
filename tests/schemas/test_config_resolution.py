"""Tests for configuration resolution (Param < User < CLI)."""

import pytest
from pydantic import ValidationError

from windiris.schemas import CLIConfig, InternalConfig, ParamConfig, UserConfig, resolve_config
from windiris.schemas.resolve import deep_merge

pytestmark = pytest.mark.unit


def test_defaults_flow_into_internal_config():
    config = resolve_config(ParamConfig(), {"ROOT_DIR": "/data/lidar"})

    assert isinstance(config, InternalConfig)
    assert config.root_dir == "/data/lidar"
    assert config.catalog_config == "config.json"
    assert config.reader.decimal_separator == "."
    assert config.reader.group_separator == ""
    assert config.reader.encoding == "utf-8"
    assert config.reader.status_policy == "window"
    assert config.pipeline.max_workers == 4
    assert config.pipeline.failure_policy == "fail_fast"
    assert config.pipeline.queue_size == 100
    assert config.logging.level == "INFO"


def test_root_dir_is_required():
    with pytest.raises(ValueError, match="root_dir"):
        resolve_config(ParamConfig())


def test_root_dir_from_param_layer():
    config = resolve_config(ParamConfig(root_dir="/srv/lidar"))
    assert config.root_dir == "/srv/lidar"


def test_user_overrides_param():
    user = UserConfig(ROOT_DIR="/data", MAX_WORKERS=8, FAILURE_POLICY="skip_file")
    config = resolve_config(ParamConfig(), user)

    assert config.pipeline.max_workers == 8
    assert config.pipeline.failure_policy == "skip_file"
    assert config.pipeline.queue_size == 100


def test_internal_config_is_frozen(internal_config):
    with pytest.raises(ValidationError):
        internal_config.root_dir = "/elsewhere"


def test_catalog_config_path(make_config, tmp_path):
    config = make_config(CATALOG_CONFIG="catalogs.json")
    assert config.catalog_config_path == tmp_path / "catalogs.json"


def test_invalid_worker_count_rejected():
    with pytest.raises(ValidationError):
        resolve_config(ParamConfig(), {"ROOT_DIR": "/data", "MAX_WORKERS": 0})


def test_invalid_status_policy_rejected():
    with pytest.raises(ValidationError):
        resolve_config(ParamConfig(), {"ROOT_DIR": "/data", "STATUS_POLICY": "per_row"})


def test_param_dict_is_accepted():
    config = resolve_config({"root_dir": "/data", "pipeline": {"max_workers": 2}})
    assert config.pipeline.max_workers == 2
    assert config.pipeline.failure_policy == "fail_fast"


def test_unknown_param_key_rejected():
    with pytest.raises(ValidationError):
        ParamConfig.model_validate({"reader": {"delimiter": ","}})


def test_deep_merge_nested():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    override = {"b": {"d": 4, "e": 5}, "f": 6}
    assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
