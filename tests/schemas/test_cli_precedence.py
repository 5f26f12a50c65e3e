import pytest
from pydantic import ValidationError

from windiris.schemas.cli import CLIConfig
from windiris.schemas.param import ParamConfig
from windiris.schemas.resolve import resolve_config
from windiris.schemas.user import UserConfig

pytestmark = pytest.mark.unit


def test_cli_overrides_do_not_mutate_user():
    user = UserConfig.model_validate({"ROOT_DIR": "/data/a", "MAX_WORKERS": 2})
    cli = CLIConfig.model_validate({"root_dir": "/data/b"})

    internal = resolve_config(ParamConfig(), user, cli)

    # CLI should take precedence
    assert internal.root_dir == "/data/b"
    assert internal.pipeline.max_workers == 2

    # But the original user model should remain unchanged
    assert user.root_dir == "/data/a"


def test_cli_log_level_wins():
    user = UserConfig(ROOT_DIR="/data", LOG_LEVEL="WARNING")
    config = resolve_config(ParamConfig(), user, CLIConfig(log_level="DEBUG"))
    assert config.logging.level == "DEBUG"


def test_cli_max_workers_wins():
    user = UserConfig(ROOT_DIR="/data", MAX_WORKERS=2)
    config = resolve_config(ParamConfig(), user, {"max_workers": 12})
    assert config.pipeline.max_workers == 12


def test_cli_alone_can_provide_root():
    config = resolve_config(ParamConfig(), None, CLIConfig(root_dir="/data"))
    assert config.root_dir == "/data"


def test_empty_cli_has_no_overrides():
    assert CLIConfig().to_internal_overrides() == {}


def test_cli_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        CLIConfig.model_validate({"site_name": "Offshore-1"})


def test_cli_rejects_bad_log_level():
    with pytest.raises(ValidationError):
        CLIConfig(log_level="VERBOSE")
