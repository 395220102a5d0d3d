import pytest
import yaml

from pathlib import Path

from src.predestroy.config import PreDestroyConfig, build_config, load_config
from src.predestroy.exceptions import ConfigurationError


def test_defaults():
    cfg = PreDestroyConfig(stack="web-stack")

    assert cfg.cdk_app_root == "."
    assert cfg.cdk_executable == "cdk"
    assert cfg.dry_run is False
    assert cfg.log_level == "INFO"
    # 15s x 40 polls = 10 minutes of waiting per service
    assert cfg.service_wait_delay_seconds * cfg.service_wait_max_attempts == 600
    assert cfg.entry_path == "app.ts"


def test_entry_path_prefers_full_path():
    cfg = PreDestroyConfig(stack="s", cdk_app_root="/app", cdk_app_path="/app/bin/app.ts")

    assert cfg.entry_path == "/app/bin/app.ts"


def test_entry_file_stays_relative_to_app_root():
    cfg = PreDestroyConfig(stack="s", cdk_app_root="/app/", cdk_app_file="./bin/main.ts")

    assert cfg.entry_path == "bin/main.ts"


def test_blank_stack_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        build_config(stack="   ")

    assert exc_info.value.config_key == "stack"


def test_missing_stack_rejected():
    with pytest.raises(ConfigurationError):
        load_config()


def test_file_and_path_are_mutually_exclusive():
    with pytest.raises(ConfigurationError):
        build_config(stack="s", cdk_app_file="app.ts", cdk_app_path="/app/bin/app.ts")


def test_blank_profile_becomes_none():
    assert PreDestroyConfig(stack="s", profile="").profile is None


def test_log_level_is_normalized():
    assert PreDestroyConfig(stack="s", log_level="debug").log_level == "DEBUG"

    with pytest.raises(ConfigurationError):
        build_config(stack="s", log_level="chatty")


def test_overrides_ignore_none():
    cfg = build_config({"stack": "from-file", "profile": "dev"}, stack=None, profile="prod")

    assert cfg.stack == "from-file"
    assert cfg.profile == "prod"


def test_load_config_from_yaml(tmp_path: Path):
    p = tmp_path / "predestroy.yml"
    p.write_text(
        yaml.safe_dump(
            {
                "stack": "web-stack",
                "region": "eu-west-1",
                "cdk-app-root": "/srv/infra",
                "service_wait_max_attempts": 10,
            }
        )
    )

    cfg = load_config(p, profile="ops")

    assert cfg.stack == "web-stack"
    assert cfg.region == "eu-west-1"
    assert cfg.cdk_app_root == "/srv/infra"
    assert cfg.service_wait_max_attempts == 10
    assert cfg.profile == "ops"


def test_cli_values_override_yaml(tmp_path: Path):
    p = tmp_path / "predestroy.yml"
    p.write_text(yaml.safe_dump({"stack": "from-file"}))

    assert load_config(p, stack="from-flag").stack == "from-flag"


def test_missing_yaml_file(tmp_path: Path):
    with pytest.raises(ConfigurationError) as exc_info:
        PreDestroyConfig.from_yaml(tmp_path / "nope.yml")

    assert exc_info.value.config_key == "config"


def test_non_mapping_yaml_rejected(tmp_path: Path):
    p = tmp_path / "list.yml"
    p.write_text("- a\n- b\n")

    with pytest.raises(ConfigurationError):
        PreDestroyConfig.from_yaml(p)


def test_from_env_respects_env_vars(monkeypatch):
    monkeypatch.setenv("PREDESTROY_STACK", "env-stack")
    monkeypatch.setenv("PREDESTROY_PROFILE", "ci")
    monkeypatch.setenv("PREDESTROY_CDK_APP_PATH", "/work/bin/app.ts")
    monkeypatch.setenv("PREDESTROY_DRY_RUN", "true")

    cfg = PreDestroyConfig.from_env()

    assert cfg.stack == "env-stack"
    assert cfg.profile == "ci"
    assert cfg.entry_path == "/work/bin/app.ts"
    assert cfg.dry_run is True


def test_from_env_without_stack_fails(monkeypatch):
    monkeypatch.delenv("PREDESTROY_STACK", raising=False)

    with pytest.raises(ConfigurationError):
        PreDestroyConfig.from_env()
