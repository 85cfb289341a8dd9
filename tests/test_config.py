from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from config import ConfigurationSet

from scorebook.config import ApiSettings, create_config, load_api_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path="/nonexistent/scorebook.yaml")
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["api.base_url"] == "http://localhost:8000"
    assert cfg["api.retry_attempts"] == 3


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "scorebook.yaml"
    yaml_file.write_text("api:\n  base_url: http://yaml.test\n  timeout: 12.5\n")
    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["api.base_url"] == "http://yaml.test"
    assert cfg["api.timeout"] == 12.5
    # Defaults still apply for unset keys
    assert cfg["api.connect_timeout"] == 10.0


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "scorebook.yaml"
    yaml_file.write_text("api:\n  base_url: http://yaml.test\n")
    monkeypatch.setenv("SCOREBOOK__API__BASE_URL", "http://env.test")
    monkeypatch.setenv("SCOREBOOK__API__RETRY_ATTEMPTS", "5")

    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["api.base_url"] == "http://env.test"
    assert cfg["api.retry_attempts"] == "5"  # env vars are strings


def test_explicit_base_url_beats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCOREBOOK__API__BASE_URL", "http://env.test")
    cfg = create_config(yaml_path="/nonexistent/scorebook.yaml", base_url="http://cli.test")
    assert cfg["api.base_url"] == "http://cli.test"


class TestLoadApiSettings:
    def test_coerces_env_strings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCOREBOOK__API__TIMEOUT", "45")
        monkeypatch.setenv("SCOREBOOK__API__RETRY_ATTEMPTS", "5")
        settings = load_api_settings(create_config(yaml_path="/nonexistent/scorebook.yaml"))
        assert settings.timeout == 45.0
        assert settings.retry_attempts == 5

    def test_strips_trailing_slash(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/scorebook.yaml", base_url="http://scores.test/")
        assert load_api_settings(cfg) == ApiSettings(
            base_url="http://scores.test", timeout=30.0, connect_timeout=10.0, retry_attempts=3
        )
