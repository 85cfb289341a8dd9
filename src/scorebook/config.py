from __future__ import annotations

from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

_DEFAULTS: dict[str, object] = {
    "api": {
        "base_url": "http://localhost:8000",
        "timeout": 30.0,
        "connect_timeout": 10.0,
        "retry_attempts": 3,
    },
}


@dataclass(frozen=True)
class ApiSettings:
    base_url: str
    timeout: float
    connect_timeout: float
    retry_attempts: int


def create_config(
    yaml_path: str = "scorebook.yaml",
    env_prefix: str = "SCOREBOOK",
    defaults: dict[str, object] | None = None,
    *,
    base_url: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables, e.g. ``SCOREBOOK__API__BASE_URL``.
        defaults: Default configuration values.
        base_url: Override the scoring API base URL.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if base_url is not None:
        layers.insert(0, config_from_dict({"api": {"base_url": base_url}}))

    return ConfigurationSet(*layers)


def load_api_settings(cfg: ConfigurationSet | None = None) -> ApiSettings:
    if cfg is None:
        cfg = create_config()
    return ApiSettings(
        base_url=str(cfg["api.base_url"]).rstrip("/"),
        timeout=float(str(cfg["api.timeout"])),
        connect_timeout=float(str(cfg["api.connect_timeout"])),
        retry_attempts=int(str(cfg["api.retry_attempts"])),
    )

