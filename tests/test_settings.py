"""Tests for the configuration loader."""

from pathlib import Path

import pytest

from robots_intellect.enterprise.config.settings import get_settings


@pytest.fixture(autouse=True)
def _restore_settings_cache():
    yield
    get_settings.cache_clear()


def test_settings_load_default_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Default environment should combine base settings and dev overrides."""

    config_dir = tmp_path / "config"
    env_dir = config_dir / "environments"
    env_dir.mkdir(parents=True)

    (config_dir / "settings.yaml").write_text(
        """
        environment: dev
        api:
          prefix: /v2
        database:
          url: mongodb://base-host:27017
          name: base
        """,
        encoding="utf-8",
    )

    (env_dir / "dev.yaml").write_text(
        """
        database:
          url: mongodb://dev-host:27017
        logging:
          level: DEBUG
        """,
        encoding="utf-8",
    )

    monkeypatch.setenv("RI_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("RI_ENVIRONMENT", raising=False)

    get_settings.cache_clear()
    settings = get_settings()

    assert settings.environment == "dev"
    assert settings.api.prefix == "/v2"
    assert settings.database.url == "mongodb://dev-host:27017"
    assert settings.database.name == "base"
    assert settings.database.robots_collection == "robots"
    assert settings.logging.level == "DEBUG"


def test_settings_env_override(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Environment variables should override YAML configuration."""

    config_dir = tmp_path / "config"
    env_dir = config_dir / "environments"
    env_dir.mkdir(parents=True)

    (config_dir / "settings.yaml").write_text(
        """
        environment: prod
        database:
          enabled: true
          name: base
        auth:
          algorithm: HS256
        """,
        encoding="utf-8",
    )

    (env_dir / "prod.yaml").write_text("{}", encoding="utf-8")

    monkeypatch.setenv("RI_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("RI_ENVIRONMENT", "prod")
    monkeypatch.setenv("RI_DATABASE__NAME", "override")
    monkeypatch.setenv("RI_AUTH__AUDIENCE", "robots-api")

    get_settings.cache_clear()
    settings = get_settings()

    assert settings.environment == "prod"
    assert settings.database.enabled is True
    assert settings.database.name == "override"
    assert settings.auth.audience == "robots-api"


def test_settings_cache_clear(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Clearing the cache should re-read configuration files."""

    config_dir = tmp_path / "config"
    env_dir = config_dir / "environments"
    env_dir.mkdir(parents=True)

    (config_dir / "settings.yaml").write_text("{}", encoding="utf-8")
    (env_dir / "dev.yaml").write_text("{}", encoding="utf-8")

    monkeypatch.setenv("RI_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("RI_ENVIRONMENT", raising=False)

    get_settings.cache_clear()
    first = get_settings()

    monkeypatch.setenv("RI_ENVIRONMENT", "qa")
    (env_dir / "qa.yaml").write_text(
        "logging:\n  level: WARNING\n",
        encoding="utf-8",
    )

    get_settings.cache_clear()
    second = get_settings()

    assert first.environment == "dev"
    assert second.environment == "qa"
    assert second.logging.level == "WARNING"


def test_logging_json_flag_from_yaml_and_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The ``json`` key still drives JSON log output."""

    config_dir = tmp_path / "config"
    (config_dir / "environments").mkdir(parents=True)
    (config_dir / "settings.yaml").write_text("logging:\n  json: true\n", encoding="utf-8")

    monkeypatch.setenv("RI_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("RI_ENVIRONMENT", raising=False)

    get_settings.cache_clear()
    assert get_settings().logging.json_output is True

    monkeypatch.setenv("RI_LOGGING__JSON", "false")
    get_settings.cache_clear()
    assert get_settings().logging.json_output is False
