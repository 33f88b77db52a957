"""Unified configuration system for the Robots Intellect API.

This module centralises application settings using :mod:`pydantic-settings`.
Configuration values are assembled from (in order of precedence):

1. Explicit keyword arguments when instantiating :class:`AppSettings`.
2. Environment variables prefixed with ``RI_`` (supports nested fields using ``__``).
3. A ``.env`` file located at the project root.
4. YAML configuration files: ``config/settings.yaml`` (base) and
   ``config/environments/<environment>.yaml`` (environment-specific overrides).

All sources are deeply merged, so an environment file only needs to carry the
values it changes.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import AliasChoices, BaseModel, Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
	"ApiSettings",
	"DatabaseSettings",
	"AuthSettings",
	"TelemetrySettings",
	"LoggingSettings",
	"AppSettings",
	"get_settings",
]


_ENVIRONMENT_VAR = "RI_ENVIRONMENT"
_CONFIG_DIR_ENV_VAR = "RI_CONFIG_DIR"


def _project_root() -> Path:
	"""Return the absolute project root directory."""

	return Path(__file__).resolve().parents[3]


DEFAULT_CONFIG_DIR = _project_root() / "config"


class ApiSettings(BaseModel):
	"""HTTP surface configuration."""

	prefix: str = Field("/api", description="Path prefix all API routers are mounted under.")
	title: str = Field("Robots Intellect API", description="Title shown in the OpenAPI document.")
	cors_origins: List[str] = Field(
		default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
		description="Origins allowed to call the API from a browser.",
	)


class DatabaseSettings(BaseModel):
	"""Document store configuration."""

	enabled: bool = Field(False, description="Use MongoDB instead of the in-memory store.")
	url: str = Field("mongodb://localhost:27017", description="MongoDB connection string.")
	name: str = Field("robots_intellect", description="Database holding the collections.")
	robots_collection: str = Field("robots", description="Collection storing robot documents.")
	server_selection_timeout_ms: PositiveInt = Field(
		5000,
		description="How long the driver waits for a reachable server.",
	)


class AuthSettings(BaseModel):
	"""Bearer token verification parameters.

	Tokens are issued elsewhere; the API only checks their signature and the
	role claims they carry.
	"""

	jwt_secret: str = Field(
		"robots-intellect-development-secret-key",
		description="Shared secret used to verify HMAC-signed tokens.",
	)
	algorithm: str = Field("HS256", description="Expected JWT signing algorithm.")
	audience: Optional[str] = Field(None, description="Required ``aud`` claim, if any.")
	issuer: Optional[str] = Field(None, description="Required ``iss`` claim, if any.")


class TelemetrySettings(BaseModel):
	"""Tracing and metrics configuration."""

	otlp_endpoint: Optional[str] = Field(None, description="OTLP collector endpoint for traces.")
	metrics_enabled: bool = Field(True, description="Enable Prometheus metrics collection.")


class LoggingSettings(BaseModel):
	"""Logging verbosity and related tuning parameters."""

	level: str = Field("INFO", description="Root log level (DEBUG, INFO, etc.).")
	# Spelled ``json`` in YAML files and env vars.
	json_output: bool = Field(
		False,
		validation_alias=AliasChoices("json", "json_output"),
		description="Emit logs as JSON for aggregators.",
	)


def _load_yaml_file(path: Path) -> Dict[str, Any]:
	"""Safely load a YAML file into a dictionary.

	Parameters
	----------
	path:
		Path to the YAML file.

	Returns
	-------
	dict
		Parsed YAML content or an empty dict if the file does not exist.
	"""

	if not path.exists() or path.is_dir():
		return {}

	with path.open("r", encoding="utf-8") as handle:
		data = yaml.safe_load(handle)
		return data or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
	"""Recursively merge ``override`` into ``base``."""

	result = base.copy()
	for key, value in override.items():
		if (
			key in result
			and isinstance(result[key], dict)
			and isinstance(value, dict)
		):
			result[key] = _deep_merge(result[key], value)
		else:
			result[key] = value
	return result


class AppSettings(BaseSettings):
	"""Primary configuration model for the application."""

	environment: str = Field("dev", description="Active environment name (dev, test, prod, ...).")
	api: ApiSettings = ApiSettings()
	database: DatabaseSettings = DatabaseSettings()
	auth: AuthSettings = AuthSettings()
	telemetry: TelemetrySettings = TelemetrySettings()
	logging: LoggingSettings = LoggingSettings()

	model_config = SettingsConfigDict(
		env_prefix="RI_",
		env_file=".env",
		env_file_encoding="utf-8",
		env_nested_delimiter="__",
		extra="ignore",
		validate_assignment=True,
	)

	@classmethod
	def _yaml_settings_source(cls) -> Dict[str, Any]:
		"""Produce settings from YAML configuration files."""

		config_dir = Path(os.getenv(_CONFIG_DIR_ENV_VAR, DEFAULT_CONFIG_DIR))
		base = _load_yaml_file(config_dir / "settings.yaml")
		env_name = os.getenv(_ENVIRONMENT_VAR, base.get("environment", "dev"))
		env_override = _load_yaml_file(config_dir / "environments" / f"{env_name}.yaml")

		merged = _deep_merge(base, env_override)
		merged.setdefault("environment", env_name)
		return merged

	@classmethod
	def settings_customise_sources(
		cls,
		_settings_cls,
		init_settings,
		env_settings,
		dotenv_settings,
		file_secret_settings,
	):
		"""Inject YAML files as the lowest-precedence settings source."""

		return (
			init_settings,
			env_settings,
			dotenv_settings,
			cls._yaml_settings_source,
			file_secret_settings,
		)


@lru_cache()
def get_settings(**overrides: Any) -> AppSettings:
	"""Return a cached :class:`AppSettings` instance.

	Keyword arguments are forwarded to :class:`AppSettings` and therefore have
	the highest precedence.
	"""

	return AppSettings(**overrides)
