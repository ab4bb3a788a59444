"""Configuration for the Wikipedia client and the CLI.

Settings come from four layers, later ones winning: built-in defaults,
``WIKITRANS_*`` environment variables (optionally read from a ``.env`` file),
a ``wikitrans.config.{yaml,yml,json,toml}`` file and command-line flags.
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_CONFIG_FILENAMES: tuple[str, ...] = (
    "wikitrans.config.yaml",
    "wikitrans.config.yml",
    "wikitrans.config.json",
    "wikitrans.config.toml",
)

DEFAULT_API_URL = "https://{language}.wikipedia.org/w/api.php"
DEFAULT_LANGUAGE = "en"
DEFAULT_USER_AGENT = "wikitrans/0.1 (https://github.com/wikitrans/wikitrans)"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SEARCH_RESULTS = 10
DEFAULT_HEIGHT = "50%"

# Keys a config file may carry besides the ``WikiConfig`` fields.
PREFERENCE_KEYS: frozenset[str] = frozenset({"search_language", "translate_language", "debug"})

ENV_VARIABLES: Dict[str, str] = {
    "api_url": "WIKITRANS_API_URL",
    "language": "WIKITRANS_LANGUAGE",
    "user_agent": "WIKITRANS_USER_AGENT",
    "timeout": "WIKITRANS_TIMEOUT",
    "search_results": "WIKITRANS_RESULTS",
    "height": "WIKITRANS_HEIGHT",
}

_DEFAULT_ENV_PATH = Path(".env")


class ConfigError(RuntimeError):
    """Raised when a configuration file or value cannot be used."""


def _find_config_file(explicit: Optional[str]) -> Optional[Path]:
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise ConfigError(f"Configuration file {path} does not exist")
        return path

    for name in DEFAULT_CONFIG_FILENAMES:
        candidate = Path.cwd() / name
        if candidate.exists():
            return candidate
    return None


def _parse_config_file(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text) or {}
        if suffix == ".json":
            return json.loads(text or "{}")
        if suffix == ".toml":
            return tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    raise ConfigError(f"Unsupported config format: {path.suffix}")


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration file and check its keys.

    Parameters
    ----------
    path:
        The explicit path passed via CLI. When ``None`` the default file names are
        probed in the current working directory and a missing file means an
        empty configuration.
    """

    config_path = _find_config_file(path)
    if config_path is None:
        return {}

    data = _parse_config_file(config_path)
    if not isinstance(data, dict):
        raise ConfigError("The configuration root must be a mapping/dictionary")

    unknown = sorted(set(data) - WikiConfig.field_names() - PREFERENCE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys in {config_path}: {', '.join(unknown)}")
    return data


def load_env_file(path: Optional[Path | str] = None) -> None:
    """Load ``KEY=VALUE`` lines from a ``.env`` file without overriding existing variables."""

    env_path = Path(path) if path is not None else _DEFAULT_ENV_PATH
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        if not key or key in os.environ:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] in {'"', "'"} and value[-1] == value[0]:
            value = value[1:-1]
        os.environ[key] = value


def as_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off"}:
            return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _coerce(name: str, value: Any) -> Any:
    try:
        if name == "timeout":
            if isinstance(value, bool):
                raise ValueError(value)
            timeout = float(value)
            if timeout <= 0:
                raise ConfigError("timeout must be a positive number")
            return timeout
        if name == "search_results":
            if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
                raise ValueError(value)
            results = int(value)
            if results <= 0:
                raise ConfigError("search_results must be a positive integer")
            return results
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from exc

    if not isinstance(value, str) or not value:
        raise ConfigError(f"{name} must be a non-empty string")
    return value


@dataclass(frozen=True)
class WikiConfig:
    """Runtime configuration for the Wikipedia client."""

    api_url: str = DEFAULT_API_URL
    language: str = DEFAULT_LANGUAGE
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    search_results: int = DEFAULT_SEARCH_RESULTS
    height: str = DEFAULT_HEIGHT

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(field.name for field in fields(cls))

    def endpoint(self, language: Optional[str] = None) -> str:
        return self.api_url.format(language=language or self.language)

    def updated(self, values: Mapping[str, Any]) -> "WikiConfig":
        """Return a copy with the known, non-``None`` entries of ``values`` applied.

        Values are converted to the field types; a value that cannot be
        converted, or a non-positive timeout or result count, raises
        :class:`ConfigError`.
        """

        changes = {
            name: _coerce(name, values[name])
            for name in self.field_names()
            if values.get(name) is not None
        }
        return replace(self, **changes)

    @classmethod
    def from_env(cls, *, env_path: Optional[Path | str] = None) -> "WikiConfig":
        """Create a configuration object from ``WIKITRANS_*`` environment variables.

        Parameters
        ----------
        env_path:
            Optional path to a ``.env`` file. When provided the file is loaded
            before reading values from the environment.
        """

        if env_path is not None:
            load_env_file(env_path)

        # Empty variables count as unset.
        values = {name: os.environ.get(variable) or None for name, variable in ENV_VARIABLES.items()}
        return cls().updated(values)


__all__ = [
    "ConfigError",
    "ENV_VARIABLES",
    "PREFERENCE_KEYS",
    "WikiConfig",
    "as_bool",
    "load_config",
    "load_env_file",
]
