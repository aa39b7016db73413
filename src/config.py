"""Runtime configuration assembled once at process start.

Precedence, lowest to highest: built-in defaults, YAML config file,
APKPIN_* environment variables, CLI flags. The resulting PinnerConfig is
passed explicitly to the pipeline; nothing reads module-level defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants
from exceptions import ConfigError

logger = logging.getLogger(__name__)

# Config attribute -> CLI dest name
_CLI_FIELDS = {
    "branch": "BRANCH",
    "input_file": "INPUT",
    "output_file": "OUTPUT",
    "arch": "ARCH",
    "repo": "REPO",
    "maintainer": "MAINTAINER",
    "os_release_file": "OS_RELEASE",
    "target_distribution": "DISTRIBUTION",
    "catalog_url": "CATALOG_URL",
    "timeout": "TIMEOUT",
    "staging_dir": "STAGING_DIR",
}

# Config attribute -> environment variable
_ENV_FIELDS = {
    "branch": "APKPIN_BRANCH",
    "input_file": "APKPIN_INPUT",
    "output_file": "APKPIN_OUTPUT",
    "arch": "APKPIN_ARCH",
    "repo": "APKPIN_REPO",
    "maintainer": "APKPIN_MAINTAINER",
    "os_release_file": "APKPIN_OS_RELEASE",
    "target_distribution": "APKPIN_DISTRIBUTION",
    "catalog_url": "APKPIN_CATALOG_URL",
    "timeout": "APKPIN_TIMEOUT",
    "staging_dir": "APKPIN_STAGING_DIR",
}


@dataclass(frozen=True)
class PinnerConfig:
    """Configuration for one pinning run."""

    branch: str = ""
    input_file: str = Constants.DEFAULT_INPUT_FILE
    output_file: str = Constants.DEFAULT_OUTPUT_FILE
    arch: str = ""
    repo: str = ""
    maintainer: str = ""
    os_release_file: str = Constants.OS_RELEASE_FILE
    target_distribution: str = Constants.TARGET_DISTRIBUTION
    catalog_url: str = Constants.CATALOG_URL
    timeout: Optional[float] = None
    staging_dir: str = ""

    @classmethod
    def from_sources(
        cls,
        args: Any = None,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[str] = None,
    ) -> "PinnerConfig":
        """Build a config from defaults, a YAML file, the environment and CLI args.

        Args:
            args: Parsed CLI arguments namespace (optional).
            environ: Environment mapping. Defaults to os.environ.
            config_path: YAML file; falls back to args.CONFIG then APKPIN_CONFIG.

        Raises:
            ConfigError: If the file or any value is invalid.

        Returns:
            PinnerConfig instance.
        """
        env = os.environ if environ is None else environ
        config = cls()

        path = config_path or getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG)
        if path:
            config = config.with_overrides(load_config_file(path), source=path)

        env_values = {
            attr: env[var] for attr, var in _ENV_FIELDS.items() if env.get(var, "") != ""
        }
        config = config.with_overrides(env_values, source="environment")

        if args is not None:
            cli_values = {}
            for attr, dest in _CLI_FIELDS.items():
                value = getattr(args, dest, None)
                if value is not None and value != "":
                    cli_values[attr] = value
            config = config.with_overrides(cli_values, source="command line")
        return config

    def with_overrides(self, values: Mapping[str, Any], *, source: str = "overrides") -> "PinnerConfig":
        """Return a copy with values applied; keys must name config fields."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s) in {source}: {', '.join(unknown)}",
                operation="load_config",
                target=source,
            )
        cleaned: Dict[str, Any] = {}
        for key, value in values.items():
            if key == "timeout":
                cleaned[key] = _coerce_timeout(value, source)
            elif value is None:
                cleaned[key] = ""
            else:
                cleaned[key] = str(value)
        return replace(self, **cleaned)


def _coerce_timeout(value: Any, source: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Invalid timeout {value!r} in {source}", operation="load_config", target=source
        ) from e
    if timeout <= 0:
        raise ConfigError(
            f"Timeout must be positive, got {value!r} in {source}",
            operation="load_config",
            target=source,
        )
    return timeout


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load settings from a YAML file.

    Accepts either a top-level mapping or one nested under an 'apkpin' key.
    Keys may use dashes or underscores.

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file: {e}", operation="load_config", target=config_path
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in config file: {e}", operation="load_config", target=config_path
        ) from e

    if data is None:
        return {}
    if isinstance(data, dict) and isinstance(data.get("apkpin"), dict):
        data = data["apkpin"]
    if not isinstance(data, dict):
        raise ConfigError(
            "Config file must contain a mapping", operation="load_config", target=config_path
        )
    values = {str(k).replace("-", "_"): v for k, v in data.items()}
    branch = values.get("branch")
    if branch is not None and not isinstance(branch, str):
        # An unquoted 3.10 loads as the float 3.1
        raise ConfigError(
            f"branch must be a string, got {branch!r}; quote it, e.g. branch: \"3.10\"",
            operation="load_config",
            target=config_path,
        )
    logger.debug("Loaded config file %s", config_path)
    return values
