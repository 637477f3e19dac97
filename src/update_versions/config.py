"""
Configuration for update-versions.

Settings come from, in order of precedence: command line flags, an optional
YAML configuration file, and built-in defaults. Relative cache and output
paths are resolved against the workspace root.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import platformdirs
import yaml

from update_versions.constants import (
    APP_NAME,
    CONFIG_FILE_NAME,
    CONFIG_KEY_CACHE_DIR,
    CONFIG_KEY_COUNT,
    CONFIG_KEY_GITHUB_TOKEN,
    CONFIG_KEY_OUTPUT,
    DEFAULT_CACHE_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_VERSION_COUNT,
    WORKSPACE_ROOT_ENV_VAR,
)
from update_versions.exceptions import ConfigFileError, ConfigValidationError
from update_versions.log_utils import logger


def get_default_config_path() -> str:
    """Return the platform-appropriate location of the YAML configuration file."""
    return os.path.join(platformdirs.user_config_dir(APP_NAME), CONFIG_FILE_NAME)


def get_workspace_root() -> str:
    """
    Determine the workspace root used to resolve relative paths.

    When run through `bazel run`, Bazel sets BUILD_WORKSPACE_DIRECTORY; otherwise the
    current working directory is used.
    """
    workspace_root = os.environ.get(WORKSPACE_ROOT_ENV_VAR, "").strip()
    if workspace_root:
        return workspace_root
    return os.getcwd()


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the YAML configuration file.

    Parameters:
        path (Optional[str]): Explicit configuration file. When omitted, the default
            location is tried and a missing file yields an empty configuration.

    Returns:
        Dict[str, Any]: The parsed configuration mapping (possibly empty).

    Raises:
        ConfigFileError: If an explicit file is missing, or the file cannot be read or
            does not contain a mapping.
    """
    explicit = path is not None
    config_path = path if explicit else get_default_config_path()

    if not os.path.exists(config_path):
        if explicit:
            raise ConfigFileError(f"Configuration file not found: {config_path}")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(
            f"Could not read configuration file {config_path}", details=str(e)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"Configuration file {config_path} must contain a mapping",
            details=f"got {type(data).__name__}",
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return data


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigValidationError(
            "count must be an integer", field="count", value=str(value)
        )
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(
            "count must be an integer", field="count", value=str(value)
        ) from e


@dataclass
class Config:
    """Settings for one update run."""

    count: int = DEFAULT_VERSION_COUNT
    cache_dir: str = DEFAULT_CACHE_DIR
    output_file: str = DEFAULT_OUTPUT_FILE
    workspace_root: str = "."
    github_token: Optional[str] = None

    @classmethod
    def from_sources(
        cls,
        file_config: Optional[Dict[str, Any]] = None,
        count: Optional[int] = None,
        cache_dir: Optional[str] = None,
        output_file: Optional[str] = None,
        workspace_root: Optional[str] = None,
    ) -> "Config":
        """
        Merge command line values over configuration file values over defaults.

        Raises:
            ConfigValidationError: If the merged configuration is invalid.
        """
        file_config = file_config or {}

        merged_count = count
        if merged_count is None:
            merged_count = _coerce_count(
                file_config.get(CONFIG_KEY_COUNT, DEFAULT_VERSION_COUNT)
            )

        config = cls(
            count=merged_count,
            cache_dir=str(
                cache_dir or file_config.get(CONFIG_KEY_CACHE_DIR) or DEFAULT_CACHE_DIR
            ),
            output_file=str(
                output_file or file_config.get(CONFIG_KEY_OUTPUT) or DEFAULT_OUTPUT_FILE
            ),
            workspace_root=workspace_root or get_workspace_root(),
            github_token=file_config.get(CONFIG_KEY_GITHUB_TOKEN),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """
        Raises:
            ConfigValidationError: If count is not positive or a path is empty.
        """
        if self.count <= 0:
            raise ConfigValidationError(
                "count must be positive", field="count", value=str(self.count)
            )
        if not self.cache_dir:
            raise ConfigValidationError("cache directory must not be empty")
        if not self.output_file:
            raise ConfigValidationError("output file must not be empty")

    def resolve_absolute_paths(self) -> Tuple[str, str]:
        """
        Resolve the cache directory and output file against the workspace root.

        Absolute paths are returned unchanged.

        Returns:
            Tuple[str, str]: `(abs_cache_dir, abs_output_file)`.
        """
        return (
            self._resolve(self.cache_dir),
            self._resolve(self.output_file),
        )

    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.join(self.workspace_root, path)
