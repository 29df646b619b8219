"""
Runtime configuration for faultclass.

Stack capture and log buffer sizes are injected here rather than hard-coded.
Configuration can be built explicitly, read from the environment, or loaded
from a YAML/JSON file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Environment variables consulted by ErrorsConfig.from_env()
ENV_STACK_CAPTURE_LENGTH = "FAULTCLASS_STACK_CAPTURE_LENGTH"
ENV_STACK_LOG_LENGTH = "FAULTCLASS_STACK_LOG_LENGTH"

_ENV_FIELDS: dict[str, str] = {
    ENV_STACK_CAPTURE_LENGTH: "stack_capture_length",
    ENV_STACK_LOG_LENGTH: "stack_log_length",
}


class ErrorsConfig(BaseModel):
    """Buffer sizes used when capturing and logging stacks."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    stack_capture_length: int = Field(default=2048, gt=0)
    """Max stack trace byte length to capture on an Error"""

    stack_log_length: int = Field(default=4096, gt=0)
    """Max stack trace byte length to log on creation"""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ErrorsConfig:
        """Build a config from plain data.

        Raises:
            Error: Classified as CONFIG_ERROR if validation fails
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise _config_error(exc) from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ErrorsConfig:
        """Build a config from FAULTCLASS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Config with unset variables left at their defaults
        """
        env = os.environ if environ is None else environ
        data = {
            field_name: env[var]
            for var, field_name in _ENV_FIELDS.items()
            if env.get(var)
        }
        return cls.from_mapping(data)

    @classmethod
    def from_file(cls, path: str | Path) -> ErrorsConfig:
        """Load a config from a YAML or JSON file.

        Args:
            path: File to read; `.json` files are parsed as JSON, anything else as YAML

        Raises:
            Error: Classified as CONFIG_ERROR if the file is unreadable or invalid
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
            data = json.loads(content) if path.suffix == ".json" else yaml.safe_load(content)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise _config_error(exc, path) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            from faultclass.errors.classes import CONFIG_ERROR

            raise CONFIG_ERROR.new("%s: expected a mapping, got %s", path, type(data).__name__)
        return cls.from_mapping(data)


def _config_error(exc: Exception, path: Path | None = None) -> Exception:
    """Classify a configuration failure."""
    from faultclass.errors.classes import CONFIG_ERROR

    if path is not None:
        return CONFIG_ERROR.new("%s: %s", path, exc)
    return CONFIG_ERROR.wrap(exc)


_config: ErrorsConfig | None = None


def get_config() -> ErrorsConfig:
    """Get the active configuration, reading the environment on first use."""
    global _config
    if _config is None:
        _config = ErrorsConfig.from_env()
    return _config


def configure(config: ErrorsConfig | None = None, **overrides: Any) -> ErrorsConfig:
    """Install the active configuration.

    Args:
        config: Base configuration (default: the current one)
        **overrides: Field values replacing those of `config`

    Returns:
        The newly active configuration

    Example:
        >>> configure(stack_capture_length=512)
    """
    global _config
    base = config if config is not None else get_config()
    if overrides:
        base = ErrorsConfig.from_mapping({**base.model_dump(), **overrides})
    _config = base
    return _config


def reset_config() -> None:
    """Forget the active configuration so the next read consults the environment."""
    global _config
    _config = None
