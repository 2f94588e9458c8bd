"""Global configuration for formwork.

Configuration lives in ``~/.config/formwork/config.yaml`` (or under
``$FORMWORK_HOME``). Every key is optional; missing keys use defaults.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from formwork.errors import ConfigurationError

DEFAULT_TOKEN_NAME = "_csrf_token"


class GlobalConfig(BaseModel):
    """Settings shared by the registry, the submission protocol and rendering."""

    default_form_registry_path: str | None = None
    token_name: str = DEFAULT_TOKEN_NAME
    required_marker: str = '<span class="required">*</span>'
    error_css_class: str = "error"
    error_summary_css_class: str = "errorSummary"
    error_message_css_class: str = "errorMessage"
    hint_css_class: str = "hint"

    model_config = {"extra": "forbid"}


def get_formwork_home() -> Path:
    """Return the formwork home directory."""
    env_home = os.environ.get("FORMWORK_HOME")
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "formwork"


def get_registry_root() -> Path:
    """Return the directory holding synced registries."""
    return get_formwork_home() / "registry"


def get_registry_path() -> Path:
    """Return the form registry path.

    Resolution order: ``$FORMWORK_REGISTRY``, the config file's
    ``default_form_registry_path``, then ``<home>/registry/form-registry``.
    """
    env_path = os.environ.get("FORMWORK_REGISTRY")
    if env_path:
        return Path(env_path)
    config = load_global_config()
    if config.default_form_registry_path:
        return Path(config.default_form_registry_path)
    return get_registry_root() / "form-registry"


def load_global_config(path: Path | str | None = None) -> GlobalConfig:
    """Load the global config file.

    Args:
        path: Explicit config file path. Defaults to ``<home>/config.yaml``.

    Returns:
        The parsed GlobalConfig, or defaults if the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid YAML or has unknown keys.
    """
    config_path = Path(path) if path else get_formwork_home() / "config.yaml"
    if not config_path.exists():
        return GlobalConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
