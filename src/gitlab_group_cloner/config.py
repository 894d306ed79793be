"""
Configuration module for GitLab Group Cloner.

This module loads the YAML configuration file that drives a cloning run.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml

from .exceptions import ConfigError


DEFAULT_CONFIG_PATH = "./config.yaml"

REQUIRED_KEYS = ("gitlab_url", "group_id", "token", "clone_dir", "per_page")


@dataclass(frozen=True)
class Config:
    """Settings for a single cloning run."""
    gitlab_url: str
    group_id: str
    token: str
    clone_dir: str
    per_page: int


def _read_document(config_file: str) -> Dict[str, Any]:
    """
    Read and parse the YAML document at config_file.

    Args:
        config_file: Path to the configuration file

    Returns:
        The top-level mapping of the document
    """
    if not os.path.exists(config_file):
        raise ConfigError(f"config file does not exist: {config_file}")
    if not os.path.isfile(config_file):
        raise ConfigError(f"config path is not a file: {config_file}")

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"error reading config {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"error reading config {config_file}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"error reading config {config_file}: expected a mapping of settings")
    return document


def _parse_per_page(value: Any) -> int:
    # bool is an int subclass and int() truncates floats; neither is a page size
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigError(f"per_page must be an integer, got {value!r}")
    try:
        per_page = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"per_page must be an integer, got {value!r}") from e
    if per_page < 1:
        raise ConfigError(f"per_page must be at least 1, got {per_page}")
    return per_page


def load_config(config_file: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load configuration from a YAML file.

    Every key in REQUIRED_KEYS must be present and non-empty; nothing is
    defaulted.

    Args:
        config_file: Path to configuration file

    Returns:
        Parsed Config

    Raises:
        ConfigError: If the file is missing, unparsable or incomplete
    """
    if not config_file:
        raise ConfigError("config path is empty")

    document = _read_document(config_file)

    missing = [key for key in REQUIRED_KEYS if document.get(key) in (None, "")]
    if missing:
        raise ConfigError(f"error reading config {config_file}: missing required keys: {', '.join(missing)}")

    return Config(
        gitlab_url=str(document["gitlab_url"]).rstrip('/'),
        group_id=str(document["group_id"]),
        token=str(document["token"]),
        clone_dir=str(document["clone_dir"]),
        per_page=_parse_per_page(document["per_page"]),
    )
