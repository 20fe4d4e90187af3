"""
Configuration loader — reads nativedeps.yml into a Project.

A broken project file is fatal: every read, YAML or schema problem is
raised as ConfigurationError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.project import Project

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "nativedeps.yml"


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Search for nativedeps.yml starting from ``start_dir`` (default cwd), walking up.

    Returns:
        Path to nativedeps.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_project(path: Path | None = None) -> Project:
    """Load and validate the project configuration.

    Args:
        path: Explicit path to nativedeps.yml. If None, searches upward.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    if path is None:
        path = find_project_file()

    if path is None:
        raise ConfigurationError(
            f"No {PROJECT_CONFIG_FILE} found. Create one or pass --config."
        )

    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    logger.debug("Loading project config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )

    # Either flat, or everything under a "project" key with siblings alongside
    project_data = dict(data["project"]) if isinstance(data.get("project"), dict) else data
    for key, value in data.items():
        if key != "project" and key not in project_data:
            project_data[key] = value

    try:
        project = Project.model_validate(project_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid project configuration: {e}") from e

    logger.info("Loaded project '%s' with %d declared modules", project.name, len(project.modules))
    return project


def project_root(config_path: Path) -> Path:
    """Project root directory for a config file path."""
    return config_path.parent.resolve()
