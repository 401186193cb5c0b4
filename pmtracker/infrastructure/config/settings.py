"""Tracker settings.

Loaded from JSON: the project file (.pmtracker/config.json under the
working directory) overrides the user file (~/.pmtracker/config.json).
PMTRACKER_STATE_DIR overrides state_dir.
"""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from pmtracker.domain.value_objects import PMFilter

CONFIG_DIR_NAME = ".pmtracker"
CONFIG_FILE_NAME = "config.json"
STATE_DIR_ENV = "PMTRACKER_STATE_DIR"


class TrackerSettings(BaseModel):
    state_dir: Path = Path(CONFIG_DIR_NAME)

    # Option lists offered by the CLI. Any string is accepted by the core.
    reviewers: list[str] = Field(default_factory=list)
    owners: list[str] = Field(default_factory=list)
    pm_types: list[str] = Field(default_factory=list)

    upload_timeout_s: float = Field(default=30.0, gt=0)
    storage_timeout_s: float = Field(default=60.0, gt=0)
    fetch_timeout_s: float = Field(default=15.0, gt=0)
    storage_retries: int = Field(default=3, ge=1)

    default_filter: PMFilter = Field(default_factory=PMFilter)


def user_config_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def project_config_path(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _read_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: expected a JSON object")
        return {}
    return data


def load_settings(
    user_path: Path | None = None,
    project_path: Path | None = None,
    env: dict[str, str] | None = None,
) -> TrackerSettings:
    env = dict(os.environ) if env is None else env

    data = _read_config(user_path or user_config_path())
    data.update(_read_config(project_path or project_config_path()))
    if env.get(STATE_DIR_ENV):
        data["state_dir"] = env[STATE_DIR_ENV]

    settings = TrackerSettings.model_validate(data)
    logger.debug(f"Loaded settings (state_dir={settings.state_dir})")
    return settings
