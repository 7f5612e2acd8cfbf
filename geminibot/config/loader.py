from __future__ import annotations

import logging
import os
import sys
from typing import Any

import google.auth
from google.auth.exceptions import DefaultCredentialsError
import yaml
from dotenv import load_dotenv

from .validator import validate_config, ConfigValidationError


DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_ENV_VAR = "CONFIG_PATH"
PROJECT_ID_ENV_VAR = "PROJECT_ID"


def get_config_path() -> str:
    """
    Resolve the config path, preferring an explicit environment override.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    return DEFAULT_CONFIG_FILE


def _load_raw_config(path: str | None = None) -> dict[str, Any]:
    cfg_path = path or get_config_path()
    try:
        with open(cfg_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        if path is None and cfg_path == DEFAULT_CONFIG_FILE:
            logging.info("No %s found, using environment variables only", cfg_path)
            return {}
        logging.error("Config file not found: %s", cfg_path)
        sys.exit(1)
    except yaml.YAMLError as e:
        logging.error("YAML parsing error in %s: %s", cfg_path, e)
        sys.exit(1)

    if not isinstance(data, dict):
        logging.error("Config root must be a mapping, got %s", type(data).__name__)
        sys.exit(1)

    return data


def get_config(path: str | None = None) -> dict[str, Any]:
    """
    Public helper for loading configuration.

    - Loads .env into the process environment first.
    - Respects CONFIG_PATH if set; a missing default config.yaml is not an error.
    - Performs YAML validation.
    - Exits with error code 1 if validation fails.
    - Returns the raw dict; BotSettings.from_config turns it into typed settings.
    """
    load_dotenv()
    cfg = _load_raw_config(path)

    try:
        validate_config(cfg, path or get_config_path())
    except ConfigValidationError:
        sys.exit(1)

    return cfg


def resolve_project_id(configured: str | None = None) -> str:
    """
    Find the Google Cloud project: explicit config value, then the project of
    the Application Default Credentials, then $PROJECT_ID.
    """
    if configured:
        return configured
    project_id = ""
    try:
        _, project_id = google.auth.default()
    except DefaultCredentialsError as e:
        logging.error("failed to find Google Cloud application default credential: %s", e)
    return project_id or os.environ.get(PROJECT_ID_ENV_VAR, "")
