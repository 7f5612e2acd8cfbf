"""
YAML configuration validator for config.yaml.

Validates structure, value types, and common misconfigurations.
Every key is optional: DISCORD_TOKEN / PROJECT_ID and built-in defaults
cover anything the file leaves out.
"""

from __future__ import annotations

import logging
from typing import Any


logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when config validation fails."""
    pass


KNOWN_TOP_LEVEL_KEYS = {
    "bot_token", "status_message", "google", "model", "timeouts", "web_fetch",
}

# section -> {key: expected type(s)}
_SECTION_TYPES: dict[str, dict[str, tuple[type, ...]]] = {
    "google": {"project_id": (str,), "location": (str,)},
    "model": {"name": (str,), "temperature": (int, float), "limit_prompt": (str,)},
    "timeouts": {"model_seconds": (int, float), "fetch_seconds": (int, float)},
    "web_fetch": {"max_bytes": (int,), "max_redirects": (int,), "allow_private_networks": (bool,)},
}


def _type_names(types_: tuple[type, ...]) -> str:
    return " or ".join(t.__name__ for t in types_)


def validate_config(cfg: dict[str, Any], config_path: str = "config.yaml") -> None:
    """
    Comprehensive validation of config.yaml structure and content.

    Raises ConfigValidationError if validation fails.
    Logs detailed error messages before raising.

    Args:
        cfg: The loaded config dictionary
        config_path: Path to config file (for error messages)

    Raises:
        ConfigValidationError: If validation fails
    """
    errors = []
    warnings = []

    # ── Check root structure ────────────────────────────────────────────────
    if not isinstance(cfg, dict):
        errors.append(f"Config root must be a mapping, got {type(cfg).__name__}")
        cfg = {}

    for key in cfg:
        if key not in KNOWN_TOP_LEVEL_KEYS:
            warnings.append(f"Unknown top-level key '{key}' is ignored")

    # ── Top-level strings ───────────────────────────────────────────────────
    for key in ("bot_token", "status_message"):
        if key in cfg and cfg[key] is not None and not isinstance(cfg[key], str):
            errors.append(f"'{key}' must be a string, got {type(cfg[key]).__name__}")

    # ── Sections ────────────────────────────────────────────────────────────
    for section, fields in _SECTION_TYPES.items():
        if cfg.get(section) is None:
            continue
        values = cfg[section]
        if not isinstance(values, dict):
            errors.append(f"'{section}' must be a mapping, got {type(values).__name__}")
            continue
        for key, value in values.items():
            if key not in fields:
                warnings.append(f"Unknown key '{section}.{key}' is ignored")
                continue
            if value is None:
                continue
            expected = fields[key]
            # bool is an int subclass; only accept it where bool is expected
            if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
                errors.append(
                    f"'{section}.{key}' must be {_type_names(expected)}, "
                    f"got {type(value).__name__}"
                )

    # ── Value ranges ────────────────────────────────────────────────────────
    model = cfg.get("model") if isinstance(cfg.get("model"), dict) else {}
    temperature = model.get("temperature")
    if isinstance(temperature, (int, float)) and not isinstance(temperature, bool):
        if not 0.0 <= temperature <= 2.0:
            errors.append(f"'model.temperature' must be between 0.0 and 2.0, got {temperature}")
    if model.get("name") == "":
        errors.append("'model.name' must not be empty")

    timeouts = cfg.get("timeouts") if isinstance(cfg.get("timeouts"), dict) else {}
    for key in ("model_seconds", "fetch_seconds"):
        value = timeouts.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value <= 0:
            errors.append(f"'timeouts.{key}' must be positive, got {value}")

    web_fetch = cfg.get("web_fetch") if isinstance(cfg.get("web_fetch"), dict) else {}
    max_bytes = web_fetch.get("max_bytes")
    if isinstance(max_bytes, int) and not isinstance(max_bytes, bool) and max_bytes <= 0:
        errors.append(f"'web_fetch.max_bytes' must be positive, got {max_bytes}")
    max_redirects = web_fetch.get("max_redirects")
    if isinstance(max_redirects, int) and not isinstance(max_redirects, bool) and max_redirects < 0:
        errors.append(f"'web_fetch.max_redirects' must not be negative, got {max_redirects}")
    if web_fetch.get("allow_private_networks") is True:
        warnings.append(
            "'web_fetch.allow_private_networks' is enabled: the model can make the bot "
            "fetch loopback and private network addresses"
        )

    # ── Log warnings ────────────────────────────────────────────────────────
    for warning in warnings:
        logger.warning("Config warning: %s", warning)

    # ── Log errors and exit if any ──────────────────────────────────────────
    if errors:
        logger.error("=" * 70)
        logger.error("CONFIG VALIDATION FAILED (%s)", config_path)
        logger.error("=" * 70)
        for i, error in enumerate(errors, 1):
            logger.error("[%d] %s", i, error)
        logger.error("=" * 70)
        logger.error("Please fix the errors above and restart the bot.")
        logger.error("=" * 70)
        raise ConfigValidationError(f"Config validation failed with {len(errors)} error(s)")
