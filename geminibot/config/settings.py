from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from geminibot.llm.gemini_service import (
    DEFAULT_MODEL_NAME,
    DEFAULT_MODEL_TIMEOUT_SECONDS,
    DEFAULT_TEMPERATURE,
)
from geminibot.llm.prompt import LIMIT_CONDITION_PROMPT
from geminibot.llm.tools.web_fetch import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT_SECONDS,
)

from .validator import ConfigValidationError


DEFAULT_LOCATION = "asia-east1"
TOKEN_ENV_VAR = "DISCORD_TOKEN"


@dataclass(frozen=True)
class BotSettings:
    """Everything the bot needs, resolved once at startup."""

    bot_token: str
    project_id: str
    location: str = DEFAULT_LOCATION
    model_name: str = DEFAULT_MODEL_NAME
    temperature: float = DEFAULT_TEMPERATURE
    limit_prompt: str = LIMIT_CONDITION_PROMPT
    model_timeout: float = DEFAULT_MODEL_TIMEOUT_SECONDS
    fetch_timeout: float = DEFAULT_TIMEOUT_SECONDS
    fetch_max_bytes: int = DEFAULT_MAX_BYTES
    fetch_max_redirects: int = DEFAULT_MAX_REDIRECTS
    allow_private_networks: bool = False
    status_message: str | None = None

    @classmethod
    def from_config(
        cls,
        cfg: Mapping[str, Any],
        project_id: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> "BotSettings":
        """
        Build settings from a validated config mapping.

        project_id is the already-resolved Google Cloud project
        (see geminibot.config.loader.resolve_project_id).
        """
        env = os.environ if environ is None else environ
        google = cfg.get("google") or {}
        model = cfg.get("model") or {}
        timeouts = cfg.get("timeouts") or {}
        web_fetch = cfg.get("web_fetch") or {}

        token = cfg.get("bot_token") or env.get(TOKEN_ENV_VAR, "")
        if not token:
            raise ConfigValidationError(f"No Discord token: set 'bot_token' or ${TOKEN_ENV_VAR}")
        project = project_id or google.get("project_id") or ""
        if not project:
            raise ConfigValidationError("No Google Cloud project id could be resolved")

        return cls(
            bot_token=token,
            project_id=project,
            location=_get(google, "location", DEFAULT_LOCATION),
            model_name=_get(model, "name", DEFAULT_MODEL_NAME),
            temperature=float(_get(model, "temperature", DEFAULT_TEMPERATURE)),
            limit_prompt=_get(model, "limit_prompt", LIMIT_CONDITION_PROMPT),
            model_timeout=float(_get(timeouts, "model_seconds", DEFAULT_MODEL_TIMEOUT_SECONDS)),
            fetch_timeout=float(_get(timeouts, "fetch_seconds", DEFAULT_TIMEOUT_SECONDS)),
            fetch_max_bytes=_get(web_fetch, "max_bytes", DEFAULT_MAX_BYTES),
            fetch_max_redirects=_get(web_fetch, "max_redirects", DEFAULT_MAX_REDIRECTS),
            allow_private_networks=_get(web_fetch, "allow_private_networks", False),
            status_message=cfg.get("status_message") or None,
        )


def _get(section: Mapping[str, Any], key: str, default: Any) -> Any:
    # YAML keys left blank load as None
    value = section.get(key)
    return default if value is None else value
