# =============================================================================
# core/config.py  —  Process Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the one Settings record the server runs with.  It is created once
#   in main.py and handed to the API client and the dispatcher; nothing
#   else in core/ reads the environment.
#
# WHERE VALUES COME FROM (later wins):
#   1. a .env file (loaded by main.py through python-dotenv)
#   2. the process environment
#   3. KEY=value arguments on the command line
#
#   Required:  API_KEY, ORGANIZATION_ID
#   Optional:  ICEPANEL_API_BASE_URL, ICEPANEL_APP_BASE_URL, LOG_LEVEL
# =============================================================================

from dataclasses import dataclass
import logging
import os
import re
from typing import Iterable, Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.icepanel.io/v1"
DEFAULT_APP_BASE_URL = "https://app.icepanel.io"

_OVERRIDE_PATTERN = re.compile(r"^([^=]+)=(.*)$")
_QUOTED_PATTERN = re.compile(r"^[\"'](.*)[\"']$")


@dataclass(frozen=True)
class Settings:
    """Everything the server needs to talk to IcePanel."""

    api_key: str
    organization_id: str
    api_base_url: str = DEFAULT_API_BASE_URL
    app_base_url: str = DEFAULT_APP_BASE_URL
    log_level: str = "INFO"


def parse_overrides(argv: Iterable[str]) -> dict[str, str]:
    """Turn ``KEY=value`` command-line arguments into a dict.

    Arguments that don't look like ``KEY=value`` are ignored.  One pair of
    surrounding quotes is stripped from the value, so ``API_KEY="abc"``
    and ``API_KEY=abc`` mean the same thing.
    """
    overrides: dict[str, str] = {}
    for arg in argv:
        match = _OVERRIDE_PATTERN.match(arg)
        if not match:
            continue
        key, value = match.groups()
        overrides[key] = _QUOTED_PATTERN.sub(r"\1", value)
    return overrides


def load_settings(
    argv: Optional[Iterable[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build Settings from the environment plus command-line overrides.

    Raises:
        ConfigurationError: if API_KEY or ORGANIZATION_ID is missing, or
            LOG_LEVEL is not a logging level name.
    """
    values = dict(os.environ if environ is None else environ)
    values.update(parse_overrides(argv or []))

    api_key = values.get("API_KEY")
    if not api_key:
        raise ConfigurationError("API_KEY environment variable is not set")

    organization_id = values.get("ORGANIZATION_ID")
    if not organization_id:
        raise ConfigurationError("ORGANIZATION_ID environment variable is not set")

    log_level = (values.get("LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got '{log_level}'")

    return Settings(
        api_key=api_key,
        organization_id=organization_id,
        api_base_url=values.get("ICEPANEL_API_BASE_URL") or DEFAULT_API_BASE_URL,
        app_base_url=values.get("ICEPANEL_APP_BASE_URL") or DEFAULT_APP_BASE_URL,
        log_level=log_level,
    )
