"""
Dispatcher options from RELAY_* settings.
Settings come from the process environment first, then from an optional
`.env`-style file (KEY=VALUE lines, `#` comments, optional quotes). The file
is read only for RELAY_* keys and never written into os.environ.
"""
import os
import logging
from typing import Dict, Optional

from Relay.Model.DispatcherOptions import DispatcherOptions

logger = logging.getLogger(__name__)

PREFIX = "RELAY_"
DELIMITER_VAR = "RELAY_DELIMITER"
WILDCARD_VAR = "RELAY_WILDCARD"
SEPARATOR_VAR = "RELAY_SEPARATOR"


def read_settings_file(filepath: str) -> Dict[str, str]:
    """Return the RELAY_* entries of `filepath`; a missing file yields nothing."""
    settings: Dict[str, str] = {}
    if not os.path.exists(filepath):
        logger.debug("Settings file not found: %s", filepath)
        return settings
    with open(filepath, "r", encoding="utf-8") as f:
        for raw in f:
            key, sep, value = raw.strip().partition("=")
            key = key.replace("export ", "", 1).strip()
            if not sep or not key.startswith(PREFIX):
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
                value = value[1:-1]
            settings[key] = value
    return settings


def options_from_env(filepath: Optional[str] = ".env") -> DispatcherOptions:
    """Build validated options; environment variables win over `filepath`."""
    settings = read_settings_file(filepath) if filepath else {}
    settings.update((k, v) for k, v in os.environ.items() if k.startswith(PREFIX))
    defaults = DispatcherOptions()
    options = DispatcherOptions(
        delimiter=settings.get(DELIMITER_VAR, defaults.delimiter),
        wildcard=settings.get(WILDCARD_VAR, defaults.wildcard),
        separator=settings.get(SEPARATOR_VAR) or None,
    ).normalized()
    logger.debug(
        "Dispatcher options: delimiter=%r wildcard=%r separator=%r",
        options.delimiter, options.wildcard, options.separator,
    )
    return options
