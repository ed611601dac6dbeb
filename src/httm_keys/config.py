"""Configuration module.

Loads settings from environment variables.

Environment Variables
---------------------
HTTM_KEYS_HTTM_PATH : str
    Name or path of the httm binary invoked by the widgets.
    Default: httm (resolved through PATH)

HTTM_KEYS_LOOKUP_KEY : str
    Space-separated prompt_toolkit key sequence for the lookup widget.
    Default: "escape m" (Alt+m)

HTTM_KEYS_SELECT_KEY : str
    Space-separated prompt_toolkit key sequence for the select widget.
    Default: "escape s" (Alt+s)

HTTM_KEYS_LOG_LEVEL : str
    Logging level name for the CLI (DEBUG, INFO, WARNING, ERROR).
    Default: WARNING

Invalid values never abort the shell: they fall back to the defaults.
"""

import logging
import os
import shutil

from prompt_toolkit.keys import Keys

logger = logging.getLogger(__name__)

DEFAULT_HTTM_PATH = "httm"

DEFAULT_LOOKUP_KEY = ("escape", "m")
DEFAULT_SELECT_KEY = ("escape", "s")

DEFAULT_LOG_LEVEL = "WARNING"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Key names prompt_toolkit accepts besides single characters
_KNOWN_KEY_NAMES = {key.value for key in Keys} | {"escape", "enter", "tab"}


def get_httm_path() -> str:
    """Get the httm binary name or path.

    Reads from HTTM_KEYS_HTTM_PATH environment variable.
    Falls back to DEFAULT_HTTM_PATH if not set or empty.

    Returns:
        Binary name or path.
    """
    raw = os.environ.get("HTTM_KEYS_HTTM_PATH", "")
    if raw and raw.strip():
        return raw.strip()
    return DEFAULT_HTTM_PATH


def parse_key_sequence(raw: str) -> tuple[str, ...] | None:
    """Parse a space-separated key sequence such as "escape m" or "c-x h".

    Named keys are case-insensitive; single characters keep their case,
    so "escape S" binds Alt+Shift+s.

    Returns:
        Tuple of key names, or None if any part is not a key
        prompt_toolkit understands.
    """
    parts = tuple(
        part if len(part) == 1 else part.lower() for part in raw.split()
    )
    if not parts:
        return None
    for part in parts:
        if len(part) == 1:
            continue
        if part not in _KNOWN_KEY_NAMES:
            return None
    return parts


def _get_key(var: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(var, "")
    if not raw.strip():
        return default
    keys = parse_key_sequence(raw)
    if keys is None:
        logger.warning(
            "Invalid %s '%s', falling back to '%s'",
            var,
            raw,
            " ".join(default),
        )
        return default
    return keys


def get_lookup_key() -> tuple[str, ...]:
    """Get the key sequence bound to the lookup widget (default Alt+m)."""
    return _get_key("HTTM_KEYS_LOOKUP_KEY", DEFAULT_LOOKUP_KEY)


def get_select_key() -> tuple[str, ...]:
    """Get the key sequence bound to the select widget (default Alt+s)."""
    return _get_key("HTTM_KEYS_SELECT_KEY", DEFAULT_SELECT_KEY)


def get_log_level() -> str:
    """Get the logging level name.

    Reads from HTTM_KEYS_LOG_LEVEL environment variable.
    Default: WARNING.

    Returns:
        Upper-case level name accepted by logging.basicConfig.
    """
    raw = os.environ.get("HTTM_KEYS_LOG_LEVEL", "")
    level = raw.strip().upper()
    if level in VALID_LOG_LEVELS:
        return level
    if level:
        logger.debug(
            "Invalid HTTM_KEYS_LOG_LEVEL '%s', falling back to '%s'",
            raw,
            DEFAULT_LOG_LEVEL,
        )
    return DEFAULT_LOG_LEVEL


def resolve_httm_binary() -> str | None:
    """Resolve the configured httm binary to an absolute path via PATH."""
    return shutil.which(get_httm_path())


def validate_httm_binary() -> tuple[bool, str]:
    """Validate that the httm binary exists and is executable.

    Returns:
        Tuple of (is_valid, message).
        If valid: (True, "httm found at <path>")
        If invalid: (False, "error message with remediation steps")
    """
    name = get_httm_path()

    if os.sep in name:
        if not os.path.exists(name):
            return (False, f"httm binary not found at {name}.\n"
                    f"Fix HTTM_KEYS_HTTM_PATH or install httm.")
        if not os.access(name, os.X_OK):
            return (False, f"httm binary at {name} is not executable.\n"
                    f"Fix with: chmod +x {name}")
        return (True, f"httm found at {name}")

    path = shutil.which(name)
    if path is None:
        return (False, f"'{name}' not found on PATH.\n"
                f"Install httm (https://github.com/kimono-koans/httm) "
                f"or set HTTM_KEYS_HTTM_PATH.")
    return (True, f"httm found at {path}")
