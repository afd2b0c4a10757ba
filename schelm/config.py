"""Configuration constants and .env loading.

WHY: The delimiter, append marker, permissions, and buffer limits are
plain data that both the core and the CLI need. Keeping them in one
module makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level. Size and log-level defaults can be overridden through
SCHELM_* environment variables.

RULES:
- YAML_SEPARATOR is the exact record boundary written by `helm template`
- Permissions are fixed: 0o750 for directories, 0o640 for files
- MAX_RECORD_SIZE defaults to 1 MiB per record
- Integer overrides must be positive; env_int() raises ValueError otherwise
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Stream format
# ---------------------------------------------------------------------------

YAML_SEPARATOR = "---\n# Source: "
"""Marker that starts every document in the templated stream."""

YAML_SEPARATOR_BYTES = YAML_SEPARATOR.encode("utf-8")

APPEND_MARKER = "\n---\n"
"""Written between two documents merged into the same output file."""

# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

DIR_PERMISSIONS = 0o750
FILE_PERMISSIONS = 0o640

# Text written to disk round-trips the input bytes exactly
CONTENT_ENCODING = "utf-8"
CONTENT_ERRORS = "surrogateescape"


def env_int(name: str, default: int) -> int:
    """Read a positive integer setting from the environment.

    WHY: Buffer sizes come from SCHELM_* variables. A typo there should
    produce a message naming the variable, not a bare int() traceback.

    RULES:
    - Unset or blank variables return the default
    - Non-integer or non-positive values raise ValueError
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw)) from None
    if value <= 0:
        raise ValueError("{} must be positive, got {}".format(name, value))
    return value


# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

MAX_RECORD_SIZE = env_int("SCHELM_MAX_RECORD_SIZE", 1_048_576)
READ_CHUNK_SIZE = env_int("SCHELM_READ_CHUNK_SIZE", 65_536)
DEFAULT_LOG_LEVEL = os.getenv("SCHELM_LOG_LEVEL", "INFO").upper()
