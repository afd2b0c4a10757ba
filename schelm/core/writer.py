"""Materialise specs as files under the output directory.

WHY: Several templated documents often share one source path (a chart
that renders two objects into the same template file). They must end
up in one file, in input order, separated the way YAML multi-document
files are.

HOW: write_or_append_spec() resolves the destination under the output
root, creates missing parent directories, then either creates the file
or appends to it. Every file is opened and closed within the call.

RULES:
- Destination is output_dir / source, with leading "/" stripped from
  source so the file always lands under the root
- Each newly created directory level gets DIR_PERMISSIONS (0o750)
- New files get FILE_PERMISSIONS (0o640) and the content verbatim
- Appends write append_marker(content) followed by content
- The marker depends on the incoming content only, never on the
  existing file's last byte
- A destination that exists but is not a regular file is a SpecWriteError
- Every OSError, and the ValueError raised for paths the OS cannot
  represent (e.g. an embedded NUL), is raised as SpecWriteError
- "Creating ..." / "Appending to ..." is logged before the write
"""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path
from typing import Union

from schelm.config import (
    APPEND_MARKER,
    CONTENT_ENCODING,
    CONTENT_ERRORS,
    DIR_PERMISSIONS,
    FILE_PERMISSIONS,
)
from schelm.errors import SpecWriteError

logger = logging.getLogger(__name__)


class WriteAction(str, enum.Enum):
    """What write_or_append_spec() did with a spec."""

    CREATED = "created"
    APPENDED = "appended"


def append_marker(content: str) -> str:
    """Return the separator written before content appended to a file.

    An extra newline is prepended when content does not itself end with
    a newline.
    """
    if content.endswith("\n"):
        return APPEND_MARKER
    return "\n" + APPEND_MARKER


def resolve_destination(output_dir: Union[str, Path], source: str) -> Path:
    """Join the output root and a source path."""
    return Path(output_dir) / source.lstrip("/")


def write_or_append_spec(
    output_dir: Union[str, Path],
    source: str,
    content: str,
) -> WriteAction:
    """Write content to output_dir/source, appending if the file exists.

    Args:
        output_dir: Existing, writable output root.
        source: Relative path from the spec's `# Source:` line.
        content: Document body to store.

    Returns:
        WriteAction.CREATED for a new file, WriteAction.APPENDED otherwise.

    Raises:
        SpecWriteError: Directory creation or file I/O failed, or the
            destination exists and is not a regular file.
    """
    destination = resolve_destination(output_dir, source)
    _make_parent_dirs(destination.parent)

    try:
        exists = destination.exists()
    except (OSError, ValueError) as exc:
        raise SpecWriteError(
            destination, "error checking file {}: {}".format(destination, exc)
        ) from exc

    if not exists:
        logger.info("Creating %s", destination)
        _write_new(destination, content)
        return WriteAction.CREATED

    if not destination.is_file():
        raise SpecWriteError(
            destination,
            "{} exists but is not a regular file".format(destination),
        )

    logger.info("Appending to %s", destination)
    _append(destination, append_marker(content) + content)
    return WriteAction.APPENDED


def _make_parent_dirs(directory: Path) -> None:
    """Create directory and any missing ancestors with DIR_PERMISSIONS.

    Path.mkdir(parents=True) only applies the mode to the last level, so
    missing levels are created one at a time from the top down.
    """
    missing = []
    current = directory
    try:
        while not current.is_dir():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        for path in reversed(missing):
            path.mkdir(mode=DIR_PERMISSIONS, exist_ok=True)
    except (OSError, ValueError) as exc:
        raise SpecWriteError(
            directory, "error creating directory {}: {}".format(directory, exc)
        ) from exc


def _write_new(destination: Path, content: str) -> None:
    try:
        fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_PERMISSIONS)
        with open(fd, "w", encoding=CONTENT_ENCODING, errors=CONTENT_ERRORS, newline="") as f:
            f.write(content)
    except (OSError, ValueError) as exc:
        raise SpecWriteError(
            destination, "error writing new file {}: {}".format(destination, exc)
        ) from exc


def _append(destination: Path, text: str) -> None:
    try:
        with open(destination, "a", encoding=CONTENT_ENCODING, errors=CONTENT_ERRORS, newline="") as f:
            f.write(text)
    except (OSError, ValueError) as exc:
        raise SpecWriteError(
            destination, "error appending to file {}: {}".format(destination, exc)
        ) from exc
