"""Output directory setup for a run.

WHY: The core expects an existing, writable output root. Whether an
existing directory may be wiped is a policy decision made once per run
by the caller, not by the core.

HOW: setup_output_directory() checks the path, removes it when force
is set, and creates it fresh with DIR_PERMISSIONS.

RULES:
- A path that exists but is not a directory is always an error
- An existing directory is removed only when force=True
- Without force, an existing directory is an error ("Use -f to overwrite")
- The overwrite policy is an argument; there is no module-level flag
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Union

from schelm.config import DIR_PERMISSIONS
from schelm.errors import OutputDirectoryError

logger = logging.getLogger(__name__)


def setup_output_directory(output_dir: Union[str, Path], force: bool = False) -> Path:
    """Prepare an empty output directory.

    Args:
        output_dir: Directory the split files will be written to.
        force: Remove an existing directory instead of failing.

    Returns:
        The output directory as a Path.

    Raises:
        OutputDirectoryError: The path is not a directory, already exists
            without force, or could not be removed or created.
    """
    path = Path(output_dir)

    try:
        exists = path.exists()
    except OSError as exc:
        raise OutputDirectoryError(
            "failed to check output directory {}: {}".format(path, exc)
        ) from exc

    if exists:
        if not path.is_dir():
            raise OutputDirectoryError('"{}" exists but is not a directory'.format(path))
        if not force:
            raise OutputDirectoryError(
                'output directory "{}" already exists. Use -f to overwrite'.format(path)
            )
        logger.info("Removing existing output directory %s (-f specified)", path)
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise OutputDirectoryError(
                "failed to remove existing directory {}: {}".format(path, exc)
            ) from exc

    logger.info("Creating output directory %s", path)
    try:
        path.mkdir(mode=DIR_PERMISSIONS, parents=True)
    except OSError as exc:
        raise OutputDirectoryError(
            "failed to create output directory {}: {}".format(path, exc)
        ) from exc
    return path
