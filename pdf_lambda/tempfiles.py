"""
Temporary files for renderer input and output.

Files are created with delete-on-release semantics tied to an ExitStack:
the caller that opens the stack owns every file registered on it, and all
of them are removed when the stack closes, on success or error.
"""

import logging
import os
import tempfile
from contextlib import ExitStack
from typing import Optional

from .errors import TempFileError

logger = logging.getLogger(__name__)


def create_temp_file(
    stack: ExitStack,
    prefix: str,
    suffix: str,
    data: Optional[bytes] = None,
) -> str:
    """
    Create a named temporary file whose removal is registered on the stack.

    Args:
        stack: ExitStack that owns the file
        prefix: File name prefix, e.g. "wkhtmltopdf-input"
        suffix: File name suffix, e.g. ".html"
        data: Optional bytes to write into the file

    Returns:
        Path of the created file

    Raises:
        TempFileError: If the file cannot be created or written
    """
    try:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    except OSError as e:
        raise TempFileError(f"Failed to create temp file: {e}") from e

    stack.callback(remove_temp_file, path)

    try:
        with os.fdopen(fd, "wb") as handle:
            if data:
                handle.write(data)
    except OSError as e:
        raise TempFileError(f"Failed to write to temp file: {e}") from e

    return path


def remove_temp_file(path: str) -> None:
    """Remove a temporary file, tolerating files that are already gone."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temp file {path}: {e}")
