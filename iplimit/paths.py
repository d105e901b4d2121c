"""
paths.py - Make sure the IP limit log and its directory exist
"""

import os
import logging
from pathlib import Path
from typing import Union

from .config import DIR_MODE, FILE_MODE

logger = logging.getLogger(__name__)


class FilesystemError(OSError):
    """Directory or file creation failed"""

    def __init__(self, path, cause: Exception):
        errno = getattr(cause, 'errno', None)
        strerror = getattr(cause, 'strerror', None) or str(cause)
        super().__init__(errno, strerror, str(path))
        self.path = Path(path)


def ensure_file_exists(path: Union[str, os.PathLike]) -> None:
    """Create the file and any missing parent directories.

    Existing directories and files are left alone; an existing file is
    never truncated.

    Raises:
        FilesystemError: if a directory or the file cannot be created,
            or the path itself is invalid
    """
    path = Path(path)
    parent = path.parent

    try:
        # mkdir(parents=True) ignores mode for intermediate dirs, so walk them
        for d in reversed([parent, *parent.parents]):
            if not d.exists():
                d.mkdir(mode=DIR_MODE, exist_ok=True)
                logger.debug(f"Created directory {d}")

        existed = path.exists()
        fd = os.open(path, os.O_CREAT | os.O_RDWR, FILE_MODE)
        os.close(fd)
        if not existed:
            logger.debug(f"Created file {path}")
    except (OSError, ValueError) as e:  # ValueError: embedded null byte
        raise FilesystemError(path, e) from e
