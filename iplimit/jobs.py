"""
jobs.py - Scheduled housekeeping for the IP limit log
"""

import logging
from typing import Callable

from .config import get_iplimit_log_path
from .paths import FilesystemError, ensure_file_exists

logger = logging.getLogger(__name__)


class ClearLogsJob:
    """Keep the IP limit log in place for its writer and for stats readers.

    Scheduling is up to the caller; run() is safe to call at any interval.
    """

    def __init__(self, log_path_provider: Callable = get_iplimit_log_path):
        self.log_path_provider = log_path_provider

    def run(self) -> bool:
        """Ensure the log exists. Failures are logged, never raised."""
        path = self.log_path_provider()
        try:
            ensure_file_exists(path)
        except FilesystemError as e:
            logger.warning(f"Failed to ensure IP limit log exists: {path} - {e}")
            return False
        return True
