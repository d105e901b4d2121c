"""
config.py - Configuration and constants for IP limit log statistics
"""

import os
from pathlib import Path

# Paths (PROJECT_DIR is the checkout root; installed copies resolve to site-packages)
PROJECT_DIR = Path(__file__).parent.parent

# Load environment variables from .env file (python-dotenv)
try:
    from dotenv import load_dotenv
    env_file = PROJECT_DIR / '.env'
    if env_file.exists():
        load_dotenv(env_file)
except ImportError:
    pass  # python-dotenv not installed

DEFAULT_LOG_DIR = '/var/log'
DEFAULT_LOG_FILE = '3xipl.log'

# Ranking
DEFAULT_TOP_N = 5

# Permissions for created directories and log file
DIR_MODE = 0o755
FILE_MODE = 0o644


def get_log_dir() -> Path:
    """Get the folder holding the IP limit log"""
    return Path(os.getenv('IPLIMIT_LOG_DIR') or DEFAULT_LOG_DIR)


def get_iplimit_log_path() -> Path:
    """Get the canonical path of the IP limit ban/unban log.

    IPLIMIT_LOG_PATH wins over IPLIMIT_LOG_DIR + IPLIMIT_LOG_FILE.
    The path is not validated.
    """
    full = os.getenv('IPLIMIT_LOG_PATH')
    if full:
        return Path(full)
    return get_log_dir() / (os.getenv('IPLIMIT_LOG_FILE') or DEFAULT_LOG_FILE)
