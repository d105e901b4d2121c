"""
iplimit - Statistics over the IP limit ban/unban log

Components:
    - ensure_file_exists: create the log file and its directories if missing
    - StatsAggregator: stream the log and count bans, unbans, unique IPs and
      emails, and rank emails by ban frequency
    - ClearLogsJob: scheduled hook keeping the log file in place
"""

from .models import EventType, LogEvent, IdentityFrequency, StatsSnapshot
from .config import DEFAULT_TOP_N, get_iplimit_log_path
from .paths import FilesystemError, ensure_file_exists
from .stats import StatsAggregator, compute_stats, rank_identities
from .jobs import ClearLogsJob


__all__ = [
    # Models
    'EventType',
    'LogEvent',
    'IdentityFrequency',
    'StatsSnapshot',

    # Config
    'DEFAULT_TOP_N',
    'get_iplimit_log_path',

    # Paths
    'FilesystemError',
    'ensure_file_exists',

    # Stats
    'StatsAggregator',
    'compute_stats',
    'rank_identities',

    # Jobs
    'ClearLogsJob',
]

__version__ = '1.0.0'
