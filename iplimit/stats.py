"""
stats.py - Ban/unban statistics from the IP limit log

The log is written by the connection limiter, one record per line:

    2024/01/02 10:00:00 BAN   [Email] = user@example.com [IP] = 1.2.3.4
    2024/01/02 10:05:00 UNBAN [Email] = user@example.com [IP] = 1.2.3.4

Anything else on a line is ignored, as are lines without a marker.
"""

import re
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from .config import DEFAULT_TOP_N, get_iplimit_log_path
from .models import EventType, LogEvent, IdentityFrequency, StatsSnapshot

logger = logging.getLogger(__name__)

# <marker> ... [Email] = <token> ... [IP] = <token>
EMAIL_FIELD = "[Email] ="
IP_FIELD = "[IP] ="

# One separating blank, then a maximal run of non-whitespace (may be empty)
_TOKEN_RE = re.compile(r"[ \t]?(\S*)")


def _read_field(line: str, label: str, start: int) -> Optional[Tuple[str, int]]:
    """Find label at or after start; return its token and the position after it"""
    i = line.find(label, start)
    if i < 0:
        return None
    m = _TOKEN_RE.match(line, i + len(label))
    return m.group(1), m.end()


def rank_identities(frequencies: Counter, top_n: int) -> List[IdentityFrequency]:
    """Sort by bans descending then identity ascending, keep the first top_n"""
    ranked = sorted(frequencies.items(), key=lambda kv: (-kv[1], kv[0]))
    return [IdentityFrequency(identity=e, bans=c) for e, c in ranked[:top_n]]


class StatsAggregator:
    """Stream the IP limit log and aggregate ban/unban counts"""

    def __init__(self):
        # \b keeps BAN from matching inside UNBAN
        self.ban_re = re.compile(r"\bBAN\b")
        self.unban_re = re.compile(r"\bUNBAN\b")

    def classify_line(self, line: str) -> LogEvent:
        """Classify a log line as ban, unban or other"""
        for event_type, marker in ((EventType.BAN, self.ban_re),
                                   (EventType.UNBAN, self.unban_re)):
            m = marker.search(line)
            if not m:
                continue
            email = _read_field(line, EMAIL_FIELD, m.end())
            if email is None:
                continue
            ip = _read_field(line, IP_FIELD, email[1])
            if ip is None:
                continue
            return LogEvent(event_type=event_type,
                            identity=email[0] or None,
                            address=ip[0] or None)
        return LogEvent(event_type=EventType.OTHER)

    def aggregate(self, lines: Iterable[str], top_n: int = DEFAULT_TOP_N,
                  generated_at: Optional[datetime] = None) -> StatsSnapshot:
        """Aggregate statistics over an iterable of log lines"""
        if not top_n or top_n <= 0:
            top_n = DEFAULT_TOP_N
        generated_at = generated_at or datetime.now()

        bans = unbans = 0
        ban_freq: Counter = Counter()
        identities: Set[str] = set()
        addresses: Set[str] = set()

        for line in lines:
            event = self.classify_line(line)
            if event.event_type is EventType.OTHER:
                continue

            if event.event_type is EventType.BAN:
                bans += 1
                if event.identity:
                    ban_freq[event.identity] += 1
            else:
                unbans += 1

            if event.identity:
                identities.add(event.identity)
            if event.address:
                addresses.add(event.address)

        return StatsSnapshot(
            generated_at=generated_at,
            ban_count=bans,
            unban_count=unbans,
            unique_address_count=len(addresses),
            unique_identity_count=len(identities),
            top_identities=tuple(rank_identities(ban_freq, top_n)),
        )

    def compute(self, log_path=None, top_n: int = DEFAULT_TOP_N) -> StatsSnapshot:
        """Parse the IP limit log and return aggregated statistics.

        A log that cannot be opened yields an empty snapshot; it usually just
        means nothing has been banned yet. Read errors after the file is open
        are logged and re-raised.
        """
        generated_at = datetime.now()
        path = Path(log_path) if log_path is not None else get_iplimit_log_path()

        try:
            f = open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            logger.debug(f"IP limit log unavailable ({path}): {e}")
            return StatsSnapshot.empty(generated_at)

        with f:
            try:
                snapshot = self.aggregate(f, top_n=top_n, generated_at=generated_at)
            except OSError as e:
                logger.error(f"Error reading IP limit log {path}: {e}")
                raise

        logger.debug(f"IP limit stats for {path}: {snapshot.ban_count} bans, "
                     f"{snapshot.unban_count} unbans, {snapshot.unique_address_count} IPs, "
                     f"{snapshot.unique_identity_count} emails")
        return snapshot


# Shared aggregator instance
aggregator = StatsAggregator()


def compute_stats(log_path=None, top_n: int = DEFAULT_TOP_N) -> StatsSnapshot:
    """Compute IP limit statistics with the shared aggregator"""
    return aggregator.compute(log_path, top_n)
