"""
models.py - Data classes for ban log events and statistics
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class EventType(Enum):
    BAN = "ban"
    UNBAN = "unban"
    OTHER = "other"


@dataclass(frozen=True)
class LogEvent:
    """Classification of a single log line"""
    event_type: EventType
    identity: Optional[str] = None  # [Email] field
    address: Optional[str] = None   # [IP] field


@dataclass(frozen=True)
class IdentityFrequency:
    """Number of bans recorded for one identity"""
    identity: str
    bans: int

    def to_dict(self) -> Dict:
        return {'email': self.identity, 'bans': self.bans}


@dataclass(frozen=True)
class StatsSnapshot:
    """Aggregated ban/unban statistics for one scan of the log"""
    generated_at: datetime
    ban_count: int = 0
    unban_count: int = 0
    unique_address_count: int = 0
    unique_identity_count: int = 0
    top_identities: Tuple[IdentityFrequency, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, generated_at: datetime) -> 'StatsSnapshot':
        return cls(generated_at=generated_at)

    def to_dict(self) -> Dict:
        return {
            'generatedAt': self.generated_at.isoformat(),
            'banCount': self.ban_count,
            'unbanCount': self.unban_count,
            'uniqueIPs': self.unique_address_count,
            'uniqueEmails': self.unique_identity_count,
            'topEmails': [f.to_dict() for f in self.top_identities],
        }
