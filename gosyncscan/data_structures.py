"""
Data structures for scan results.

All structures are immutable and deterministic.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class IdiomKind(Enum):
    CHANNEL_MAKE    = "channel_make"
    CHANNEL_SEND    = "channel_send"
    CHANNEL_RECEIVE = "channel_receive"

    WAITGROUP_DECLARATION = "waitgroup_declaration"
    MUTEX_DECLARATION     = "mutex_declaration"
    RWMUTEX_DECLARATION   = "rwmutex_declaration"
    LOCKER_DECLARATION    = "locker_declaration"
    ONCE_DECLARATION      = "once_declaration"

    WAITGROUP_FIELD = "waitgroup_field"
    MUTEX_FIELD     = "mutex_field"
    RWMUTEX_FIELD   = "rwmutex_field"
    LOCKER_FIELD    = "locker_field"
    ONCE_FIELD      = "once_field"

    LOCK_CALL      = "lock_call"
    UNLOCK_CALL    = "unlock_call"
    WAITGROUP_ADD  = "waitgroup_add"
    WAITGROUP_DONE = "waitgroup_done"
    WAITGROUP_WAIT = "waitgroup_wait"

    COND_CONSTRUCTION = "cond_construction"
    COND_SIGNAL       = "cond_signal"
    COND_BROADCAST    = "cond_broadcast"
    ONCE_DO           = "once_do"


@dataclass(frozen=True)
class Position:
    """A location inside one source file. Line and column are 1-based."""

    file: str
    line: int
    column: int  # byte offset within the line, as Go reports it

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Finding:
    """One reported idiom occurrence."""

    kind: IdiomKind
    position: Position
    fragment: Optional[str] = None  # rendered name / identifier / expression
    details: Tuple[Tuple[str, str], ...] = ()

    @property
    def detail(self) -> Dict[str, str]:
        """Idiom-specific fields as a dict."""
        return dict(self.details)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Look up one idiom-specific field."""
        return self.detail.get(key, default)
