from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Skip counters never grow past this.
SKIP_COUNTER_MAX = 2**64 - 1


class SkipReason(str, Enum):
    UNREADABLE = "unreadable"
    UNMATCHED = "unmatched"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class TimestampedLine:
    """
    A log line together with the timestamp extracted from it.

    timestamp_ms is milliseconds since the Unix epoch (UTC).
    line is the raw text without its line terminator.
    """
    timestamp_ms: int
    line: str


@dataclass(frozen=True)
class Hole:
    """
    Two timestamped lines in the order they are reported.
    """
    first: TimestampedLine
    second: TimestampedLine

    @property
    def gap_ms(self) -> int:
        return self.second.timestamp_ms - self.first.timestamp_ms


@dataclass(frozen=True)
class ParseFailure:
    raw: str
    reason: SkipReason
    detail: Optional[str] = None
