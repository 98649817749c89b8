import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Union

from .extract import extract_timestamp
from .maxgap import MaxGapTracker
from .threshold import ThresholdGapReporter
from .types import (
    SKIP_COUNTER_MAX,
    Hole,
    ParseFailure,
    SkipReason,
    TimestampedLine,
)

logger = logging.getLogger("holefinder.scan")

Tracker = Union[MaxGapTracker, ThresholdGapReporter]
HoleCallback = Callable[[Hole], None]


class MalformedTimestampError(ValueError):
    def __init__(self, failure: ParseFailure, line_no: int):
        self.failure = failure
        self.line_no = line_no
        super().__init__(
            f"line {line_no}: malformed timestamp ({failure.detail}): "
            f"{failure.raw}"
        )


# ---------- Metrics ----------

@dataclass
class ScanStats:
    parsed: int = 0
    skipped: int = 0
    skipped_by_reason: Dict[SkipReason, int] = field(default_factory=dict)

    @property
    def lines_read(self) -> int:
        return self.parsed + self.skipped

    def record_success(self):
        self.parsed += 1

    def record_skip(self, reason: SkipReason):
        self.skipped = min(self.skipped + 1, SKIP_COUNTER_MAX)
        self.skipped_by_reason[reason] = min(
            self.skipped_by_reason.get(reason, 0) + 1,
            SKIP_COUNTER_MAX,
        )


@dataclass(frozen=True)
class ScanResult:
    stats: ScanStats
    best: Optional[Hole] = None


# ---------- Pipeline ----------

def make_tracker(threshold_ms: Optional[int] = None) -> Tracker:
    if threshold_ms is None:
        return MaxGapTracker()
    return ThresholdGapReporter(threshold_ms)


def decode_line(raw: Union[bytes, str]) -> str:
    """
    Turn one raw line into text without its terminator.

    Raises UnicodeDecodeError for bytes that are not valid UTF-8.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def scan_stream(
    lines: Iterable[Union[bytes, str]],
    tracker: Tracker,
    on_hole: Optional[HoleCallback] = None,
    strict: bool = False,
) -> ScanResult:
    """
    Feed every timestamped line of a stream into one tracker.

    Pipeline:
      raw line
        → UTF-8 decode
          → timestamp extraction
            → tracker update
              → hole callback (threshold mode)

    Lines that cannot be decoded or carry no usable timestamp are counted
    and skipped. With strict=True a malformed timestamp raises
    MalformedTimestampError instead.
    """
    stats = ScanStats()

    for line_no, raw in enumerate(lines, 1):
        try:
            line = decode_line(raw)
        except UnicodeDecodeError as e:
            logger.debug("line %d: not valid UTF-8 (%s)", line_no, e)
            stats.record_skip(SkipReason.UNREADABLE)
            continue

        ts = extract_timestamp(line)
        if isinstance(ts, ParseFailure):
            if ts.reason is SkipReason.MALFORMED:
                if strict:
                    raise MalformedTimestampError(ts, line_no)
                logger.warning(
                    "line %d: malformed timestamp skipped (%s)",
                    line_no,
                    ts.detail,
                )
            else:
                logger.debug("line %d: no timestamp", line_no)
            stats.record_skip(ts.reason)
            continue

        stats.record_success()
        hole = tracker.update(TimestampedLine(timestamp_ms=ts, line=line))

        if hole is not None and on_hole is not None:
            on_hole(hole)

    best = None
    if isinstance(tracker, MaxGapTracker):
        best = tracker.result()

    logger.info(
        "Scanned %d lines: %d parsed, %d skipped",
        stats.lines_read,
        stats.parsed,
        stats.skipped,
    )
    return ScanResult(stats=stats, best=best)
