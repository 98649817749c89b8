from typing import Optional

from .types import Hole, TimestampedLine


DEFAULT_THRESHOLD_MS = 500


class ThresholdGapReporter:
    """
    Reports consecutive line pairs whose gap exceeds a threshold.

    The gap is previous minus current, so with timestamps moving forward it
    is zero or negative and nothing fires. A report means time went
    backwards by more than threshold_ms between two lines.
    """

    def __init__(self, threshold_ms: int = DEFAULT_THRESHOLD_MS):
        self.threshold_ms = threshold_ms
        self.previous: Optional[TimestampedLine] = None

    def update(self, item: TimestampedLine) -> Optional[Hole]:
        hole = None

        if self.previous is not None:
            gap = self.previous.timestamp_ms - item.timestamp_ms
            if gap > self.threshold_ms:
                hole = Hole(first=item, second=self.previous)

        self.previous = item
        return hole
