from typing import Optional

from .types import Hole, TimestampedLine


class MaxGapTracker:
    """
    Tracks the largest gap between consecutively arriving timestamped lines.

    Memory stays constant: only the best pair (earlier, later) and one
    candidate line are retained. Only a strictly larger gap replaces the
    best pair, so ties keep the pair found first.

    The newest line always sits in either the later slot or the candidate
    slot, so every consecutive pair is compared against the best one. Gaps
    are signed: a line older than its predecessor gives a negative gap.
    """

    def __init__(self):
        self.earlier: Optional[TimestampedLine] = None
        self.later: Optional[TimestampedLine] = None
        self.candidate: Optional[TimestampedLine] = None
        self.seen = 0

    @property
    def best_gap(self) -> Optional[int]:
        if self.later is None:
            return None
        return self.later.timestamp_ms - self.earlier.timestamp_ms

    def update(self, item: TimestampedLine) -> None:
        self.seen += 1

        if self.earlier is None:
            self.earlier = item
            return

        if self.later is None:
            self.later = item
            return

        best = self.best_gap

        if self.candidate is None:
            if item.timestamp_ms - self.later.timestamp_ms > best:
                self.earlier = self.later
                self.later = item
            else:
                self.candidate = item
            return

        if item.timestamp_ms - self.candidate.timestamp_ms > best:
            self.earlier = self.candidate
            self.later = item
            self.candidate = None
        else:
            self.candidate = item

    def result(self) -> Optional[Hole]:
        """Best pair seen so far, or None with fewer than two lines."""
        if self.later is None:
            return None
        return Hole(first=self.earlier, second=self.later)
