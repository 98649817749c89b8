from .extract import extract_timestamp
from .maxgap import MaxGapTracker
from .scan import (
    MalformedTimestampError,
    ScanResult,
    ScanStats,
    make_tracker,
    scan_stream,
)
from .threshold import ThresholdGapReporter
from .types import Hole, ParseFailure, SkipReason, TimestampedLine

__version__ = "0.1.0"
