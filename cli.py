import argparse
import logging
import sys
from contextlib import nullcontext

from config import load_settings
from holes import (
    MalformedTimestampError,
    __version__,
    make_tracker,
    scan_stream,
)
from logger_config import setup_logger


# Marks "-t" given without a value; the configured default applies.
USE_CONFIGURED_THRESHOLD = object()


# ---------------- CLI ----------------

def build_parser():
    parser = argparse.ArgumentParser(
        prog="holefinder",
        description="Finds big holes in logfiles",
    )
    parser.add_argument(
        "-f", "--file",
        default="-",
        metavar="FILE",
        help="Sets a logfile to read from ('-' reads standard input).",
    )

    algorithm = parser.add_mutually_exclusive_group(required=True)
    algorithm.add_argument(
        "-m", "--maxhole",
        action="store_true",
        help="Report the single biggest hole.",
    )
    algorithm.add_argument(
        "-t", "--threshold",
        type=int,
        nargs="?",
        const=USE_CONFIGURED_THRESHOLD,
        metavar="THRESHOLD",
        help="minimum hole length to report about (ms).",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first malformed timestamp instead of skipping it.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped lines to stderr.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


# ---------------- Helpers ----------------

def open_input(path: str):
    if path == "-":
        return nullcontext(sys.stdin.buffer)
    return open(path, "rb")


def print_hole(hole):
    print(hole.first.line)
    print(hole.second.line)
    print(flush=True)


# ---------------- Main ----------------

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        parser.error(str(e))

    level = logging.DEBUG if args.verbose else settings.log_level
    setup_logger(level=level, log_file=settings.log_file)

    if args.maxhole:
        threshold_ms = None
    elif args.threshold is USE_CONFIGURED_THRESHOLD:
        threshold_ms = settings.threshold_ms
    else:
        threshold_ms = args.threshold

    tracker = make_tracker(threshold_ms)

    try:
        with open_input(args.file) as f:
            result = scan_stream(
                f,
                tracker,
                on_hole=print_hole,
                strict=args.strict,
            )
    except OSError as e:
        print(f"{parser.prog}: error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1
    except MalformedTimestampError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    if threshold_ms is None:
        if result.best is not None:
            print("Biggest difference:")
            print_hole(result.best)
        else:
            print("Parsed ts regex on less than 2 lines!")

    print(
        f"Skipped {result.stats.skipped} lines because of "
        "ill-formatted timestamp."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
