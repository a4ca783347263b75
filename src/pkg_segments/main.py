#!/usr/bin/env python3
"""Command line entry point for pkg-segments."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .domain.segment_request import SegmentRequest
from .exceptions import PkgSegmentsError
from .orchestrator import SegmentResult, generate_from_segment_file, run_segments

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkg-segments",
        description="Generate trimmed Project.toml/Manifest.toml pairs from a resolved environment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory containing Project.toml and Manifest.toml (default: current directory)",
    )
    parser.add_argument(
        "--segment-file",
        default=None,
        help="Segment list file inside the directory (default: PkgSegments.toml or $PKG_SEGMENTS_FILE)",
    )
    parser.add_argument(
        "--deps",
        default=None,
        help="Comma separated 'Name' or 'Name:UUID' list; generates one segment instead of reading the segment file",
    )
    parser.add_argument(
        "--subdir",
        default=None,
        help="Output subdirectory for --deps (default: seg or $PKG_SEGMENTS_DEFAULT_SUBDIR)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the remaining segments when one fails",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute segments without writing any files",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: INFO or $LOG_LEVEL)",
    )
    return parser


def configure_logging(level_name: str, log_format: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format=log_format,
    )


def _split_deps(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the segment generator."""
    args = build_parser().parse_args(argv)

    # Load .env from the working directory before reading configuration
    load_dotenv(Path.cwd() / ".env")
    from .config import LoggingConfig, SegmentConfig

    configure_logging(args.log_level or LoggingConfig.LOG_LEVEL, LoggingConfig.LOG_FORMAT)

    directory = Path(args.directory)
    keep_going = args.keep_going or SegmentConfig.KEEP_GOING
    results: List[SegmentResult]
    try:
        if args.deps is not None:
            subdir = args.subdir or SegmentConfig.DEFAULT_SUBDIR
            request = SegmentRequest.from_texts(subdir, _split_deps(args.deps), subdir)
            results = run_segments(directory, [request], dry_run=args.dry_run)
        else:
            segment_file = args.segment_file or SegmentConfig.SEGMENT_FILE
            results = generate_from_segment_file(
                directory, segment_file, keep_going=keep_going, dry_run=args.dry_run
            )
    except PkgSegmentsError as e:
        print(f"pkg-segments: error [{e.error_code}]: {e}", file=sys.stderr)
        return 1

    failed = [result for result in results if not result.ok]
    if failed:
        names = ", ".join(result.name for result in failed)
        print(f"pkg-segments: {len(failed)} of {len(results)} segment(s) failed: {names}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
