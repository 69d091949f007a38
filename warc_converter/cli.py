# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Convert a WARC archive into normalized documents.
#
# USAGE:
# ------
#   python -m warc_converter.cli ARCHIVE OUTPUT
#   python -m warc_converter.cli crawl.warc.gz out/docs.jsonl --filter-config rules.json
#   python -m warc_converter.cli crawl.warc.gz documents --sink mongo --workers 4
#
# EXIT CODES:
# -----------
#   0 → conversion completed
#   1 → invalid filter configuration / settings, nothing written
#   2 → missing or invalid arguments (argparse)
#
# ==============================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from warc_converter.config import SINK_TYPES, load_config
from warc_converter.filtering import FilterConfigError
from warc_converter.pipeline import convert


logger = logging.getLogger("warc_converter.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="warc-converter",
        description="Convert WARC response records into normalized documents.",
    )
    parser.add_argument("archive", help="WARC archive path or http(s) URL")
    parser.add_argument("output", help="Output file (jsonl) or collection name (mongo)")
    parser.add_argument(
        "--filter-config",
        type=Path,
        default=None,
        help="JSON file with document filter rules (overrides FILTER_CONFIG)",
    )
    parser.add_argument(
        "--sink",
        choices=SINK_TYPES,
        default=None,
        help="Output sink (overrides OUTPUT_SINK, default jsonl)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of transform threads (overrides WORKERS)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.workers is not None and args.workers < 1:
        print("error: --workers must be at least 1", file=sys.stderr)
        return 1

    try:
        config = load_config()
        result = convert(
            args.archive,
            args.output,
            config=config,
            filter_path=args.filter_config,
            sink_type=args.sink,
            workers=args.workers,
        )
    except FilterConfigError as e:
        print(f"error: invalid filter configuration: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    summary = result.summary()
    print(f"📊 Summary:")
    print(f"   → Records read: {summary['records_read']}")
    print(f"   → KEPT: {summary['KEPT']}")
    print(f"   → FILTERED: {summary['FILTERED']}")
    print(f"   → Time elapsed: {summary['elapsed_seconds']}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
