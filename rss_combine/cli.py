from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_settings
from .core import FeedMerger
from .exceptions import RSSCombineError
from .parser import read_feed
from .writer import write_feed


def _non_negative(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError("must be zero or positive")
    return n


def build_parser(default_max_entries: int = 0, default_output: Optional[str] = None) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="rss-combine",
        description="Merge entries from multiple rss files.",
    )
    ap.add_argument(
        "-l", "--max-entries",
        type=_non_negative,
        default=default_max_entries,
        help="Maximum number of entries in the RSS; use 0 for unlimited entries",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Print more details to stdout")
    ap.add_argument(
        "-o", "--output",
        default=default_output,
        help="Where to write the merged RSS (default: overwrite the main RSS file)",
    )
    ap.add_argument("input", help="Main RSS file")
    ap.add_argument("files", nargs="+", help="Additional files")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        settings = load_settings()
    except ValueError as e:
        build_parser().error(str(e))

    args = build_parser(settings.max_entries, settings.output).parse_args(argv)
    output = args.output or args.input

    try:
        if args.verbose:
            print(f"Reading original RSS: {args.input}")
        primary = read_feed(args.input)

        merger = FeedMerger(max_entries=args.max_entries, verbose=args.verbose)
        result = merger.merge(primary, args.files)
        if args.verbose and result.skipped:
            print(f"Skipped {len(result.skipped)} of {len(args.files)} additional RSS files")
        if not result.changed:
            return 0

        write_feed(result.document, output)
    except RSSCombineError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Wrote {result.entry_count} entries ({result.new_entries} new) to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
