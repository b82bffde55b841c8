import argparse
import logging
import sys
from typing import Callable, List, Optional

from reorganizer.config import MARKER_SUFFIX, ReorganizeOptions
from reorganizer.errors import ReorganizerError
from reorganizer.logger import get_logger
from reorganizer.mover import SubdirectoryMover
from reorganizer.reporter import RunReporter
from reorganizer.scanner import CollectionScanner
from reorganizer.space import SpaceChecker
from reorganizer.utils import resolve_roots

DESCRIPTION = (
    "Find every subdirectory of the source ending with the marker suffix and move "
    "its subdirectories up into the target directory (default: the source itself)."
)


class _Parser(argparse.ArgumentParser):
    # bad arguments exit with 1, like every other failure
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="reorganize", description=DESCRIPTION, add_help=False)
    parser.add_argument("source", nargs="?", help="directory containing *Collection directories")
    parser.add_argument("target", nargs="?", help="where subdirectories go (default: source)")
    parser.add_argument("-n", "--dry-run", action="store_true", help="only show what would happen")
    parser.add_argument("-f", "--force", action="store_true", help="don't ask when target space looks short")
    parser.add_argument("-v", "--verbose", action="store_true", help="print progress lines")
    parser.add_argument("--suffix", default=MARKER_SUFFIX,
                        help=f"marker suffix of collection directories (default: {MARKER_SUFFIX})")
    parser.add_argument("--json", dest="json_summary", action="store_true", help="print the summary as JSON")
    parser.add_argument("-h", "--help", action="store_true", help="show this help and exit")
    return parser


def ask_yes_no(prompt: str) -> bool:
    try:
        return input(prompt + " [y/N]: ").strip().lower() == "y"
    except EOFError:
        return False


def reorganize_flow(options: ReorganizeOptions, logger: logging.Logger,
                    confirm: Callable[[str], bool] = ask_yes_no) -> RunReporter:
    source, target = resolve_roots(options.source, options.target, logger)
    if options.dry_run:
        logger.info("--- DRY RUN --- nothing will be changed")

    # Space preflight
    SpaceChecker(source.path, target.path, logger, dry_run=options.dry_run,
                 force=options.force, confirm=confirm).check()

    # Scan
    collections = CollectionScanner(source.path, logger, suffix=options.suffix).scan()
    reporter = RunReporter(logger, dry_run=options.dry_run)
    reporter.collections_found(len(collections))

    # Move
    mover = SubdirectoryMover(target.path, logger, dry_run=options.dry_run)
    for collection in collections:
        reporter.record_many(mover.move_collection(collection))
    return reporter


def main(argv: Optional[List[str]] = None,
         confirm: Callable[[str], bool] = ask_yes_no) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help()
        return 1
    if args.source is None:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: the source directory is required", file=sys.stderr)
        return 1
    if not args.suffix:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: --suffix must not be empty", file=sys.stderr)
        return 1

    options = ReorganizeOptions(
        source=args.source,
        target=args.target,
        dry_run=args.dry_run,
        force=args.force,
        verbose=args.verbose,
        suffix=args.suffix,
        json_summary=args.json_summary,
    )
    logger = get_logger(options.verbose)
    try:
        reporter = reorganize_flow(options, logger, confirm=confirm)
    except ReorganizerError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Cannot scan %s: %s", options.source, e)
        return 1

    print(reporter.render(as_json=options.json_summary))
    return reporter.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
