#!/usr/bin/env python3
"""
sigmatch CLI - File Type Identification Tool

Reports the most likely format of a file from its magic bytes.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from . import __version__, identify
from .errors import CatalogError, FileUnreadable, MalformedSignature, NoMatchFound
from .reporter import ReportGenerator, build_report
from .signatures import SignatureDB, find_catalog
from .utils import hex_dump, read_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_MATCH = 3
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='sigmatch',
        description='sigmatch - identify a file type from its magic numbers',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Identify a file using file_sigs.json (or the bundled catalog)
  sigmatch suspicious.bin

  # Use a specific signature catalog
  sigmatch -s ./my_sigs.json evidence.dat

  # Also require trailer bytes at the end of the file
  sigmatch --check-trailer photo.jpg

  # Machine-readable output, saved to disk as well
  sigmatch --json -o report.json evidence.dat
'''
    )

    parser.add_argument(
        'file',
        nargs='?',
        help='File to identify'
    )

    # Catalog options
    parser.add_argument(
        '-s', '--sigs',
        default=None,
        help='Signature catalog (default: ./file_sigs.json, else the bundled catalog)'
    )
    parser.add_argument(
        '--list-types',
        action='store_true',
        help='List all signatures in the catalog and exit'
    )

    # Matching options
    parser.add_argument(
        '--check-trailer',
        action='store_true',
        help='Also require a signature\'s trailer bytes at the end of the file'
    )

    # Output options
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print a JSON report instead of text'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Also write the JSON report to this path'
    )

    # Verbosity
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Quiet mode (errors only)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def setup_logging(verbose: bool, quiet: bool, console: Console):
    """Route log records to stderr through rich."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(console=console, show_time=False, show_path=verbose)
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.file and not args.list_types:
        parser.error("no filename given")

    err_console = Console(stderr=True)
    setup_logging(args.verbose, args.quiet, err_console)

    def print_error(msg):
        err_console.print(
            Text.assemble(("Error:", "bold red"), f" {msg}"), soft_wrap=True
        )

    reporter = ReportGenerator(Console())

    try:
        catalog_path = find_catalog(args.sigs)
        logger.debug("Loading signatures from %s", catalog_path)
        db = SignatureDB.load(catalog_path)

        if args.list_types:
            reporter.print_catalog(db)
            return EXIT_OK

        data = read_file(args.file)
        logger.debug("Read %d bytes from %s", len(data), args.file)
        if data:
            logger.debug("Leading bytes:\n%s", hex_dump(data, length=32))

        result = identify(data, db, check_trailer=args.check_trailer)
        logger.debug(
            "%d of %d signatures matched", len(result.matches), len(db)
        )

        report = None
        if args.json or args.output:
            report = build_report(args.file, len(data), result)

        if args.json:
            reporter.print_json(report)
        else:
            reporter.print_text(result)

        if args.output:
            reporter.write_json(report, args.output)

        return EXIT_OK

    except NoMatchFound:
        err_console.print(
            f"No known file type recognized for {args.file}",
            markup=False, highlight=False, emoji=False, soft_wrap=True
        )
        return EXIT_NO_MATCH
    except (FileUnreadable, CatalogError, MalformedSignature) as e:
        print_error(e)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print_error("Cancelled by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        print_error(str(e))
        if args.verbose:
            err_console.print_exception()
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
