"""Command-line interface for schelm.

WHY: The usual way to use the splitter is at the end of a pipe:
``helm template ./chart | schelm out/``. The CLI wires flag parsing,
logging, output directory setup, and the stream processor together
behind that one command.

HOW: argparse accepts the output directory, a force flag, an optional
input file, the record size limit, and the log level. main() configures
logging, prepares the output directory, runs StreamProcessor over the
input, and turns the outcome into an exit code.

RULES:
- Positional argument: OUTPUT_DIR (must not be empty)
- Input defaults to standard input (read as bytes); --input FILE reads a file
- -f/--force removes an existing OUTPUT_DIR first; otherwise it must not exist
- The input is opened before OUTPUT_DIR is touched, so a bad --input never
  removes existing output
- Log lines and warnings go to stderr; nothing is written to stdout
- Fatal errors print "Error: <message>" to stderr and exit 1
- Warnings alone never change the exit code
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from schelm.config import DEFAULT_LOG_LEVEL, MAX_RECORD_SIZE, READ_CHUNK_SIZE
from schelm.core.processor import StreamProcessor
from schelm.errors import SchelmError
from schelm.output_dir import setup_output_directory

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _error(msg: str) -> None:
    """Print an error to stderr and exit with status 1."""
    print("Error: {}".format(msg), file=sys.stderr, flush=True)
    sys.exit(1)


def _non_empty(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("output directory argument cannot be empty")
    return value


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected an integer, got {!r}".format(value)) from None
    if number <= 0:
        raise argparse.ArgumentTypeError("expected a positive integer, got {}".format(number))
    return number


def _open_input(path: str) -> BinaryIO:
    if path == "-":
        return sys.stdin.buffer
    return open(path, "rb")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() lets tests inspect
    defaults and validation without touching the filesystem.
    """
    parser = argparse.ArgumentParser(
        prog="schelm",
        description="Split the output of `helm template` into one file per "
                    "'# Source:' path under OUTPUT_DIR.",
    )

    parser.add_argument(
        "output_dir",
        metavar="OUTPUT_DIR",
        type=_non_empty,
        help="Directory to write the split files into.",
    )

    parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing output directory.",
    )

    parser.add_argument(
        "-i", "--input",
        default="-",
        help="File to read the templated stream from (default: standard input).",
    )

    parser.add_argument(
        "--max-record-size",
        type=_positive_int,
        default=MAX_RECORD_SIZE,
        help="Largest single document accepted, in bytes (default: %(default)s).",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL if DEFAULT_LOG_LEVEL in LOG_LEVELS else "INFO",
        help="Logging verbosity (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        stream = _open_input(args.input)
    except OSError as e:
        _error("cannot open input {}: {}".format(args.input, e))

    try:
        output_dir = setup_output_directory(args.output_dir, force=args.force)
    except SchelmError as e:
        if stream is not sys.stdin.buffer:
            stream.close()
        _error(str(e))

    processor = StreamProcessor(
        output_dir,
        max_record_size=args.max_record_size,
        chunk_size=READ_CHUNK_SIZE,
    )
    try:
        result = processor.run(stream)
    finally:
        if stream is not sys.stdin.buffer:
            stream.close()

    if not result.success:
        _error(result.error)

    logger.info(
        "Processing complete. %d spec(s) written (%d created, %d appended), %d skipped.",
        result.specs_written,
        result.files_created,
        result.files_appended,
        result.specs_skipped,
    )


if __name__ == "__main__":
    main()
