"""Exception types raised by the splitter.

WHY: The driving loop is the only place that decides whether a problem
ends the run. It needs one base class to catch, and the CLI needs clear
messages to print. Each failure mode gets its own type so tests and
callers can tell them apart.

HOW: SchelmError is the common base. The tokenizer, writer, and output
directory setup raise the specific subclasses; nothing in those layers
catches or retries them.

RULES:
- Every exception raised on purpose by this package derives from SchelmError
- Messages name the offending path or size so they can be printed as-is
- Non-fatal conditions (empty input, empty source path) are warnings,
  never exceptions
"""

from __future__ import annotations


class SchelmError(Exception):
    """Base class for all fatal splitter errors."""


class RecordTooLargeError(SchelmError):
    """Raised when a record exceeds the configured maximum size.

    WHY: A stream that never contains the delimiter would otherwise be
    buffered in full. The size bound keeps memory use predictable on
    malformed input.

    RULES:
    - size is a lower bound on the record length when raised mid-stream
    - limit is the configured maximum
    """

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            "Record of at least {:,} bytes exceeds the maximum record size "
            "of {:,} bytes".format(size, limit)
        )


class InputReadError(SchelmError):
    """Raised when reading the input stream fails."""


class SpecWriteError(SchelmError):
    """Raised when a spec cannot be written to its destination.

    RULES:
    - path is the resolved destination (or the directory that failed)
    - The underlying OSError, if any, is chained as __cause__
    """

    def __init__(self, path, message: str) -> None:
        self.path = path
        super().__init__(message)


class OutputDirectoryError(SchelmError):
    """Raised when the output root cannot be prepared for a run."""
