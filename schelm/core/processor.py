"""Driving loop: stream in, files out.

WHY: The tokenizer, splitter, and writer each do one thing. Something
has to run them in order, drop the preamble, decide which problems are
warnings and which end the run, and report the outcome to the CLI.

HOW: StreamProcessor walks a small state machine:

  start -> discard_preamble -> process_record (loop) -> done
                         \\________________\\___________> failed

run() consumes the stream one record at a time. Each record is decoded,
split into a Spec and written before the next one is read. The first
SchelmError or OSError moves the run to FAILED and stops reading.

RULES:
- The preamble (bytes before the first delimiter) is never written
- Empty input, or input with no delimiter, warns and succeeds
- A spec with an empty source path warns and is skipped
- Fatal errors abort the rest of the stream; files already written stay
- Warnings are logged and also collected on the RunResult
- One processor instance handles one run
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from schelm.config import CONTENT_ENCODING, CONTENT_ERRORS, MAX_RECORD_SIZE, READ_CHUNK_SIZE
from schelm.core.spec import split_spec
from schelm.core.tokenizer import iter_records
from schelm.core.writer import WriteAction, write_or_append_spec
from schelm.errors import SchelmError, SpecWriteError

logger = logging.getLogger(__name__)

NO_SEPARATORS_WARNING = "Input stream is empty or contains no separators."
EMPTY_SOURCE_WARNING = "Skipping empty source path in input."


class RunState(str, enum.Enum):
    """States of a single processing run.

    RULES:
    - done and failed are terminal
    - failed is reachable from every non-terminal state
    """

    START = "start"
    DISCARD_PREAMBLE = "discard_preamble"
    PROCESS_RECORD = "process_record"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    """Outcome of one run.

    Attributes:
        success: True when the run reached DONE.
        error: Description of the fatal error, or None on success.
        files_created: Specs written to new files.
        files_appended: Specs appended to existing files.
        specs_skipped: Specs dropped for having an empty source path.
        warnings: Non-fatal conditions reported during the run.
        exception: The exception that ended the run, if any.
    """

    success: bool = True
    error: Optional[str] = None
    files_created: int = 0
    files_appended: int = 0
    specs_skipped: int = 0
    warnings: List[str] = field(default_factory=list)
    exception: Optional[Exception] = None

    @property
    def specs_written(self) -> int:
        return self.files_created + self.files_appended


class StreamProcessor:
    """Split one templated stream into files under output_dir.

    Args:
        output_dir: Existing, writable root for the output tree.
        max_record_size: Largest record accepted from the stream, in bytes.
        chunk_size: Bytes requested per read from the stream.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        max_record_size: int = MAX_RECORD_SIZE,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.max_record_size = max_record_size
        self.chunk_size = chunk_size
        self.state = RunState.START
        self.result = RunResult()

    def run(self, stream: BinaryIO) -> RunResult:
        """Process the whole stream and return the run's outcome."""
        if self.state is not RunState.START:
            raise RuntimeError("StreamProcessor instances are single-use")

        try:
            self._process(stream)
        except (SchelmError, OSError) as exc:
            self.state = RunState.FAILED
            self.result.success = False
            self.result.error = str(exc)
            self.result.exception = exc
            return self.result

        self.state = RunState.DONE
        return self.result

    def _process(self, stream: BinaryIO) -> None:
        records = iter_records(
            stream,
            max_record_size=self.max_record_size,
            chunk_size=self.chunk_size,
        )

        self.state = RunState.DISCARD_PREAMBLE
        if next(records, None) is None:
            self._warn(NO_SEPARATORS_WARNING)
            return

        self.state = RunState.PROCESS_RECORD
        seen_record = False
        for raw in records:
            seen_record = True
            self._process_record(raw)

        if not seen_record:
            self._warn(NO_SEPARATORS_WARNING)

    def _process_record(self, raw: bytes) -> None:
        spec = split_spec(raw.decode(CONTENT_ENCODING, CONTENT_ERRORS))
        if spec.is_empty:
            self.result.specs_skipped += 1
            self._warn(EMPTY_SOURCE_WARNING)
            return

        try:
            action = write_or_append_spec(self.output_dir, spec.source, spec.content)
        except SpecWriteError as exc:
            raise SpecWriteError(
                exc.path,
                "failed to process spec for source {}: {}".format(spec.source, exc),
            ) from exc

        if action is WriteAction.CREATED:
            self.result.files_created += 1
        else:
            self.result.files_appended += 1

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.result.warnings.append(message)


def process_stream(
    stream: BinaryIO,
    output_dir: Union[str, Path],
    **kwargs,
) -> RunResult:
    """Run a fresh StreamProcessor over stream; see StreamProcessor for kwargs."""
    return StreamProcessor(output_dir, **kwargs).run(stream)
