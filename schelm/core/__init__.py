"""Core splitting modules.

WHY: The tokenizer, spec splitter, writer, and driving loop are the
whole of the splitting logic. They know nothing about flags or
output directory policy.

HOW: tokenizer.py yields records from a byte stream, spec.py splits a
record into path and content, writer.py puts content on disk, and
processor.py runs them in order and reports the outcome.

RULES:
- Single-threaded, blocking, one record at a time
- Errors are raised to the processor, which alone decides to stop
"""

from schelm.core.processor import RunResult, RunState, StreamProcessor, process_stream
from schelm.core.spec import Spec, split_spec
from schelm.core.tokenizer import iter_records
from schelm.core.writer import WriteAction, append_marker, write_or_append_spec

__all__ = [
    "RunResult",
    "RunState",
    "Spec",
    "StreamProcessor",
    "WriteAction",
    "append_marker",
    "iter_records",
    "process_stream",
    "split_spec",
    "write_or_append_spec",
]
