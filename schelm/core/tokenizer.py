"""Incremental delimiter-based tokenizer for templated YAML streams.

WHY: `helm template` output can be large and arrives on a pipe. The
splitter must find every `---\n# Source: ` marker without reading the
whole stream into memory first.

HOW: iter_records() is a generator over stream.read(). It keeps a
bytearray of unread input and searches it for the delimiter. When the
delimiter is missing it reads another chunk; at end of stream it yields
whatever is left. Each search resumes just before the previously
scanned tail, so a delimiter split across two reads is still found.

RULES:
- Records are bytes and never include the delimiter
- The first record is the preamble; dropping it is the caller's job
- A delimiter at the very end of the stream yields no empty record
- A record longer than max_record_size raises RecordTooLargeError, as
  soon as the buffer proves the pending record is too long
- Read failures (OSError) are raised as InputReadError
- Only an empty read means end of stream; a None read (non-blocking
  stream with no data yet) is raised as InputReadError
- The iterator is lazy, finite, and not restartable
"""

from __future__ import annotations

from typing import BinaryIO, Iterator

from schelm.config import MAX_RECORD_SIZE, READ_CHUNK_SIZE, YAML_SEPARATOR_BYTES
from schelm.errors import InputReadError, RecordTooLargeError


def iter_records(
    stream: BinaryIO,
    delimiter: bytes = YAML_SEPARATOR_BYTES,
    max_record_size: int = MAX_RECORD_SIZE,
    chunk_size: int = READ_CHUNK_SIZE,
) -> Iterator[bytes]:
    """Yield the records between delimiter occurrences in a byte stream.

    Args:
        stream: Object with a read(n) method. Binary streams are expected;
                text chunks are encoded as UTF-8.
        delimiter: Record boundary. Must be non-empty.
        max_record_size: Largest record, in bytes, that may be yielded.
        chunk_size: Number of bytes requested per read.

    Yields:
        Each record as bytes, starting with the preamble.

    Raises:
        RecordTooLargeError: A record exceeds max_record_size.
        InputReadError: The stream raised OSError while reading.
        ValueError: Invalid delimiter or size arguments.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if max_record_size <= 0:
        raise ValueError("max_record_size must be positive")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    buffer = bytearray()
    search_from = 0
    at_eof = False

    while True:
        index = buffer.find(delimiter, search_from)
        if index >= 0:
            if index > max_record_size:
                raise RecordTooLargeError(index, max_record_size)
            record = bytes(buffer[:index])
            del buffer[:index + len(delimiter)]
            search_from = 0
            yield record
            continue

        if at_eof:
            if buffer:
                if len(buffer) > max_record_size:
                    raise RecordTooLargeError(len(buffer), max_record_size)
                yield bytes(buffer)
            return

        # Everything except a possible partial delimiter at the tail
        # already belongs to the pending record.
        search_from = max(0, len(buffer) - len(delimiter) + 1)
        if search_from > max_record_size:
            raise RecordTooLargeError(search_from, max_record_size)

        chunk = _read_chunk(stream, chunk_size)
        if chunk:
            buffer.extend(chunk)
        else:
            at_eof = True


def _read_chunk(stream: BinaryIO, chunk_size: int) -> bytes:
    try:
        chunk = stream.read(chunk_size)
    except OSError as exc:
        raise InputReadError("Error reading input stream: {}".format(exc)) from exc
    if chunk is None:
        # Non-blocking stream with nothing buffered; only b"" means EOF
        raise InputReadError("Input stream returned no data; non-blocking streams are not supported")
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return chunk
