"""Spec dataclass and record splitting.

WHY: Every record after the preamble starts with the source path on its
first line, followed by the document body. The writer needs these two
parts separately.

HOW: split_spec() partitions a decoded record at its first newline.

RULES:
- source is used verbatim: no whitespace trimming, no normalisation
- A record without a newline becomes a source with empty content
- An empty source marks a degenerate record; the driving loop skips it
- to_record() rejoins with a newline, reproducing records that had one
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Spec:
    """One templated document: where it goes and what it contains.

    Attributes:
        source: Relative output path taken from the `# Source:` line.
        content: Document body, possibly empty, stored verbatim.
    """

    source: str
    content: str

    @property
    def is_empty(self) -> bool:
        """True when the record carried no source path."""
        return self.source == ""

    def to_record(self) -> str:
        return "{}\n{}".format(self.source, self.content)


def split_spec(record: str) -> Spec:
    """Split a record into its source path and content at the first newline.

    If the record has no newline at all, the whole record is taken as the
    source path and the content is empty.
    """
    source, _, content = record.partition("\n")
    return Spec(source=source, content=content)
