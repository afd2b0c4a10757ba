"""Shared test fixtures for the schelm test suite.

WHY: Most modules need the same small templated stream: a preamble, a
top-level file, and a nested file. Centralizing it keeps the expected
file contents in one place.

HOW: Pytest fixtures provide the raw stream bytes, an empty output
directory under tmp_path, and a helper that reads the produced tree
back as a {relative path: text} dict.

RULES:
- All filesystem work happens under tmp_path
- SAMPLE_STREAM matches the two-file scenario used throughout the docs
"""

from pathlib import Path
from typing import Dict

import pytest

SAMPLE_STREAM = (
    b"preamble\n"
    b"---\n# Source: a.yaml\nfoo: 1\n"
    b"---\n# Source: b/c.yaml\nbar: 2\n"
)


def read_tree(root: Path) -> Dict[str, str]:
    """Return every file under root as {posix relative path: content}."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture(name="read_tree")
def read_tree_fixture():
    """The read_tree helper, for tests that inspect the output tree."""
    return read_tree


@pytest.fixture
def sample_stream():
    return SAMPLE_STREAM


@pytest.fixture
def output_dir(tmp_path):
    """An existing, empty output directory."""
    out = tmp_path / "out"
    out.mkdir()
    return out
