"""schelm: split `helm template` output into one file per source path.

WHY: Templating tools emit every rendered manifest into one stream, each
document prefixed with ``---\\n# Source: <path>``. Reviewing, diffing, or
committing that output is much easier as a directory tree that mirrors
the chart's templates.

HOW: Three-stage pipeline: tokenize the byte stream on the source
marker, split each record into path and content, write or append the
content under the output directory. StreamProcessor runs the stages in
one pass; the CLI adds flag parsing, logging, and output directory setup.

RULES:
- Content is stored verbatim; YAML is never parsed
- Documents sharing a path are appended in input order
- The first fatal error ends the run
"""

__version__ = "0.1.0"
