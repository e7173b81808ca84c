"""Helpers for locating per-file blocks inside a unified git diff."""

import re

from commit_bot.models import FileDiffBlock
from commit_bot.pipeline.exceptions import MalformedDiffError

UNKNOWN_PATH = "unknown"
DEV_NULL = "/dev/null"

# A file block starts at a line beginning with one of these markers
_BLOCK_START_RE = re.compile(r"^diff --(?:git|cc|combined) ", re.MULTILINE)
_GIT_HEADER_RE = re.compile(r"^diff --git (\"?a/.+?\"?) (\"?b/.+?\"?)\s*$")
_COMBINED_HEADER_RE = re.compile(r"^diff --(?:cc|combined) (.+?)\s*$")


def _strip_path(raw: str) -> str:
    """Remove quoting, a/ b/ prefixes and trailing tab metadata from a path."""
    path = raw.split("\t", 1)[0].strip()
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path


def extract_block_path(block_text: str) -> str:
    """Return the file path a block describes.

    Prefers the ``+++`` post-image header, falls back to the ``---`` header
    for deletions, then ``rename to``, then the ``diff --git`` line itself.

    Args:
        block_text: Text of a single file block.

    Returns:
        The file path, or ``"unknown"`` if nothing recognizable is found.
    """
    old_path: str | None = None
    new_path: str | None = None
    renamed_to: str | None = None
    lines = block_text.splitlines()

    for line in lines[1:]:
        if line.startswith("@@"):
            break
        if line.startswith("+++ "):
            new_path = _strip_path(line[4:])
        elif line.startswith("--- "):
            old_path = _strip_path(line[4:])
        elif line.startswith("rename to "):
            renamed_to = line[len("rename to "):].strip()

    if new_path and new_path != DEV_NULL:
        return new_path
    if old_path and old_path != DEV_NULL:
        return old_path
    if renamed_to:
        return renamed_to

    header = lines[0] if lines else ""
    match = _GIT_HEADER_RE.match(header)
    if match:
        return _strip_path(match.group(2))
    match = _COMBINED_HEADER_RE.match(header)
    if match:
        return _strip_path(match.group(1))
    return UNKNOWN_PATH


def split_file_blocks(diff: str) -> list[FileDiffBlock]:
    """Split a raw diff into per-file blocks without altering any character.

    Any text before the first block marker is kept with the first block so
    that joining every block's text reproduces *diff* exactly.

    Args:
        diff: Raw unified diff text (e.g. from ``git diff --staged``).

    Returns:
        Ordered list of FileDiffBlock. Empty list for an empty diff.

    Raises:
        MalformedDiffError: If *diff* is non-empty but has no block marker.
    """
    if not diff:
        return []

    starts = [match.start() for match in _BLOCK_START_RE.finditer(diff)]
    if not starts:
        raise MalformedDiffError("Diff contains no recognizable file-diff boundary")

    # Preamble (if any) belongs to the first block
    starts[0] = 0
    bounds = starts + [len(diff)]

    blocks = []
    for start, end in zip(bounds, bounds[1:]):
        text = diff[start:end]
        marker = _BLOCK_START_RE.search(text)
        header_text = text[marker.start():] if marker else text
        blocks.append(FileDiffBlock(path=extract_block_path(header_text), text=text))
    return blocks
