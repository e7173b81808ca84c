"""Whole-diff statistics: files changed, lines added/deleted, file types."""

import logging
import posixpath
from collections import Counter

from commit_bot.models import DiffStats
from commit_bot.pipeline.diff_parser import UNKNOWN_PATH, split_file_blocks
from commit_bot.pipeline.exceptions import MalformedDiffError

logger = logging.getLogger(__name__)

UNKNOWN_FILE_TYPE = "unknown"


def file_type_of(path: str) -> str:
    """Return the lower-cased extension of *path*, or ``"unknown"``.

    Dotfiles such as ``.gitignore`` have no extension.
    """
    if not path or path == UNKNOWN_PATH:
        return UNKNOWN_FILE_TYPE
    _, ext = posixpath.splitext(posixpath.basename(path))
    return ext[1:].lower() if len(ext) > 1 else UNKNOWN_FILE_TYPE


def count_changed_lines(block_text: str) -> tuple[int, int]:
    """Count added and deleted lines in one file block.

    Only lines after the first hunk header are counted, so the ``+++`` and
    ``---`` file headers never contribute. Combined diffs (``diff --cc``)
    carry one prefix column per parent, as announced by the number of ``@``
    in the hunk header; a line is deleted if any column is ``-``, otherwise
    added if any column is ``+``.

    Returns:
        Tuple of (added, deleted).
    """
    added = 0
    deleted = 0
    columns = 0
    for line in block_text.splitlines():
        if line.startswith("@@"):
            columns = max(len(line) - len(line.lstrip("@")) - 1, 1)
            continue
        if not columns:
            continue
        prefix = line[:columns]
        if "-" in prefix:
            deleted += 1
        elif "+" in prefix:
            added += 1
    return added, deleted


def extract_stats(diff: str) -> DiffStats:
    """Compute aggregate statistics for a whole diff.

    Never raises: a diff without recognizable file blocks yields zero counts.
    """
    try:
        blocks = split_file_blocks(diff)
    except MalformedDiffError:
        logger.warning("No file blocks found; diff statistics will be empty")
        return DiffStats()

    lines_added = 0
    lines_deleted = 0
    type_counts: Counter[str] = Counter()
    for block in blocks:
        added, deleted = count_changed_lines(block.text)
        lines_added += added
        lines_deleted += deleted
        type_counts[file_type_of(block.path)] += 1

    return DiffStats(
        files_changed=len(blocks),
        lines_added=lines_added,
        lines_deleted=lines_deleted,
        file_types=frozenset(type_counts),
        file_type_counts=dict(type_counts),
    )
