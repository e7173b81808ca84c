"""Split a large diff into size-bounded segments of whole file blocks."""

import logging

from commit_bot.models import DiffSegment, FileDiffBlock
from commit_bot.pipeline.diff_parser import UNKNOWN_PATH, split_file_blocks
from commit_bot.pipeline.exceptions import MalformedDiffError

logger = logging.getLogger(__name__)


def _blocks_or_whole(diff: str) -> list[FileDiffBlock]:
    try:
        return split_file_blocks(diff)
    except MalformedDiffError as exc:
        logger.warning("%s; treating the whole diff as a single block", exc)
        return [FileDiffBlock(path=UNKNOWN_PATH, text=diff)]


def segment_diff(diff: str, max_segment_length: int) -> list[DiffSegment]:
    """Group file blocks into segments no longer than *max_segment_length*.

    Blocks are accumulated in diff order. When the next block would push the
    current segment past the limit, the segment is closed and a new one
    starts with that block. A block that alone exceeds the limit becomes its
    own oversized segment; blocks are never split.

    Args:
        diff: Raw diff text.
        max_segment_length: Maximum segment payload length in characters.

    Returns:
        Ordered list of DiffSegment whose payloads concatenate to *diff*.

    Raises:
        ValueError: If max_segment_length is less than 1.
    """
    if max_segment_length < 1:
        raise ValueError(f"max_segment_length must be >= 1, got {max_segment_length}")
    if not diff:
        return []

    segments: list[DiffSegment] = []
    current: list[FileDiffBlock] = []
    current_length = 0

    for block in _blocks_or_whole(diff):
        block_length = len(block.text)
        if current and current_length + block_length > max_segment_length:
            segments.append(DiffSegment.from_blocks(len(segments), current))
            current = []
            current_length = 0
        current.append(block)
        current_length += block_length

    if current:
        segments.append(DiffSegment.from_blocks(len(segments), current))

    logger.debug(
        "Segmented %d chars into %d segment(s) (limit %d)",
        len(diff),
        len(segments),
        max_segment_length,
    )
    return segments
