"""Tolerant parser for ``filename: description`` lines in backend responses."""

import logging
import posixpath
import re

from commit_bot.models import FileSummary
from commit_bot.pipeline.exceptions import RemoteSummaryError

logger = logging.getLogger(__name__)

MAX_PATH_LENGTH = 260

# Leading list markers: "-", "*", "+", "•", "1.", "2)"
_BULLET_RE = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s+")


def _clean_token(text: str) -> str:
    return text.strip().strip("`*_\"'").strip()


def _split_line(line: str) -> tuple[str, str] | None:
    """Split a response line into a raw (filename, description) pair."""
    stripped = _BULLET_RE.sub("", line.strip(), count=1)
    if ":" not in stripped:
        return None
    # Prefer ": " so Windows drive letters and URLs survive
    separator = ": " if ": " in stripped else ":"
    left, right = stripped.split(separator, 1)
    filename = _clean_token(left)
    description = right.strip().strip("`").strip()
    if not filename or not description:
        return None
    return filename, description


def _match_expected(filename: str, expected_paths: list[str]) -> list[str]:
    """Return the segment paths a response filename could refer to.

    Exact match first, then suffix match, then basename. More than one
    candidate means the filename is ambiguous.
    """
    if filename in expected_paths:
        return [filename]
    suffix_matches = [
        path
        for path in expected_paths
        if path.endswith("/" + filename) or filename.endswith("/" + path)
    ]
    if suffix_matches:
        return suffix_matches
    basename = posixpath.basename(filename)
    return [path for path in expected_paths if posixpath.basename(path) == basename]


def _looks_like_path(filename: str) -> bool:
    if len(filename) > MAX_PATH_LENGTH or any(ch.isspace() for ch in filename):
        return False
    return "." in filename or "/" in filename


def parse_file_summaries(text: str, expected_paths: list[str]) -> list[FileSummary]:
    """Scan free-form backend output for per-file descriptions.

    Lines that cannot be read as ``filename: description`` are skipped.
    Expected files are returned first, in *expected_paths* order; a file the
    response omitted gets an empty description. Filenames that match none of
    the expected paths are appended afterwards in response order. A filename
    that matches several expected paths (e.g. a bare basename shared by two
    files) is dropped.

    Args:
        text: Raw response text.
        expected_paths: File paths of the segment, in diff order.

    Returns:
        List of FileSummary.

    Raises:
        RemoteSummaryError: If no line in *text* could be parsed.
    """
    found: dict[str, str] = {}
    extras: dict[str, str] = {}
    ambiguous = False

    for line in (text or "").splitlines():
        pair = _split_line(line)
        if pair is None:
            continue
        filename, description = pair
        candidates = _match_expected(filename, expected_paths)
        if len(candidates) == 1:
            found.setdefault(candidates[0], description)
        elif len(candidates) > 1:
            logger.debug("Skipping ambiguous filename %r (matches %s)", filename, candidates)
            ambiguous = True
        elif _looks_like_path(filename):
            extras.setdefault(filename, description)

    if not (found or extras or ambiguous):
        raise RemoteSummaryError("Response contained no 'filename: description' lines")

    summaries = [
        FileSummary(file_path=path, description=found.get(path, ""))
        for path in dict.fromkeys(expected_paths)
    ]
    summaries.extend(
        FileSummary(file_path=path, description=description)
        for path, description in extras.items()
    )
    return summaries
