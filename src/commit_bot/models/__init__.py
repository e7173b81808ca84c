"""Data models for the commit bot."""

from commit_bot.models.diff_models import DiffSegment, DiffStats, FileDiffBlock
from commit_bot.models.summary_models import (
    NO_DESCRIPTION,
    FileSummary,
    StructuredSummary,
)

__all__ = [
    "NO_DESCRIPTION",
    "DiffSegment",
    "DiffStats",
    "FileDiffBlock",
    "FileSummary",
    "StructuredSummary",
]
