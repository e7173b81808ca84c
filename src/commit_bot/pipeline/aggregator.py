"""Merge whole-diff statistics with ordered per-file summaries."""

from commit_bot.models import DiffStats, FileSummary, StructuredSummary

DESCRIPTION_SEPARATOR = "; "


def merge_file_summaries(summaries: list[FileSummary]) -> list[FileSummary]:
    """Collapse repeated paths into their first entry, keeping appearance order.

    Non-empty descriptions of later duplicates are appended to the first
    entry's description.
    """
    order: list[str] = []
    descriptions: dict[str, list[str]] = {}
    for summary in summaries:
        if summary.file_path not in descriptions:
            order.append(summary.file_path)
            descriptions[summary.file_path] = []
        text = summary.description.strip()
        if text and text not in descriptions[summary.file_path]:
            descriptions[summary.file_path].append(text)
    return [
        FileSummary(file_path=path, description=DESCRIPTION_SEPARATOR.join(descriptions[path]))
        for path in order
    ]


def aggregate(
    stats: DiffStats,
    summaries: list[FileSummary],
    segment_count: int = 0,
) -> StructuredSummary:
    """Build the structured input for the commit-message generator.

    Args:
        stats: Statistics computed from the whole diff.
        summaries: File summaries in file-appearance order.
        segment_count: Number of segments the diff was split into.

    Returns:
        StructuredSummary ready to be rendered.
    """
    return StructuredSummary(
        stats=stats,
        file_summaries=tuple(merge_file_summaries(summaries)),
        segment_count=segment_count,
    )
