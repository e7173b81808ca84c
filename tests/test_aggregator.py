"""Tests for summary aggregation and rendering."""

from commit_bot.models import DiffStats, FileSummary, StructuredSummary
from commit_bot.pipeline.aggregator import aggregate, merge_file_summaries


def _stats():
    return DiffStats(
        files_changed=3,
        lines_added=12,
        lines_deleted=4,
        file_types=frozenset({"rs", "toml"}),
        file_type_counts={"rs": 2, "toml": 1},
    )


def test_merge_keeps_first_appearance_order():
    merged = merge_file_summaries(
        [
            FileSummary(file_path="b.rs", description="add parser"),
            FileSummary(file_path="a.rs", description="fix bug"),
            FileSummary(file_path="b.rs", description="add tests"),
        ]
    )
    assert merged == [
        FileSummary(file_path="b.rs", description="add parser; add tests"),
        FileSummary(file_path="a.rs", description="fix bug"),
    ]


def test_merge_drops_empty_and_repeated_descriptions():
    merged = merge_file_summaries(
        [
            FileSummary(file_path="a.rs", description=""),
            FileSummary(file_path="a.rs", description="tweak"),
            FileSummary(file_path="a.rs", description="tweak"),
        ]
    )
    assert merged == [FileSummary(file_path="a.rs", description="tweak")]


def test_aggregate_builds_structured_summary():
    summaries = [
        FileSummary(file_path="src/a.rs", description="add retry loop"),
        FileSummary(file_path="Cargo.toml", description=""),
    ]
    result = aggregate(_stats(), summaries, segment_count=2)
    assert isinstance(result, StructuredSummary)
    assert result.stats == _stats()
    assert result.segment_count == 2
    assert [s.file_path for s in result.file_summaries] == ["src/a.rs", "Cargo.toml"]


def test_render_contains_stats_and_file_lines():
    result = aggregate(
        _stats(),
        [
            FileSummary(file_path="src/a.rs", description="add retry loop"),
            FileSummary(file_path="Cargo.toml", description=""),
        ],
    )
    assert result.render() == (
        "Statistics:\n"
        "- Files changed: 3\n"
        "- Lines added: 12\n"
        "- Lines deleted: 4\n"
        "- File types: rs (2), toml (1)\n"
        "\n"
        "File summaries:\n"
        "- src/a.rs: add retry loop\n"
        "- Cargo.toml: (no description)\n"
    )


def test_render_with_no_files():
    text = aggregate(DiffStats(), []).render()
    assert "- File types: none" in text
    assert "- (none)" in text
