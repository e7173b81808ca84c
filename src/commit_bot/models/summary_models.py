"""Models for per-file summaries and the aggregated commit-message input."""

from pydantic import BaseModel, ConfigDict, Field

from commit_bot.models.diff_models import DiffStats

NO_DESCRIPTION = "(no description)"


class FileSummary(BaseModel):
    """Short natural-language description of the change to one file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    description: str = ""  # Empty when the backend omitted the file


class StructuredSummary(BaseModel):
    """Statistics block plus ordered file summaries for the message generator."""

    model_config = ConfigDict(frozen=True)

    stats: DiffStats
    file_summaries: tuple[FileSummary, ...] = Field(default_factory=tuple)
    segment_count: int = 0

    def render_stats(self) -> str:
        types = ", ".join(
            f"{file_type} ({count})" for file_type, count in self.stats.dominant_file_types()
        )
        return (
            "Statistics:\n"
            f"- Files changed: {self.stats.files_changed}\n"
            f"- Lines added: {self.stats.lines_added}\n"
            f"- Lines deleted: {self.stats.lines_deleted}\n"
            f"- File types: {types or 'none'}"
        )

    def render_file_summaries(self) -> str:
        lines = ["File summaries:"]
        for summary in self.file_summaries:
            lines.append(f"- {summary.file_path}: {summary.description or NO_DESCRIPTION}")
        if not self.file_summaries:
            lines.append("- (none)")
        return "\n".join(lines)

    def render(self) -> str:
        """Render the readable text consumed by the commit-message generator."""
        return f"{self.render_stats()}\n\n{self.render_file_summaries()}\n"
