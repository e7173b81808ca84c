"""Route a staged diff to the single-shot or segmented commit-message path."""

import logging

from commit_bot.agents.commit_writer import CommitMessageGenerator
from commit_bot.agents.llm_client import LLMClient
from commit_bot.agents.segment_summarizer import SegmentSummarizer
from commit_bot.config import CommitBotConfig
from commit_bot.models import StructuredSummary
from commit_bot.orchestrator.exceptions import CommitMessageError
from commit_bot.pipeline.aggregator import aggregate
from commit_bot.pipeline.exceptions import AggregateSummaryError, SegmentTimeoutError
from commit_bot.pipeline.segmenter import segment_diff
from commit_bot.pipeline.stats import extract_stats
from commit_bot.pipeline.summarizer import (
    ConcurrentSummarizer,
    ProgressCallback,
    SegmentSummaryClient,
)

logger = logging.getLogger(__name__)

SPLIT_SUGGESTION = (
    "No commit message was generated. Consider splitting this change into "
    "smaller commits (stage fewer files with `git add <path>`) and try again."
)


def describe_failure(error: AggregateSummaryError, timeout_seconds: int | None = None) -> str:
    """Turn a batch failure into a message for the user."""
    position = "?" if error.segment_index is None else error.segment_index + 1
    if isinstance(error.cause, SegmentTimeoutError):
        limit = f" after {timeout_seconds}s" if timeout_seconds else ""
        reason = f"the summarization request timed out{limit}"
    else:
        reason = f"the summarization backend returned an error ({error.cause})"
    return (
        f"Large diff processing failed on segment {position}/{error.total_segments}: "
        f"{reason}. {SPLIT_SUGGESTION}"
    )


class CommitPipeline:
    """Produces commit-message input for diffs of any size."""

    def __init__(
        self,
        config: CommitBotConfig,
        summary_client: SegmentSummaryClient,
        message_generator: CommitMessageGenerator,
    ) -> None:
        self.config = config
        self.summary_client = summary_client
        self.message_generator = message_generator

    async def process(
        self,
        diff: str,
        progress: ProgressCallback | None = None,
    ) -> str | StructuredSummary:
        """Return a commit message for small diffs, a StructuredSummary otherwise.

        Diffs shorter than ``max_diff_length`` go straight to the single-shot
        generator and never reach the segmenter.

        Raises:
            CommitMessageError: If any segment fails; no partial summary is
                ever returned.
        """
        if len(diff) < self.config.max_diff_length:
            logger.info(
                "Diff is %d chars (< %d); using single-shot generation",
                len(diff),
                self.config.max_diff_length,
            )
            return await self.message_generator.generate_from_diff(diff)

        stats = extract_stats(diff)
        segments = segment_diff(diff, self.config.effective_segment_length)
        logger.info(
            "Diff is %d chars; split %d file(s) into %d segment(s)",
            len(diff),
            stats.files_changed,
            len(segments),
        )

        summarizer = ConcurrentSummarizer(
            self.summary_client,
            max_concurrency=self.config.max_concurrency,
            segment_timeout_seconds=self.config.segment_timeout_seconds,
            progress=progress,
        )
        try:
            summaries = await summarizer.summarize(segments)
        except AggregateSummaryError as exc:
            raise CommitMessageError(
                describe_failure(exc, self.config.segment_timeout_seconds)
            ) from exc

        return aggregate(stats, summaries, segment_count=len(segments))

    async def generate_commit_message(
        self,
        diff: str,
        progress: ProgressCallback | None = None,
    ) -> str:
        """Run process() and, for large diffs, write the message from the summary."""
        result = await self.process(diff, progress=progress)
        if isinstance(result, StructuredSummary):
            return await self.message_generator.generate_from_summary(result)
        return result


def build_pipeline(config: CommitBotConfig) -> CommitPipeline:
    """Wire the LLM client and agents described by *config*.

    Raises:
        AgentError: If no LLM credentials are available.
    """
    client = LLMClient(
        provider=config.llm_provider,
        model=config.model,
        base_url=config.base_url,
    )
    return CommitPipeline(
        config=config,
        summary_client=SegmentSummarizer(client),
        message_generator=CommitMessageGenerator(client, commit_prompt=config.commit_prompt),
    )
