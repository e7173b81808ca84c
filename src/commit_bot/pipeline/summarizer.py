"""Bounded-concurrency summarization of diff segments.

A fixed pool of worker tasks pulls segments in order from a per-batch
PipelineRun, so no more than ``max_concurrency`` requests are ever
outstanding. The first failing segment cancels the whole batch.
"""

import asyncio
import logging
from typing import Callable, Protocol

from commit_bot.models import DiffSegment, FileSummary
from commit_bot.pipeline.exceptions import (
    AggregateSummaryError,
    RemoteSummaryError,
    SegmentFailureError,
    SegmentTimeoutError,
)
from commit_bot.pipeline.response_parser import parse_file_summaries

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

DEFAULT_MAX_CONCURRENCY = 3
DEFAULT_SEGMENT_TIMEOUT_SECONDS = 30


class SegmentSummaryClient(Protocol):
    """Anything that can turn a segment payload into free-text summaries."""

    async def summarize_segment(self, segment: DiffSegment) -> str: ...


class PipelineRun:
    """Transient dispatch state for one summarize() call."""

    def __init__(self, segments: list[DiffSegment]) -> None:
        self.segments = segments
        self.total = len(segments)
        self.next_index = 0
        self.completed = 0
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def claim_next(self) -> DiffSegment | None:
        """Hand out the next undispatched segment, or None when done/cancelled."""
        if self._cancelled or self.next_index >= self.total:
            return None
        segment = self.segments[self.next_index]
        self.next_index += 1
        return segment


class ConcurrentSummarizer:
    """Summarizes segments with a concurrency cap and per-request timeout."""

    def __init__(
        self,
        client: SegmentSummaryClient,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        segment_timeout_seconds: float = DEFAULT_SEGMENT_TIMEOUT_SECONDS,
        progress: ProgressCallback | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        if segment_timeout_seconds <= 0:
            raise ValueError(
                f"segment_timeout_seconds must be > 0, got {segment_timeout_seconds}"
            )
        self.client = client
        self.max_concurrency = max_concurrency
        self.segment_timeout_seconds = segment_timeout_seconds
        self.progress = progress

    async def summarize(self, segments: list[DiffSegment]) -> list[FileSummary]:
        """Summarize every segment; all succeed or the batch fails.

        Args:
            segments: Segments in diff order.

        Returns:
            File summaries in segment order, regardless of completion order.

        Raises:
            AggregateSummaryError: On the first segment timeout or remote
                error. Every other request is cancelled first and no partial
                result is returned.
        """
        if not segments:
            return []

        run = PipelineRun(list(segments))
        worker_count = min(self.max_concurrency, run.total)
        workers = [
            asyncio.create_task(self._worker(run), name=f"segment-worker-{i}")
            for i in range(worker_count)
        ]
        logger.info(
            "Summarizing %d segment(s) with %d worker(s), %ss timeout each",
            run.total,
            worker_count,
            self.segment_timeout_seconds,
        )

        try:
            done, pending = await asyncio.wait(
                workers, return_when=asyncio.FIRST_EXCEPTION
            )
            failures = [
                task.exception()
                for task in done
                if not task.cancelled() and task.exception() is not None
            ]
            if failures:
                run.cancel()
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
                self._raise_batch_failure(run, failures)
        finally:
            # Covers cancellation of the batch itself
            leftovers = [task for task in workers if not task.done()]
            if leftovers:
                run.cancel()
                for task in leftovers:
                    task.cancel()
                await asyncio.gather(*leftovers, return_exceptions=True)

        collected: dict[int, list[FileSummary]] = {}
        for task in workers:
            collected.update(task.result())
        return [summary for index in sorted(collected) for summary in collected[index]]

    def _raise_batch_failure(self, run: PipelineRun, failures: list[BaseException]) -> None:
        segment_failures = [exc for exc in failures if isinstance(exc, SegmentFailureError)]
        if not segment_failures:
            raise failures[0]
        first = min(
            segment_failures,
            key=lambda exc: exc.segment_index if exc.segment_index is not None else run.total,
        )
        logger.warning(
            "Segment %s failed (%s); cancelled remaining requests",
            first.segment_index,
            first.kind,
        )
        run.completed += 1
        self._report(run)
        raise AggregateSummaryError(first, run.total) from first

    async def _worker(self, run: PipelineRun) -> dict[int, list[FileSummary]]:
        results: dict[int, list[FileSummary]] = {}
        while (segment := run.claim_next()) is not None:
            logger.debug("Dispatching segment %d/%d", segment.index + 1, run.total)
            try:
                summaries = await self._summarize_one(segment)
            except BaseException:
                # Flip the flag before siblings resume in this loop iteration
                run.cancel()
                raise
            if run.cancelled:
                logger.debug("Discarding late result for segment %d", segment.index + 1)
                break
            results[segment.index] = summaries
            run.completed += 1
            self._report(run)
        return results

    async def _summarize_one(self, segment: DiffSegment) -> list[FileSummary]:
        try:
            text = await asyncio.wait_for(
                self.client.summarize_segment(segment),
                timeout=self.segment_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise SegmentTimeoutError(
                f"No response within {self.segment_timeout_seconds}s",
                segment.index,
            ) from exc
        except SegmentFailureError as exc:
            if exc.segment_index is None:
                exc.segment_index = segment.index
            raise
        except Exception as exc:
            raise RemoteSummaryError(str(exc) or type(exc).__name__, segment.index) from exc

        if not isinstance(text, str):
            raise RemoteSummaryError(
                f"Expected text response, got {type(text).__name__}", segment.index
            )
        try:
            return parse_file_summaries(text, segment.file_paths)
        except RemoteSummaryError as exc:
            raise RemoteSummaryError(str(exc), segment.index) from exc

    def _report(self, run: PipelineRun) -> None:
        if self.progress is not None:
            self.progress(run.completed, run.total)
