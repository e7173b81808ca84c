"""Large-diff segmentation and concurrent summarization pipeline."""

from commit_bot.pipeline.aggregator import aggregate
from commit_bot.pipeline.exceptions import (
    AggregateSummaryError,
    MalformedDiffError,
    PipelineError,
    RemoteSummaryError,
    SegmentFailureError,
    SegmentTimeoutError,
)
from commit_bot.pipeline.response_parser import parse_file_summaries
from commit_bot.pipeline.segmenter import segment_diff
from commit_bot.pipeline.stats import extract_stats
from commit_bot.pipeline.summarizer import ConcurrentSummarizer, PipelineRun

__all__ = [
    "AggregateSummaryError",
    "ConcurrentSummarizer",
    "MalformedDiffError",
    "PipelineError",
    "PipelineRun",
    "RemoteSummaryError",
    "SegmentFailureError",
    "SegmentTimeoutError",
    "aggregate",
    "extract_stats",
    "parse_file_summaries",
    "segment_diff",
]
