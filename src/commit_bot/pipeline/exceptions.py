"""Exceptions for the diff segmentation and summarization pipeline.

Note: Names chosen to avoid collisions with the builtin TimeoutError.
"""


class PipelineError(Exception):
    """Base exception for all pipeline operations."""


class MalformedDiffError(PipelineError):
    """Raised when diff text contains no recognizable file-diff boundary."""


class SegmentFailureError(PipelineError):
    """Base exception for a single segment's summarization request."""

    kind = "segment failure"

    def __init__(self, message: str, segment_index: int | None = None) -> None:
        super().__init__(message)
        self.segment_index = segment_index


class SegmentTimeoutError(SegmentFailureError):
    """Raised when a segment request exceeds the per-request timeout."""

    kind = "timeout"


class RemoteSummaryError(SegmentFailureError):
    """Raised when the backend errors or returns an unusable response."""

    kind = "remote error"


class AggregateSummaryError(PipelineError):
    """Raised once per batch, wrapping the first observed segment failure."""

    def __init__(self, cause: SegmentFailureError, total_segments: int) -> None:
        self.cause = cause
        self.segment_index = cause.segment_index
        self.total_segments = total_segments
        position = "?" if cause.segment_index is None else cause.segment_index + 1
        super().__init__(
            f"Segment {position}/{total_segments} failed ({cause.kind}): {cause}"
        )

    @property
    def kind(self) -> str:
        return self.cause.kind
