"""Tests for exception hierarchies."""

from commit_bot.agents.exceptions import AgentError, LLMCallError
from commit_bot.orchestrator.exceptions import CommitMessageError, OrchestratorError
from commit_bot.pipeline.exceptions import (
    AggregateSummaryError,
    MalformedDiffError,
    PipelineError,
    RemoteSummaryError,
    SegmentFailureError,
    SegmentTimeoutError,
)


class TestAgentExceptions:
    """Tests for agent exception hierarchy."""

    def test_llm_call_error_inherits_from_agent_error(self):
        exc = LLMCallError("request failed")
        assert isinstance(exc, AgentError)
        assert str(exc) == "request failed"


class TestOrchestratorExceptions:
    """Tests for orchestrator exception hierarchy."""

    def test_commit_message_error_inherits_from_orchestrator_error(self):
        exc = CommitMessageError("could not generate")
        assert isinstance(exc, OrchestratorError)
        assert str(exc) == "could not generate"


class TestPipelineExceptions:
    """Tests for pipeline exception hierarchy."""

    def test_all_inherit_from_pipeline_error(self):
        for exc_class in (
            MalformedDiffError,
            SegmentFailureError,
            SegmentTimeoutError,
            RemoteSummaryError,
        ):
            assert issubclass(exc_class, PipelineError)

    def test_segment_failure_kinds(self):
        assert SegmentTimeoutError("slow").kind == "timeout"
        assert RemoteSummaryError("boom").kind == "remote error"

    def test_segment_failure_carries_index(self):
        exc = SegmentTimeoutError("slow", segment_index=4)
        assert exc.segment_index == 4
        assert str(exc) == "slow"

    def test_timeout_error_is_not_builtin_timeout(self):
        assert not issubclass(SegmentTimeoutError, TimeoutError)

    def test_aggregate_error_wraps_cause(self):
        cause = RemoteSummaryError("HTTP 500", segment_index=1)
        exc = AggregateSummaryError(cause, total_segments=3)
        assert exc.cause is cause
        assert exc.segment_index == 1
        assert exc.total_segments == 3
        assert exc.kind == "remote error"
        assert str(exc) == "Segment 2/3 failed (remote error): HTTP 500"

    def test_aggregate_error_unknown_index(self):
        exc = AggregateSummaryError(SegmentTimeoutError("slow"), total_segments=2)
        assert str(exc).startswith("Segment ?/2 failed")
