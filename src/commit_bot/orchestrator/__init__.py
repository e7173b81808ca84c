"""Orchestrator package for the commit-message pipeline."""

from commit_bot.orchestrator.exceptions import CommitMessageError, OrchestratorError
from commit_bot.orchestrator.pipeline import CommitPipeline, build_pipeline, describe_failure

__all__ = [
    "CommitMessageError",
    "CommitPipeline",
    "OrchestratorError",
    "build_pipeline",
    "describe_failure",
]
