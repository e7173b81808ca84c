"""Exceptions for orchestrator operations."""


class OrchestratorError(Exception):
    """Base exception for all orchestrator operations."""


class CommitMessageError(OrchestratorError):
    """Raised with user-facing text when no commit message could be produced."""
