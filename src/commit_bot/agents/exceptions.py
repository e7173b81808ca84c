"""Exceptions for agent operations."""


class AgentError(Exception):
    """Base exception for all agent operations."""


class LLMCallError(AgentError):
    """Raised when an LLM request fails or returns no usable text."""
