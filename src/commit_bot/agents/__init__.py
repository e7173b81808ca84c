"""Agent components for the commit bot."""

from commit_bot.agents.commit_writer import CommitMessageGenerator, clean_commit_message
from commit_bot.agents.exceptions import AgentError, LLMCallError
from commit_bot.agents.llm_client import LLMClient
from commit_bot.agents.segment_summarizer import SegmentSummarizer

__all__ = [
    "AgentError",
    "CommitMessageGenerator",
    "LLMCallError",
    "LLMClient",
    "SegmentSummarizer",
    "clean_commit_message",
]
