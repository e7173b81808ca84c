"""LLM-assisted commit messages for diffs of any size."""

__version__ = "0.1.0"
