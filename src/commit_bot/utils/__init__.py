"""Utilities for the commit bot."""

from commit_bot.utils.git_ops import (
    GitError,
    add_all,
    commit,
    get_current_branch,
    get_staged_diff,
    has_remote,
    has_upstream,
    is_git_repo,
    push,
)

__all__ = [
    "GitError",
    "add_all",
    "commit",
    "get_current_branch",
    "get_staged_diff",
    "has_remote",
    "has_upstream",
    "is_git_repo",
    "push",
]
