"""Thin wrappers around the git commands the commit flow needs."""

import subprocess


class GitError(Exception):
    """Raised when a git command fails."""


def _run_git(args: list[str], cwd: str | None = None) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise GitError(f"Failed to run git {' '.join(args)}: {exc}") from exc


def _check(result: subprocess.CompletedProcess, command: str) -> str:
    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        raise GitError(f"git {command} failed: {detail}")
    return result.stdout


def is_git_repo(cwd: str | None = None) -> bool:
    """Return True if *cwd* is inside a git work tree."""
    try:
        result = _run_git(["rev-parse", "--is-inside-work-tree"], cwd=cwd)
    except GitError:
        return False
    return result.returncode == 0 and result.stdout.strip() == "true"


def get_staged_diff(cwd: str | None = None) -> str:
    """Return the output of ``git diff --staged`` unchanged."""
    return _check(_run_git(["diff", "--staged"], cwd=cwd), "diff --staged")


def add_all(cwd: str | None = None) -> None:
    """Stage every change in the work tree."""
    _check(_run_git(["add", "-A"], cwd=cwd), "add -A")


def commit(message: str, cwd: str | None = None) -> None:
    """Create a commit from the staged changes with *message*."""
    if not message.strip():
        raise GitError("Refusing to commit with an empty message")
    _check(_run_git(["commit", "-m", message], cwd=cwd), "commit")


def has_remote(cwd: str | None = None) -> bool:
    """Return True if at least one remote is configured."""
    try:
        result = _run_git(["remote"], cwd=cwd)
    except GitError:
        return False
    return result.returncode == 0 and bool(result.stdout.strip())


def has_upstream(cwd: str | None = None) -> bool:
    """Return True if the current branch tracks an upstream branch."""
    result = _run_git(["rev-parse", "--abbrev-ref", "@{upstream}"], cwd=cwd)
    return result.returncode == 0


def get_current_branch(cwd: str | None = None) -> str:
    branch = _check(_run_git(["branch", "--show-current"], cwd=cwd), "branch").strip()
    if not branch:
        raise GitError("Cannot push from a detached HEAD")
    return branch


def push(cwd: str | None = None) -> None:
    """Push the current branch.

    A branch without an upstream is pushed to the first configured remote
    and set to track it.
    """
    if has_upstream(cwd):
        _check(_run_git(["push"], cwd=cwd), "push")
        return

    remotes = _check(_run_git(["remote"], cwd=cwd), "remote").split()
    if not remotes:
        raise GitError("No remote repository configured")
    branch = get_current_branch(cwd)
    _check(
        _run_git(["push", "--set-upstream", remotes[0], branch], cwd=cwd),
        f"push --set-upstream {remotes[0]} {branch}",
    )
