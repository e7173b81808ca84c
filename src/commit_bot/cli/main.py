"""CLI entry point for commit-bot."""
import argparse
import asyncio
import json
import sys
import traceback

from dotenv import load_dotenv

from commit_bot.agents.exceptions import AgentError
from commit_bot.config import CommitBotConfig, ConfigError, load_config
from commit_bot.logging_config import configure_logging
from commit_bot.orchestrator.exceptions import OrchestratorError
from commit_bot.utils.git_ops import (
    GitError,
    add_all,
    commit,
    get_staged_diff,
    has_remote,
    is_git_repo,
    push,
)

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_AGENT_ERROR = 2
EXIT_ORCHESTRATOR_ERROR = 3
EXIT_GIT_ERROR = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

# Safe keys allowed in config output (no prompts or secrets)
_SAFE_CONFIG_KEYS = frozenset({
    "max_diff_length", "max_segment_length", "max_concurrency",
    "segment_timeout_seconds", "llm_provider", "model", "base_url",
})


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="commit-bot",
        description="Generate a commit message for staged changes with an LLM and commit",
    )
    parser.add_argument(
        "-a", "--all", action="store_true", help="Stage all changes before committing"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML config file (default: $COMMIT_BOT_CONFIG or ~/.commit-bot.toml)",
    )
    parser.add_argument(
        "--llm-provider",
        type=str,
        default=None,
        choices=("auto", "anthropic", "openai"),
        help="LLM provider: auto (default), anthropic, or openai",
    )
    parser.add_argument("--model", type=str, default=None, help="Model ID to use")
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="OpenAI-compatible endpoint, e.g. http://localhost:11434/v1 for Ollama",
    )
    parser.add_argument(
        "--max-diff-length",
        type=int,
        default=None,
        help="Diffs at least this many characters long are segmented (default: 8000)",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Concurrent segment summarization requests (default: 3)",
    )
    parser.add_argument(
        "--segment-timeout",
        type=int,
        default=None,
        help="Per-segment request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--no-commit",
        action="store_true",
        help="Print the generated message without committing",
    )
    parser.add_argument(
        "--push", action="store_true", help="Push the current branch after committing"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print config and exit without running"
    )
    parser.add_argument(
        "--output-json", action="store_true", help="Output results as JSON"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    return parser


def cli_overrides(args: argparse.Namespace) -> dict:
    """Map CLI flags onto config option names (unset flags are None)."""
    return {
        "llm_provider": args.llm_provider,
        "model": args.model,
        "base_url": args.base_url,
        "max_diff_length": args.max_diff_length,
        "max_concurrency": args.max_concurrency,
        "segment_timeout_seconds": args.segment_timeout,
    }


def print_progress(completed: int, total: int) -> None:
    """Render a single-line "Processing segments X/Y" indicator on stderr."""
    end = "\n" if completed >= total else ""
    print(f"\rProcessing segments: {completed}/{total}", end=end, file=sys.stderr, flush=True)


def print_config_human(config: CommitBotConfig) -> None:
    """Print configuration in human-readable format.

    Only prints keys in the safe allowlist.
    """
    print("\nConfiguration:")
    print(f"{'='*40}")
    for key, value in config.model_dump().items():
        if key in _SAFE_CONFIG_KEYS:
            print(f"  {key}: {value}")
    print(f"{'='*40}")


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config, overrides=cli_overrides(args))
    except ConfigError as exc:
        return _handle_error("Configuration error", exc, args.verbose, EXIT_INVALID_INPUT)

    if args.dry_run:
        if args.output_json:
            safe = {k: v for k, v in config.model_dump().items() if k in _SAFE_CONFIG_KEYS}
            print(json.dumps(safe, indent=2))
        else:
            print_config_human(config)
        return EXIT_SUCCESS

    if args.push and args.no_commit:
        print("Error: --push cannot be combined with --no-commit", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if not is_git_repo():
        print("Error: Not in a git repository", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        if args.push and not has_remote():
            raise GitError("No remote repository configured; add one with 'git remote add'")

        if args.all:
            print("Staging all changes...", file=sys.stderr)
            add_all()

        diff = get_staged_diff()
        if not diff.strip():
            print("No staged changes to commit")
            return EXIT_SUCCESS

        # Deferred so --help and --dry-run never load the LLM SDKs
        from commit_bot.orchestrator.pipeline import build_pipeline

        pipeline = build_pipeline(config)
        print("Generating commit message...", file=sys.stderr)
        message = asyncio.run(
            pipeline.generate_commit_message(diff, progress=print_progress)
        )

        committed = False
        if not args.no_commit:
            commit(message)
            committed = True

        pushed = False
        if committed and args.push:
            print("Pushing...", file=sys.stderr)
            push()
            pushed = True

        if args.output_json:
            print(json.dumps(
                {
                    "message": message,
                    "committed": committed,
                    "pushed": pushed,
                    "diff_length": len(diff),
                },
                indent=2,
            ))
        else:
            print(f"Commit message: {message}")
            if committed:
                print("✓ Committed successfully!")
            if pushed:
                print("✓ Pushed successfully!")
        return EXIT_SUCCESS

    except AgentError as exc:
        return _handle_error("Agent error", exc, args.verbose, EXIT_AGENT_ERROR)

    except OrchestratorError as exc:
        return _handle_error("Commit message error", exc, args.verbose, EXIT_ORCHESTRATOR_ERROR)

    except GitError as exc:
        return _handle_error("Git error", exc, args.verbose, EXIT_GIT_ERROR)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)


if __name__ == "__main__":
    sys.exit(main())
