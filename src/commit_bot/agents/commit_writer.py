"""Agent that turns a diff or a structured summary into a commit message."""

from commit_bot.agents.exceptions import LLMCallError
from commit_bot.agents.llm_client import LLMClient
from commit_bot.models import StructuredSummary

MAX_MESSAGE_TOKENS = 256

DEFAULT_COMMIT_PROMPT = """Write a single-line git commit message in the \
Conventional Commits style (for example "feat: add login form") for the \
following staged diff. Reply with the commit message only.

{diff}
"""

SUMMARY_PROMPT = """Write a single-line git commit message in the Conventional \
Commits style (for example "feat: add login form") for a large change. The \
change was too big to show in full, so it is described below by overall \
statistics and a one-line summary per file, in the order the files appear in \
the diff. Reply with the commit message only.

{summary}
"""


def clean_commit_message(text: str) -> str:
    """Reduce an LLM reply to a single commit-message line.

    Strips code fences, surrounding quotes/backticks and whitespace, and keeps
    the first non-empty line.

    Raises:
        LLMCallError: If nothing usable remains.
    """
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("```"):
            continue
        line = line.strip("`\"'").strip()
        if line:
            return line
    raise LLMCallError("LLM reply did not contain a commit message")


class CommitMessageGenerator:
    """Generates one commit-message line from a diff or a StructuredSummary."""

    def __init__(
        self,
        client: LLMClient,
        commit_prompt: str = DEFAULT_COMMIT_PROMPT,
        max_tokens: int = MAX_MESSAGE_TOKENS,
    ) -> None:
        self.client = client
        self.commit_prompt = commit_prompt
        self.max_tokens = max_tokens

    async def generate_from_diff(self, diff: str) -> str:
        """Single-shot path: substitute the whole diff into the commit prompt."""
        prompt = self.commit_prompt.replace("{diff}", diff)
        reply = await self.client.complete(prompt, max_tokens=self.max_tokens)
        return clean_commit_message(reply)

    async def generate_from_summary(self, summary: StructuredSummary) -> str:
        prompt = SUMMARY_PROMPT.replace("{summary}", summary.render())
        reply = await self.client.complete(prompt, max_tokens=self.max_tokens)
        return clean_commit_message(reply)
