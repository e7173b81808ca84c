import asyncio

import pytest


def _file_diff(path: str, added: int = 1, deleted: int = 0, size: int | None = None) -> str:
    """Build one git file block, optionally padded to exactly *size* chars."""
    text = (
        f"diff --git a/{path} b/{path}\n"
        "index 1111111..2222222 100644\n"
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        f"@@ -1,{deleted} +1,{added} @@\n"
    )
    text += "".join(f"-old line {i}\n" for i in range(deleted))
    text += "".join(f"+new line {i}\n" for i in range(added))
    if size is not None:
        pad = size - len(text)
        if pad < 0:
            raise ValueError(f"size {size} too small for {path} ({len(text)} chars)")
        if pad == 1:
            text += "\n"
        elif pad > 1:
            # Context line: neither added nor deleted
            text += " " + "x" * (pad - 2) + "\n"
    return text


@pytest.fixture
def make_file_diff():
    return _file_diff


@pytest.fixture
def make_diff():
    """Build a multi-file diff from (path, size) pairs."""

    def build(*files: tuple[str, int]) -> str:
        return "".join(_file_diff(path, size=size) for path, size in files)

    return build


class FakeSummaryClient:
    """Async stand-in for SegmentSummarizer that records concurrency."""

    def __init__(
        self,
        delays: dict[int, float] | None = None,
        fail: set[int] | None = None,
        responses: dict[int, str] | None = None,
        default_delay: float = 0.01,
    ) -> None:
        self.delays = delays or {}
        self.fail = fail or set()
        self.responses = responses or {}
        self.default_delay = default_delay
        self.calls: list[int] = []
        self.completed: list[int] = []
        self.cancelled: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def summarize_segment(self, segment) -> str:
        self.calls.append(segment.index)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(segment.index, self.default_delay))
            if segment.index in self.fail:
                raise RuntimeError(f"backend exploded on segment {segment.index}")
            self.completed.append(segment.index)
            if segment.index in self.responses:
                return self.responses[segment.index]
            return "\n".join(f"{path}: update {path}" for path in segment.file_paths)
        except asyncio.CancelledError:
            self.cancelled.append(segment.index)
            raise
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_client_factory():
    return FakeSummaryClient


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep real API keys and user config files out of every test."""
    for name in (
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
        "COMMIT_BOT_CONFIG",
        "COMMIT_BOT_MAX_DIFF_LENGTH",
        "COMMIT_BOT_MAX_SEGMENT_LENGTH",
        "COMMIT_BOT_MAX_CONCURRENCY",
        "COMMIT_BOT_SEGMENT_TIMEOUT_SECONDS",
        "COMMIT_BOT_COMMIT_PROMPT",
        "COMMIT_BOT_LLM_PROVIDER",
        "COMMIT_BOT_MODEL",
        "COMMIT_BOT_BASE_URL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
