"""Tests for the async LLM client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from commit_bot.agents.exceptions import AgentError, LLMCallError
from commit_bot.agents.llm_client import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_OPENAI_MODEL,
    PLACEHOLDER_API_KEY,
    LLMClient,
)


def _anthropic_response(*texts):
    blocks = []
    for text in texts:
        block = MagicMock()
        block.type = "text"
        block.text = text
        blocks.append(block)
    response = MagicMock()
    response.content = blocks
    return response


def _openai_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


# --- Init tests ---


@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
@patch("commit_bot.agents.llm_client.AsyncAnthropic")
def test_init_prefers_anthropic_in_auto(mock_anthropic, mock_openai, monkeypatch):
    """Auto mode prefers Anthropic when both keys are present."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "anthropic-key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

    client = LLMClient()
    assert client.provider == "anthropic"
    assert client.model_name == DEFAULT_ANTHROPIC_MODEL
    mock_anthropic.assert_called_once_with(api_key="anthropic-key")


@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
def test_init_falls_back_to_openai_in_auto(mock_openai, monkeypatch):
    """Auto mode uses OpenAI when only its key is present."""
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

    client = LLMClient()
    assert client.provider == "openai"
    assert client.model_name == DEFAULT_OPENAI_MODEL


@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
def test_init_base_url_without_key_uses_placeholder(mock_openai):
    """A local OpenAI-compatible server needs no real key."""
    client = LLMClient(
        provider="openai", model="qwen2.5-coder", base_url="http://localhost:11434/v1"
    )
    mock_openai.assert_called_once_with(
        api_key=PLACEHOLDER_API_KEY, base_url="http://localhost:11434/v1"
    )
    assert client.model_name == "qwen2.5-coder"


@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
def test_openai_ignores_claude_model_name(mock_openai, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    client = LLMClient(provider="openai", model="claude-sonnet-4-5-20250929")
    assert client.model_name == DEFAULT_OPENAI_MODEL


@patch("commit_bot.agents.llm_client.AsyncAnthropic")
def test_explicit_api_key_goes_to_anthropic(mock_anthropic):
    LLMClient(provider="anthropic", api_key="sk-test")
    mock_anthropic.assert_called_once_with(api_key="sk-test")


def test_init_no_api_key_raises():
    with pytest.raises(AgentError, match="No Anthropic or OpenAI API key found"):
        LLMClient()


def test_init_anthropic_without_key_raises():
    with pytest.raises(AgentError, match="--llm-provider=anthropic"):
        LLMClient(provider="anthropic")


def test_init_openai_without_key_raises():
    with pytest.raises(AgentError, match="--llm-provider=openai"):
        LLMClient(provider="openai")


def test_init_unknown_provider_raises():
    with pytest.raises(AgentError, match="Unsupported provider"):
        LLMClient(provider="gemini", api_key="x")


# --- complete() ---


@pytest.mark.asyncio
@patch("commit_bot.agents.llm_client.AsyncAnthropic")
async def test_complete_anthropic_joins_text_blocks(mock_anthropic):
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(
        return_value=_anthropic_response("feat: ", "add login")
    )
    mock_anthropic.return_value = mock_client

    client = LLMClient(provider="anthropic", api_key="sk-test")
    text = await client.complete("prompt", max_tokens=64)

    assert text == "feat: add login"
    kwargs = mock_client.messages.create.call_args.kwargs
    assert kwargs["max_tokens"] == 64
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@pytest.mark.asyncio
@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
async def test_complete_openai_returns_message_content(mock_openai):
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(
        return_value=_openai_response("fix: handle empty diff")
    )
    mock_openai.return_value = mock_client

    client = LLMClient(provider="openai", base_url="http://localhost:11434/v1")
    assert await client.complete("prompt") == "fix: handle empty diff"


@pytest.mark.asyncio
@patch("commit_bot.agents.llm_client.AsyncAnthropic")
async def test_complete_wraps_backend_errors(mock_anthropic):
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(side_effect=RuntimeError("rate limited"))
    mock_anthropic.return_value = mock_client

    client = LLMClient(provider="anthropic", api_key="sk-test")
    with pytest.raises(LLMCallError, match="rate limited"):
        await client.complete("prompt")


@pytest.mark.asyncio
@patch("commit_bot.agents.llm_client.openai.AsyncOpenAI")
async def test_complete_empty_reply_raises(mock_openai):
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(return_value=_openai_response(None))
    mock_openai.return_value = mock_client

    client = LLMClient(provider="openai", base_url="http://localhost:11434/v1")
    with pytest.raises(LLMCallError, match="empty response"):
        await client.complete("prompt")
