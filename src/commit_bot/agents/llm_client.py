"""Async LLM client shared by the segment summarizer and commit writer."""

import os
from typing import Literal

import openai
from anthropic import AsyncAnthropic

from commit_bot.agents.exceptions import AgentError, LLMCallError

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 1024

# Local OpenAI-compatible servers (e.g. Ollama) accept any key
PLACEHOLDER_API_KEY = "not-needed"

Provider = Literal["anthropic", "openai", "auto"]


class LLMClient:
    """Sends single-turn prompts to Anthropic or an OpenAI-compatible API."""

    def __init__(
        self,
        provider: str = "auto",
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            provider: "auto", "anthropic" or "openai". Auto prefers Anthropic
                when its key is available.
            model: Model ID. Defaults depend on the resolved provider.
            api_key: Key for the selected provider. Falls back to
                ANTHROPIC_API_KEY / OPENAI_API_KEY env vars.
            base_url: OpenAI-compatible endpoint (Ollama, DeepSeek, vLLM).

        Raises:
            AgentError: If the provider is unknown or no credentials are found.
        """
        self.llm_provider: Provider = self._normalize_provider(provider)
        self.model = model
        self.base_url = base_url
        self._anthropic_client: AsyncAnthropic | None = None
        self._openai_client: openai.AsyncOpenAI | None = None

        anthropic_key = os.getenv("ANTHROPIC_API_KEY")
        openai_key = os.getenv("OPENAI_API_KEY")
        if api_key and self.llm_provider == "openai":
            openai_key = api_key
        elif api_key:
            anthropic_key = api_key

        if anthropic_key and self.llm_provider in {"auto", "anthropic"}:
            self._anthropic_client = AsyncAnthropic(api_key=anthropic_key)
        if self.llm_provider in {"auto", "openai"}:
            if openai_key or base_url:
                self._openai_client = openai.AsyncOpenAI(
                    api_key=openai_key or PLACEHOLDER_API_KEY,
                    base_url=base_url,
                )

        if self.llm_provider == "anthropic" and self._anthropic_client is None:
            raise AgentError("No Anthropic API key found for --llm-provider=anthropic.")
        if self.llm_provider == "openai" and self._openai_client is None:
            raise AgentError(
                "No OpenAI API key or base URL found for --llm-provider=openai."
            )
        if not (self._anthropic_client or self._openai_client):
            raise AgentError(
                "No Anthropic or OpenAI API key found. "
                "Provide via ANTHROPIC_API_KEY or OPENAI_API_KEY env vars, "
                "or configure an OpenAI-compatible base_url."
            )

    @staticmethod
    def _normalize_provider(value: str) -> Provider:
        if value not in {"auto", "anthropic", "openai"}:
            raise AgentError(f"Unsupported provider: {value}")
        return value  # type: ignore[return-value]

    @property
    def provider(self) -> Literal["anthropic", "openai"]:
        if self.llm_provider == "auto":
            if self._anthropic_client is not None:
                return "anthropic"
            return "openai"
        return self.llm_provider

    @property
    def model_name(self) -> str:
        if self.provider == "openai":
            if not self.model or self.model.startswith("claude-"):
                return DEFAULT_OPENAI_MODEL
            return self.model
        return self.model or DEFAULT_ANTHROPIC_MODEL

    async def complete(self, prompt: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
        """Send *prompt* as a single user message and return the reply text.

        Raises:
            LLMCallError: If the request fails or the reply has no text.
        """
        provider = self.provider
        try:
            if provider == "anthropic":
                response = await self._anthropic_client.messages.create(
                    model=self.model_name,
                    max_tokens=max_tokens,
                    messages=[{"role": "user", "content": prompt}],
                )
                text = "".join(
                    block.text
                    for block in response.content
                    if getattr(block, "type", "") == "text"
                )
            else:
                response = await self._openai_client.chat.completions.create(
                    model=self.model_name,
                    max_tokens=max_tokens,
                    messages=[{"role": "user", "content": prompt}],
                )
                text = response.choices[0].message.content or ""
        except Exception as error:
            raise LLMCallError(
                f"{provider} request failed with {type(error).__name__}: {error}"
            ) from error

        if not text.strip():
            raise LLMCallError(f"{provider} returned an empty response")
        return text
