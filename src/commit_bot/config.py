"""Configuration loading: TOML file, then environment, then explicit overrides."""

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from commit_bot.agents.commit_writer import DEFAULT_COMMIT_PROMPT

DEFAULT_CONFIG_FILENAME = ".commit-bot.toml"
CONFIG_PATH_ENV = "COMMIT_BOT_CONFIG"
ENV_PREFIX = "COMMIT_BOT_"

# Tables whose keys are merged into the flat option namespace
_SECTIONS = ("pipeline", "llm", "git")

# Explicit file chosen by load_config(); None means the default location
_config_file: ContextVar[Path | None] = ContextVar("commit_bot_config_file", default=None)


class ConfigError(Exception):
    """Raised when the configuration file or values are invalid."""


def default_config_path() -> Path:
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILENAME


class SectionedTomlSource(TomlConfigSettingsSource):
    """TOML source that also accepts options under [pipeline], [llm] and [git]."""

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        raw = super()._read_file(file_path)
        values: dict[str, Any] = {}
        for section in _SECTIONS:
            table = raw.get(section)
            if isinstance(table, dict):
                values.update(table)
        values.update({key: value for key, value in raw.items() if key not in _SECTIONS})
        return values


class CommitBotConfig(BaseSettings):
    """Validated options for the commit pipeline and its LLM backend.

    Sources, highest priority first: init kwargs (CLI flags),
    ``COMMIT_BOT_*`` env vars, ``.env``, the TOML config file, defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    max_diff_length: int = Field(default=8000, ge=1)
    max_segment_length: int | None = Field(default=None, ge=1)
    max_concurrency: int = Field(default=3, ge=1)
    segment_timeout_seconds: int = Field(default=30, ge=1)
    llm_provider: Literal["auto", "anthropic", "openai"] = "auto"
    model: str | None = None
    base_url: str | None = None
    commit_prompt: str = DEFAULT_COMMIT_PROMPT

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = _config_file.get() or default_config_path()
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            SectionedTomlSource(settings_cls, toml_file=toml_file),
        )

    @property
    def effective_segment_length(self) -> int:
        """Segment limit; defaults to the diff-length threshold."""
        return self.max_segment_length or self.max_diff_length


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> CommitBotConfig:
    """Load configuration.

    Options may sit at the top level of the file or under ``[pipeline]``,
    ``[llm]`` or ``[git]`` tables. A missing default file is not an error;
    a missing explicit *path* is.

    Args:
        path: Config file path. Defaults to $COMMIT_BOT_CONFIG or
            ~/.commit-bot.toml.
        overrides: Values from the command line; None entries are ignored.

    Returns:
        Validated CommitBotConfig.

    Raises:
        ConfigError: If the file cannot be read/parsed or a value is invalid.
    """
    config_path = None
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

    kwargs = {key: value for key, value in (overrides or {}).items() if value is not None}
    token = _config_file.set(config_path)
    try:
        return CommitBotConfig(**kwargs)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path or default_config_path()}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file: {exc}") from exc
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    finally:
        _config_file.reset(token)
