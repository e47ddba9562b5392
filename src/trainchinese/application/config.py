from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from trainchinese.domain.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_EPHEMERAL_WORDS,
    DEFAULT_MAX_FLEETING_WORDS,
    DEFAULT_MAX_TOTAL_WORDS,
    DEFAULT_SAVE_FILE,
    DEFAULT_STATS_FILE,
    DEFAULT_VOCABULARY_FILE,
)
from trainchinese.domain.models import TrainingParams


def config_file_candidates() -> list[Path]:
    return [
        Path.home() / ".config/trainchinese/config.toml",
        Path.home() / ".trainchinese.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for trainchinese.
    Supports loading from:
    1. Environment variables (TRAINCHINESE_*)
    2. Config file (~/.config/trainchinese/config.toml or ~/.trainchinese.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAINCHINESE_",
        extra="ignore",
    )

    # Paths
    vocabulary_file: Path = Path(DEFAULT_VOCABULARY_FILE)
    save_file: Path = Path(DEFAULT_SAVE_FILE)
    stats_file: Path = Path(DEFAULT_STATS_FILE)

    # Pool composition
    max_ephemeral_words: int = Field(default=DEFAULT_MAX_EPHEMERAL_WORDS, ge=0)
    max_fleeting_words: int = Field(default=DEFAULT_MAX_FLEETING_WORDS, ge=0)
    max_total_words: int = Field(default=DEFAULT_MAX_TOTAL_WORDS, ge=0)

    # Review rounds
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)
    seed: int | None = None

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in config_file_candidates() if f.exists()), None)

        # Earlier sources take priority: CLI overrides, then env, then file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("vocabulary_file", "save_file", "stats_file", mode="before")
    @classmethod
    def expand_user(cls, v: Any) -> Path:
        return Path(v).expanduser()

    def training_params(self) -> TrainingParams:
        return TrainingParams(
            max_ephemeral_words=self.max_ephemeral_words,
            max_fleeting_words=self.max_fleeting_words,
            max_total_words=self.max_total_words,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/trainchinese/config.toml (if exists)
    3. Environment variables (TRAINCHINESE_*)
    4. cli_overrides (passed from Typer; None values mean "not given")
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
